"""
Terminal UI elements for termform.

Provides the element tree and document, key parsing and key-binding
tables, the text and select-list input controls, and the labeled input
that composes a label with one of them.
"""
from __future__ import annotations

from termform.tui.document import Document
from termform.tui.editable_text_box import EditableTextBox
from termform.tui.element import Element
from termform.tui.events import ClickData, Emission, EventEmitter, KeyResult
from termform.tui.keybindings import (
    EDITABLE_TEXT_BOX_KEYBINDINGS,
    LABELED_INPUT_KEYBINDINGS,
    MULTI_LINE_EDITABLE_TEXT_BOX_KEYBINDINGS,
    SELECT_LIST_KEYBINDINGS,
    KeyBindings,
)
from termform.tui.keys import Key, parse_key
from termform.tui.labeled_input import (
    InputStatus,
    InputType,
    LabeledInput,
    LabelStyle,
    resolve_label_style,
)
from termform.tui.renderer import TUIRenderer
from termform.tui.select_list import ListItem, SelectList
from termform.tui.text import Text

__all__ = [
    # Core
    "Element",
    "Document",
    "TUIRenderer",
    # Events
    "EventEmitter",
    "Emission",
    "KeyResult",
    "ClickData",
    # Keys
    "Key",
    "parse_key",
    "KeyBindings",
    "LABELED_INPUT_KEYBINDINGS",
    "EDITABLE_TEXT_BOX_KEYBINDINGS",
    "MULTI_LINE_EDITABLE_TEXT_BOX_KEYBINDINGS",
    "SELECT_LIST_KEYBINDINGS",
    # Widgets
    "Text",
    "EditableTextBox",
    "SelectList",
    "ListItem",
    "LabeledInput",
    "InputType",
    "InputStatus",
    "LabelStyle",
    "resolve_label_style",
]
