"""
termform - labeled input widgets for terminal user interfaces.

A ``LabeledInput`` pairs an optional label with a text box or a select
list, routes keys to the control before its own submit binding, and keeps
the label styled according to focus.

Example:
    from termform import Document, LabeledInput

    document = Document(width=40, height=2)
    colour = LabeledInput(
        {"type": "select", "label": "Colour: ", "items": ["red", "green"]},
        parent=document,
    )
    colour.on("submit", lambda value, _, widget: print("picked", value))
    document.give_focus_to(colour)
    document.feed(b"\\x1b[B")   # down
    document.feed(b"\\r")       # picked green
"""

from termform.config import LabeledInputConfig
from termform.errors import ConfigError, TermformError, UnknownInputTypeError
from termform.tui import (
    Document,
    EditableTextBox,
    InputType,
    Key,
    KeyBindings,
    KeyResult,
    LabeledInput,
    ListItem,
    SelectList,
    parse_key,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "LabeledInputConfig",
    "TermformError",
    "ConfigError",
    "UnknownInputTypeError",
    "Document",
    "EditableTextBox",
    "SelectList",
    "ListItem",
    "LabeledInput",
    "InputType",
    "Key",
    "KeyBindings",
    "KeyResult",
    "parse_key",
]
