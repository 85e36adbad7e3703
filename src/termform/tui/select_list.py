"""
Selectable list control.

A one-row button showing the current item; bound keys move the selection
through the items and ``submit`` commits it, emitting a ``submit`` event
with the selected value.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from termform.logging import get_logger
from termform.tui.ansi import Attr, style
from termform.tui.element import Element
from termform.tui.events import KEY, SUBMIT, KeyResult
from termform.tui.keybindings import SELECT_LIST_KEYBINDINGS, KeyBindings
from termform.tui.keys import Key

logger = get_logger("tui.select_list")


@dataclass
class ListItem:
    """
    A single entry in a :class:`SelectList`.

    Attributes
    ----------
    content:
        Display text for the item.
    value:
        Value reported when the item is selected.  Defaults to *content*.
    """

    content: str
    value: Any = None

    def __post_init__(self) -> None:
        if self.value is None:
            self.value = self.content

    @classmethod
    def coerce(cls, item: ListItem | Mapping[str, Any] | str) -> ListItem:
        """Accept a ``ListItem``, a ``{"content", "value"}`` dict, or a string."""
        if isinstance(item, ListItem):
            return item
        if isinstance(item, Mapping):
            return cls(content=str(item.get("content", item.get("value", ""))), value=item.get("value"))
        return cls(content=str(item))


class SelectList(Element):
    """
    Item selector.

    Parameters
    ----------
    items:
        Selectable entries; strings, dicts or :class:`ListItem`.
    value:
        Initially selected value.  ``None`` selects the first item.
    content:
        Button text override; by default the selected item's content.
    button_blur_attr, button_focus_attr, button_disabled_attr, button_submitted_attr:
        Button attributes per status.
    key_bindings:
        Key -> action table.  Defaults to the select-list preset.
    """

    element_type = "SelectList"

    def __init__(
        self,
        *,
        parent: Element | None = None,
        items: Iterable[ListItem | Mapping[str, Any] | str] | None = None,
        value: Any = None,
        content: str | None = None,
        x: int | None = None,
        y: int | None = None,
        width: int = 1,
        button_blur_attr: Attr | None = None,
        button_focus_attr: Attr | None = None,
        button_disabled_attr: Attr | None = None,
        button_submitted_attr: Attr | None = None,
        key_bindings: KeyBindings | Mapping[str, str] | None = None,
        no_draw: bool = False,
    ) -> None:
        super().__init__(parent=parent, x=x, y=y, width=width, height=1)
        self._items: list[ListItem] = [ListItem.coerce(i) for i in items or ()]
        self.key_bindings = (
            KeyBindings.coerce(key_bindings)
            if key_bindings is not None
            else SELECT_LIST_KEYBINDINGS
        )
        self.button_blur_attr: Attr = dict(button_blur_attr or {})
        self.button_focus_attr: Attr = dict(button_focus_attr or {})
        self.button_disabled_attr: Attr = dict(button_disabled_attr or {})
        self.button_submitted_attr: Attr = dict(button_submitted_attr or {})
        self.disabled = False
        self.submitted = False

        self._selected_index: int | None = 0 if self._items else None
        self._content: str | None = None
        if value is not None:
            self.set_value(value, dont_draw=True)
        if content is not None:
            self._content = content

        self._actions: dict[str, Callable[[], None]] = {
            "previous": self._previous,
            "next": self._next,
            "first": self._first,
            "last": self._last,
            "submit": self.submit,
        }
        self.on(KEY, self.on_key)

        if not no_draw:
            self.draw()

    # ------------------------------------------------------------------
    # Items and selection
    # ------------------------------------------------------------------

    @property
    def items(self) -> list[ListItem]:
        return list(self._items)

    @property
    def selected_index(self) -> int | None:
        """Index of the selected item, ``None`` when nothing is selected."""
        return self._selected_index

    @property
    def selected_item(self) -> ListItem | None:
        if self._selected_index is None:
            return None
        return self._items[self._selected_index]

    def select(self, index: int | None) -> None:
        """Select the item at *index* (clamped), or clear with ``None``."""
        if index is None or not self._items:
            self._selected_index = None
        else:
            self._selected_index = max(0, min(index, len(self._items) - 1))
        self._content = None
        self.submitted = False
        self.invalidate()

    # ------------------------------------------------------------------
    # Value / content
    # ------------------------------------------------------------------

    def get_value(self) -> Any:
        """Value of the selected item, ``None`` when nothing is selected."""
        item = self.selected_item
        return item.value if item is not None else None

    def set_value(self, value: Any, dont_draw: bool = False) -> None:
        """Select the first item whose value equals *value*; otherwise clear."""
        index = next((i for i, item in enumerate(self._items) if item.value == value), None)
        self.select(index)
        if not dont_draw:
            self.draw()

    def get_content(self) -> str:
        """Text shown on the button."""
        if self._content is not None:
            return self._content
        item = self.selected_item
        return item.content if item is not None else ""

    def set_content(self, content: str, has_markup: bool = False, dont_draw: bool = False) -> None:
        self._content = content
        self.invalidate()
        if not dont_draw:
            self.draw()

    # ------------------------------------------------------------------
    # Input handling
    # ------------------------------------------------------------------

    def on_key(self, key: Key) -> KeyResult:
        action = self.key_bindings.action_for(key)
        handler = self._actions.get(action) if action else None
        if handler is None or self.disabled:
            return KeyResult.NOT_HANDLED
        handler()
        self.draw()
        return KeyResult.CONSUMED

    def _move(self, index: int) -> None:
        if self._items:
            self.select(index)

    def _previous(self) -> None:
        if self._selected_index is None:
            self._move(len(self._items) - 1)
        else:
            self._move(self._selected_index - 1)

    def _next(self) -> None:
        if self._selected_index is None:
            self._move(0)
        else:
            self._move(self._selected_index + 1)

    def _first(self) -> None:
        self._move(0)

    def _last(self) -> None:
        self._move(len(self._items) - 1)

    def submit(self) -> None:
        """Commit the current selection and emit ``submit(value)``."""
        self.submitted = True
        self.invalidate()
        value = self.get_value()
        logger.debug("Select list submitted %r", value)
        self.emit(SUBMIT, value)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    @property
    def button_attr(self) -> Attr:
        if self.disabled:
            return self.button_disabled_attr
        if self.submitted:
            return self.button_submitted_attr
        if self.has_focus or (self.parent is not None and self.parent.has_focus):
            return self.button_focus_attr
        return self.button_blur_attr

    def render(self) -> list[str]:
        text = self.get_content()[:self.width].ljust(self.width)
        self._dirty = False
        return [style(text, self.button_attr)]
