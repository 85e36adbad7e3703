"""
Editable text box.

Single- or multi-line text editing driven entirely by a key-binding table:
the table decides which keys move the cursor, delete, or break lines, and
any printable key that is not bound inserts itself.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping

from termform.tui.ansi import Attr, style
from termform.tui.element import Element
from termform.tui.events import KEY, KeyResult
from termform.tui.keybindings import EDITABLE_TEXT_BOX_KEYBINDINGS, KeyBindings
from termform.tui.keys import Key


class EditableTextBox(Element):
    """
    Text input control.

    Features
    --------
    * Cursor movement by character, word and line
    * Backward/forward delete, joining lines at the edges
    * Line breaks and vertical movement when the table binds
      ``new_line``/``up``/``down``
    * Masked rendering for passwords via *hidden_content*

    Parameters
    ----------
    content:
        Initial text.
    value:
        Initial text; takes precedence over *content* when given.
    hidden_content:
        ``True`` renders every character as ``*``; a string renders every
        character as that string's first character.
    text_attr:
        Attributes used when the box has content.
    empty_attr:
        Attributes used when the box is empty.
    key_bindings:
        Key -> action table.  Defaults to the single-line preset.
    """

    element_type = "EditableTextBox"

    def __init__(
        self,
        *,
        parent: Element | None = None,
        content: str | None = None,
        value: str | None = None,
        x: int | None = None,
        y: int | None = None,
        width: int = 1,
        height: int = 1,
        hidden_content: bool | str | None = None,
        text_attr: Attr | None = None,
        empty_attr: Attr | None = None,
        key_bindings: KeyBindings | Mapping[str, str] | None = None,
        no_draw: bool = False,
    ) -> None:
        super().__init__(parent=parent, x=x, y=y, width=width, height=height)
        self.key_bindings = (
            KeyBindings.coerce(key_bindings)
            if key_bindings is not None
            else EDITABLE_TEXT_BOX_KEYBINDINGS
        )
        self.hidden_content = hidden_content
        self.text_attr: Attr = dict(text_attr or {})
        self.empty_attr: Attr = dict(empty_attr or {})

        # Content is stored as a list of lines (without trailing newlines).
        self._lines: list[str] = [""]
        self._cursor_row = 0
        self._cursor_col = 0
        self._scroll_row = 0
        self._scroll_col = 0

        self._actions: dict[str, Callable[[], None]] = {
            "back_delete": self._back_delete,
            "delete": self._delete,
            "backward": self._backward,
            "forward": self._forward,
            "start_of_word": self._start_of_word,
            "end_of_word": self._end_of_word,
            "start_of_line": self._start_of_line,
            "end_of_line": self._end_of_line,
            "new_line": self._new_line,
            "up": self._up,
            "down": self._down,
        }

        initial = value if value is not None else content
        self.set_content("" if initial is None else str(initial), dont_draw=True)

        self.on(KEY, self.on_key)

        if not no_draw:
            self.draw()

    # ------------------------------------------------------------------
    # Value / content
    # ------------------------------------------------------------------

    def get_value(self) -> str:
        """The text, lines joined by ``\\n``."""
        return "\n".join(self._lines)

    def set_value(self, value: str | None, dont_draw: bool = False) -> None:
        self.set_content("" if value is None else str(value), dont_draw=dont_draw)

    def get_content(self) -> str:
        return self.get_value()

    def set_content(
        self,
        content: str,
        has_markup: bool = False,
        dont_draw: bool = False,
    ) -> None:
        """
        Replace the text and move the cursor to its end.

        *has_markup* is accepted for interface parity with other
        controls; text boxes store their content verbatim.
        """
        self._lines = content.split("\n") if content else [""]
        self._cursor_row = len(self._lines) - 1
        self._cursor_col = len(self._lines[self._cursor_row])
        self._scroll_row = 0
        self._scroll_col = 0
        self.invalidate()
        if not dont_draw:
            self.draw()

    @property
    def cursor(self) -> tuple[int, int]:
        """``(row, column)`` of the cursor within the text."""
        return self._cursor_row, self._cursor_col

    # ------------------------------------------------------------------
    # Input handling
    # ------------------------------------------------------------------

    def on_key(self, key: Key) -> KeyResult:
        """Apply the bound action, or insert a printable character."""
        action = self.key_bindings.action_for(key)
        handler = self._actions.get(action) if action else None

        if handler is not None:
            handler()
        elif action is None and key.printable:
            self._insert(key.char)
        else:
            return KeyResult.NOT_HANDLED

        self.invalidate()
        self.draw()
        return KeyResult.CONSUMED

    def _insert(self, text: str) -> None:
        line = self._lines[self._cursor_row]
        self._lines[self._cursor_row] = line[:self._cursor_col] + text + line[self._cursor_col:]
        self._cursor_col += len(text)

    def _back_delete(self) -> None:
        if self._cursor_col > 0:
            line = self._lines[self._cursor_row]
            self._lines[self._cursor_row] = line[:self._cursor_col - 1] + line[self._cursor_col:]
            self._cursor_col -= 1
        elif self._cursor_row > 0:
            # Merge with previous line
            prev = self._lines[self._cursor_row - 1]
            self._cursor_col = len(prev)
            self._lines[self._cursor_row - 1] = prev + self._lines.pop(self._cursor_row)
            self._cursor_row -= 1

    def _delete(self) -> None:
        line = self._lines[self._cursor_row]
        if self._cursor_col < len(line):
            self._lines[self._cursor_row] = line[:self._cursor_col] + line[self._cursor_col + 1:]
        elif self._cursor_row < len(self._lines) - 1:
            self._lines[self._cursor_row] = line + self._lines.pop(self._cursor_row + 1)

    def _backward(self) -> None:
        if self._cursor_col > 0:
            self._cursor_col -= 1
        elif self._cursor_row > 0:
            self._cursor_row -= 1
            self._cursor_col = len(self._lines[self._cursor_row])

    def _forward(self) -> None:
        if self._cursor_col < len(self._lines[self._cursor_row]):
            self._cursor_col += 1
        elif self._cursor_row < len(self._lines) - 1:
            self._cursor_row += 1
            self._cursor_col = 0

    def _start_of_word(self) -> None:
        line = self._lines[self._cursor_row]
        pos = self._cursor_col - 1
        while pos >= 0 and not line[pos].isalnum():
            pos -= 1
        while pos >= 0 and line[pos].isalnum():
            pos -= 1
        self._cursor_col = pos + 1

    def _end_of_word(self) -> None:
        line = self._lines[self._cursor_row]
        pos = self._cursor_col
        while pos < len(line) and not line[pos].isalnum():
            pos += 1
        while pos < len(line) and line[pos].isalnum():
            pos += 1
        self._cursor_col = pos

    def _start_of_line(self) -> None:
        self._cursor_col = 0

    def _end_of_line(self) -> None:
        self._cursor_col = len(self._lines[self._cursor_row])

    def _new_line(self) -> None:
        line = self._lines[self._cursor_row]
        self._lines[self._cursor_row] = line[:self._cursor_col]
        self._lines.insert(self._cursor_row + 1, line[self._cursor_col:])
        self._cursor_row += 1
        self._cursor_col = 0

    def _up(self) -> None:
        if self._cursor_row > 0:
            self._cursor_row -= 1
            self._cursor_col = min(self._cursor_col, len(self._lines[self._cursor_row]))

    def _down(self) -> None:
        if self._cursor_row < len(self._lines) - 1:
            self._cursor_row += 1
            self._cursor_col = min(self._cursor_col, len(self._lines[self._cursor_row]))

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _mask(self, text: str) -> str:
        if not self.hidden_content:
            return text
        char = self.hidden_content[0] if isinstance(self.hidden_content, str) else "*"
        return char * len(text)

    def _scroll_to_cursor(self) -> None:
        """Keep the cursor inside the visible window."""
        if self._cursor_row < self._scroll_row:
            self._scroll_row = self._cursor_row
        elif self._cursor_row >= self._scroll_row + self.height:
            self._scroll_row = self._cursor_row - self.height + 1
        if self._cursor_col < self._scroll_col:
            self._scroll_col = self._cursor_col
        elif self._cursor_col >= self._scroll_col + self.width:
            self._scroll_col = self._cursor_col - self.width + 1

    def render(self) -> list[str]:
        self._scroll_to_cursor()
        attr = self.text_attr if self.get_value() else self.empty_attr
        rows: list[str] = []
        for i in range(self.height):
            index = self._scroll_row + i
            line = self._lines[index] if index < len(self._lines) else ""
            visible = self._mask(line)[self._scroll_col:self._scroll_col + self.width]
            rows.append(style(visible.ljust(self.width), attr))
        self._dirty = False
        return rows

    def draw_self_cursor(self) -> tuple[int, int]:
        """Absolute screen cell where the terminal cursor belongs."""
        self._scroll_to_cursor()
        return (
            self.x + self._cursor_col - self._scroll_col,
            self.y + self._cursor_row - self._scroll_row,
        )
