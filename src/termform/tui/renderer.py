"""
Differential rendering engine.

``TUIRenderer`` tracks the previously written frame and only rewrites rows
that changed, using CSI 2026 synchronized output markers to avoid visible
tearing on modern terminals.
"""

from __future__ import annotations

import sys
from io import StringIO
from typing import TextIO

from termform.tui.ansi import (
    clear_line,
    clear_screen,
    cursor_position,
    hide_cursor,
    show_cursor,
)

# ---------------------------------------------------------------------------
# Synchronized output markers (DEC private mode 2026)
# ---------------------------------------------------------------------------

_SYNC_START = "\033[?2026h"
_SYNC_END = "\033[?2026l"


class TUIRenderer:
    """
    Differential terminal renderer.

    Keeps a copy of the last frame and on each :meth:`render` call only
    rewrites the rows that differ.  A full redraw is forced when the
    terminal dimensions change.

    Parameters
    ----------
    output:
        Writable text stream, defaults to ``sys.stdout``.
    """

    def __init__(self, output: TextIO | None = None) -> None:
        self._output: TextIO = output or sys.stdout
        self._previous_lines: list[str] = []
        self._prev_width: int = 0
        self._prev_height: int = 0

    @property
    def previous_lines(self) -> list[str]:
        """The last frame that was written to the terminal."""
        return list(self._previous_lines)

    def render(
        self,
        lines: list[str],
        width: int,
        height: int,
        cursor: tuple[int, int] | None = None,
    ) -> None:
        """
        Write *lines* to the terminal, rewriting only changed rows.

        Parameters
        ----------
        lines:
            Composed frame, one string per row.
        width, height:
            Terminal size; a change forces a full redraw.
        cursor:
            0-based ``(x, y)`` to leave the visible cursor at, or ``None``
            to keep it hidden.
        """
        new_lines = list(lines[:height])
        if len(new_lines) < height:
            new_lines.extend([""] * (height - len(new_lines)))

        size_changed = (width != self._prev_width or height != self._prev_height)
        if size_changed or not self._previous_lines:
            updates = [(i + 1, line) for i, line in enumerate(new_lines)]
            self._write_frame(updates, cursor, full=True)
        else:
            updates = self._diff(self._previous_lines, new_lines)
            if updates or cursor is not None:
                self._write_frame(updates, cursor, full=False)

        self._previous_lines = new_lines
        self._prev_width = width
        self._prev_height = height

    def clear(self) -> None:
        """Clear the screen and reset internal state."""
        self._write(clear_screen())
        self._previous_lines = []
        self._prev_width = 0
        self._prev_height = 0

    @staticmethod
    def _diff(old_lines: list[str], new_lines: list[str]) -> list[tuple[int, str]]:
        """Return ``(1-based row, text)`` pairs for every changed row."""
        max_len = max(len(old_lines), len(new_lines))
        updates: list[tuple[int, str]] = []
        for i in range(max_len):
            old = old_lines[i] if i < len(old_lines) else ""
            new = new_lines[i] if i < len(new_lines) else ""
            if old != new:
                updates.append((i + 1, new))
        return updates

    def _write_frame(
        self,
        updates: list[tuple[int, str]],
        cursor: tuple[int, int] | None,
        full: bool,
    ) -> None:
        buf = StringIO()
        buf.write(_SYNC_START)
        buf.write(hide_cursor())
        if full:
            buf.write(clear_screen())

        for row, text in updates:
            buf.write(cursor_position(row, 1))
            if not full:
                buf.write(clear_line())
            buf.write(text)

        if cursor is not None:
            x, y = cursor
            buf.write(cursor_position(y + 1, x + 1))
            buf.write(show_cursor())
        buf.write(_SYNC_END)
        self._write(buf.getvalue())

    def _write(self, data: str) -> None:
        """Write data to the output stream and flush."""
        self._output.write(data)
        self._output.flush()
