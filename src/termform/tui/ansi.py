"""
ANSI escape sequence utilities for terminal rendering.

Widgets describe their look with *attribute dicts* such as
``{"bg_color": "cyan", "color": "white", "bold": True}``; this module turns
those into SGR escape sequences and provides the cursor and screen
primitives used by the renderer.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

# ---------------------------------------------------------------------------
# Escape sequences
# ---------------------------------------------------------------------------

ESC = "\033"
CSI = f"{ESC}["
RESET = f"{CSI}0m"

_ANSI_RE = re.compile(r"\033\[[0-9;?]*[A-Za-z]")

Attr = Mapping[str, Any]
"""An attribute dict: colour names plus boolean style flags."""


# ---------------------------------------------------------------------------
# Colour names
# ---------------------------------------------------------------------------

# Offsets from the foreground base (30); backgrounds add 10.
_COLOR_CODES: dict[str, int] = {
    "black": 30,
    "red": 31,
    "green": 32,
    "yellow": 33,
    "blue": 34,
    "magenta": 35,
    "cyan": 36,
    "white": 37,
    "default": 39,
    "gray": 90,
    "grey": 90,
    "bright_black": 90,
    "bright_red": 91,
    "bright_green": 92,
    "bright_yellow": 93,
    "bright_blue": 94,
    "bright_magenta": 95,
    "bright_cyan": 96,
    "bright_white": 97,
}

_STYLE_CODES: dict[str, int] = {
    "bold": 1,
    "dim": 2,
    "italic": 3,
    "underline": 4,
    "inverse": 7,
    "strikethrough": 9,
}

# camelCase spellings accepted in attribute dicts
_ATTR_ALIASES: dict[str, str] = {
    "bgColor": "bg_color",
    "bg": "bg_color",
    "fg": "color",
    "fgColor": "color",
}


def _snake(name: str) -> str:
    """``brightCyan`` -> ``bright_cyan``."""
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


def _color_code(color: str | int, background: bool) -> str:
    """Return the SGR parameter(s) for *color*."""
    offset = 10 if background else 0
    if isinstance(color, int):
        # 256-colour palette index
        return f"{48 if background else 38};5;{color}"
    if color.startswith("#"):
        r, g, b = _hex_to_rgb(color)
        return f"{48 if background else 38};2;{r};{g};{b}"
    code = _COLOR_CODES.get(_snake(color))
    if code is None:
        raise ValueError(f"Unknown colour name: {color!r}")
    return str(code + offset)


def _hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """Convert a hex color string (with or without '#') to an (r, g, b) tuple."""
    h = hex_color.lstrip("#")
    if len(h) == 3:
        h = h[0] * 2 + h[1] * 2 + h[2] * 2
    if len(h) != 6:
        raise ValueError(f"Invalid hex color: {hex_color!r}")
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


# ---------------------------------------------------------------------------
# Styling
# ---------------------------------------------------------------------------

def sgr(attr: Attr | None) -> str:
    """
    Build the SGR escape sequence for an attribute dict.

    Returns an empty string for an empty or ``None`` dict.

    >>> sgr({"bold": True})
    '\\x1b[1m'
    >>> sgr({"bg_color": "blue"})
    '\\x1b[44m'
    """
    if not attr:
        return ""
    params: list[str] = []
    for raw_name, value in attr.items():
        name = _ATTR_ALIASES.get(raw_name, raw_name)
        if name == "color" and value is not None:
            params.append(_color_code(value, background=False))
        elif name == "bg_color" and value is not None:
            params.append(_color_code(value, background=True))
        elif name in _STYLE_CODES and value:
            params.append(str(_STYLE_CODES[name]))
    if not params:
        return ""
    return f"{CSI}{';'.join(params)}m"


def style(text: str, attr: Attr | None = None) -> str:
    """
    Wrap *text* in the escape sequences for *attr*.

    The result ends with ``RESET`` whenever any styling was applied.
    """
    prefix = sgr(attr)
    if not prefix or not text:
        return text
    return f"{prefix}{text}{RESET}"


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from *text*."""
    return _ANSI_RE.sub("", text)


def visible_len(text: str) -> int:
    """Length of *text* as displayed, ignoring escape sequences."""
    return len(strip_ansi(text))


def truncate(text: str, width: int) -> str:
    """
    Cut *text* to *width* visible columns, keeping its escape sequences.

    A ``RESET`` is appended when styled text was cut short.
    """
    out: list[str] = []
    visible = 0
    styled = False
    pos = 0
    while pos < len(text) and visible < width:
        match = _ANSI_RE.match(text, pos)
        if match:
            out.append(match.group())
            styled = True
            pos = match.end()
            continue
        out.append(text[pos])
        visible += 1
        pos += 1
    if styled and pos < len(text):
        out.append(RESET)
    return "".join(out)


# ---------------------------------------------------------------------------
# Cursor and screen control
# ---------------------------------------------------------------------------

def cursor_position(row: int, col: int) -> str:
    """Move cursor to absolute *row*, *col* (1-based)."""
    return f"{CSI}{row};{col}H"


def clear_line() -> str:
    """Erase the entire current line."""
    return f"{CSI}2K"


def clear_screen() -> str:
    """Clear the entire screen and move cursor to top-left."""
    return f"{CSI}2J{CSI}H"


def hide_cursor() -> str:
    return f"{CSI}?25l"


def show_cursor() -> str:
    return f"{CSI}?25h"
