"""
Key parsing for terminal input.

Translates raw bytes read from stdin into structured ``Key`` objects, and
``Key`` objects into the canonical descriptor strings (``"ctrl+left"``,
``"alt+enter"``) that key-binding tables are written in.
"""

from __future__ import annotations

from dataclasses import dataclass

_MODIFIER_ORDER = ("alt", "ctrl", "shift")


# ---------------------------------------------------------------------------
# Key data model
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Key:
    """
    Parsed representation of a single key press.

    Attributes
    ----------
    name:
        Symbolic base name (e.g. ``'enter'``, ``'up'``, ``'a'``).  Modifiers
        are never part of the name; they live in the boolean flags.
    char:
        The literal character, if printable.  Empty string otherwise.
    ctrl:
        ``True`` when Ctrl was held.
    alt:
        ``True`` when Alt (Meta/Option) was held.
    shift:
        ``True`` when Shift was held (only detectable for certain keys).
    """

    name: str
    char: str = ""
    ctrl: bool = False
    alt: bool = False
    shift: bool = False

    @property
    def descriptor(self) -> str:
        """
        Canonical descriptor: sorted modifiers then the base name.

        >>> Key(name="left", ctrl=True).descriptor
        'ctrl+left'
        >>> Key(name="enter", char="\\r", alt=True).descriptor
        'alt+enter'
        """
        mods = [m for m in _MODIFIER_ORDER if getattr(self, m)]
        return "+".join(mods + [self.name])

    @property
    def printable(self) -> bool:
        """Whether the key inserts its character into text."""
        return bool(self.char) and self.char.isprintable() and not (self.ctrl or self.alt)

    @classmethod
    def from_descriptor(cls, descriptor: str) -> Key:
        """
        Build a ``Key`` from a descriptor such as ``"Ctrl+Right"``.

        Single printable characters get their ``char`` filled in.
        """
        parts = [p.strip().lower() for p in descriptor.split("+")]
        base = parts[-1]
        mods = set(parts[:-1])
        char = _NAMED_CHARS.get(base, base if len(base) == 1 else "")
        return cls(
            name=base,
            char=char,
            ctrl="ctrl" in mods,
            alt="alt" in mods,
            shift="shift" in mods,
        )


def normalise_descriptor(descriptor: str) -> str:
    """
    Normalise a human-readable key descriptor to canonical form.

    Accepts ``+`` or ``_`` separated forms, so ``"Ctrl+Left"``,
    ``"CTRL_LEFT"`` and ``"left+ctrl"`` all become ``"ctrl+left"``.
    ``KP_ENTER`` and ``PAGE_UP`` keep their underscore because the part
    before it is not a modifier.
    """
    text = descriptor.strip().lower()
    tokens = text.replace("+", " ").split()
    parts: list[str] = []
    for token in tokens:
        # CTRL_LEFT style: split off leading modifiers only
        while "_" in token:
            head, rest = token.split("_", 1)
            if head not in _MODIFIER_ORDER:
                break
            parts.append(head)
            token = rest
        parts.append(token)
    mods = sorted({p for p in parts if p in _MODIFIER_ORDER})
    bases = [p for p in parts if p not in _MODIFIER_ORDER]
    base = bases[-1] if bases else ""
    return "+".join(mods + [base])


# ---------------------------------------------------------------------------
# Common key constants
# ---------------------------------------------------------------------------

KEY_ENTER = Key(name="enter", char="\r")
KEY_KP_ENTER = Key(name="kp_enter", char="\r")
KEY_ALT_ENTER = Key(name="enter", char="\r", alt=True)
KEY_TAB = Key(name="tab", char="\t")
KEY_ESCAPE = Key(name="escape")
KEY_BACKSPACE = Key(name="backspace")
KEY_DELETE = Key(name="delete")
KEY_INSERT = Key(name="insert")
KEY_SPACE = Key(name="space", char=" ")

KEY_UP = Key(name="up")
KEY_DOWN = Key(name="down")
KEY_LEFT = Key(name="left")
KEY_RIGHT = Key(name="right")

KEY_HOME = Key(name="home")
KEY_END = Key(name="end")
KEY_PAGE_UP = Key(name="page_up")
KEY_PAGE_DOWN = Key(name="page_down")

_NAMED_CHARS: dict[str, str] = {
    "enter": "\r",
    "kp_enter": "\r",
    "tab": "\t",
    "space": " ",
}

_FUNCTION_KEYS: dict[int, str] = {
    11: "f1", 12: "f2", 13: "f3", 14: "f4", 15: "f5",
    17: "f6", 18: "f7", 19: "f8", 20: "f9", 21: "f10",
    23: "f11", 24: "f12",
}


# ---------------------------------------------------------------------------
# Escape sequence lookup tables
# ---------------------------------------------------------------------------

# CSI final byte -> key
_CSI_FINAL: dict[str, Key] = {
    "A": KEY_UP,
    "B": KEY_DOWN,
    "C": KEY_RIGHT,
    "D": KEY_LEFT,
    "H": KEY_HOME,
    "F": KEY_END,
    "Z": Key(name="tab", char="\t", shift=True),
}

# CSI <number> ~
_CSI_TILDE: dict[int, Key] = {
    1: KEY_HOME,
    2: KEY_INSERT,
    3: KEY_DELETE,
    4: KEY_END,
    5: KEY_PAGE_UP,
    6: KEY_PAGE_DOWN,
    **{code: Key(name=name) for code, name in _FUNCTION_KEYS.items()},
}

# SS3 (ESC O <letter>); application keypad mode sends ESC O M for Enter
_SS3: dict[str, Key] = {
    "P": Key(name="f1"),
    "Q": Key(name="f2"),
    "R": Key(name="f3"),
    "S": Key(name="f4"),
    "H": KEY_HOME,
    "F": KEY_END,
    "A": KEY_UP,
    "B": KEY_DOWN,
    "C": KEY_RIGHT,
    "D": KEY_LEFT,
    "M": KEY_KP_ENTER,
}

UNKNOWN = Key(name="unknown")


def _with_modifiers(base: Key, code: int) -> Key:
    """
    Apply an xterm modifier code to *base*.

    The modifier value is 1-based: ``value = 1 + shift + 2*alt + 4*ctrl``.
    """
    code -= 1
    return Key(
        name=base.name,
        char=base.char,
        shift=bool(code & 1),
        alt=bool(code & 2),
        ctrl=bool(code & 4),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_key(data: bytes) -> Key:
    """
    Parse raw terminal input bytes into a ``Key`` object.

    Handles printable UTF-8, Ctrl+letter, Alt-prefixed keys, CSI and SS3
    sequences, and xterm-style modifier suffixes (``CSI 1;5C`` for
    Ctrl+Right).  Anything unrecognised yields a key named ``"unknown"``.
    """
    if not data:
        return UNKNOWN

    if data[:1] == b"\x1b":
        if len(data) == 1:
            return KEY_ESCAPE
        if data[1:2] == b"[":
            return _parse_csi(data[2:])
        if data[1:2] == b"O":
            return _SS3.get(data[2:3].decode("ascii", "replace"), UNKNOWN)
        # Alt + key: parse the remainder and set the flag
        inner = parse_key(data[1:])
        if inner is UNKNOWN or inner.alt:
            return UNKNOWN
        return Key(name=inner.name, char=inner.char, ctrl=inner.ctrl, alt=True, shift=inner.shift)

    byte = data[0]

    if byte in (0x0D, 0x0A):
        return KEY_ENTER
    if byte == 0x09:
        return KEY_TAB
    if byte in (0x7F, 0x08):
        return KEY_BACKSPACE
    if byte == 0x00:
        return Key(name="space", char=" ", ctrl=True)
    if 1 <= byte <= 26:
        letter = chr(byte + 96)
        return Key(name=letter, char=letter, ctrl=True)

    try:
        ch = data.decode("utf-8")
    except UnicodeDecodeError:
        return UNKNOWN

    if len(ch) == 1 and ch.isprintable():
        if ch == " ":
            return KEY_SPACE
        return Key(name=ch, char=ch)

    return UNKNOWN


def _parse_csi(payload: bytes) -> Key:
    """Parse the bytes after ``ESC [``."""
    try:
        text = payload.decode("ascii")
    except UnicodeDecodeError:
        return UNKNOWN
    if not text:
        return UNKNOWN

    final, params = text[-1], text[:-1].split(";") if len(text) > 1 else []

    if final == "~":
        base = _CSI_TILDE.get(_safe_int(params[0]) if params else -1)
    else:
        base = _CSI_FINAL.get(final)
    if base is None:
        return UNKNOWN

    if len(params) == 2:
        mod = _safe_int(params[1])
        if mod < 1:
            return UNKNOWN
        return _with_modifiers(base, mod)
    return base


def _safe_int(s: str) -> int:
    """Return ``int(s)`` or ``-1`` if *s* is not a valid integer."""
    try:
        return int(s)
    except ValueError:
        return -1
