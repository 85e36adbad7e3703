"""
Key-binding tables.

A binding table maps a key descriptor (``"enter"``, ``"ctrl+left"``) to a
logical action name (``"submit"``, ``"start_of_word"``).  Tables are
immutable; the presets below are shared by every widget that uses them.
"""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

from termform.errors import ConfigError
from termform.logging import get_logger
from termform.tui.keys import Key, normalise_descriptor

logger = get_logger("tui.keybindings")


class KeyBindings(Mapping[str, str]):
    """
    Immutable mapping from normalised key descriptor to action name.

    Parameters
    ----------
    bindings:
        Mapping of key descriptors to actions.  Descriptors are normalised
        on the way in, so ``{"CTRL_LEFT": "start_of_word"}`` and
        ``{"ctrl+left": "start_of_word"}`` build the same table.
    """

    __slots__ = ("_table",)

    def __init__(self, bindings: Mapping[str, str] | None = None) -> None:
        table: dict[str, str] = {}
        for descriptor, action in (bindings or {}).items():
            table[normalise_descriptor(descriptor)] = action
        self._table: Mapping[str, str] = MappingProxyType(table)

    # ------------------------------------------------------------------
    # Mapping protocol
    # ------------------------------------------------------------------

    def __getitem__(self, descriptor: str) -> str:
        return self._table[normalise_descriptor(descriptor)]

    def __contains__(self, descriptor: object) -> bool:
        if not isinstance(descriptor, str):
            return False
        return normalise_descriptor(descriptor) in self._table

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def __repr__(self) -> str:
        return f"KeyBindings({dict(self._table)!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, KeyBindings):
            return dict(self._table) == dict(other._table)
        if isinstance(other, Mapping):
            return self == KeyBindings(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    # ------------------------------------------------------------------
    # Querying
    # ------------------------------------------------------------------

    def action_for(self, key: Key | str) -> str | None:
        """
        Return the action bound to *key*, or ``None``.

        Parameters
        ----------
        key:
            Either a :class:`Key` or a descriptor string.
        """
        if isinstance(key, Key):
            return self._table.get(key.descriptor)
        return self._table.get(normalise_descriptor(key))

    def keys_for(self, action: str) -> list[str]:
        """Return every descriptor bound to *action*, in table order."""
        return [d for d, a in self._table.items() if a == action]

    def extend(self, overrides: Mapping[str, str]) -> KeyBindings:
        """Return a new table with *overrides* layered on top of this one."""
        merged = dict(self._table)
        merged.update(KeyBindings(overrides)._table)
        return KeyBindings(merged)

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def coerce(cls, value: KeyBindings | Mapping[str, str]) -> KeyBindings:
        """Return *value* unchanged if it is already a table, else wrap it."""
        if isinstance(value, KeyBindings):
            return value
        return cls(value)

    @classmethod
    def load(cls, path: str | Path) -> KeyBindings:
        """
        Load a table from a JSON file.

        The file must be an object mapping key descriptors to action
        names, e.g.::

            {
                "enter": "submit",
                "ctrl+s": "submit"
            }
        """
        path = Path(path)
        try:
            raw: Any = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            raise ConfigError(f"Cannot read key bindings from {path}: {e}") from e

        if not isinstance(raw, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in raw.items()
        ):
            raise ConfigError(f"Key bindings in {path} must map strings to strings")

        logger.debug("Loaded %d key bindings from %s", len(raw), path)
        return cls(raw)


# ---------------------------------------------------------------------------
# Presets
# ---------------------------------------------------------------------------

LABELED_INPUT_KEYBINDINGS = KeyBindings({
    "enter": "submit",
    "kp_enter": "submit",
    "alt+enter": "submit",
})
"""Container-level table: which keys submit the labeled input."""

EDITABLE_TEXT_BOX_KEYBINDINGS = KeyBindings({
    "backspace": "back_delete",
    "delete": "delete",
    "left": "backward",
    "right": "forward",
    "ctrl+left": "start_of_word",
    "ctrl+right": "end_of_word",
    "home": "start_of_line",
    "end": "end_of_line",
})

MULTI_LINE_EDITABLE_TEXT_BOX_KEYBINDINGS = EDITABLE_TEXT_BOX_KEYBINDINGS.extend({
    "enter": "new_line",
    "kp_enter": "new_line",
    "up": "up",
    "down": "down",
})

SELECT_LIST_KEYBINDINGS = KeyBindings({
    "up": "previous",
    "down": "next",
    "enter": "submit",
    "kp_enter": "submit",
})
