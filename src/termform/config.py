"""
Configuration for labeled inputs.

A :class:`LabeledInputConfig` can be built programmatically, from a plain
dictionary, or from YAML.  Dictionary keys may be written in ``snake_case``
or in the ``camelCase`` spelling (``hiddenContent``, ``allowNewLine``,
``inputKeyBindings``, ``noDraw``, ...).
"""

from __future__ import annotations

import dataclasses
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from termform.errors import ConfigError
from termform.logging import get_logger

logger = get_logger("config")

Attr = Mapping[str, Any]


def _snake_case(name: str) -> str:
    """``inputKeyBindings`` -> ``input_key_bindings``."""
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


@dataclass
class LabeledInputConfig:
    """
    Construction options for :class:`~termform.tui.labeled_input.LabeledInput`.

    Example YAML:
        type: select
        label: "Colour: "
        items: [red, green, blue]
        value: green
        buttonFocusAttr:
          bg_color: bright_cyan
          color: black
    """

    # Variant
    type: str = "text"  # "text" or "select"

    # Layout (None = derive from the parent)
    x: int | None = None
    y: int | None = None
    width: int | None = None
    height: int | None = None

    # Label
    label: str = ""
    label_focus_attr: Attr = field(default_factory=lambda: {"bold": True})
    label_blur_attr: Attr = field(default_factory=lambda: {"dim": True})
    label_focus_left_padding: str = ""
    label_focus_right_padding: str = ""
    label_blur_left_padding: str = ""
    label_blur_right_padding: str = ""

    # Initial content forwarded to the child control
    content: str | None = None
    value: Any = None

    # Text variant
    hidden_content: bool | str | None = None
    allow_new_line: bool = False
    text_attr: Attr = field(default_factory=lambda: {"bg_color": "blue"})
    empty_attr: Attr = field(default_factory=lambda: {"bg_color": "blue"})

    # Select variant
    items: list[Any] = field(default_factory=list)
    button_blur_attr: Attr = field(
        default_factory=lambda: {"bg_color": "cyan", "color": "white", "bold": True}
    )
    button_focus_attr: Attr = field(
        default_factory=lambda: {"bg_color": "bright_cyan", "color": "black", "bold": True}
    )
    button_disabled_attr: Attr = field(
        default_factory=lambda: {"bg_color": "cyan", "color": "gray", "bold": True}
    )
    button_submitted_attr: Attr = field(
        default_factory=lambda: {"bg_color": "bright_cyan", "color": "bright_white", "bold": True}
    )

    # Key bindings (None = built-in presets)
    key_bindings: Mapping[str, str] | None = None
    input_key_bindings: Mapping[str, str] | None = None

    no_draw: bool = False

    @classmethod
    def field_names(cls) -> set[str]:
        return {f.name for f in dataclasses.fields(cls)}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LabeledInputConfig:
        """
        Create config from a dictionary.

        Raises
        ------
        ConfigError
            On unknown option names or non-mapping key-binding tables.
        """
        known = cls.field_names()
        options: dict[str, Any] = {}
        for raw_key, value in data.items():
            key = _snake_case(str(raw_key))
            if key not in known:
                raise ConfigError(f"Unknown labeled input option: {raw_key!r}")
            options[key] = value

        for key in ("key_bindings", "input_key_bindings"):
            table = options.get(key)
            if table is not None and not isinstance(table, Mapping):
                raise ConfigError(f"{key} must be a mapping of key to action")

        if options.get("items") is None:
            options.pop("items", None)

        return cls(**options)

    @classmethod
    def from_yaml(cls, path: str | Path) -> LabeledInputConfig:
        """Load config from a YAML file."""
        path = Path(path)
        try:
            content = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e
        logger.debug("Loading labeled input config from %s", path)
        return cls.from_yaml_string(content)

    @classmethod
    def from_yaml_string(cls, content: str) -> LabeledInputConfig:
        """Load config from a YAML string."""
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML: {e}") from e
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError("Labeled input config must be a YAML mapping")
        return cls.from_dict(data)

    def to_dict(self) -> dict[str, Any]:
        """Convert config to a dictionary of plain values."""
        result: dict[str, Any] = {}
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Mapping):
                value = dict(value)
            elif isinstance(value, list):
                value = list(value)
            result[f.name] = value
        return result

    def merged(self, **overrides: Any) -> LabeledInputConfig:
        """Return a copy with *overrides* (snake or camel case) applied."""
        data = self.to_dict()
        data.update({_snake_case(k): v for k, v in overrides.items()})
        return type(self).from_dict(data)
