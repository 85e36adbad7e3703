"""Exception hierarchy for termform."""

from __future__ import annotations


class TermformError(Exception):
    """Base class for all termform errors."""


class ConfigError(TermformError):
    """Raised when widget configuration cannot be parsed or is malformed."""


class UnknownInputTypeError(TermformError, ValueError):
    """Raised when a labeled input is built with an unsupported input type."""

    def __init__(self, input_type: object) -> None:
        self.input_type = input_type
        super().__init__(f"Unknown input type: {input_type!r}")
