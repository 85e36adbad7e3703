"""Shared pytest fixtures for termform tests."""

from __future__ import annotations

from typing import Any

import pytest

from termform.tui.document import Document


class Recorder:
    """Callable that records every call's positional arguments."""

    def __init__(self, result: Any = None) -> None:
        self.calls: list[tuple[Any, ...]] = []
        self._result = result

    def __call__(self, *args: Any) -> Any:
        self.calls.append(args)
        return self._result

    @property
    def values(self) -> list[Any]:
        """First argument of each call (the submitted value for ``submit``)."""
        return [call[0] for call in self.calls]


@pytest.fixture
def document() -> Document:
    """A detached 40x5 document with no renderer."""
    return Document(width=40, height=5)


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()
