"""
Synchronous event emitter for UI elements.

Every element is an emitter.  Listeners run in registration order within
the call that emits the event; a listener that returns
:attr:`KeyResult.CONSUMED` interrupts delivery to the listeners after it
and marks the emission as interrupted, which is how key events stop
bubbling up the element tree.

Example:
    emitter = EventEmitter()

    def on_key(key):
        if key.name == "enter":
            return KeyResult.CONSUMED
        return KeyResult.NOT_HANDLED

    unsub = emitter.on("key", on_key)
    emitter.emit("key", KEY_ENTER).interrupted   # True
    unsub()
"""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

# Event name constants
KEY = "key"
FOCUS = "focus"
CLICK = "click"
SUBMIT = "submit"

Listener = Callable[..., Any]


class KeyResult(enum.Enum):
    """Outcome of handling an input event."""

    CONSUMED = "consumed"
    """Fully handled; stop propagation."""

    NOT_HANDLED = "not_handled"
    """Not handled here; the host may keep propagating."""

    @property
    def consumed(self) -> bool:
        return self is KeyResult.CONSUMED


@dataclass(frozen=True)
class ClickData:
    """Payload of a ``click`` event: the absolute cell that was clicked."""

    x: int
    y: int


@dataclass
class Emission:
    """What happened when an event was emitted."""

    event: str
    listener_count: int = 0
    interrupted: bool = False
    results: list[Any] = field(default_factory=list)


class EventEmitter:
    """
    Minimal synchronous event emitter.

    Listener exceptions propagate to the caller of :meth:`emit`; the
    remaining listeners for that emission are not called.
    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = {}

    def on(self, event: str, listener: Listener) -> Callable[[], None]:
        """
        Register *listener* for *event*.

        Returns a callable that removes it again.
        """
        self._listeners.setdefault(event, []).append(listener)

        def unsubscribe() -> None:
            self.off(event, listener)

        return unsubscribe

    def off(self, event: str, listener: Listener) -> None:
        """
        Remove *listener* from *event*.

        Removing a listener that is not registered is a no-op.
        """
        listeners = self._listeners.get(event)
        if not listeners:
            return
        for i, registered in enumerate(listeners):
            # Bound methods compare equal but are not identical
            if registered == listener:
                del listeners[i]
                break
        if not listeners:
            del self._listeners[event]

    def listeners(self, event: str) -> list[Listener]:
        """Return a copy of the listeners registered for *event*."""
        return list(self._listeners.get(event, ()))

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, ()))

    def remove_all_listeners(self, event: str | None = None) -> None:
        """Remove all listeners, or all listeners for a specific event."""
        if event is None:
            self._listeners.clear()
        else:
            self._listeners.pop(event, None)

    def emit(self, event: str, *args: Any) -> Emission:
        """
        Call every listener for *event* with *args*.

        The listener list is snapshotted first, so listeners may
        register or remove listeners without affecting this emission.
        """
        emission = Emission(event=event)
        for listener in list(self._listeners.get(event, ())):
            emission.listener_count += 1
            result = listener(*args)
            if result is not None:
                emission.results.append(result)
            if result is KeyResult.CONSUMED:
                emission.interrupted = True
                break
        return emission
