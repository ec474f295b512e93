"""Store backend contract and the in-memory reference backend.

The container only needs a backend that can report its value, accept a
forced replacement, and let interested parties subscribe.  Anything
implementing :class:`StoreBackend` can be plugged in; :class:`MemoryStore`
is used when no backend is given.

Only one writer is expected per backend.  Two containers (or a container
and outside code) writing to the same backend will overwrite each other
without any coordination.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Protocol

Listener = Callable[[Any, Any], None]


class StoreBackend(Protocol):
    def get_state(self) -> Any: ...

    def set_state(self, value: Any, replace: bool = False) -> None: ...

    def subscribe(self, listener: Listener) -> Callable[[], None]: ...


class MemoryStore:
    """Synchronous in-memory store with change listeners.

    ``set_state`` accepts a value or a function of the current value.
    Without ``replace`` a mapping is shallow-merged into the current
    mapping; with ``replace`` it becomes the new value as-is.  Writing
    the very object already held is ignored.  Listeners receive
    ``(state, previous_state)`` and run synchronously; their exceptions
    propagate to the writer.
    """

    def __init__(self, initial: Any = None) -> None:
        self._state: Any = {} if initial is None else initial
        self._listeners: list[Listener] = []

    def get_state(self) -> Any:
        return self._state

    def set_state(self, value: Any, replace: bool = False) -> None:
        next_state = value(self._state) if callable(value) else value
        if next_state is self._state:
            return
        previous = self._state
        if not replace and isinstance(next_state, Mapping) and isinstance(previous, Mapping):
            next_state = {**previous, **next_state}
        self._state = next_state
        for listener in list(self._listeners):
            listener(self._state, previous)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener* and return a callable that removes it again."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
