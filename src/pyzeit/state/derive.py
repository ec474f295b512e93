"""Derived-field recomputation around a store backend.

:class:`DerivedStore` wraps a backend and guarantees that every value it
writes carries freshly computed derived fields: ``{**state, **compute(state)}``.
Recomputation is synchronous and unconditional on each write.

The container composes and writes values itself; outside code that
holds the store handle goes through :meth:`DerivedStore.set_state`, which
resolves, merges and recomputes before writing.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from pyzeit.exceptions import ZeitDerivationError
from pyzeit.state.backend import Listener, StoreBackend
from pyzeit.state.merge import merge

_logger = logging.getLogger(__name__)

Compute = Callable[[Any], Mapping[str, Any]]


class DerivedStore:
    """Store handle that keeps derived fields consistent with base fields."""

    def __init__(self, backend: StoreBackend, compute: Compute) -> None:
        self._backend = backend
        self._compute = compute

    @property
    def backend(self) -> StoreBackend:
        return self._backend

    def compose(self, state: Mapping[str, Any]) -> dict[str, Any]:
        """Return *state* overlaid with the fields computed from it."""
        derived = self._compute(state)
        if not isinstance(derived, Mapping):
            raise ZeitDerivationError(
                f"compute must return a mapping, got {type(derived).__name__}",
            )
        return {**state, **derived}

    def initialize(self, state: Mapping[str, Any]) -> dict[str, Any]:
        """Compose and force-write the first value; return what was written."""
        composed = self.compose(state)
        self._backend.set_state(composed, True)
        _logger.debug("Derived store initialized with %d fields", len(composed))
        return composed

    def write(self, composed: dict[str, Any]) -> None:
        """Force-write a value that :meth:`compose` already produced."""
        self._backend.set_state(composed, True)

    def get_state(self) -> Any:
        return self._backend.get_state()

    def set_state(self, patch: Any, replace: bool = False) -> None:
        """Write *patch* (or ``patch(current)``) with derived fields recomputed.

        Without ``replace`` the resolved patch is deep-merged into the
        current value first.
        """
        current = self._backend.get_state()
        next_state = patch(current) if callable(patch) else patch
        if not replace:
            next_state = merge(current, next_state)
        self._backend.set_state(self.compose(next_state), True)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        return self._backend.subscribe(listener)
