"""State mutation engine.

Value taxonomy, cloning, patch merging, derived-field recomputation and
the command history that the container is built from.
"""

from pyzeit.state.backend import MemoryStore, StoreBackend
from pyzeit.state.clone import clone
from pyzeit.state.derive import DerivedStore
from pyzeit.state.history import CommandHistory
from pyzeit.state.kinds import ATOMIC_KINDS, ValueKind, classify, is_atomic
from pyzeit.state.merge import merge

__all__ = [
    "ATOMIC_KINDS",
    "CommandHistory",
    "DerivedStore",
    "MemoryStore",
    "StoreBackend",
    "ValueKind",
    "classify",
    "clone",
    "is_atomic",
    "merge",
]
