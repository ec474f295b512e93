"""pyzeit - Patch-based state container with derived fields and undo/redo."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyzeit")
except PackageNotFoundError:
    __version__ = "0+local"
from pyzeit._constants import REDO_ID, RESET_ID, UNDO_ID
from pyzeit.config import ZeitConfig
from pyzeit.container import Zeit
from pyzeit.exceptions import (
    ZeitCloneError,
    ZeitConfigError,
    ZeitDerivationError,
    ZeitError,
    ZeitHistoryError,
    ZeitReentrancyError,
)
from pyzeit.hooks import ZeitHooks
from pyzeit.models import Command, HistoryRecord, Rect
from pyzeit.state import CommandHistory, DerivedStore, MemoryStore, StoreBackend, clone, merge

__all__ = [
    "__version__",
    "REDO_ID",
    "RESET_ID",
    "UNDO_ID",
    "Command",
    "CommandHistory",
    "DerivedStore",
    "HistoryRecord",
    "MemoryStore",
    "Rect",
    "StoreBackend",
    "Zeit",
    "ZeitCloneError",
    "ZeitConfig",
    "ZeitConfigError",
    "ZeitDerivationError",
    "ZeitError",
    "ZeitHistoryError",
    "ZeitHooks",
    "ZeitReentrancyError",
    "clone",
    "merge",
]
