"""Custom exception hierarchy for pyzeit."""

from __future__ import annotations


class ZeitError(Exception):
    """Base exception for all pyzeit errors."""


class ZeitConfigError(ZeitError):
    """Invalid configuration."""


class ZeitHistoryError(ZeitError):
    """Command history would violate the cursor invariant.

    The cursor must stay within ``[-1, len(history) - 1]``.  Raised by
    :meth:`pyzeit.Zeit.replace_history` before anything is installed, so
    the previous history remains intact.
    """

    def __init__(
        self,
        message: str,
        *,
        cursor: int,
        length: int,
    ) -> None:
        self.cursor = cursor
        self.length = length
        super().__init__(message)


class ZeitCloneError(ZeitError):
    """Value cannot be cloned under strict cloning."""

    def __init__(self, message: str, *, value_type: type) -> None:
        self.value_type = value_type
        super().__init__(message)


class ZeitDerivationError(ZeitError):
    """The derive function returned something other than a mapping."""


class ZeitReentrancyError(ZeitError):
    """Hooks re-entered the write path deeper than allowed.

    Raised when nested writes triggered from lifecycle hooks exceed
    ``ZeitConfig.max_write_depth``.
    """

    def __init__(self, message: str, *, depth: int) -> None:
        self.depth = depth
        super().__init__(message)
