"""Lifecycle callbacks for :class:`pyzeit.Zeit`.

Every callback is optional and runs synchronously inside the write that
triggers it.  ``id`` arguments carry the caller's operation id or one of
the reserved ids from :mod:`pyzeit._constants`.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pyzeit.models.command import Command

StateHook = Callable[[Any], None]
ChangeHook = Callable[[Any, str | None], None]
CommandHook = Callable[[Command, str | None], None]
CommitHook = Callable[[Any, Any, Any, str | None], Any]


@dataclass
class ZeitHooks:
    """Optional lifecycle callbacks.

    ``commit(next, prev, patch, id)`` is the last chance to transform the
    value about to become current.  Whatever it changes is not recorded
    in history and cannot be undone.
    """

    on_state_will_change: ChangeHook | None = None
    on_state_did_change: ChangeHook | None = None
    on_patch: StateHook | None = None
    on_command: CommandHook | None = None
    on_reset: StateHook | None = None
    on_reset_history: StateHook | None = None
    on_replace_history: StateHook | None = None
    on_undo: StateHook | None = None
    on_redo: StateHook | None = None
    commit: CommitHook | None = None
