"""State container with patch mutation, derived fields and undo/redo."""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Callable, Iterator, Mapping, Sequence
from typing import Any

from pyzeit._constants import REDO_ID, RESET_ID, UNDO_ID
from pyzeit._summary import summarize_for_log
from pyzeit.config import ZeitConfig
from pyzeit.exceptions import ZeitReentrancyError
from pyzeit.hooks import ZeitHooks
from pyzeit.models.command import Command, HistoryRecord
from pyzeit.state.backend import MemoryStore, StoreBackend
from pyzeit.state.clone import clone
from pyzeit.state.derive import Compute, DerivedStore
from pyzeit.state.history import CommandHistory
from pyzeit.state.merge import merge

_logger = logging.getLogger(__name__)


class Zeit:
    """State container with linear undo/redo history.

    Usage::

        zeit = Zeit({"a": 1, "b": {"c": 2}}, lambda s: {"sum": s["a"] + s["b"]["c"]})
        zeit.patch({"b": {"c": 5}})
        zeit.execute(Command(next={"a": 2}, prev={"a": 1}))
        zeit.undo()
        zeit.state  # {"a": 1, "b": {"c": 5}, "sum": 6}

    Every write runs merge → :meth:`commit` → derived recomputation, then
    fires ``on_state_will_change``, stores the value, force-writes it into
    the backend, fires ``on_state_did_change`` and finally the
    operation-specific hook.

    The container must be the only writer of its backend.  Hooks may call
    mutation methods again; such nested writes complete before the outer
    write fires its remaining hooks, up to ``config.max_write_depth``.
    """

    def __init__(
        self,
        initial_state: Mapping[str, Any],
        compute: Compute,
        *,
        hooks: ZeitHooks | None = None,
        config: ZeitConfig | None = None,
        backend: StoreBackend | None = None,
    ) -> None:
        self._config = config or ZeitConfig()
        self.hooks = hooks if hooks is not None else ZeitHooks()
        self._initial_state = self._clone(initial_state)
        self._history = CommandHistory()
        self._write_depth = 0
        self._store = DerivedStore(backend if backend is not None else MemoryStore(), compute)
        self._state: dict[str, Any] = self._store.initialize(self._clone(self._initial_state))
        self._snapshot = self._clone(self._state)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def config(self) -> ZeitConfig:
        return self._config

    @property
    def store(self) -> DerivedStore:
        return self._store

    @property
    def state(self) -> Any:
        return self._read(self._store.get_state())

    @property
    def snapshot(self) -> Any:
        return self._read(self._snapshot)

    @property
    def history(self) -> tuple[Command, ...]:
        return tuple(self._read_command(command) for command in self._history.commands)

    @property
    def cursor(self) -> int:
        return self._history.cursor

    @property
    def can_undo(self) -> bool:
        return self._history.can_undo

    @property
    def can_redo(self) -> bool:
        return self._history.can_redo

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _clone(self, value: Any) -> Any:
        return clone(value, strict=self._config.strict_clone)

    def _read(self, value: Any) -> Any:
        return self._clone(value) if self._config.clone_on_read else value

    def _clone_command(self, command: Command) -> Command:
        return Command(id=command.id, prev=self._clone(command.prev), next=self._clone(command.next))

    def _read_command(self, command: Command) -> Command:
        return self._clone_command(command) if self._config.clone_on_read else command

    def _fire(self, name: str, *args: Any) -> None:
        hook: Callable[..., Any] | None = getattr(self.hooks, name)
        if hook is not None:
            hook(*args)

    @contextlib.contextmanager
    def _writing(self) -> Iterator[None]:
        if self._write_depth >= self._config.max_write_depth:
            raise ZeitReentrancyError(
                f"write nesting exceeded max_write_depth={self._config.max_write_depth}",
                depth=self._write_depth + 1,
            )
        self._write_depth += 1
        try:
            yield
        finally:
            self._write_depth -= 1

    @contextlib.contextmanager
    def _history_guard(self) -> Iterator[None]:
        """Roll back history moves made in the block if no new state was adopted."""
        checkpoint = self._history.checkpoint()
        adopted = self._state
        try:
            yield
        except Exception:
            if self._state is adopted:
                self._history.restore(checkpoint)
            raise

    def _stage(self, next_state: Any, patch: Any, id: str | None) -> None:
        """Run commit and derivation, fire the will-change hook, adopt the value."""
        finale = self.commit(next_state, self._state, patch, id)
        composed = self._store.compose(finale)
        self._fire("on_state_will_change", self._read(composed), id)
        self._state = composed

    def _publish(self, id: str | None) -> None:
        self._store.write(self._state)
        self._fire("on_state_did_change", self._read(self._state), id)

    def _apply_patch(self, patch: Any, id: str | None = None) -> None:
        if self._config.log_patches:
            _logger.debug("Applying patch id=%s patch=%s", id, summarize_for_log(patch))
        self._stage(merge(self._state, self._clone(patch)), patch, id)
        self._publish(id)

    def _clear_history(self) -> None:
        self._history.clear()
        self._fire("on_reset_history", self._read(self._state))

    # ------------------------------------------------------------------
    # Extension seam
    # ------------------------------------------------------------------

    def commit(self, next: Any, prev: Any, patch: Any, id: str | None = None) -> Any:
        """Return the value that is about to become current.

        Defaults to ``hooks.commit`` when set, otherwise returns *next*
        unchanged.  Changes made here bypass history and cannot be undone.
        """
        if self.hooks.commit is not None:
            return self.hooks.commit(next, prev, patch, id)
        return next

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def patch(self, patch: Mapping[str, Any], id: str | None = None) -> None:
        """Merge *patch* into the current state."""
        with self._writing():
            self._apply_patch(patch, id)
            self._fire("on_patch", self._read(self._state))

    def replace(self, state: Mapping[str, Any]) -> None:
        """Replace the state wholesale, bypassing the merge."""
        with self._writing():
            self._stage(self._clone(state), state, None)
            self._publish(None)

    def execute(self, command: Command | Mapping[str, Any], id: str | None = None) -> None:
        """Push *command* onto the history and apply its ``next`` patch.

        Commands after the cursor (undone ones) are discarded first.
        ``id`` defaults to ``command.id``.  A write that fails before the
        new state is adopted leaves the history as it was.
        """
        if not isinstance(command, Command):
            command = Command.model_validate(command)
        command_id = id if id is not None else command.id
        stored = self._clone_command(command.model_copy(update={"id": command_id}))
        with self._writing():
            with self._history_guard():
                discarded = self._history.push(stored)
                self._apply_patch(stored.next, command_id)
            if discarded:
                _logger.debug("Discarded %d undone command(s) on execute id=%s", len(discarded), command_id)
            self._fire("on_command", self._read_command(stored), command_id)

    def undo(self) -> None:
        """Revert the command at the cursor; no-op when nothing is applied.

        The cursor moves back before the command's ``prev`` patch is
        applied, so change hooks already see the post-undo ``cursor``,
        ``can_undo`` and ``can_redo``.  A write that fails before the state
        is adopted puts the cursor back.
        """
        if not self._history.can_undo:
            return
        with self._writing():
            with self._history_guard():
                command = self._history.step_back()
                if command is None:
                    return
                _logger.debug("Undo command id=%s cursor=%d", command.id, self._history.cursor)
                self._apply_patch(command.prev, UNDO_ID)
            self._fire("on_undo", self._read(self._state))

    def redo(self) -> None:
        """Re-apply the command after the cursor; no-op at the end of history.

        As with :meth:`undo`, the cursor moves first and is put back if the
        write fails before the state is adopted.
        """
        if not self._history.can_redo:
            return
        with self._writing():
            with self._history_guard():
                command = self._history.step_forward()
                if command is None:
                    return
                _logger.debug("Redo command id=%s cursor=%d", command.id, self._history.cursor)
                self._apply_patch(command.next, REDO_ID)
            self._fire("on_redo", self._read(self._state))

    def reset(self) -> None:
        """Restore the construction-time state and clear the history."""
        initial = self._clone(self._initial_state)
        with self._writing():
            self._stage(initial, initial, RESET_ID)
            self._clear_history()
            self._publish(RESET_ID)
            _logger.debug("State reset to initial value")
            self._fire("on_reset", self._read(self._state))

    def force_update(self) -> None:
        """Recompose the current state and write it into the backend again.

        The backend always receives a fresh object, so its subscribers are
        notified even when nothing changed.
        """
        with self._writing():
            self._state = self._store.compose(self._state)
            self._store.write(self._state)

    # ------------------------------------------------------------------
    # History and snapshot management
    # ------------------------------------------------------------------

    def reset_history(self) -> None:
        with self._writing():
            self._clear_history()

    def replace_history(
        self,
        history: HistoryRecord | Sequence[Command | Mapping[str, Any]],
        cursor: int | None = None,
    ) -> None:
        """Install an externally built history.

        Accepts a :class:`~pyzeit.models.HistoryRecord` (its cursor is used
        unless *cursor* is given) or a sequence of commands, where
        *cursor* defaults to the last command.  Commands are copied on the
        way in.  The state itself is not touched.
        """
        if isinstance(history, HistoryRecord):
            commands: list[Command] = list(history.commands)
            if cursor is None:
                cursor = history.cursor
        else:
            commands = [item if isinstance(item, Command) else Command.model_validate(item) for item in history]
        commands = [self._clone_command(command) for command in commands]
        with self._writing():
            self._history.replace(commands, cursor)
            _logger.debug("History replaced: %d command(s), cursor=%d", len(commands), self._history.cursor)
            self._fire("on_replace_history", self._read(self._state))

    def export_history(self) -> HistoryRecord:
        """Return a copy of the history and cursor as a :class:`~pyzeit.models.HistoryRecord`."""
        return HistoryRecord(
            commands=[self._clone_command(command) for command in self._history.commands],
            cursor=self._history.cursor,
        )

    def save_snapshot(self) -> None:
        """Capture an independent copy of the current state."""
        self._snapshot = self._clone(self._state)
