"""Linear command history with a cursor.

The cursor is the index of the most recently applied command, ``-1``
when none is applied.  It always stays within ``[-1, len - 1]``.
Pushing a command after one or more undos discards the undone suffix
for good; there is no branching.

Moving the cursor and applying the matching patch are separate steps:
the container moves the cursor first and restores a :meth:`CommandHistory.checkpoint`
if the write fails.
"""

from __future__ import annotations

from collections.abc import Iterable

from pyzeit.exceptions import ZeitHistoryError
from pyzeit.models.command import Command, HistoryRecord


class CommandHistory:
    """Ordered log of commands plus the applied-position cursor."""

    def __init__(self) -> None:
        self._commands: list[Command] = []
        self._cursor = -1

    def __len__(self) -> int:
        return len(self._commands)

    @property
    def commands(self) -> tuple[Command, ...]:
        return tuple(self._commands)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def can_undo(self) -> bool:
        return self._cursor > -1

    @property
    def can_redo(self) -> bool:
        return self._cursor < len(self._commands) - 1

    def push(self, command: Command) -> list[Command]:
        """Append *command* after the cursor and move the cursor onto it.

        Returns the commands that were discarded because they lay after
        the cursor (the redo branch), oldest first.
        """
        discarded: list[Command] = []
        if self._cursor < len(self._commands) - 1:
            discarded = self._commands[self._cursor + 1 :]
            del self._commands[self._cursor + 1 :]
        self._commands.append(command)
        self._cursor = len(self._commands) - 1
        return discarded

    def step_back(self) -> Command | None:
        """Return the command at the cursor and move the cursor back one.

        Returns ``None`` (and leaves the cursor alone) when nothing is applied.
        """
        if not self.can_undo:
            return None
        command = self._commands[self._cursor]
        self._cursor -= 1
        return command

    def step_forward(self) -> Command | None:
        """Move the cursor forward one and return the command now under it.

        Returns ``None`` (and leaves the cursor alone) at the end of the log.
        """
        if not self.can_redo:
            return None
        self._cursor += 1
        return self._commands[self._cursor]

    def clear(self) -> None:
        self._commands = []
        self._cursor = -1

    def replace(self, commands: Iterable[Command], cursor: int | None = None) -> None:
        """Install *commands* wholesale.

        ``cursor`` defaults to the last command.  An out-of-range cursor
        raises :class:`~pyzeit.exceptions.ZeitHistoryError` and leaves the
        current log untouched.
        """
        installed = list(commands)
        position = len(installed) - 1 if cursor is None else cursor
        if not -1 <= position <= len(installed) - 1:
            raise ZeitHistoryError(
                f"cursor {position} out of range for {len(installed)} commands",
                cursor=position,
                length=len(installed),
            )
        self._commands = installed
        self._cursor = position

    def checkpoint(self) -> tuple[tuple[Command, ...], int]:
        """Return the current log and cursor, to be handed back to :meth:`restore`."""
        return tuple(self._commands), self._cursor

    def restore(self, checkpoint: tuple[tuple[Command, ...], int]) -> None:
        commands, cursor = checkpoint
        self._commands = list(commands)
        self._cursor = cursor

    def to_record(self) -> HistoryRecord:
        return HistoryRecord(commands=list(self._commands), cursor=self._cursor)
