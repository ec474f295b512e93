"""Command and history models.

A :class:`Command` is one undoable edit: ``next`` is the patch applied
going forward (execute/redo) and ``prev`` the patch that reverts it
(undo).  A :class:`HistoryRecord` is the exportable form of a whole
command log together with its cursor.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, model_validator

from pyzeit.models._base import ZeitBaseModel


class Command(ZeitBaseModel):
    """A reversible edit made of two patches."""

    id: str | None = Field(default=None, description="Optional operation identifier")
    prev: dict[str, Any] = Field(default_factory=dict, description="Patch that undoes the command")
    next: dict[str, Any] = Field(default_factory=dict, description="Patch that applies the command")


class HistoryRecord(ZeitBaseModel):
    """A command log plus the cursor marking the last applied command.

    ``cursor == -1`` means no command is applied.
    """

    commands: list[Command] = Field(default_factory=list)
    cursor: int = -1

    @model_validator(mode="after")
    def _check_cursor(self) -> HistoryRecord:
        if not -1 <= self.cursor <= len(self.commands) - 1:
            raise ValueError(f"cursor {self.cursor} out of range for {len(self.commands)} commands")
        return self
