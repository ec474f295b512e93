"""Base model for pyzeit value objects.

Every model inherits from :class:`ZeitBaseModel` which is frozen and
rejects unknown fields, so history entries and geometry values behave as
immutable records once constructed.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ZeitBaseModel(BaseModel):
    """Frozen, strict-shape pydantic base."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        arbitrary_types_allowed=True,
    )
