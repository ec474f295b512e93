"""Rectangle geometry value."""

from __future__ import annotations

from pydantic import Field

from pyzeit.models._base import ZeitBaseModel


class Rect(ZeitBaseModel):
    """Axis-aligned rectangle.

    Treated as a single atomic value by the patch merger: a ``Rect`` in a
    patch replaces the stored rectangle instead of being merged field by
    field.
    """

    x: float = 0.0
    y: float = 0.0
    width: float = Field(default=0.0)
    height: float = Field(default=0.0)

    @property
    def left(self) -> float:
        return min(self.x, self.x + self.width)

    @property
    def right(self) -> float:
        return max(self.x, self.x + self.width)

    @property
    def top(self) -> float:
        return min(self.y, self.y + self.height)

    @property
    def bottom(self) -> float:
        return max(self.y, self.y + self.height)
