"""Value models used by the state container."""

from pyzeit.models._base import ZeitBaseModel
from pyzeit.models.command import Command, HistoryRecord
from pyzeit.models.geometry import Rect

__all__ = [
    "Command",
    "HistoryRecord",
    "Rect",
    "ZeitBaseModel",
]
