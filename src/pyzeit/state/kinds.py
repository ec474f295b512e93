"""Closed value taxonomy shared by the cloner and the patch merger.

:func:`classify` checks a value against a fixed list of kinds in a fixed
order.  Sequences are recognised before sets and mappings, and every
value lands in exactly one kind, including iterables nobody planned for
(:attr:`ValueKind.ITERABLE`).
"""

from __future__ import annotations

import datetime
import enum
import re
from collections.abc import Iterable, Mapping
from enum import StrEnum
from typing import Any

from pyzeit.models.geometry import Rect


class ValueKind(StrEnum):
    NONE = "none"
    PRIMITIVE = "primitive"
    DATETIME = "datetime"
    PATTERN = "pattern"
    RECT = "rect"
    SEQUENCE = "sequence"
    SET = "set"
    RECORD = "record"
    KEYED = "keyed"
    ITERABLE = "iterable"
    OBJECT = "object"


# Kinds that a patch replaces wholesale instead of merging into.
ATOMIC_KINDS: frozenset[ValueKind] = frozenset(
    {
        ValueKind.DATETIME,
        ValueKind.PATTERN,
        ValueKind.SET,
        ValueKind.KEYED,
        ValueKind.RECT,
    }
)

_PRIMITIVE_TYPES = (bool, int, float, complex, str, bytes, enum.Enum)
_DATETIME_TYPES = (datetime.date, datetime.time, datetime.timedelta)


def classify(value: Any) -> ValueKind:
    """Return the :class:`ValueKind` of *value*."""
    if value is None:
        return ValueKind.NONE
    if isinstance(value, _PRIMITIVE_TYPES):
        return ValueKind.PRIMITIVE
    # datetime.datetime is a subclass of datetime.date
    if isinstance(value, _DATETIME_TYPES):
        return ValueKind.DATETIME
    if isinstance(value, re.Pattern):
        return ValueKind.PATTERN
    if isinstance(value, Rect):
        return ValueKind.RECT
    if isinstance(value, (list, tuple)):
        return ValueKind.SEQUENCE
    if isinstance(value, (set, frozenset)):
        return ValueKind.SET
    if type(value) is dict:
        return ValueKind.RECORD
    if isinstance(value, Mapping):
        return ValueKind.KEYED
    if isinstance(value, Iterable):
        return ValueKind.ITERABLE
    return ValueKind.OBJECT


def is_atomic(value: Any) -> bool:
    """Return ``True`` when a patch carrying *value* replaces instead of merging."""
    return classify(value) in ATOMIC_KINDS
