"""Deep, structure-preserving copies of state values.

Containers (sequences, sets, records and keyed collections) are rebuilt
recursively with their concrete type preserved.  Immutable leaves
(primitives, date/time values, compiled patterns, :class:`~pyzeit.models.Rect`)
are shared, which is indistinguishable from copying them.  Everything else
(unclassified iterables such as ``deque`` or ``bytearray``, class instances)
goes through :func:`copy.deepcopy`.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import MutableMapping
from types import MappingProxyType
from typing import Any, TypeVar

from pyzeit.exceptions import ZeitCloneError
from pyzeit.state.kinds import ValueKind, classify

_logger = logging.getLogger(__name__)

T = TypeVar("T")


def _clone_sequence(value: list[Any] | tuple[Any, ...], strict: bool) -> Any:
    items = [clone(member, strict=strict) for member in value]
    if type(value) is list:
        return items
    if type(value) is tuple:
        return tuple(items)
    if isinstance(value, tuple) and hasattr(value, "_make"):
        # namedtuple
        return value._make(items)  # type: ignore[attr-defined]
    return type(value)(items)


def _clone_keyed(value: Any, strict: bool) -> Any:
    if isinstance(value, MappingProxyType):
        return MappingProxyType({key: clone(member, strict=strict) for key, member in value.items()})
    if isinstance(value, MutableMapping):
        # copy.copy keeps the concrete type and extras like default_factory.
        result = copy.copy(value)
        for key in list(result.keys()):
            result[key] = clone(value[key], strict=strict)
        return result
    return copy.deepcopy(value)


def clone(value: T, *, strict: bool = False) -> T:
    """Return a deep copy of *value* with no shared mutable sub-structure.

    Parameters
    ----------
    value
        Any state value.  Inputs must be free of reference cycles.
    strict
        Raise :class:`~pyzeit.exceptions.ZeitCloneError` for iterables
        outside the known taxonomy instead of falling back to
        :func:`copy.deepcopy`.
    """
    kind = classify(value)

    if kind is ValueKind.SEQUENCE:
        return _clone_sequence(value, strict)  # type: ignore[arg-type]

    if kind is ValueKind.SET:
        members = (clone(member, strict=strict) for member in value)  # type: ignore[attr-defined]
        if type(value) is frozenset:
            return frozenset(members)  # type: ignore[return-value]
        if type(value) is set:
            return set(members)  # type: ignore[return-value]
        return type(value)(members)  # type: ignore[call-arg]

    if kind is ValueKind.RECORD:
        return {key: clone(member, strict=strict) for key, member in value.items()}  # type: ignore[attr-defined,return-value]

    if kind is ValueKind.KEYED:
        return _clone_keyed(value, strict)

    if kind is ValueKind.ITERABLE:
        if strict:
            raise ZeitCloneError(
                f"cannot clone iterable of type {type(value).__name__}",
                value_type=type(value),
            )
        _logger.debug("Deep-copying unclassified iterable of type %s", type(value).__name__)
        return copy.deepcopy(value)

    if kind is ValueKind.OBJECT:
        # functions and classes come back as-is from deepcopy
        return copy.deepcopy(value)

    return value
