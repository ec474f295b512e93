"""Recursive patch merging.

Merge semantics:

- A patch value that is itself a plain ``dict`` is merged recursively
  into the stored value at the same key.
- Any other patch value replaces the stored value.  Lists and tuples are
  never merged element-wise, and the atomic kinds (date/time values,
  compiled patterns, sets, non-``dict`` mappings, :class:`~pyzeit.models.Rect`)
  are always swapped in whole.
- Keys absent from the patch keep their stored value.

Neither input is mutated.  Patch values are placed into the result by
reference; callers that keep using a patch afterwards should clone it
first (:class:`pyzeit.Zeit` does).

Re-applying the same patch is only idempotent when it carries no
sequence or atomic values that differ between calls.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pyzeit.state.kinds import ValueKind, classify, is_atomic


def merge(base: Any, patch: Any) -> Any:
    """Return *base* with *patch* merged into it as a new value."""
    if is_atomic(patch) or not isinstance(patch, Mapping):
        return patch

    result: dict[Any, Any] = dict(base) if isinstance(base, Mapping) else {}
    for key, value in patch.items():
        if classify(value) is ValueKind.RECORD:
            result[key] = merge(result.get(key), value)
        else:
            result[key] = value
    return result
