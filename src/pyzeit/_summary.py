"""Helpers for bounded debug logging.

States and patches can be arbitrarily large and nested.  This module
renders a size-limited copy of such values before they are emitted in
DEBUG logs.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence, Set
from typing import Any

_MAX_DEPTH = 8


def summarize_for_log(
    value: Any,
    *,
    max_string: int = 120,
    max_items: int = 20,
    _depth: int = 0,
) -> Any:
    """Return a bounded, JSON-like copy of *value* suitable for debug logs."""
    if _depth > _MAX_DEPTH:
        return "<max-depth>"

    if value is None or isinstance(value, (bool, int, float)):
        return value

    if isinstance(value, str):
        if len(value) > max_string:
            return f"{value[:max_string]}…<truncated>"
        return value

    if isinstance(value, (bytes, bytearray)):
        return f"<bytes:{len(value)}b>"

    if isinstance(value, Mapping):
        summary: dict[str, Any] = {}
        for index, (k, v) in enumerate(value.items()):
            if index >= max_items:
                summary["…"] = f"<{len(value) - max_items} more>"
                break
            summary[str(k)] = summarize_for_log(v, max_string=max_string, max_items=max_items, _depth=_depth + 1)
        return summary

    if isinstance(value, (Sequence, Set)) and not isinstance(value, str):
        items = [
            summarize_for_log(v, max_string=max_string, max_items=max_items, _depth=_depth + 1)
            for v in list(value)[:max_items]
        ]
        if len(value) > max_items:
            items.append(f"<{len(value) - max_items} more>")
        return items

    # Fallback: represent opaque objects without dumping internals.
    text = repr(value)
    if len(text) > max_string:
        return f"{text[:max_string]}…<truncated>"
    return text
