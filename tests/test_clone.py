"""Tests for the value taxonomy and deep cloning."""

from __future__ import annotations

import re
from collections import Counter, OrderedDict, defaultdict, deque, namedtuple
from datetime import UTC, date, datetime, timedelta
from types import MappingProxyType

import pytest

from pyzeit.exceptions import ZeitCloneError
from pyzeit.models import Rect
from pyzeit.state.clone import clone
from pyzeit.state.kinds import ValueKind, classify, is_atomic

Point = namedtuple("Point", ["x", "y"])


class _Bag:
    """Iterable that is neither a sequence, a set nor a mapping."""

    def __init__(self, *items: object) -> None:
        self.items = list(items)

    def __iter__(self):  # type: ignore[no-untyped-def]
        return iter(self.items)


# ------------------------------------------------------------------
# classify
# ------------------------------------------------------------------


class TestClassify:
    @pytest.mark.parametrize(
        ("value", "kind"),
        [
            (None, ValueKind.NONE),
            (True, ValueKind.PRIMITIVE),
            (3, ValueKind.PRIMITIVE),
            ("text", ValueKind.PRIMITIVE),
            (b"raw", ValueKind.PRIMITIVE),
            (datetime(2026, 1, 1, tzinfo=UTC), ValueKind.DATETIME),
            (date(2026, 1, 1), ValueKind.DATETIME),
            (timedelta(seconds=5), ValueKind.DATETIME),
            (re.compile("a+"), ValueKind.PATTERN),
            (Rect(width=2, height=3), ValueKind.RECT),
            ([1, 2], ValueKind.SEQUENCE),
            ((1, 2), ValueKind.SEQUENCE),
            ({1, 2}, ValueKind.SET),
            (frozenset({1}), ValueKind.SET),
            ({"a": 1}, ValueKind.RECORD),
            (OrderedDict(a=1), ValueKind.KEYED),
            (MappingProxyType({"a": 1}), ValueKind.KEYED),
            (_Bag(1), ValueKind.ITERABLE),
            (bytearray(b"ab"), ValueKind.ITERABLE),
            (deque([1]), ValueKind.ITERABLE),
            (len, ValueKind.OBJECT),
        ],
    )
    def test_kinds(self, value: object, kind: ValueKind) -> None:
        assert classify(value) is kind

    def test_namedtuple_is_a_sequence(self) -> None:
        assert classify(Point(1, 2)) is ValueKind.SEQUENCE

    def test_atomic_kinds(self) -> None:
        assert is_atomic(datetime(2026, 1, 1, tzinfo=UTC))
        assert is_atomic({1})
        assert is_atomic(OrderedDict())
        assert is_atomic(Rect())
        assert not is_atomic({"a": 1})
        assert not is_atomic([1])


# ------------------------------------------------------------------
# clone
# ------------------------------------------------------------------


class TestClone:
    def test_nested_record_is_independent(self) -> None:
        original = {"a": 1, "b": {"c": [1, {"d": 2}]}, "tags": {"x"}}
        copied = clone(original)

        assert copied == original
        copied["b"]["c"][1]["d"] = 99
        copied["b"]["c"].append(3)
        copied["tags"].add("y")

        assert original == {"a": 1, "b": {"c": [1, {"d": 2}]}, "tags": {"x"}}

    def test_sequence_types_preserved(self) -> None:
        value = {"list": [1, [2]], "tuple": (1, [2]), "point": Point(1, [2])}
        copied = clone(value)

        assert type(copied["list"]) is list
        assert type(copied["tuple"]) is tuple
        assert type(copied["point"]) is Point
        assert copied["point"].y is not value["point"].y
        assert copied == value

    def test_set_and_frozenset_preserved(self) -> None:
        value = {"s": {1, 2}, "f": frozenset({3})}
        copied = clone(value)

        assert type(copied["s"]) is set
        assert type(copied["f"]) is frozenset
        assert copied["s"] is not value["s"]
        assert copied == value

    def test_keyed_collections_keep_type_and_extras(self) -> None:
        ordered = OrderedDict([("b", [1]), ("a", [2])])
        counts = Counter({"x": 2})
        grouped: defaultdict[str, list[int]] = defaultdict(list, {"k": [1]})

        copied_ordered = clone(ordered)
        copied_counts = clone(counts)
        copied_grouped = clone(grouped)

        assert type(copied_ordered) is OrderedDict
        assert list(copied_ordered) == ["b", "a"]
        assert copied_ordered["b"] is not ordered["b"]
        assert copied_counts == counts
        assert copied_grouped.default_factory is list
        copied_grouped["k"].append(2)
        assert grouped["k"] == [1]

    def test_mapping_proxy_rebuilt(self) -> None:
        proxy = MappingProxyType({"a": [1]})
        copied = clone(proxy)

        assert isinstance(copied, MappingProxyType)
        assert copied["a"] == [1]
        assert copied["a"] is not proxy["a"]

    def test_immutable_leaves_shared(self) -> None:
        stamp = datetime(2026, 1, 1, tzinfo=UTC)
        pattern = re.compile("x", re.IGNORECASE)
        rect = Rect(x=1, y=2, width=3, height=4)

        copied = clone({"stamp": stamp, "pattern": pattern, "rect": rect})

        assert copied["stamp"] == stamp
        assert copied["pattern"].flags & re.IGNORECASE
        assert copied["rect"] == rect

    def test_unclassified_iterable_deep_copied_by_default(self) -> None:
        bag = _Bag(1, [2])
        copied = clone({"bag": bag})

        assert copied["bag"] is not bag
        copied["bag"].items[1].append(3)
        assert bag.items == [1, [2]]

    def test_mutable_leaves_are_independent(self) -> None:
        source = {"buf": bytearray(b"ab"), "queue": deque([1])}
        copied = clone(source)

        copied["buf"][0] = ord("z")
        copied["queue"].append(2)

        assert source == {"buf": bytearray(b"ab"), "queue": deque([1])}

    def test_plain_objects_deep_copied_and_functions_shared(self) -> None:
        class Settings:
            def __init__(self) -> None:
                self.flags = ["a"]

        settings = Settings()
        copied = clone({"settings": settings, "fn": len})

        copied["settings"].flags.append("b")
        assert settings.flags == ["a"]
        assert copied["fn"] is len

    def test_opaque_iterable_rejected_when_strict(self) -> None:
        with pytest.raises(ZeitCloneError) as excinfo:
            clone({"bag": _Bag(1)}, strict=True)

        assert excinfo.value.value_type is _Bag

    def test_none_and_primitives(self) -> None:
        assert clone(None) is None
        assert clone(5) == 5
        assert clone("text") == "text"
