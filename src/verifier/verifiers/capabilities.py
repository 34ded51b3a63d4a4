"""Capability verifiers.

Instead of a hierarchy of per-type verifiers, assertions are grouped by the
capability they need from the value:
- ComparableVerifier: values supporting ``<``/``<=``
- CollectionVerifier: sized, iterable values

A verifier for a concrete type combines the capabilities it needs, e.g.
``class VersionListVerifier(CollectionVerifier, ComparableVerifier)``.
The algorithms themselves are free functions so they can be reused outside
of verifiers.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from enum import Enum
from itertools import pairwise
from typing import Any, TypeVar

from verifier.verifiers.base import CustomVerifier, match_all, match_any

CV = TypeVar("CV", bound="ComparableVerifier")
LV = TypeVar("LV", bound="CollectionVerifier")


def is_between(value: Any, start: Any, end: Any, inclusive: bool = True) -> bool:
    """Check ``start <= value <= end`` (or ``<`` when not inclusive).

    None for any bound or the value is never between.
    """
    if value is None or start is None or end is None:
        return False
    if inclusive:
        return start <= value <= end
    return start < value < end


def is_sorted(items: Iterable[Any] | None, key: Callable[[Any], Any] | None = None) -> bool:
    """Check that ``items`` are in ascending order (None counts as sorted)."""
    if items is None:
        return True
    keyed = items if key is None else (key(item) for item in items)
    return all(left <= right for left, right in pairwise(keyed))


class ComparableKeys(Enum):
    BETWEEN = "verifier.comparable.between"
    BETWEEN_EXCLUSIVE = "verifier.comparable.between_exclusive"
    GREATER_THAN = "verifier.comparable.greater_than"
    GREATER_THAN_OR_EQUAL_TO = "verifier.comparable.greater_than_or_equal_to"
    LESS_THAN = "verifier.comparable.less_than"
    LESS_THAN_OR_EQUAL_TO = "verifier.comparable.less_than_or_equal_to"

    @property
    def code(self) -> str:
        return self.value


class CollectionKeys(Enum):
    CONTAIN = "verifier.collection.contain"
    CONTAIN_ALL = "verifier.collection.contain_all"
    CONTAIN_ANY = "verifier.collection.contain_any"
    EMPTY = "verifier.collection.empty"
    SIZE_OF = "verifier.collection.size_of"
    SORTED = "verifier.collection.sorted"

    @property
    def code(self) -> str:
        return self.value


class ComparableVerifier(CustomVerifier[Any]):
    """Assertions for values that can be ordered."""

    def between(
        self: CV, start: Any, end: Any, start_name: Any = None, end_name: Any = None
    ) -> CV:
        result = self.evaluate(lambda: is_between(self.value, start, end))
        self.verification.report(
            result,
            ComparableKeys.BETWEEN,
            start if start_name is None else start_name,
            end if end_name is None else end_name,
        )
        return self

    def between_exclusive(
        self: CV, start: Any, end: Any, start_name: Any = None, end_name: Any = None
    ) -> CV:
        result = self.evaluate(lambda: is_between(self.value, start, end, inclusive=False))
        self.verification.report(
            result,
            ComparableKeys.BETWEEN_EXCLUSIVE,
            start if start_name is None else start_name,
            end if end_name is None else end_name,
        )
        return self

    def greater_than(self: CV, other: Any, name: Any = None) -> CV:
        return self._compare(ComparableKeys.GREATER_THAN, other, name, lambda v, o: v > o)

    def greater_than_or_equal_to(self: CV, other: Any, name: Any = None) -> CV:
        return self._compare(
            ComparableKeys.GREATER_THAN_OR_EQUAL_TO, other, name, lambda v, o: v >= o
        )

    def less_than(self: CV, other: Any, name: Any = None) -> CV:
        return self._compare(ComparableKeys.LESS_THAN, other, name, lambda v, o: v < o)

    def less_than_or_equal_to(self: CV, other: Any, name: Any = None) -> CV:
        return self._compare(
            ComparableKeys.LESS_THAN_OR_EQUAL_TO, other, name, lambda v, o: v <= o
        )

    def _compare(
        self: CV,
        key: ComparableKeys,
        other: Any,
        name: Any,
        comparison: Callable[[Any, Any], bool],
    ) -> CV:
        value = self.value
        result = self.evaluate(
            lambda: value is not None and other is not None and comparison(value, other)
        )
        self.verification.report(result, key, other if name is None else name)
        return self


class CollectionVerifier(CustomVerifier[Any]):
    """Assertions for sized, iterable values."""

    def contain(self: LV, element: Any) -> LV:
        value = self.value
        result = self.evaluate(lambda: value is not None and element in value)
        self.verification.report(result, CollectionKeys.CONTAIN, element)
        return self

    def contain_all(self: LV, *elements: Any) -> LV:
        value = self.value
        result = self.evaluate(
            lambda: value is not None
            and match_all(elements, lambda element: element in value)
        )
        self.verification.report(result, CollectionKeys.CONTAIN_ALL, elements)
        return self

    def contain_any(self: LV, *elements: Any) -> LV:
        value = self.value
        result = self.evaluate(
            lambda: value is not None
            and match_any(elements, lambda element: element in value)
        )
        self.verification.report(result, CollectionKeys.CONTAIN_ANY, elements)
        return self

    def empty(self: LV) -> LV:
        value = self.value
        result = self.evaluate(lambda: value is None or len(value) == 0)
        self.verification.report(result, CollectionKeys.EMPTY)
        return self

    def size_of(self: LV, size: int) -> LV:
        value = self.value
        result = self.evaluate(lambda: len(value) == size if value is not None else size == 0)
        self.verification.report(result, CollectionKeys.SIZE_OF, size)
        return self

    def sorted_by(self: LV, key: Callable[[Any], Any] | None = None) -> LV:
        """Verify the elements are in ascending order, optionally by ``key``."""
        result = self.evaluate(lambda: is_sorted(self.value, key))
        self.verification.report(result, CollectionKeys.SORTED)
        return self
