"""Base verifier API.

Verifiers are thin: each assertion computes a boolean and hands it to the
Verification with a message key. They never build messages themselves.

Usage:
    verify(order.total, "total").not_().nulled().that(lambda v: v >= 0)
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable
from enum import Enum
from typing import Any, Generic, TypeVar

from verifier.messages.keys import MessageKey
from verifier.verification.context import Verification

T = TypeVar("T")
E = TypeVar("E")
C = TypeVar("C", bound="CustomVerifier[Any]")
S = TypeVar("S", bound="CustomVerifier[Any]")


def match_all(inputs: Iterable[E] | None, matcher: Callable[[E], bool]) -> bool:
    """True if every input matches (vacuously true for None)."""
    if inputs is None:
        return True
    return all(matcher(item) for item in inputs)


def match_any(inputs: Iterable[E] | None, matcher: Callable[[E], bool]) -> bool:
    """True if at least one input matches (false for None)."""
    if inputs is None:
        return False
    return any(matcher(item) for item in inputs)


def _hash_or_none(value: Any) -> int | None:
    if value is None or not isinstance(value, Hashable):
        return None
    try:
        return hash(value)
    except TypeError:
        # e.g. a tuple holding a list
        return None


class ObjectKeys(Enum):
    EQUAL_TO = "verifier.object.equal_to"
    EQUAL_TO_ANY = "verifier.object.equal_to_any"
    HASHED_AS = "verifier.object.hashed_as"
    INSTANCE_OF = "verifier.object.instance_of"
    INSTANCE_OF_ALL = "verifier.object.instance_of_all"
    INSTANCE_OF_ANY = "verifier.object.instance_of_any"
    NULLED = "verifier.object.nulled"
    SAME_AS = "verifier.object.same_as"
    SAME_AS_ANY = "verifier.object.same_as_any"

    @property
    def code(self) -> str:
        return self.value


class CustomVerifier(Generic[T]):
    """Assertions available for any value.

    Every assertion returns the verifier so calls can be chained. not_()
    inverts the next assertion only, even if evaluating it raises.
    """

    def __init__(self, verification: Verification[T]):
        self._verification = verification

    @property
    def value(self) -> T:
        return self._verification.value

    @property
    def verification(self) -> Verification[T]:
        return self._verification

    def and_(self, value: Any, name: Any = None, cls: type[C] | None = None) -> C:
        """Start verifying another value with the same engine collaborators."""
        verifier_cls = cls or ObjectVerifier
        return verifier_cls(self._verification.copy(value, name))

    def not_(self: S) -> S:
        self._verification.negated = not self._verification.negated
        return self

    def evaluate(self, check: Callable[[], bool]) -> bool:
        """Compute the result for the next report.

        Negation is cleared if ``check`` raises, as report() would have.
        """
        try:
            return bool(check())
        except Exception:
            self._verification.negated = False
            raise

    def equal_to(self: S, other: Any, name: Any = None) -> S:
        result = self.evaluate(lambda: self.is_equal_to(self.value, other))
        self._verification.report(result, ObjectKeys.EQUAL_TO, other if name is None else name)
        return self

    def equal_to_any(self: S, *others: Any) -> S:
        value = self.value
        result = self.evaluate(
            lambda: match_any(others, lambda other: self.is_equal_to(value, other))
        )
        self._verification.report(result, ObjectKeys.EQUAL_TO_ANY, others)
        return self

    def hashed_as(self: S, hash_code: int) -> S:
        self._verification.report(
            _hash_or_none(self.value) == hash_code, ObjectKeys.HASHED_AS, hash_code
        )
        return self

    def instance_of(self: S, cls: type | None) -> S:
        result = self.evaluate(lambda: cls is not None and isinstance(self.value, cls))
        self._verification.report(result, ObjectKeys.INSTANCE_OF, cls)
        return self

    def instance_of_all(self: S, *classes: type) -> S:
        value = self.value
        result = self.evaluate(
            lambda: value is not None
            and match_all(classes, lambda cls: cls is not None and isinstance(value, cls))
        )
        self._verification.report(result, ObjectKeys.INSTANCE_OF_ALL, classes)
        return self

    def instance_of_any(self: S, *classes: type) -> S:
        value = self.value
        result = self.evaluate(
            lambda: value is not None
            and match_any(classes, lambda cls: cls is not None and isinstance(value, cls))
        )
        self._verification.report(result, ObjectKeys.INSTANCE_OF_ANY, classes)
        return self

    def nulled(self: S) -> S:
        self._verification.report(self.value is None, ObjectKeys.NULLED)
        return self

    def same_as(self: S, other: Any, name: Any = None) -> S:
        result = self.value is other
        self._verification.report(result, ObjectKeys.SAME_AS, other if name is None else name)
        return self

    def same_as_any(self: S, *others: Any) -> S:
        value = self.value
        result = match_any(others, lambda other: value is other)
        self._verification.report(result, ObjectKeys.SAME_AS_ANY, others)
        return self

    def that(
        self: S,
        assertion: Callable[[T], bool],
        key_or_template: MessageKey | str | None = None,
        *args: Any,
    ) -> S:
        """Verify the value against a custom predicate.

        Args:
            assertion: Predicate receiving the value
            key_or_template: Message describing the predicate (None uses
                the default "be valid" message)
            *args: Template arguments
        """

        def check() -> bool:
            self.and_(assertion, "assertion").not_().nulled()
            return assertion(self.value)

        result = self.evaluate(check)
        self._verification.report(result, key_or_template, *args)
        return self

    def is_equal_to(self, value: T, other: Any) -> bool:
        if other is None:
            return value is None
        return other == value


class ObjectVerifier(CustomVerifier[Any]):
    """Verifier for values without a more specific verifier."""
