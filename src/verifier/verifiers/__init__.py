"""Verifier API consumed by application code.

Usage:
    from verifier import verify
    from verifier.verifiers import ComparableVerifier

    verify(age, "age", ComparableVerifier).between(0, 150)
"""

from verifier.verifiers.base import (
    CustomVerifier,
    ObjectKeys,
    ObjectVerifier,
    match_all,
    match_any,
)
from verifier.verifiers.capabilities import (
    CollectionKeys,
    CollectionVerifier,
    ComparableKeys,
    ComparableVerifier,
    is_between,
    is_sorted,
)

__all__ = [
    "CollectionKeys",
    "CollectionVerifier",
    "ComparableKeys",
    "ComparableVerifier",
    "CustomVerifier",
    "ObjectKeys",
    "ObjectVerifier",
    "is_between",
    "is_sorted",
    "match_all",
    "match_any",
]
