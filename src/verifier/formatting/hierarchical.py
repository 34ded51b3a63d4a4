"""Formatters for container values.

Containers are rendered depth-first. Scalar children are wrapped in single
quotes (after being run through their own formatter, if any), container
children are recursed into, and a child that is already an ancestor on the
current branch is replaced by CIRCULAR_MARKER.

Examples:
    [1, 2, 3]             -> ['1', '2', '3']
    [1, None, 3]          -> ['1', null, '3']
    {"a": [1]}            -> {'a'=['1']}
    a = [1]; a.append(a)  -> ['1', {Circular}]
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Mapping, Sequence, Set
from typing import TYPE_CHECKING, Any

from verifier.formatting.types import Formatter

if TYPE_CHECKING:
    from verifier.verification.context import Verification

CIRCULAR_MARKER = "{Circular}"
NULL_MARKER = "null"

# Sequence-like types rendered as text rather than as containers
_TEXT_TYPES = (str, bytes, bytearray, memoryview)


class HierarchicalFormatter(Formatter):
    """Base class for formatters of values that contain other values.

    Subclasses provide ``get_children`` and may override the tags.
    """

    start_tag = "{"
    end_tag = "}"
    separator = ", "
    wrapper = "'"

    def format(self, verification: Verification[Any], obj: Any) -> str:
        if obj is None:
            return NULL_MARKER
        return self.format_children(verification, obj, {id(obj)})

    def format_children(
        self, verification: Verification[Any], parent: Any, path: set[int]
    ) -> str:
        """Render ``parent`` given the identities of its ancestors (inclusive)."""
        parts = [
            self.format_child(verification, child, path)
            for child in self.get_children(parent)
        ]
        return f"{self.start_tag}{self.separator.join(parts)}{self.end_tag}"

    def format_child(
        self, verification: Verification[Any], child: Any, path: set[int]
    ) -> str:
        return self.format_node(verification, child, path)

    def format_node(
        self, verification: Verification[Any], node: Any, path: set[int]
    ) -> str:
        """Render a single child, recursing into nested containers."""
        if node is None:
            return NULL_MARKER
        if id(node) in path:
            return CIRCULAR_MARKER

        formatter = verification.get_formatter(node)
        if isinstance(formatter, HierarchicalFormatter):
            # Membership is scoped to the current branch
            path.add(id(node))
            try:
                return formatter.format_children(verification, node, path)
            finally:
                path.discard(id(node))

        text = formatter.format(verification, node) if formatter is not None else str(node)
        return f"{self.wrapper}{text}{self.wrapper}"

    def get_children(self, parent: Any) -> Iterable[Any]:
        raise NotImplementedError("Subclasses must implement get_children()")


class SequenceFormatter(HierarchicalFormatter):
    """Formats lists, tuples, sets and other non-text sequences as ``[...]``."""

    start_tag = "["
    end_tag = "]"

    def get_children(self, parent: Any) -> Iterable[Any]:
        return parent

    def supports(self, cls: type) -> bool:
        if issubclass(cls, _TEXT_TYPES):
            return False
        return issubclass(cls, (Sequence, Set, deque))


class MappingFormatter(HierarchicalFormatter):
    """Formats mappings as ``{k0=v0, k1=v1}``."""

    def get_children(self, parent: Any) -> Iterable[Any]:
        return parent.items()

    def format_child(
        self, verification: Verification[Any], child: Any, path: set[int]
    ) -> str:
        key, value = child
        return (
            f"{self.format_node(verification, key, path)}"
            f"={self.format_node(verification, value, path)}"
        )

    def supports(self, cls: type) -> bool:
        return issubclass(cls, Mapping)
