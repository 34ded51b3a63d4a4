"""Hierarchical formatter engine.

Renders values (including self-referential containers) into bounded,
readable strings for failure messages.

Usage:
    from verifier.formatting import Formatter
    from verifier.services import service

    @service(Formatter)
    class DecimalFormatter(Formatter):
        weight = 10

        def format(self, verification, obj):
            return f"{obj:,.2f}"

        def supports(self, cls):
            return issubclass(cls, Decimal)
"""

from verifier.formatting.builtin import TypeFormatter, register_builtin_formatters
from verifier.formatting.hierarchical import (
    CIRCULAR_MARKER,
    NULL_MARKER,
    HierarchicalFormatter,
    MappingFormatter,
    SequenceFormatter,
)
from verifier.formatting.types import DefaultFormatterProvider, Formatter, FormatterProvider

__all__ = [
    "CIRCULAR_MARKER",
    "NULL_MARKER",
    "DefaultFormatterProvider",
    "Formatter",
    "FormatterProvider",
    "HierarchicalFormatter",
    "MappingFormatter",
    "SequenceFormatter",
    "TypeFormatter",
    "register_builtin_formatters",
]
