"""Formatters shipped with the engine."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from verifier.formatting.hierarchical import MappingFormatter, SequenceFormatter
from verifier.formatting.types import DefaultFormatterProvider, Formatter, FormatterProvider
from verifier.services.registry import ServiceRegistry

if TYPE_CHECKING:
    from verifier.verification.context import Verification


class TypeFormatter(Formatter):
    """Formats classes by qualified name, e.g. ``collections.OrderedDict``.

    Builtins are rendered by bare name (``int`` rather than ``builtins.int``).
    """

    def format(self, verification: Verification[Any], obj: Any) -> str:
        if obj.__module__ == "builtins":
            return obj.__qualname__
        return f"{obj.__module__}.{obj.__qualname__}"

    def supports(self, cls: type) -> bool:
        return issubclass(cls, type)


def register_builtin_formatters() -> None:
    """Register the bundled formatters and the default formatter provider."""
    ServiceRegistry.register(Formatter, SequenceFormatter(), name="sequence")
    ServiceRegistry.register(Formatter, MappingFormatter(), name="mapping")
    ServiceRegistry.register(Formatter, TypeFormatter(), name="type")
    ServiceRegistry.register(FormatterProvider, DefaultFormatterProvider(), name="default")
