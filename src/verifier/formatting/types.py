"""Core types for the formatter engine.

A Formatter renders objects of the runtime types it supports into strings
for use inside failure messages. Exactly one formatter is selected per
runtime type: the first registered formatter (in weight order) whose
``supports`` returns True.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from verifier.services.registry import DEFAULT_IMPLEMENTATION_WEIGHT, ServiceRegistry

if TYPE_CHECKING:
    from verifier.verification.context import Verification


class Formatter:
    """Base class for formatters.

    Subclasses should override ``format`` and ``supports``.
    """

    weight: int = DEFAULT_IMPLEMENTATION_WEIGHT

    def format(self, verification: Verification[Any], obj: Any) -> str:
        """Render ``obj`` as a string. Override in subclasses."""
        raise NotImplementedError("Subclasses must implement format()")

    def supports(self, cls: type) -> bool:
        """Check if this formatter can render instances of ``cls``."""
        raise NotImplementedError("Subclasses must implement supports()")


class FormatterProvider:
    """Looks up the Formatter to use for an object."""

    weight: int = DEFAULT_IMPLEMENTATION_WEIGHT

    def get_formatter(self, obj: Any) -> Formatter | None:
        raise NotImplementedError("Subclasses must implement get_formatter()")


class DefaultFormatterProvider(FormatterProvider):
    """Selects the first registered Formatter supporting the object's type."""

    def get_formatter(self, obj: Any) -> Formatter | None:
        if obj is None:
            return None

        cls = type(obj)
        for formatter in ServiceRegistry.get_all(Formatter):
            if formatter.supports(cls):
                return formatter
        return None
