"""The verification context.

A Verification holds the value under test, its optional display name and
the engine collaborators used to report on it. It is created once per value
(and once per copy() for derived values) and discarded afterwards.

The only mutable state is the negation flag. It is set by not_() on a
verifier and is always reset by the next report(), whatever its outcome.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from verifier.formatting.types import Formatter, FormatterProvider
from verifier.locale import Locale, LocaleContext
from verifier.messages.keys import MessageKey
from verifier.messages.source import MessageSource
from verifier.verification.report import ReportExecutor, message_holder

T = TypeVar("T")
V = TypeVar("V")


class Verification(Generic[T]):
    """Context for verifying a single value.

    Attributes:
        value: The value being verified (may be None)
        name: Optional label for the value used in messages
        locale_context: Supplies the locale for messages
        message_source: Builds failure messages
        formatter_provider: Finds formatters for values and arguments
        report_executor: Runs the report chain
    """

    def __init__(
        self,
        value: T,
        name: Any = None,
        *,
        locale_context: LocaleContext,
        message_source: MessageSource,
        formatter_provider: FormatterProvider,
        report_executor: ReportExecutor,
    ):
        self._value = value
        self._name = name
        self._negated = False
        self.locale_context = locale_context
        self.message_source = message_source
        self.formatter_provider = formatter_provider
        self.report_executor = report_executor

    def __repr__(self) -> str:
        return f"Verification(value={self._value!r}, name={self._name!r}, negated={self._negated})"

    @property
    def value(self) -> T:
        return self._value

    @property
    def name(self) -> Any:
        return self._name

    @property
    def locale(self) -> Locale:
        return self.locale_context.locale

    @property
    def negated(self) -> bool:
        return self._negated

    @negated.setter
    def negated(self, negated: bool) -> None:
        self._negated = negated

    def copy(self, value: V, name: Any = None) -> Verification[V]:
        """Create a fresh Verification for another value sharing these collaborators."""
        return Verification(
            value,
            name,
            locale_context=self.locale_context,
            message_source=self.message_source,
            formatter_provider=self.formatter_provider,
            report_executor=self.report_executor,
        )

    def get_formatter(self, obj: Any) -> Formatter | None:
        return self.formatter_provider.get_formatter(obj)

    def get_message(self, key_or_template: MessageKey | str | None, *args: Any) -> str:
        """Build the full message for a key or template against this context."""
        return self.message_source.get_message(self, key_or_template, args)

    def report(
        self, result: bool, key_or_template: MessageKey | str | None = None, *args: Any
    ) -> Verification[T]:
        """Report the result of an assertion.

        Args:
            result: Whether the assertion held, before negation is applied
            key_or_template: MessageKey or literal template describing the
                assertion (None uses the default message)
            *args: Template arguments, formatted only if a message is built

        Returns:
            This Verification, for chaining

        Raises:
            VerifierError: If the negation-adjusted result fails
        """
        holder = message_holder(key_or_template, args)
        try:
            self.report_executor.execute(self, result, holder)
        finally:
            self._negated = False
        return self
