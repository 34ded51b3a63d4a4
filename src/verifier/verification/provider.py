"""Creation of Verification instances from the registered services."""

from __future__ import annotations

from typing import Any, TypeVar

from verifier.errors import ServiceNotFoundError
from verifier.formatting.types import FormatterProvider
from verifier.locale import LocaleContextProvider
from verifier.messages.source import MessageSourceProvider
from verifier.services.registry import DEFAULT_IMPLEMENTATION_WEIGHT, ServiceRegistry
from verifier.verification.context import Verification
from verifier.verification.report import ReportExecutorProvider

T = TypeVar("T")


class VerificationProvider:
    """Creates the Verification for a value."""

    weight: int = DEFAULT_IMPLEMENTATION_WEIGHT

    def get_verification(self, value: T, name: Any = None) -> Verification[T]:
        raise NotImplementedError("Subclasses must implement get_verification()")


class DefaultVerificationProvider(VerificationProvider):
    """Wires a Verification from the most important registered providers.

    The formatter provider is the first registered one; the locale context,
    message source and report executor come from the first provider of each
    kind that returns something.
    """

    def get_verification(self, value: T, name: Any = None) -> Verification[T]:
        formatter_provider = ServiceRegistry.get_first(FormatterProvider)
        locale_context = ServiceRegistry.get_first_matching(
            LocaleContextProvider, lambda provider: provider.get_locale_context()
        )
        message_source = ServiceRegistry.get_first_matching(
            MessageSourceProvider, lambda provider: provider.get_message_source()
        )
        report_executor = ServiceRegistry.get_first_matching(
            ReportExecutorProvider, lambda provider: provider.get_report_executor()
        )

        if locale_context is None:
            raise ServiceNotFoundError(LocaleContextProvider)
        if message_source is None:
            raise ServiceNotFoundError(MessageSourceProvider)
        if report_executor is None:
            raise ServiceNotFoundError(ReportExecutorProvider)

        return Verification(
            value,
            name,
            locale_context=locale_context,
            message_source=message_source,
            formatter_provider=formatter_provider,
            report_executor=report_executor,
        )
