"""Registration of the engine's default services."""

from __future__ import annotations

from verifier.config import VerifierConfig
from verifier.formatting.builtin import register_builtin_formatters
from verifier.locale import DefaultLocaleContextProvider, LocaleContextProvider
from verifier.messages.source import DefaultMessageSourceProvider, MessageSourceProvider
from verifier.services.registry import ServiceRegistry
from verifier.verification.provider import DefaultVerificationProvider, VerificationProvider
from verifier.verification.report import (
    AssertionReporter,
    DefaultReportExecutorProvider,
    Reporter,
    ReportExecutorProvider,
)


def register_builtin_services(config: VerifierConfig | None = None) -> None:
    """Register the default implementation of every capability.

    Called when the package is imported. Registration is idempotent, so to
    apply a different config call ``ServiceRegistry.clear()`` first.

    Args:
        config: Configuration for the defaults (read from the environment
            when omitted)
    """
    config = config or VerifierConfig.from_env()

    register_builtin_formatters()
    defaults = [
        (LocaleContextProvider, DefaultLocaleContextProvider(config)),
        (MessageSourceProvider, DefaultMessageSourceProvider(config)),
        (Reporter, AssertionReporter()),
        (ReportExecutorProvider, DefaultReportExecutorProvider()),
        (VerificationProvider, DefaultVerificationProvider()),
    ]
    for capability, instance in defaults:
        ServiceRegistry.register(capability, instance, name="default")
