"""Shared fixtures for the verifier test suite."""

import pytest

from verifier.bootstrap import register_builtin_services
from verifier.config import VerifierConfig
from verifier.formatting import DefaultFormatterProvider
from verifier.locale import LocaleContext
from verifier.messages import CatalogMessageSource
from verifier.services import ServiceRegistry
from verifier.verification import AssertionReporter, ReportExecutor, Verification


@pytest.fixture(autouse=True)
def setup_registry():
    """Register the built-in services (English locale) around each test."""
    ServiceRegistry.clear()
    register_builtin_services(VerifierConfig(locale="en"))
    yield
    ServiceRegistry.clear()
    register_builtin_services(VerifierConfig(locale="en"))


@pytest.fixture
def message_source():
    return CatalogMessageSource()


@pytest.fixture
def make_verification(message_source):
    """Factory for Verification instances wired with real collaborators."""

    def _make(
        value=None,
        name=None,
        *,
        locale="en",
        source=None,
        reporters=None,
    ):
        return Verification(
            value,
            name,
            locale_context=LocaleContext(locale),
            message_source=source or message_source,
            formatter_provider=DefaultFormatterProvider(),
            report_executor=ReportExecutor(
                reporters if reporters is not None else [AssertionReporter()]
            ),
        )

    return _make
