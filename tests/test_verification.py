"""Tests for the verification context and report chain."""

from unittest.mock import MagicMock

import pytest

from verifier import verify
from verifier.errors import ServiceNotFoundError, VerifierError
from verifier.formatting import register_builtin_formatters
from verifier.locale import Locale, LocaleContext, LocaleContextProvider
from verifier.messages import MessageCode, MessageSource
from verifier.services import ServiceRegistry
from verifier.verification import (
    AssertionReporter,
    DefaultReportExecutorProvider,
    DefaultVerificationProvider,
    KeyMessageHolder,
    Reporter,
    TemplateMessageHolder,
    message_holder,
    passes,
)


class RecordingReporter(Reporter):
    """Records calls and optionally stops the chain."""

    def __init__(self, weight=0, proceed=True):
        self.weight = weight
        self.proceed = proceed
        self.calls = []

    def report(self, verification, result, message_holder):
        self.calls.append((result, verification.negated))
        return self.proceed


class ExplodingReporter(Reporter):
    def report(self, verification, result, message_holder):
        raise RuntimeError("reporter failed")


@pytest.fixture
def mock_source():
    source = MagicMock(spec=MessageSource)
    source.get_message.return_value = "i am expected"
    return source


# =============================================================================
# Reporting
# =============================================================================


class TestReport:
    def test_failure_message_comes_from_message_source(self, make_verification, mock_source):
        verification = make_verification("value", source=mock_source)

        with pytest.raises(VerifierError) as exc_info:
            verification.report(False, "test", "foo", "bar")

        assert str(exc_info.value) == "i am expected"
        mock_source.get_message.assert_called_once_with(verification, "test", ("foo", "bar"))

    def test_negated_true_result_fails_and_resets(self, make_verification, mock_source):
        verification = make_verification("value", source=mock_source)
        verification.negated = True

        with pytest.raises(VerifierError):
            verification.report(True, "test")

        assert verification.negated is False

    def test_negated_false_result_passes_and_resets(self, make_verification):
        verification = make_verification("value")
        verification.negated = True

        assert verification.report(False) is verification
        assert verification.negated is False

    def test_passing_report_returns_self(self, make_verification):
        verification = make_verification(1)

        assert verification.report(True, "be fine") is verification

    def test_passing_report_builds_no_message(self, make_verification, mock_source):
        verification = make_verification("value", source=mock_source)

        verification.report(True, MessageCode("never.resolved"), [1])

        mock_source.get_message.assert_not_called()

    def test_negation_resets_when_reporter_raises(self, make_verification):
        verification = make_verification(1, reporters=[ExplodingReporter()])
        verification.negated = True

        with pytest.raises(RuntimeError, match="reporter failed"):
            verification.report(True)

        assert verification.negated is False

    def test_reporters_see_negation(self, make_verification):
        reporter = RecordingReporter()
        verification = make_verification(1, reporters=[reporter])
        verification.negated = True

        verification.report(False)

        assert reporter.calls == [(False, True)]
        assert verification.negated is False

    def test_negated_failure_message_is_negated(self, make_verification):
        verification = make_verification(None, "email")
        verification.negated = True

        with pytest.raises(VerifierError, match="^email must not be null: null$"):
            verification.report(True, MessageCode("verifier.object.nulled"))

    def test_reporter_returning_false_stops_chain(self, make_verification):
        first = RecordingReporter(proceed=False)
        second = RecordingReporter()
        verification = make_verification(1, reporters=[first, second, AssertionReporter()])

        verification.report(False)

        assert first.calls == [(False, False)]
        assert second.calls == []

    @pytest.mark.parametrize(
        "result,negated,expected",
        [(True, False, True), (False, False, False), (True, True, False), (False, True, True)],
    )
    def test_passes(self, result, negated, expected):
        assert passes(result, negated) is expected


# =============================================================================
# Message holders
# =============================================================================


class TestMessageHolder:
    def test_key_gives_key_holder(self):
        key = MessageCode("a.b")

        assert message_holder(key, [1]) == KeyMessageHolder(key, (1,))

    def test_string_and_none_give_template_holder(self):
        assert message_holder("be {0}", [1]) == TemplateMessageHolder("be {0}", (1,))
        assert message_holder(None, []) == TemplateMessageHolder(None, ())

    def test_holder_delegates_to_message_source(self, make_verification, mock_source):
        verification = make_verification(1, source=mock_source)

        assert KeyMessageHolder(MessageCode("a.b"), (2,)).get_message(verification) == "i am expected"
        mock_source.get_message.assert_called_once_with(verification, MessageCode("a.b"), (2,))


# =============================================================================
# Context
# =============================================================================


class TestVerification:
    def test_exposes_value_name_and_locale(self, make_verification):
        verification = make_verification(5, "count", locale="fr_CA")

        assert verification.value == 5
        assert verification.name == "count"
        assert verification.locale == Locale("fr", "CA")
        assert verification.negated is False

    def test_copy_shares_collaborators(self, make_verification):
        verification = make_verification(5, "count")
        verification.negated = True

        copy = verification.copy("other", "label")

        assert copy.value == "other"
        assert copy.name == "label"
        assert copy.negated is False
        assert copy.message_source is verification.message_source
        assert copy.report_executor is verification.report_executor
        assert copy.locale_context is verification.locale_context

    def test_get_message_delegates(self, make_verification, mock_source):
        verification = make_verification(5, source=mock_source)

        assert verification.get_message("be {0}", 1, 2) == "i am expected"
        mock_source.get_message.assert_called_once_with(verification, "be {0}", (1, 2))

    def test_get_formatter(self, make_verification):
        verification = make_verification()

        assert verification.get_formatter([1]) is not None
        assert verification.get_formatter(1) is None


# =============================================================================
# Providers
# =============================================================================


class TestProviders:
    def test_report_executor_orders_reporters_by_weight(self):
        late = RecordingReporter(weight=2000)
        early = RecordingReporter(weight=10)
        ServiceRegistry.register(Reporter, late, name="late")
        ServiceRegistry.register(Reporter, early, name="early")

        executor = DefaultReportExecutorProvider().get_report_executor()

        assert executor.reporters[0] is early
        assert isinstance(executor.reporters[1], AssertionReporter)
        assert executor.reporters[2] is late

    def test_verification_provider_wires_registered_services(self):
        verification = DefaultVerificationProvider().get_verification(3, "x")

        assert verification.value == 3
        assert verification.locale == Locale("en")
        with pytest.raises(VerifierError, match="^x must be valid: 3$"):
            verification.report(False)

    def test_lower_weight_locale_provider_wins(self):
        class GermanLocale(LocaleContextProvider):
            weight = 10

            def get_locale_context(self):
                return LocaleContext("de")

        ServiceRegistry.register(LocaleContextProvider, GermanLocale())

        with pytest.raises(VerifierError, match="^Wert muss null sein: 1$"):
            verify(1).nulled()

    def test_provider_returning_none_defers(self):
        class Undecided(LocaleContextProvider):
            weight = 10

            def get_locale_context(self):
                return None

        ServiceRegistry.register(LocaleContextProvider, Undecided())

        assert DefaultVerificationProvider().get_verification(1).locale == Locale("en")

    def test_missing_locale_provider_raises(self):
        ServiceRegistry.clear()
        register_builtin_formatters()

        with pytest.raises(ServiceNotFoundError) as exc_info:
            DefaultVerificationProvider().get_verification(1)

        assert exc_info.value.capability is LocaleContextProvider

    def test_verify_without_services_raises(self):
        ServiceRegistry.clear()

        with pytest.raises(ServiceNotFoundError):
            verify(1)
