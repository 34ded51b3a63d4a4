"""Report chain for verification results.

Each call to Verification.report() runs the ReportExecutor's reporters in
order. A reporter returns False to stop the chain, or raises to end it.
The AssertionReporter, registered by default, raises VerifierError when
the (negation-adjusted) result fails.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from verifier.errors import VerifierError
from verifier.messages.keys import MessageKey, is_message_key
from verifier.services.registry import DEFAULT_IMPLEMENTATION_WEIGHT, ServiceRegistry

if TYPE_CHECKING:
    from verifier.verification.context import Verification

logger = logging.getLogger(__name__)


def passes(result: bool, negated: bool) -> bool:
    """Whether ``result`` counts as a pass given the negation flag."""
    return result != negated


# =============================================================================
# Message Holders
# =============================================================================


class MessageHolder:
    """A message captured at report time and only built when needed."""

    def get_message(self, verification: Verification[Any]) -> str:
        raise NotImplementedError("Subclasses must implement get_message()")


@dataclass(frozen=True)
class KeyMessageHolder(MessageHolder):
    key: MessageKey
    args: tuple[Any, ...] = ()

    def get_message(self, verification: Verification[Any]) -> str:
        return verification.message_source.get_message(verification, self.key, self.args)


@dataclass(frozen=True)
class TemplateMessageHolder(MessageHolder):
    template: str | None
    args: tuple[Any, ...] = ()

    def get_message(self, verification: Verification[Any]) -> str:
        return verification.message_source.get_message(verification, self.template, self.args)


def message_holder(key_or_template: MessageKey | str | None, args: Sequence[Any]) -> MessageHolder:
    """Create the holder matching a key or a literal template."""
    if is_message_key(key_or_template):
        return KeyMessageHolder(key_or_template, tuple(args))
    return TemplateMessageHolder(key_or_template, tuple(args))


# =============================================================================
# Reporters
# =============================================================================


class Reporter:
    """A step in the report chain.

    ``report`` returns whether the chain should continue.
    """

    weight: int = DEFAULT_IMPLEMENTATION_WEIGHT

    def report(
        self, verification: Verification[Any], result: bool, message_holder: MessageHolder
    ) -> bool:
        raise NotImplementedError("Subclasses must implement report()")


class AssertionReporter(Reporter):
    """Raises VerifierError with the resolved message when a result fails."""

    def report(
        self, verification: Verification[Any], result: bool, message_holder: MessageHolder
    ) -> bool:
        if not passes(result, verification.negated):
            raise VerifierError(message_holder.get_message(verification))
        return True


class ReportExecutor:
    """Runs reporters in order until one stops the chain."""

    def __init__(self, reporters: Iterable[Reporter]):
        self.reporters = list(reporters)

    def execute(
        self, verification: Verification[Any], result: bool, message_holder: MessageHolder
    ) -> None:
        for reporter in self.reporters:
            if not reporter.report(verification, result, message_holder):
                logger.debug("Report chain stopped by %s", type(reporter).__name__)
                return


# =============================================================================
# Provider
# =============================================================================


class ReportExecutorProvider:
    """Supplies the ReportExecutor for new verifications.

    Returning None defers to the next provider.
    """

    weight: int = DEFAULT_IMPLEMENTATION_WEIGHT

    def get_report_executor(self) -> ReportExecutor | None:
        raise NotImplementedError("Subclasses must implement get_report_executor()")


class DefaultReportExecutorProvider(ReportExecutorProvider):
    """Builds the chain from every registered Reporter in weight order."""

    def get_report_executor(self) -> ReportExecutor:
        return ReportExecutor(ServiceRegistry.get_all(Reporter))
