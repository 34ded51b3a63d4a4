"""Verification context and report chain."""

from verifier.verification.context import Verification
from verifier.verification.provider import DefaultVerificationProvider, VerificationProvider
from verifier.verification.report import (
    AssertionReporter,
    DefaultReportExecutorProvider,
    KeyMessageHolder,
    MessageHolder,
    ReportExecutor,
    ReportExecutorProvider,
    Reporter,
    TemplateMessageHolder,
    message_holder,
    passes,
)

__all__ = [
    "AssertionReporter",
    "DefaultReportExecutorProvider",
    "DefaultVerificationProvider",
    "KeyMessageHolder",
    "MessageHolder",
    "ReportExecutor",
    "ReportExecutorProvider",
    "Reporter",
    "TemplateMessageHolder",
    "Verification",
    "VerificationProvider",
    "message_holder",
    "passes",
]
