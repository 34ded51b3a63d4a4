"""Error types raised by the verifier engine.

- VerifierError: An expectation was not met (carries the resolved message)
- NoSuchMessageError: A message key could not be resolved for a locale
- ServiceNotFoundError: No implementation is registered for a capability
- TemplateError: A message template is malformed or its arguments don't fit
- CatalogError: A message catalog file could not be parsed
"""

from __future__ import annotations

from typing import Any


class VerifierError(Exception):
    """Raised when a verification fails.

    The message is always the fully resolved, human-readable text.
    """


class NoSuchMessageError(VerifierError):
    """Raised when no message could be found for a key and locale.

    Attributes:
        code: The unresolved message key code
        locale: The locale the lookup was made for
    """

    def __init__(self, code: str | None, locale: Any):
        self.code = code
        self.locale = locale
        super().__init__(f"No message found under key '{code}' for locale '{locale}'")


class ServiceNotFoundError(VerifierError):
    """Raised when a required service has no registered implementation.

    Attributes:
        capability: The capability (usually a class) that was requested
    """

    def __init__(self, capability: Any):
        self.capability = capability
        name = getattr(capability, "__qualname__", None) or str(capability)
        super().__init__(f"No implementation registered for service '{name}'")


class TemplateError(VerifierError, ValueError):
    """Raised when a message template cannot be compiled or applied."""


class CatalogError(VerifierError):
    """Raised when a message catalog exists but is not valid."""
