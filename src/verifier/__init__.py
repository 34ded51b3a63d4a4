"""Fluent verification engine.

Wrap a value, chain checks against it, and get a descriptive VerifierError
when one fails:

    from verifier import verify

    verify(user.email, "email").not_().nulled()
    verify(items, "items", CollectionVerifier).not_().empty().sorted_by()
    # VerifierError: items must be sorted: ['3', '1']

Built-in services are registered on import. Register extra formatters,
reporters or providers through verifier.services.ServiceRegistry.
"""

from __future__ import annotations

from typing import Any, TypeVar

from verifier.bootstrap import register_builtin_services
from verifier.config import VerifierConfig
from verifier.errors import (
    CatalogError,
    NoSuchMessageError,
    ServiceNotFoundError,
    TemplateError,
    VerifierError,
)
from verifier.messages.keys import MessageCode
from verifier.services.registry import ServiceRegistry
from verifier.verification.provider import VerificationProvider
from verifier.verifiers import (
    CollectionVerifier,
    ComparableVerifier,
    CustomVerifier,
    ObjectVerifier,
)

C = TypeVar("C", bound=CustomVerifier[Any])


def verify(value: Any, name: Any = None, cls: type[C] | None = None) -> C:
    """Start verifying ``value``.

    Args:
        value: The value to verify
        name: Optional label used in failure messages
        cls: Verifier class to use (defaults to ObjectVerifier)

    Raises:
        ServiceNotFoundError: If no VerificationProvider is registered
    """
    provider = ServiceRegistry.get_first(VerificationProvider)
    verifier_cls = cls or ObjectVerifier
    return verifier_cls(provider.get_verification(value, name))


register_builtin_services()

__all__ = [
    "CatalogError",
    "CollectionVerifier",
    "ComparableVerifier",
    "CustomVerifier",
    "MessageCode",
    "NoSuchMessageError",
    "ObjectVerifier",
    "ServiceNotFoundError",
    "TemplateError",
    "VerifierConfig",
    "VerifierError",
    "register_builtin_services",
    "verify",
]
