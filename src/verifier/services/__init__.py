"""Weighted service discovery for the verifier engine.

Usage:
    from verifier.services import ServiceRegistry, service

    @service(Formatter)
    class DecimalFormatter:
        weight = 10
        ...
"""

from verifier.services.registry import (
    DEFAULT_IMPLEMENTATION_WEIGHT,
    ServiceRegistry,
    Weighted,
    service,
)

__all__ = [
    "DEFAULT_IMPLEMENTATION_WEIGHT",
    "ServiceRegistry",
    "Weighted",
    "service",
]
