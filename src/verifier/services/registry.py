"""Weighted service registry for the verifier engine.

Provides registration and lookup for pluggable implementations of a
capability (formatters, message source providers, reporters, etc.).
Follows the same explicit-registration pattern for every capability:
implementations are registered at startup and looked up in weight order.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Protocol, TypeVar, runtime_checkable

from verifier.errors import ServiceNotFoundError

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

# Weight of the implementation shipped for each capability. Anything
# registered with a lower weight takes precedence.
DEFAULT_IMPLEMENTATION_WEIGHT = 1000


@runtime_checkable
class Weighted(Protocol):
    """Anything exposing an integer priority. Lower weight wins."""

    weight: int


class ServiceRegistry:
    """Registry for weighted service implementations.

    Services must be explicitly registered before they can be looked up.
    The library registers its default implementations through
    register_builtin_services(); applications register their own at startup.

    Example:
        ServiceRegistry.register(Formatter, MyFormatter())

        # Later, in weight order
        formatters = ServiceRegistry.get_all(Formatter)
    """

    _services: dict[Any, dict[str, Any]] = {}
    _resolved: dict[Any, list[Any]] = {}

    @classmethod
    def register(cls, capability: type[T], instance: T, name: str | None = None) -> None:
        """Register an implementation of a capability.

        Idempotent - re-registering the same name, or the same unnamed
        instance, for a capability is a no-op. Distinct unnamed instances of
        one class are all kept.

        Args:
            capability: The interface being implemented (e.g., Formatter)
            instance: The implementation; must expose an integer ``weight``
            name: Unique identifier within the capability (defaults to the
                qualified class name of ``instance``, with a ``#n`` suffix
                for later instances of the same class)

        Raises:
            TypeError: If ``instance`` has no integer weight
        """
        weight = getattr(instance, "weight", None)
        if not isinstance(weight, int) or isinstance(weight, bool):
            raise TypeError(
                f"Service {type(instance).__qualname__} must expose an integer weight"
            )

        registered = cls._services.setdefault(capability, {})
        if name is not None:
            key = name
            if key in registered:
                return  # Already registered, no-op
        else:
            if any(existing is instance for existing in registered.values()):
                return
            key = _unique_name(registered, instance)

        registered[key] = instance
        cls._resolved.pop(capability, None)
        logger.debug(
            "Registered %s for %s (weight=%d)", key, _capability_name(capability), weight
        )

    @classmethod
    def get_all(cls, capability: type[T]) -> list[T]:
        """Get every implementation of a capability in ascending weight order.

        Ties keep registration order. The ordered list is computed once per
        capability and reused until the next registration.

        Returns:
            A new list of implementations (empty if none are registered)
        """
        resolved = cls._resolved.get(capability)
        if resolved is None:
            instances = list(cls._services.get(capability, {}).values())
            resolved = sorted(instances, key=lambda instance: instance.weight)
            cls._resolved[capability] = resolved
        return list(resolved)

    @classmethod
    def get_first(cls, capability: type[T]) -> T:
        """Get the most important implementation of a capability.

        Raises:
            ServiceNotFoundError: If no implementation is registered
        """
        instances = cls.get_all(capability)
        if not instances:
            raise ServiceNotFoundError(capability)
        return instances[0]

    @classmethod
    def get_first_matching(
        cls, capability: type[T], mapper: Callable[[T], R | None]
    ) -> R | None:
        """Apply ``mapper`` to implementations in weight order.

        Returns:
            The first non-None mapped result, or None if there isn't one
        """
        for instance in cls.get_all(capability):
            result = mapper(instance)
            if result is not None:
                return result
        return None

    @classmethod
    def is_registered(cls, capability: Any, name: str) -> bool:
        """Check if a named implementation is registered for a capability."""
        return name in cls._services.get(capability, {})

    @classmethod
    def list_registered(cls, capability: Any) -> list[str]:
        """List the registered implementation names for a capability."""
        return sorted(cls._services.get(capability, {}).keys())

    @classmethod
    def clear(cls) -> None:
        """Clear all registrations. Primarily for testing."""
        cls._services.clear()
        cls._resolved.clear()


def service(capability: type, name: str | None = None) -> Callable[[type[T]], type[T]]:
    """Class decorator registering an instance of the decorated class.

    Usage:
        @service(Formatter)
        class DecimalFormatter:
            weight = 10
            ...
    """

    def decorator(cls: type[T]) -> type[T]:
        ServiceRegistry.register(capability, cls(), name=name)
        return cls

    return decorator


def _unique_name(registered: dict[str, Any], instance: Any) -> str:
    """Qualified class name of ``instance``, suffixed ``#n`` if already taken."""
    base = f"{type(instance).__module__}.{type(instance).__qualname__}"
    key = base
    suffix = 1
    while key in registered:
        suffix += 1
        key = f"{base}#{suffix}"
    return key


def _capability_name(capability: Any) -> str:
    return getattr(capability, "__qualname__", None) or str(capability)
