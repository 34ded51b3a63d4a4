"""Symbolic message keys.

A message key is anything exposing a stable string ``code`` that is looked
up in the message catalogs. Plain strings are never keys; they are literal
templates.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class MessageKey(Protocol):
    """A localizable message identifier."""

    @property
    def code(self) -> str: ...


@dataclass(frozen=True)
class MessageCode:
    """An ad-hoc message key, e.g. ``MessageCode("myapp.order.valid")``."""

    code: str

    def __str__(self) -> str:
        return self.code


class MessageKeys(Enum):
    """Keys the engine needs to build every failure message.

    All of them must resolve for any supported locale.
    """

    DEFAULT_MESSAGE = "verifier.message.default.normal"
    DEFAULT_MESSAGE_NEGATED = "verifier.message.default.negated"
    DEFAULT_NAME = "verifier.message.default.name"
    MESSAGE = "verifier.message.normal"
    MESSAGE_NEGATED = "verifier.message.negated"

    @property
    def code(self) -> str:
        return self.value


def is_message_key(obj: Any) -> bool:
    """Check if ``obj`` should be resolved as a key rather than a template."""
    return obj is not None and not isinstance(obj, str) and isinstance(obj, MessageKey)
