"""Message resolution engine.

This module provides:
- MessageKey / MessageKeys: Symbolic, localizable message identifiers
- CompiledTemplate: Parsed positional templates
- CatalogStore: YAML catalogs looked up by base name and locale
- MessageSource: The resolution pipeline producing failure messages
"""

from verifier.messages.cache import LockedCache
from verifier.messages.catalog import CatalogSource, CatalogStore, MessageCatalog, parse_catalog
from verifier.messages.keys import MessageCode, MessageKey, MessageKeys, is_message_key
from verifier.messages.source import (
    CatalogMessageSource,
    DefaultMessageSourceProvider,
    MessageSource,
    MessageSourceProvider,
)
from verifier.messages.templates import CompiledTemplate, Placeholder

__all__ = [
    # Keys
    "MessageCode",
    "MessageKey",
    "MessageKeys",
    "is_message_key",
    # Templates
    "CompiledTemplate",
    "LockedCache",
    "Placeholder",
    # Catalogs
    "CatalogSource",
    "CatalogStore",
    "MessageCatalog",
    "parse_catalog",
    # Sources
    "CatalogMessageSource",
    "DefaultMessageSourceProvider",
    "MessageSource",
    "MessageSourceProvider",
]
