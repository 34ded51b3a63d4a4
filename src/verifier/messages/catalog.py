"""YAML message catalogs.

A catalog file maps message key codes to templates:

    messages:
      verifier.message.default.name: Value
      myapp.order.valid: "be a valid order for {0}"

Catalogs are addressed by base name and locale. A base name is either a
package resource (``package:stem``) or a filesystem path stem. For locale
fr_CA the candidate files, in priority order, are ``stem_fr_CA.yaml``,
``stem_fr.yaml`` and ``stem.yaml``; missing files are skipped.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from verifier.errors import CatalogError
from verifier.locale import Locale
from verifier.messages.cache import LockedCache

logger = logging.getLogger(__name__)

# "package.module:stem" (a single-letter prefix is a drive, not a package)
_PACKAGE_BASE_NAME = re.compile(r"^(?P<package>[A-Za-z_][\w]*(?:\.[A-Za-z_][\w]*)+|[A-Za-z_]\w+):(?P<stem>[\w.-]+)$")


class MessageCatalog(BaseModel):
    """Schema of a catalog file."""

    model_config = ConfigDict(extra="forbid")
    messages: dict[str, str] = {}

    @field_validator("messages", mode="before")
    @classmethod
    def empty_messages_allowed(cls, v: object) -> object:
        return {} if v is None else v


@dataclass(frozen=True)
class CatalogSource:
    """A loaded catalog file."""

    origin: str
    messages: Mapping[str, str] = field(default_factory=dict)

    def get(self, code: str) -> str | None:
        return self.messages.get(code)


def parse_catalog(text: str, origin: str) -> CatalogSource:
    """Parse and validate catalog YAML.

    Raises:
        CatalogError: If the YAML is invalid or doesn't match the schema
    """
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise CatalogError(f"Message catalog {origin} is not valid YAML: {e}") from e

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise CatalogError(f"Message catalog {origin} must be a mapping")

    try:
        catalog = MessageCatalog.model_validate(raw)
    except ValidationError as e:
        raise CatalogError(f"Message catalog {origin} is invalid: {e}") from e

    return CatalogSource(origin=origin, messages=dict(catalog.messages))


class CatalogStore:
    """Backing store of message catalogs.

    Loaded sources are cached per (base name, locale) until clear_cache().
    """

    def __init__(self) -> None:
        self._sources: LockedCache[tuple[str, Locale], list[CatalogSource]] = LockedCache()

    def get_sources(self, base_name: str, locale: Locale) -> list[CatalogSource]:
        """Get the catalogs for ``base_name`` in priority order for ``locale``."""
        return self._sources.get_or_create(
            (base_name, locale), lambda: self._load_sources(base_name, locale)
        )

    def lookup(self, source: CatalogSource, code: str) -> str | None:
        """Get the template for ``code`` from ``source``, or None if absent."""
        return source.get(code)

    def clear_cache(self) -> None:
        self._sources.clear()

    def _load_sources(self, base_name: str, locale: Locale) -> list[CatalogSource]:
        sources = []
        for suffix in locale.candidates:
            loaded = self._read(base_name, suffix)
            if loaded is not None:
                text, origin = loaded
                sources.append(parse_catalog(text, origin))

        logger.debug(
            "Loaded %d catalog(s) for base name '%s' and locale '%s'",
            len(sources),
            base_name,
            locale,
        )
        return sources

    def _read(self, base_name: str, suffix: str) -> tuple[str, str] | None:
        match = _PACKAGE_BASE_NAME.match(base_name)
        if match:
            package = match.group("package")
            filename = f"{match.group('stem')}{suffix}.yaml"
            try:
                resource = resources.files(package).joinpath(filename)
            except ModuleNotFoundError as e:
                raise CatalogError(f"Catalog package '{package}' not found") from e
            if not resource.is_file():
                return None
            return resource.read_text(encoding="utf-8"), f"{package}:{filename}"

        path = Path(f"{base_name}{suffix}.yaml")
        if not path.is_file():
            return None
        return path.read_text(encoding="utf-8"), str(path)
