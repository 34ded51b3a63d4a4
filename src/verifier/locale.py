"""Locale handling for message resolution."""

from __future__ import annotations

import locale as _locale
import os
import re
from dataclasses import dataclass

from verifier.config import VerifierConfig
from verifier.services.registry import DEFAULT_IMPLEMENTATION_WEIGHT

# e.g. "en", "en_GB", "en-GB", "fr_CA.UTF-8"
_LOCALE_PATTERN = re.compile(r"^(?P<language>[A-Za-z]{2,8})(?:[_-](?P<country>[A-Za-z0-9]{2,3}))?")


@dataclass(frozen=True)
class Locale:
    """A language with an optional country, e.g. ``Locale("fr", "CA")``."""

    language: str = ""
    country: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "language", self.language.lower())
        object.__setattr__(self, "country", self.country.upper())

    def __str__(self) -> str:
        if self.country:
            return f"{self.language}_{self.country}"
        return self.language

    @property
    def candidates(self) -> list[str]:
        """Catalog suffixes from most to least specific, ending with the root."""
        suffixes = []
        if self.language and self.country:
            suffixes.append(f"_{self.language}_{self.country}")
        if self.language:
            suffixes.append(f"_{self.language}")
        suffixes.append("")
        return suffixes

    @classmethod
    def parse(cls, value: str | None) -> Locale:
        """Parse an identifier such as "en_GB", "en-GB" or "C.UTF-8".

        Unrecognized identifiers give the root locale.
        """
        if not value:
            return ROOT
        match = _LOCALE_PATTERN.match(value.strip())
        if not match or value.upper().startswith("POSIX"):
            return ROOT
        return cls(match.group("language"), match.group("country") or "")

    @classmethod
    def default(cls) -> Locale:
        """The process default locale (LC_ALL/LC_MESSAGES/LANG, then the C library)."""
        for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
            value = os.environ.get(var)
            if value:
                return cls.parse(value)
        language, _ = _locale.getlocale()
        return cls.parse(language)


ROOT = Locale()


class LocaleContext:
    """Holds the locale used by a verification."""

    def __init__(self, locale: Locale | str | None = None):
        if isinstance(locale, str):
            locale = Locale.parse(locale)
        self.locale = locale if locale is not None else Locale.default()


class LocaleContextProvider:
    """Supplies the LocaleContext for new verifications.

    Register implementations with a lower weight to select locales
    differently (per request, per thread, etc.). Returning None defers to
    the next provider.
    """

    weight: int = DEFAULT_IMPLEMENTATION_WEIGHT

    def get_locale_context(self) -> LocaleContext | None:
        raise NotImplementedError("Subclasses must implement get_locale_context()")


class DefaultLocaleContextProvider(LocaleContextProvider):
    """Provides a fixed locale taken from the configuration."""

    def __init__(self, config: VerifierConfig | None = None):
        config = config or VerifierConfig()
        self._context = LocaleContext(config.locale)

    def get_locale_context(self) -> LocaleContext:
        return self._context
