"""Engine configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


@dataclass
class VerifierConfig:
    """Configuration for the default engine implementations.

    Attributes:
        locale: Locale identifier such as "en_GB" (None uses the process default)
        base_names: Extra catalog base names, tried before the bundled catalog
        always_use_templates: Compile templates even when no arguments are given
        use_key_as_default_message: Use a missing key's code as its message
            instead of raising NoSuchMessageError
    """

    locale: str | None = None
    base_names: list[str] = field(default_factory=list)
    always_use_templates: bool = False
    use_key_as_default_message: bool = False

    @classmethod
    def from_env(cls) -> VerifierConfig:
        """Create config from environment variables.

        Reads:
        1. VERIFIER_LOCALE
        2. VERIFIER_BASE_NAMES (comma separated)
        3. VERIFIER_ALWAYS_USE_TEMPLATES
        4. VERIFIER_USE_KEY_AS_DEFAULT_MESSAGE
        """
        raw_base_names = os.environ.get("VERIFIER_BASE_NAMES", "")
        base_names = [name.strip() for name in raw_base_names.split(",") if name.strip()]

        return cls(
            locale=os.environ.get("VERIFIER_LOCALE") or None,
            base_names=base_names,
            always_use_templates=_env_flag("VERIFIER_ALWAYS_USE_TEMPLATES"),
            use_key_as_default_message=_env_flag("VERIFIER_USE_KEY_AS_DEFAULT_MESSAGE"),
        )
