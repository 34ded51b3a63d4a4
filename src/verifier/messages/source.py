"""Message sources for the verifier engine.

Provides the resolution pipeline used to build failure messages:
1. MessageSource: Resolves a key or literal template, formats its
   arguments and wraps the result in a contextual sentence
2. CatalogMessageSource: MessageSource backed by YAML catalogs
3. MessageSourceProvider: Supplies the MessageSource for new verifications
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from verifier.config import VerifierConfig
from verifier.errors import NoSuchMessageError
from verifier.locale import Locale
from verifier.messages.cache import LockedCache
from verifier.messages.catalog import CatalogStore
from verifier.messages.keys import MessageKey, MessageKeys, is_message_key
from verifier.messages.templates import CompiledTemplate
from verifier.services.registry import DEFAULT_IMPLEMENTATION_WEIGHT

if TYPE_CHECKING:
    from verifier.verification.context import Verification

logger = logging.getLogger(__name__)


# =============================================================================
# Message Source
# =============================================================================


class MessageSource:
    """Base class for message sources.

    Subclasses decide where key templates come from (``resolve_key``) and
    how the final sentence is assembled (``build_message``,
    ``get_default_message`` and ``get_default_name``).

    Attributes:
        always_use_templates: Compile templates even when no arguments are
            given. When disabled, argument-free templates are used verbatim,
            so escaping (``{{``) only applies to templates with arguments.
        use_key_as_default_message: Use the code of an unresolvable key as
            its message instead of raising NoSuchMessageError.
    """

    def __init__(
        self,
        always_use_templates: bool = False,
        use_key_as_default_message: bool = False,
    ):
        self.always_use_templates = always_use_templates
        self.use_key_as_default_message = use_key_as_default_message
        self._templates: LockedCache[tuple[str, Locale], CompiledTemplate] = LockedCache()

    def get_message(
        self,
        verification: Verification[Any],
        key_or_template: MessageKey | str | None,
        args: Sequence[Any] = (),
    ) -> str:
        """Build the full failure message for a key or literal template.

        A None template falls back to the default message.

        Raises:
            NoSuchMessageError: If a key (or a key required to build the
                sentence) cannot be resolved
            TemplateError: If a template is malformed or ``args`` don't fit it
        """
        message = self.resolve_message(key_or_template, args, verification)

        if message is None:
            if is_message_key(key_or_template):
                message = self.get_default_message_for_key(key_or_template, verification)
                if message is None:
                    raise NoSuchMessageError(key_or_template.code, verification.locale)
            else:
                message = self.get_default_message(verification)

        name = self.resolve_name(verification.name, verification)
        value = self.resolve_value(verification.value, verification)
        return self.build_message(message, name, value, verification)

    def resolve_message(
        self,
        key_or_template: MessageKey | str | None,
        args: Sequence[Any],
        verification: Verification[Any],
    ) -> str | None:
        """Resolve a key or template and substitute ``args``, without trimmings.

        Returns:
            The formatted message, or None if there is no template or the
            key cannot be found
        """
        if key_or_template is None:
            return None

        use_template = self.always_use_templates or bool(args)

        if is_message_key(key_or_template):
            text = self.resolve_key(key_or_template, verification)
            if text is None or not use_template:
                return text
        else:
            text = key_or_template
            if not use_template:
                return text

        template = self.get_template(text, verification.locale)
        return template.format(self.resolve_arguments(args, verification))

    def get_template(self, text: str, locale: Locale) -> CompiledTemplate:
        """Get the compiled template for ``text`` and ``locale`` (cached)."""
        return self._templates.get_or_create(
            (text, locale), lambda: CompiledTemplate(text, locale)
        )

    def resolve_arguments(
        self, args: Sequence[Any] | None, verification: Verification[Any]
    ) -> list[Any]:
        """Replace every argument that has a Formatter with its formatted text."""
        if not args:
            return []
        return [self.try_format(arg, verification) for arg in args]

    def resolve_name(self, name: Any, verification: Verification[Any]) -> Any:
        if name is None:
            return self.get_default_name(verification)
        return self.try_format(name, verification)

    def resolve_value(self, value: Any, verification: Verification[Any]) -> Any:
        return self.try_format(value, verification)

    def try_format(self, obj: Any, verification: Verification[Any]) -> Any:
        """Format ``obj`` if a Formatter supports it; otherwise return it unchanged."""
        formatter = verification.get_formatter(obj)
        return formatter.format(verification, obj) if formatter is not None else obj

    def get_default_message_for_key(
        self, key: MessageKey, verification: Verification[Any]
    ) -> str | None:
        """Message used when ``key`` can't be found (its code, if so configured)."""
        return key.code if self.use_key_as_default_message else None

    def clear_cache(self) -> None:
        """Clear anything cached by this source."""
        self._templates.clear()
        logger.debug("Cleared message caches for %s", type(self).__name__)

    def resolve_key(self, key: MessageKey, verification: Verification[Any]) -> str | None:
        """Find the raw template text for ``key``. Override in subclasses."""
        raise NotImplementedError("Subclasses must implement resolve_key()")

    def build_message(
        self, message: str, name: Any, value: Any, verification: Verification[Any]
    ) -> str:
        """Wrap ``message`` in a sentence with the resolved name and value.

        Should differ depending on whether ``verification`` is negated.
        """
        raise NotImplementedError("Subclasses must implement build_message()")

    def get_default_message(self, verification: Verification[Any]) -> str:
        raise NotImplementedError("Subclasses must implement get_default_message()")

    def get_default_name(self, verification: Verification[Any]) -> Any:
        raise NotImplementedError("Subclasses must implement get_default_name()")


class CatalogMessageSource(MessageSource):
    """MessageSource resolving keys from YAML catalogs.

    Base names are tried in order; within a base name, the most specific
    locale catalog wins. The final sentence itself is a catalog template
    (``{0} must {1}: {2}``) receiving the name, message and value.
    """

    DEFAULT_BASE_NAMES = ("verifier.messages.data:verifier",)

    def __init__(
        self,
        base_names: Sequence[str] | None = None,
        store: CatalogStore | None = None,
        always_use_templates: bool = False,
        use_key_as_default_message: bool = False,
    ):
        super().__init__(
            always_use_templates=always_use_templates,
            use_key_as_default_message=use_key_as_default_message,
        )
        self.base_names = list(base_names) if base_names is not None else list(self.DEFAULT_BASE_NAMES)
        self.store = store or CatalogStore()
        self._lookups: LockedCache[tuple[str, Locale], str | None] = LockedCache()

    def resolve_key(self, key: MessageKey, verification: Verification[Any]) -> str | None:
        locale = verification.locale
        return self._lookups.get_or_create(
            (key.code, locale), lambda: self._find(key.code, locale)
        )

    def _find(self, code: str, locale: Locale) -> str | None:
        for base_name in self.base_names:
            for source in self.store.get_sources(base_name, locale):
                text = self.store.lookup(source, code)
                if text is not None:
                    return text
        return None

    def build_message(
        self, message: str, name: Any, value: Any, verification: Verification[Any]
    ) -> str:
        key = MessageKeys.MESSAGE_NEGATED if verification.negated else MessageKeys.MESSAGE
        text = self.resolve_key(key, verification)
        if text is None:
            raise NoSuchMessageError(key.code, verification.locale)
        # name, message and value are already formatted
        return self.get_template(text, verification.locale).format((name, message, value))

    def get_default_message(self, verification: Verification[Any]) -> str:
        key = (
            MessageKeys.DEFAULT_MESSAGE_NEGATED
            if verification.negated
            else MessageKeys.DEFAULT_MESSAGE
        )
        return self._require(key, verification)

    def get_default_name(self, verification: Verification[Any]) -> Any:
        return self._require(MessageKeys.DEFAULT_NAME, verification)

    def _require(self, key: MessageKey, verification: Verification[Any]) -> str:
        message = self.resolve_message(key, (), verification)
        if message is None:
            raise NoSuchMessageError(key.code, verification.locale)
        return message

    def clear_cache(self) -> None:
        super().clear_cache()
        self._lookups.clear()
        self.store.clear_cache()


# =============================================================================
# Provider
# =============================================================================


class MessageSourceProvider:
    """Supplies the MessageSource for new verifications.

    Returning None defers to the next provider.
    """

    weight: int = DEFAULT_IMPLEMENTATION_WEIGHT

    def get_message_source(self) -> MessageSource | None:
        raise NotImplementedError("Subclasses must implement get_message_source()")


class DefaultMessageSourceProvider(MessageSourceProvider):
    """Provides one shared CatalogMessageSource built from the configuration.

    Configured base names are tried before the bundled catalogs.
    """

    def __init__(self, config: VerifierConfig | None = None):
        config = config or VerifierConfig()
        self._message_source = CatalogMessageSource(
            base_names=[*config.base_names, *CatalogMessageSource.DEFAULT_BASE_NAMES],
            always_use_templates=config.always_use_templates,
            use_key_as_default_message=config.use_key_as_default_message,
        )

    def get_message_source(self) -> CatalogMessageSource:
        return self._message_source
