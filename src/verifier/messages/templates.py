"""Compiled message templates.

Templates use positional ``str.format`` placeholders:
- {0}          - Argument 0
- {1:.2f}      - Argument 1 with a format spec
- {0!r}        - Argument 0 with a conversion
- {{ and }}    - Literal braces

Templates are parsed once (CompiledTemplate) and applied many times.
"""

from __future__ import annotations

import string
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from verifier.errors import TemplateError
from verifier.formatting.hierarchical import NULL_MARKER
from verifier.locale import Locale

_parser = string.Formatter()

_CONVERSIONS = {"r": repr, "s": str, "a": ascii}


@dataclass(frozen=True)
class Placeholder:
    """A positional placeholder within a template."""

    index: int
    spec: str = ""
    conversion: str | None = None


class CompiledTemplate:
    """A parsed template for a single locale.

    Raises TemplateError on construction if the template is malformed.
    """

    def __init__(self, text: str, locale: Locale):
        self.text = text
        self.locale = locale
        self.parts = self._compile(text)
        self.arity = max(
            (part.index + 1 for part in self.parts if isinstance(part, Placeholder)),
            default=0,
        )

    def __repr__(self) -> str:
        return f"CompiledTemplate({self.text!r}, locale='{self.locale}')"

    def _compile(self, text: str) -> list[str | Placeholder]:
        try:
            parsed = list(_parser.parse(text))
        except ValueError as e:
            raise TemplateError(f"Malformed template {text!r}: {e}") from e

        parts: list[str | Placeholder] = []
        for literal, field_name, spec, conversion in parsed:
            if literal:
                parts.append(literal)
            if field_name is None:
                continue
            if not field_name.isdigit():
                raise TemplateError(
                    f"Template {text!r} must use positional placeholders such as "
                    f"{{0}}, found {{{field_name}}}"
                )
            if spec and "{" in spec:
                raise TemplateError(f"Template {text!r} uses a nested placeholder")
            if conversion is not None and conversion not in _CONVERSIONS:
                raise TemplateError(
                    f"Template {text!r} uses unknown conversion '!{conversion}'"
                )
            parts.append(Placeholder(int(field_name), spec or "", conversion))
        return parts

    def format(self, args: Sequence[Any]) -> str:
        """Substitute ``args`` into the template.

        Raises:
            TemplateError: If a placeholder refers to a missing argument or
                an argument doesn't accept its format spec
        """
        buffer = []
        for part in self.parts:
            if isinstance(part, str):
                buffer.append(part)
                continue
            if part.index >= len(args):
                raise TemplateError(
                    f"Template {self.text!r} expects argument {part.index} "
                    f"but {len(args)} were supplied"
                )
            buffer.append(self._render(args[part.index], part))
        return "".join(buffer)

    def _render(self, value: Any, placeholder: Placeholder) -> str:
        if placeholder.conversion:
            value = _CONVERSIONS[placeholder.conversion](value)
        elif value is None and not placeholder.spec:
            return NULL_MARKER

        try:
            return format(value, placeholder.spec)
        except (TypeError, ValueError) as e:
            raise TemplateError(
                f"Argument {placeholder.index} of template {self.text!r} "
                f"cannot be formatted with '{placeholder.spec}': {e}"
            ) from e
