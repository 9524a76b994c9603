"""Resolution of error code chains to human-readable messages."""

from __future__ import annotations

from collections.abc import Mapping
from collections.abc import Sequence
from dataclasses import dataclass
from numbers import Number
from typing import Any
import re

from itemservice.binding.errors import FieldError
from itemservice.binding.errors import MessageResolutionError
from itemservice.binding.errors import ObjectError
from itemservice.binding.result import BindingResult
from itemservice.formatting.locales import locale_candidates
from itemservice.formatting.locales import normalize_locale
from itemservice.formatting.number import NumberFormatter

_PLACEHOLDER = re.compile(r"\{(\d+)\}")


@dataclass(frozen=True)
class ResolvedFieldMessage:
    field: str
    code: str | None
    message: str


@dataclass(frozen=True)
class ResolvedMessages:
    """Messages of one binding result, ready to render next to the form."""

    fields: tuple[ResolvedFieldMessage, ...]
    globals: tuple[str, ...]

    def for_field(self, field: str) -> list[str]:
        return [item.message for item in self.fields if item.field == field]


class MessageSource:
    """Look up message templates per locale and fill their ``{n}`` placeholders.

    Catalogs are read-only after construction. A code missing from the
    requested locale is looked up in the language-only locale and then in the
    default locale before moving on to the next, less specific code.
    """

    def __init__(
        self,
        catalogs: Mapping[str, Mapping[str, str]],
        *,
        default_locale: str = "en",
        formatter: NumberFormatter | None = None,
    ) -> None:
        self._catalogs: dict[str, dict[str, str]] = {}
        for locale, entries in catalogs.items():
            key = normalize_locale(locale)
            if key is None:
                raise ValueError("Catalog locale must not be blank")
            self._catalogs.setdefault(key, {}).update(entries)
        self._default_locale = normalize_locale(default_locale) or "en"
        self._formatter = formatter or NumberFormatter(default_locale=self._default_locale)

    @property
    def default_locale(self) -> str:
        return self._default_locale

    def find_template(self, code: str, locale: str | None = None) -> str | None:
        """Return the raw template for one code, honoring locale fallback."""
        for candidate in locale_candidates(locale, self._default_locale):
            catalog = self._catalogs.get(candidate)
            if catalog is not None and code in catalog:
                return catalog[code]
        return None

    def get_message(
        self,
        codes: str | Sequence[str],
        arguments: Sequence[Any] = (),
        locale: str | None = None,
        default_message: str | None = None,
    ) -> str:
        """Resolve the first code that has a template, else the default message."""
        chain = (codes,) if isinstance(codes, str) else tuple(codes)
        for code in chain:
            template = self.find_template(code, locale)
            if template is not None:
                return self.format(template, arguments, locale)
        if default_message is not None:
            return self.format(default_message, arguments, locale)
        raise MessageResolutionError(chain, locale)

    def resolve(self, error: ObjectError, locale: str | None = None) -> str:
        """Resolve one binding or validation error to its message."""
        return self.get_message(
            error.codes,
            error.arguments,
            locale,
            default_message=error.default_message,
        )

    def resolve_all(self, result: BindingResult, locale: str | None = None) -> ResolvedMessages:
        fields: list[ResolvedFieldMessage] = []
        globals_: list[str] = []
        for error in result.all_errors():
            message = self.resolve(error, locale)
            if isinstance(error, FieldError):
                fields.append(ResolvedFieldMessage(field=error.field, code=error.code, message=message))
            else:
                globals_.append(message)
        return ResolvedMessages(fields=tuple(fields), globals=tuple(globals_))

    def format(self, template: str, arguments: Sequence[Any], locale: str | None = None) -> str:
        """Substitute ``{n}`` placeholders; unknown indexes are left untouched."""
        if not arguments:
            return template

        def _substitute(match: re.Match[str]) -> str:
            index = int(match.group(1))
            if index >= len(arguments):
                return match.group(0)
            return self._render_argument(arguments[index], locale)

        return _PLACEHOLDER.sub(_substitute, template)

    def _render_argument(self, value: Any, locale: str | None) -> str:
        if isinstance(value, Number) and not isinstance(value, bool):
            return self._formatter.print(value, locale or self._default_locale)
        return str(value)
