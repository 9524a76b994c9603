"""Locale-aware number parsing and printing.

Turns user input such as ``"1,000"`` into ``1000`` and renders numbers back
with the grouping and decimal separators of the requested locale.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from numbers import Number
import logging
import re

from itemservice.formatting.locales import locale_candidates

logger = logging.getLogger(__name__)

_NUMBER_PATTERN = re.compile(r"^[+-]?\d+(\.\d+)?$")
MAX_FRACTION_DIGITS = 3


@dataclass(frozen=True)
class NumberSymbols:
    """Separators used when printing and parsing numbers for one locale."""

    grouping: str
    decimal: str
    alternate_grouping: tuple[str, ...] = ()


DEFAULT_SYMBOLS: Mapping[str, NumberSymbols] = {
    "en": NumberSymbols(grouping=",", decimal="."),
    "ko": NumberSymbols(grouping=",", decimal="."),
    "de": NumberSymbols(grouping=".", decimal=","),
    "fr": NumberSymbols(grouping="\u202f", decimal=",", alternate_grouping=("\u00a0", " ")),
}


class NumberFormatter:
    """Parse and print numbers for a locale, falling back to a default locale."""

    def __init__(
        self,
        *,
        default_locale: str = "en",
        symbols: Mapping[str, NumberSymbols] | None = None,
    ) -> None:
        self._symbols = dict(symbols or DEFAULT_SYMBOLS)
        if not self._symbols:
            raise ValueError("symbols must define at least one locale")
        self._default_locale = default_locale

    @property
    def default_locale(self) -> str:
        return self._default_locale

    def symbols_for(self, locale: str | None) -> NumberSymbols:
        """Return separators for the closest known locale."""
        for candidate in locale_candidates(locale, self._default_locale):
            found = self._symbols.get(candidate)
            if found is not None:
                return found
        return next(iter(self._symbols.values()))

    def parse(self, text: str, locale: str | None = None) -> int | float:
        """Parse locale-formatted text into an int, or a float when it has a fraction."""
        logger.debug("Parsing number text=%r locale=%s", text, locale)
        if not isinstance(text, str):
            raise ValueError(f"Expected text to parse, got {type(text).__name__}")

        symbols = self.symbols_for(locale)
        normalized = text.strip()
        for separator in (symbols.grouping, *symbols.alternate_grouping):
            normalized = normalized.replace(separator, "")
        if symbols.decimal != ".":
            if "." in normalized:
                raise ValueError(f"Invalid number: {text!r}")
            normalized = normalized.replace(symbols.decimal, ".")

        if not _NUMBER_PATTERN.match(normalized):
            raise ValueError(f"Invalid number: {text!r}")

        if "." in normalized:
            value = float(normalized)
            if value.is_integer():
                return int(value)
            return value
        return int(normalized)

    def print(self, value: Number, locale: str | None = None) -> str:
        """Render a number with locale separators and at most three fraction digits."""
        logger.debug("Printing number value=%r locale=%s", value, locale)
        if isinstance(value, bool) or not isinstance(value, Number):
            raise ValueError(f"Expected a number, got {type(value).__name__}")

        symbols = self.symbols_for(locale)
        if isinstance(value, int):
            rendered = f"{value:,}"
        else:
            rendered = f"{Decimal(str(value)):,.{MAX_FRACTION_DIGITS}f}"
            rendered = rendered.rstrip("0").rstrip(".")

        integral, _, fraction = rendered.partition(".")
        integral = integral.replace(",", symbols.grouping)
        if fraction:
            return f"{integral}{symbols.decimal}{fraction}"
        return integral
