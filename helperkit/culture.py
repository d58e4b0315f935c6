"""
Culture (locale) handling with explicit context.

The current culture lives in a ``ContextVar`` rather than in process-wide
locale state, so swapping it affects only the current thread or asyncio
task. Formatting helpers take the culture as an argument and fall back to
the current one when it is omitted.

Example:
    with CultureContext.from_culture_name("pl-PL"):
        format_number(1234.5)        # '1234,5'
    format_number(1234.5)            # '1,234.5'
"""

import logging
from contextvars import ContextVar, Token
from datetime import date
from decimal import Decimal
from typing import Optional, Union

from babel import Locale, UnknownLocaleError
from babel import dates as babel_dates
from babel import numbers as babel_numbers

from .error_handler import InvalidArgumentError, MissingArgumentError

logger = logging.getLogger(__name__)

DEFAULT_CULTURE = "en_US"

_default_culture: Locale = Locale.parse(DEFAULT_CULTURE)
_current_culture: ContextVar[Optional[Locale]] = ContextVar("helperkit_culture", default=None)


def resolve_culture(name: str) -> Locale:
    """
    Turn a culture name such as ``"pl-PL"`` or ``"pl_PL"`` into a Locale.

    Raises:
        MissingArgumentError: If ``name`` is None.
        InvalidArgumentError: If ``name`` is not a known culture.
    """
    if name is None:
        raise MissingArgumentError("name", "Provided culture name is None")

    try:
        return Locale.parse(name.strip().replace("-", "_"))
    except (UnknownLocaleError, ValueError, TypeError) as e:
        raise InvalidArgumentError("name", f"Provided culture name is invalid: {name}", name) from e


def get_default_culture() -> Locale:
    return _default_culture


def set_default_culture(culture: Union[str, Locale]) -> Locale:
    """Change the culture used when no ``CultureContext`` is active."""
    global _default_culture

    if not isinstance(culture, Locale):
        culture = resolve_culture(culture)
    _default_culture = culture
    logger.debug(f"Default culture set to {culture}")
    return culture


def get_current_culture() -> Locale:
    """Culture bound to the current context, or the default culture."""
    culture = _current_culture.get()
    return culture if culture is not None else _default_culture


class CultureContext:
    """
    Swap the current culture for the duration of a ``with`` block.

    The original culture is captured when the context is created and
    restored when the block exits, whether it returns or raises.
    """

    def __init__(self, swap_culture: Locale):
        if swap_culture is None:
            raise MissingArgumentError("swap_culture", "Provided culture is None")

        self.original_culture: Locale = get_current_culture()
        self.swapped_culture: Locale = swap_culture
        self._token: Optional[Token] = None

    @classmethod
    def from_culture_name(cls, swap_culture_name: str) -> "CultureContext":
        return cls(resolve_culture(swap_culture_name))

    def __enter__(self) -> "CultureContext":
        if self._token is not None:
            raise RuntimeError("CultureContext is already active")
        self._token = _current_culture.set(self.swapped_culture)
        return self

    def __exit__(self, exc_type, exc_value, tb) -> None:
        _current_culture.reset(self._token)
        self._token = None

    def __repr__(self) -> str:
        return f"CultureContext({self.original_culture} -> {self.swapped_culture})"


def _culture_or_current(culture: Optional[Union[str, Locale]]) -> Locale:
    if culture is None:
        return get_current_culture()
    if isinstance(culture, Locale):
        return culture
    return resolve_culture(culture)


def format_number(value: Union[int, float, Decimal], culture: Optional[Union[str, Locale]] = None) -> str:
    """Format a number with the grouping and decimal symbols of ``culture``."""
    return babel_numbers.format_decimal(value, locale=_culture_or_current(culture))


def parse_number(text: str, culture: Optional[Union[str, Locale]] = None) -> Decimal:
    """
    Parse a number written in the convention of ``culture``.

    Raises:
        InvalidArgumentError: If ``text`` is not a number in that culture.
    """
    if text is None:
        raise MissingArgumentError("text")

    locale = _culture_or_current(culture)
    try:
        return babel_numbers.parse_decimal(text, locale=locale)
    except babel_numbers.NumberFormatError as e:
        raise InvalidArgumentError("text", f"Not a number in {locale}: {text!r}", text) from e


def format_date(value: date, format: str = "medium", culture: Optional[Union[str, Locale]] = None) -> str:
    """Format a date in the ``format`` style (short/medium/long/full) of ``culture``."""
    return babel_dates.format_date(value, format=format, locale=_culture_or_current(culture))
