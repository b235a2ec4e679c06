"""Currency choice and locale-aware money formatting."""

from __future__ import annotations

import math
from types import MappingProxyType
from typing import Literal, Mapping, Tuple

from babel.numbers import format_currency as _babel_format_currency

from .storage import PersistenceStore

CurrencyCode = Literal["AUD", "USD", "EUR", "GBP"]

CURRENCY_LOCALES: Mapping[str, str] = MappingProxyType(
    {"AUD": "en_AU", "USD": "en_US", "EUR": "de_DE", "GBP": "en_GB"}
)
CURRENCIES: Tuple[str, ...] = tuple(CURRENCY_LOCALES)
DEFAULT_CURRENCY: CurrencyCode = "AUD"
CURRENCY_STORAGE_KEY = "truecost.currency"
PLACEHOLDER = "–"


def locale_for_currency(currency: str) -> str:
    return CURRENCY_LOCALES.get(currency, CURRENCY_LOCALES[DEFAULT_CURRENCY])


def format_currency(value: float, currency: str = DEFAULT_CURRENCY) -> str:
    """Format ``value`` with two decimals in the locale tied to ``currency``.

    NaN and infinities render as a dash rather than a number.
    """

    if not math.isfinite(value):
        return PLACEHOLDER
    return _babel_format_currency(value, currency, locale=locale_for_currency(currency))


def load_currency(store: PersistenceStore) -> CurrencyCode:
    stored = store.get_text(CURRENCY_STORAGE_KEY)
    if stored in CURRENCY_LOCALES:
        return stored  # type: ignore[return-value]
    return DEFAULT_CURRENCY


def save_currency(store: PersistenceStore, currency: CurrencyCode) -> bool:
    if currency not in CURRENCY_LOCALES:
        raise ValueError(f"Unsupported currency: {currency}")
    return store.set_text(CURRENCY_STORAGE_KEY, currency)
