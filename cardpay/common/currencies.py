"""ISO 4217 currency reference table derived from CLDR locale data.

The table is computed once per process on first use and is immutable after
that. Every territory named by a known locale contributes the currencies that
are legal tender there today.
"""

from functools import lru_cache

from babel.core import parse_locale
from babel.localedata import locale_identifiers
from babel.numbers import get_territory_currencies


def _locale_territories() -> set[str]:
    territories: set[str] = set()
    for identifier in locale_identifiers():
        try:
            _, territory, *_ = parse_locale(identifier)
        except ValueError:
            continue
        if territory:
            territories.add(territory)
    return territories


@lru_cache(maxsize=1)
def iso_currency_codes() -> frozenset[str]:
    """Return upper-case ISO currency codes in use across known locales."""

    codes: set[str] = set()
    for territory in _locale_territories():
        codes.update(get_territory_currencies(territory, tender=True))
    return frozenset(code.upper() for code in codes)


def is_iso_currency(code: str | None) -> bool:
    """Case-insensitive membership check against the reference table."""

    if not code or not code.strip() or len(code) != 3:
        return False
    return code.upper() in iso_currency_codes()
