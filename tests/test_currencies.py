"""ISO currency reference table."""

import pytest

from cardpay.common.currencies import is_iso_currency, iso_currency_codes


def test_table_is_built_once_and_immutable():
    codes = iso_currency_codes()

    assert isinstance(codes, frozenset)
    assert iso_currency_codes() is codes


@pytest.mark.parametrize("code", ["USD", "GBP", "EUR", "JPY", "CHF"])
def test_common_currencies_are_known(code):
    assert code in iso_currency_codes()


def test_codes_are_upper_case():
    assert all(code == code.upper() for code in iso_currency_codes())


@pytest.mark.parametrize("code", ["usd", "Gbp"])
def test_lookup_ignores_case(code):
    assert is_iso_currency(code)


@pytest.mark.parametrize("code", [None, "", "   ", "AAA", "US", "USDD"])
def test_unknown_or_malformed_codes(code):
    assert not is_iso_currency(code)
