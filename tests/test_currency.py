from decimal import Decimal

import pytest
from pydantic import ValidationError

from tracker.core.config import Settings
from tracker.currency.currencies import CURRENCIES, format_amount, get_currency


def test_symbol_position():
    assert format_amount(Decimal("1234.5"), get_currency("USD")) == "$1234.50"
    assert format_amount(Decimal("99.9"), get_currency("SEK")) == "99.90 kr"
    assert format_amount(Decimal("10"), get_currency("PLN")) == "10.00 zł"
    assert format_amount(Decimal("-3"), get_currency("EUR")) == "€-3.00"


def test_lookup_falls_back_to_default():
    assert get_currency("gbp").code == "GBP"
    assert get_currency("XXX").code == "USD"
    assert get_currency("XXX", default="EUR").code == "EUR"


def test_codes_are_unique():
    codes = [currency.code for currency in CURRENCIES]
    assert len(codes) == len(set(codes))


def test_default_currency_must_be_supported():
    settings = Settings(STRIPE_SECRET_KEY="sk", STRIPE_PUBLIC_KEY="pk", DEFAULT_CURRENCY="eur", _env_file=None)
    assert settings.DEFAULT_CURRENCY == "EUR"

    with pytest.raises(ValidationError):
        Settings(STRIPE_SECRET_KEY="sk", STRIPE_PUBLIC_KEY="pk", DEFAULT_CURRENCY="XXX", _env_file=None)
