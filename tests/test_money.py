from __future__ import annotations

from decimal import Decimal

import pytest

from app.domain.services.money import from_minor_units, normalize_currency, to_minor_units


def test_to_minor_units_converts_whole_price():
    assert to_minor_units(Decimal("2850")) == 285000


def test_to_minor_units_rounds_half_cent_up():
    assert to_minor_units(Decimal("19.995")) == 2000
    assert to_minor_units(Decimal("19.994")) == 1999


@pytest.mark.parametrize("value", ["0.01", "19.99", "2850", "1234.50", "99999.99"])
def test_minor_units_conversion_is_lossless_for_two_decimals(value):
    amount = Decimal(value)

    assert from_minor_units(to_minor_units(amount)) == amount


def test_to_minor_units_rejects_non_positive_amount():
    with pytest.raises(ValueError):
        to_minor_units(Decimal("0"))


def test_normalize_currency_defaults_to_usd():
    assert normalize_currency(None) == "USD"
    assert normalize_currency("  ") == "USD"


def test_normalize_currency_uppercases_and_validates():
    assert normalize_currency("eur") == "EUR"
    with pytest.raises(ValueError):
        normalize_currency("euro")
