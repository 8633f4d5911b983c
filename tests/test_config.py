from __future__ import annotations

import pytest

from app.shared.config import get_settings, missing_required_settings


REQUIRED = ("STRIPE_SECRET_KEY", "STRIPE_WEBHOOK_SECRET", "SITE_URL", "POSTGRES_DSN")


def test_missing_required_settings_lists_unset_variables(monkeypatch):
    for name in REQUIRED:
        monkeypatch.delenv(name, raising=False)

    missing = missing_required_settings(get_settings())

    assert missing == list(REQUIRED)


def test_settings_parse_environment(monkeypatch):
    monkeypatch.setenv("STRIPE_SECRET_KEY", "sk_test_123")
    monkeypatch.setenv("STRIPE_WEBHOOK_SECRET", "whsec_123")
    monkeypatch.setenv("SITE_URL", "https://baobabboundadventures.com/")
    monkeypatch.setenv("POSTGRES_DSN", "postgresql+psycopg://localhost/baobab")
    monkeypatch.setenv("CHECKOUT_PRICE_SOURCE", "Catalog")
    monkeypatch.setenv("TOUR_CATALOG", '{"village-walk": {"name": "Village Walk", "price": "45"}}')
    monkeypatch.setenv("SHIPPING_ALLOWED_COUNTRIES", "us, za")
    monkeypatch.setenv("STRIPE_TIMEOUT_SECONDS", "3.5")

    settings = get_settings()

    assert missing_required_settings(settings) == []
    assert settings.site_url == "https://baobabboundadventures.com"
    assert settings.checkout_price_source == "catalog"
    assert settings.tour_catalog["village-walk"]["name"] == "Village Walk"
    assert settings.shipping_allowed_countries == ["US", "ZA"]
    assert settings.stripe_timeout_seconds == 3.5


def test_settings_reject_unknown_price_source(monkeypatch):
    monkeypatch.setenv("CHECKOUT_PRICE_SOURCE", "client")

    with pytest.raises(ValueError):
        get_settings()
