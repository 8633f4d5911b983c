from __future__ import annotations

import json
import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()


DEFAULT_SHIPPING_COUNTRIES = (
    "US,CA,GB,AU,DE,FR,ES,IT,NL,BE,CH,AT,SE,NO,DK,FI,JP,CN,IN,BR,ZA"
)
PRICE_SOURCES = {"request", "catalog"}


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


def _json(name: str) -> dict:
    value = _env(name)
    if not value:
        return {}
    return json.loads(value)


def _csv(name: str, default: str = "") -> list[str]:
    value = _env(name, default) or ""
    return [item.strip().upper() for item in value.split(",") if item.strip()]


def _bool(name: str, default: str = "false") -> bool:
    return (_env(name, default) or "").strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    stripe_secret_key: str
    stripe_webhook_secret: str
    stripe_timeout_seconds: float
    stripe_webhook_tolerance_seconds: int
    site_url: str
    site_name: str
    admin_email: str
    cors_allow_origin: str
    checkout_price_source: str
    tour_catalog: dict
    shipping_allowed_countries: list[str]
    postgres_dsn: str
    db_auto_create_schema: bool
    notification_relay_url: str
    notification_relay_api_key: str
    notification_timeout_seconds: float
    log_level: str


REQUIRED_SETTINGS = {
    "STRIPE_SECRET_KEY": "stripe_secret_key",
    "STRIPE_WEBHOOK_SECRET": "stripe_webhook_secret",
    "SITE_URL": "site_url",
    "POSTGRES_DSN": "postgres_dsn",
}


def get_settings() -> Settings:
    price_source = (_env("CHECKOUT_PRICE_SOURCE", "request") or "request").strip().lower()
    if price_source not in PRICE_SOURCES:
        raise ValueError(f"CHECKOUT_PRICE_SOURCE must be one of {sorted(PRICE_SOURCES)}.")
    return Settings(
        stripe_secret_key=_env("STRIPE_SECRET_KEY", ""),
        stripe_webhook_secret=_env("STRIPE_WEBHOOK_SECRET", ""),
        stripe_timeout_seconds=float(_env("STRIPE_TIMEOUT_SECONDS", "10")),
        stripe_webhook_tolerance_seconds=int(_env("STRIPE_WEBHOOK_TOLERANCE_SECONDS", "300")),
        site_url=(_env("SITE_URL", "") or "").rstrip("/"),
        site_name=_env("SITE_NAME", "Baobab Bound Adventures"),
        admin_email=_env("ADMIN_EMAIL", "admin@baobabboundadventures.com"),
        cors_allow_origin=_env("CORS_ALLOW_ORIGIN", "*"),
        checkout_price_source=price_source,
        tour_catalog=_json("TOUR_CATALOG"),
        shipping_allowed_countries=_csv("SHIPPING_ALLOWED_COUNTRIES", DEFAULT_SHIPPING_COUNTRIES),
        postgres_dsn=_env("POSTGRES_DSN", ""),
        db_auto_create_schema=_bool("DB_AUTO_CREATE_SCHEMA"),
        notification_relay_url=_env("NOTIFICATION_RELAY_URL", ""),
        notification_relay_api_key=_env("NOTIFICATION_RELAY_API_KEY", ""),
        notification_timeout_seconds=float(_env("NOTIFICATION_TIMEOUT_SECONDS", "10")),
        log_level=(_env("LOG_LEVEL", "INFO") or "INFO").upper(),
    )


def missing_required_settings(settings: Settings) -> list[str]:
    return [name for name, attr in REQUIRED_SETTINGS.items() if not getattr(settings, attr)]
