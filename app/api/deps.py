from __future__ import annotations

from functools import lru_cache

from fastapi import HTTPException

from app.application.use_cases.create_tour_checkout_session import CreateTourCheckoutSessionUseCase
from app.application.use_cases.process_payment_webhook import ProcessPaymentWebhookUseCase
from app.infrastructure.catalog.tour_catalog import DEFAULT_TOUR_CATALOG, StaticTourCatalog
from app.infrastructure.clients.notification_relay_client import HttpNotifier, LogNotifier
from app.infrastructure.clients.stripe_client import StripeClient
from app.infrastructure.db.engine import get_engine
from app.infrastructure.db.repositories.booking_repository import SqlBookingRepository
from app.shared.config import get_settings


def _get_db_engine():
    settings = get_settings()
    if not settings.postgres_dsn:
        raise HTTPException(status_code=500, detail="POSTGRES_DSN is required.")
    return get_engine(settings.postgres_dsn)


@lru_cache(maxsize=1)
def _get_stripe_client() -> StripeClient:
    settings = get_settings()
    if not settings.stripe_secret_key:
        raise HTTPException(status_code=500, detail="STRIPE_SECRET_KEY is required.")
    if not settings.stripe_webhook_secret:
        raise HTTPException(status_code=500, detail="STRIPE_WEBHOOK_SECRET is required.")
    return StripeClient(
        secret_key=settings.stripe_secret_key,
        webhook_secret=settings.stripe_webhook_secret,
        timeout_seconds=settings.stripe_timeout_seconds,
        webhook_tolerance_seconds=settings.stripe_webhook_tolerance_seconds,
        shipping_allowed_countries=settings.shipping_allowed_countries,
    )


@lru_cache(maxsize=1)
def _get_tour_catalog() -> StaticTourCatalog:
    settings = get_settings()
    return StaticTourCatalog(settings.tour_catalog or DEFAULT_TOUR_CATALOG)


def _get_notifier() -> HttpNotifier | LogNotifier:
    settings = get_settings()
    if not settings.notification_relay_url:
        return LogNotifier()
    return HttpNotifier(
        relay_url=settings.notification_relay_url,
        timeout_seconds=settings.notification_timeout_seconds,
        api_key=settings.notification_relay_api_key or None,
    )


def get_create_tour_checkout_session_use_case() -> CreateTourCheckoutSessionUseCase:
    settings = get_settings()
    return CreateTourCheckoutSessionUseCase(
        payment_port=_get_stripe_client(),
        tour_catalog=_get_tour_catalog(),
        use_catalog_prices=settings.checkout_price_source == "catalog",
    )


def get_process_payment_webhook_use_case() -> ProcessPaymentWebhookUseCase:
    settings = get_settings()
    return ProcessPaymentWebhookUseCase(
        payment_port=_get_stripe_client(),
        booking_store=SqlBookingRepository(_get_db_engine()),
        notifier=_get_notifier(),
        admin_email=settings.admin_email,
        site_name=settings.site_name,
    )
