from __future__ import annotations

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI

from app.api.errors import register_exception_handlers
from app.api.routers import checkout, health, webhook
from app.domain.exceptions import ConfigurationError
from app.infrastructure.db.engine import create_schema, get_engine
from app.shared.config import get_settings, missing_required_settings


logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


@asynccontextmanager
async def lifespan(_app: FastAPI):
    settings = get_settings()
    missing = missing_required_settings(settings)
    if missing:
        raise ConfigurationError(f"Missing required settings: {', '.join(missing)}")
    if settings.db_auto_create_schema:
        create_schema(get_engine(settings.postgres_dsn))
        logger.info("main: schema_ensured")
    logger.info(
        "main: startup site_url=%s price_source=%s notifications=%s",
        settings.site_url,
        settings.checkout_price_source,
        "relay" if settings.notification_relay_url else "log",
    )
    yield


configure_logging(get_settings().log_level)

app = FastAPI(title="Baobab Booking API", lifespan=lifespan)
app.include_router(health.router)
app.include_router(checkout.router)
app.include_router(webhook.router)
register_exception_handlers(app)
