from __future__ import annotations

from decimal import Decimal

from app.application.dto.checkout import (
    CheckoutSessionRequest,
    CreateCheckoutSessionInput,
    CreateCheckoutSessionOutput,
)
from app.application.ports.payment_provider_port import PaymentProviderPort
from app.application.ports.tour_catalog_port import TourCatalogPort
from app.domain.exceptions import CheckoutInputError, TourNotFoundError
from app.domain.services.money import normalize_currency, to_minor_units


MISSING_FIELDS_MESSAGE = "Missing required fields: tourId, tourName, price"
CHECKOUT_SESSION_PLACEHOLDER = "{CHECKOUT_SESSION_ID}"


class CreateTourCheckoutSessionUseCase:
    def __init__(
        self,
        *,
        payment_port: PaymentProviderPort,
        tour_catalog: TourCatalogPort,
        use_catalog_prices: bool = False,
    ):
        self._payment_port = payment_port
        self._tour_catalog = tour_catalog
        self._use_catalog_prices = use_catalog_prices

    def execute(self, command: CreateCheckoutSessionInput) -> CreateCheckoutSessionOutput:
        tour_id, tour_name, price, currency = self._resolve_purchase(command)

        try:
            currency_code = normalize_currency(currency)
        except ValueError as exc:
            raise CheckoutInputError("Invalid currency") from exc

        unit_amount = to_minor_units(price)
        if unit_amount < 1:
            raise CheckoutInputError("Invalid price")

        site_url = command.site_url.rstrip("/")
        result = self._payment_port.create_checkout_session(
            request=CheckoutSessionRequest(
                tour_id=tour_id,
                tour_name=tour_name,
                description=f"Safari tour booking for {tour_name}",
                image_url=f"{site_url}/images/tours/{tour_id}.webp",
                unit_amount=unit_amount,
                currency=currency_code.lower(),
                success_url=f"{site_url}/booking-success?session_id={CHECKOUT_SESSION_PLACEHOLDER}",
                cancel_url=f"{site_url}/tours/{tour_id}",
            )
        )
        return CreateCheckoutSessionOutput(session_id=result.id, url=result.url)

    def _resolve_purchase(self, command: CreateCheckoutSessionInput) -> tuple[str, str, Decimal, str | None]:
        tour_id = (command.tour_id or "").strip()

        if self._use_catalog_prices:
            if not tour_id:
                raise CheckoutInputError(MISSING_FIELDS_MESSAGE)
            tour = self._tour_catalog.get_tour(tour_id=tour_id)
            if tour is None:
                raise TourNotFoundError("Unknown tour")
            return tour.id, tour.name, tour.price, tour.currency

        tour_name = (command.tour_name or "").strip()
        price = command.price
        if not tour_id or not tour_name or price is None or price == 0:
            raise CheckoutInputError(MISSING_FIELDS_MESSAGE)
        if not price.is_finite() or price < 0:
            raise CheckoutInputError("Invalid price")
        return tour_id, tour_name, price, command.currency
