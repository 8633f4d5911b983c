from __future__ import annotations

from decimal import Decimal

import pytest

from app.application.dto.checkout import (
    CheckoutSessionRequest,
    CheckoutSessionResult,
    CreateCheckoutSessionInput,
)
from app.application.use_cases.create_tour_checkout_session import (
    MISSING_FIELDS_MESSAGE,
    CreateTourCheckoutSessionUseCase,
)
from app.domain.entities.tour import Tour
from app.domain.exceptions import CheckoutInputError, PaymentProviderError, TourNotFoundError


SITE_URL = "https://baobabboundadventures.com"


class FakePaymentPort:
    def __init__(self, *, fail: bool = False):
        self.requests: list[CheckoutSessionRequest] = []
        self._fail = fail

    def create_checkout_session(self, *, request: CheckoutSessionRequest) -> CheckoutSessionResult:
        self.requests.append(request)
        if self._fail:
            raise PaymentProviderError("Failed to create Stripe checkout session.")
        return CheckoutSessionResult(id="cs_test_123", url="https://checkout.stripe.com/c/pay/cs_test_123")

    def verify_webhook(self, *, signature: str, payload: bytes):
        raise NotImplementedError


class FakeTourCatalog:
    def __init__(self, tours: dict[str, Tour] | None = None):
        self._tours = tours or {}

    def get_tour(self, *, tour_id: str) -> Tour | None:
        return self._tours.get(tour_id)


def _command(**overrides) -> CreateCheckoutSessionInput:
    values = {
        "tour_id": "7-day-baobab-safari",
        "tour_name": "7-Day Baobab Safari",
        "price": Decimal("2850"),
        "currency": "USD",
        "site_url": SITE_URL,
    }
    values.update(overrides)
    return CreateCheckoutSessionInput(**values)


def test_execute_creates_session_with_minor_unit_amount():
    payment_port = FakePaymentPort()
    use_case = CreateTourCheckoutSessionUseCase(payment_port=payment_port, tour_catalog=FakeTourCatalog())

    output = use_case.execute(_command(currency=None))

    assert output.session_id == "cs_test_123"
    assert output.url.startswith("https://checkout.stripe.com/")
    assert len(payment_port.requests) == 1
    request = payment_port.requests[0]
    assert request.unit_amount == 285000
    assert request.currency == "usd"
    assert request.tour_name == "7-Day Baobab Safari"
    assert request.description == "Safari tour booking for 7-Day Baobab Safari"
    assert request.image_url == f"{SITE_URL}/images/tours/7-day-baobab-safari.webp"
    assert request.success_url == f"{SITE_URL}/booking-success?session_id={{CHECKOUT_SESSION_ID}}"
    assert request.cancel_url == f"{SITE_URL}/tours/7-day-baobab-safari"


def test_execute_lowercases_explicit_currency():
    payment_port = FakePaymentPort()
    use_case = CreateTourCheckoutSessionUseCase(payment_port=payment_port, tour_catalog=FakeTourCatalog())

    use_case.execute(_command(price=Decimal("149.99"), currency="EUR"))

    assert payment_port.requests[0].unit_amount == 14999
    assert payment_port.requests[0].currency == "eur"


@pytest.mark.parametrize(
    "overrides",
    [
        {"tour_id": None},
        {"tour_id": ""},
        {"tour_name": None},
        {"tour_name": "   "},
        {"price": None},
        {"price": Decimal("0")},
    ],
)
def test_execute_rejects_missing_fields_without_calling_provider(overrides):
    payment_port = FakePaymentPort()
    use_case = CreateTourCheckoutSessionUseCase(payment_port=payment_port, tour_catalog=FakeTourCatalog())

    with pytest.raises(CheckoutInputError) as exc_info:
        use_case.execute(_command(**overrides))

    assert str(exc_info.value) == MISSING_FIELDS_MESSAGE
    assert payment_port.requests == []


def test_execute_rejects_negative_price():
    payment_port = FakePaymentPort()
    use_case = CreateTourCheckoutSessionUseCase(payment_port=payment_port, tour_catalog=FakeTourCatalog())

    with pytest.raises(CheckoutInputError, match="Invalid price"):
        use_case.execute(_command(price=Decimal("-10")))

    assert payment_port.requests == []


def test_execute_rejects_price_below_one_cent():
    payment_port = FakePaymentPort()
    use_case = CreateTourCheckoutSessionUseCase(payment_port=payment_port, tour_catalog=FakeTourCatalog())

    with pytest.raises(CheckoutInputError, match="Invalid price"):
        use_case.execute(_command(price=Decimal("0.004")))

    assert payment_port.requests == []


def test_execute_rounds_half_cent_up_to_one_cent():
    payment_port = FakePaymentPort()
    use_case = CreateTourCheckoutSessionUseCase(payment_port=payment_port, tour_catalog=FakeTourCatalog())

    use_case.execute(_command(price=Decimal("0.005")))

    assert payment_port.requests[0].unit_amount == 1


def test_execute_rejects_malformed_currency():
    payment_port = FakePaymentPort()
    use_case = CreateTourCheckoutSessionUseCase(payment_port=payment_port, tour_catalog=FakeTourCatalog())

    with pytest.raises(CheckoutInputError, match="Invalid currency"):
        use_case.execute(_command(currency="dollars"))

    assert payment_port.requests == []


def test_execute_propagates_provider_error():
    use_case = CreateTourCheckoutSessionUseCase(
        payment_port=FakePaymentPort(fail=True),
        tour_catalog=FakeTourCatalog(),
    )

    with pytest.raises(PaymentProviderError):
        use_case.execute(_command())


def test_catalog_mode_uses_server_side_price():
    payment_port = FakePaymentPort()
    catalog = FakeTourCatalog(
        {
            "7-day-baobab-safari": Tour(
                id="7-day-baobab-safari",
                name="7-Day Baobab Safari",
                price=Decimal("2850"),
                currency="USD",
            )
        }
    )
    use_case = CreateTourCheckoutSessionUseCase(
        payment_port=payment_port,
        tour_catalog=catalog,
        use_catalog_prices=True,
    )

    use_case.execute(_command(tour_name=None, price=Decimal("1"), currency=None))

    request = payment_port.requests[0]
    assert request.unit_amount == 285000
    assert request.tour_name == "7-Day Baobab Safari"


def test_catalog_mode_rejects_unknown_tour():
    payment_port = FakePaymentPort()
    use_case = CreateTourCheckoutSessionUseCase(
        payment_port=payment_port,
        tour_catalog=FakeTourCatalog(),
        use_catalog_prices=True,
    )

    with pytest.raises(TourNotFoundError):
        use_case.execute(_command(tour_id="unknown-tour"))

    assert payment_port.requests == []
