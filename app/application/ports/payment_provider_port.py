from __future__ import annotations

from typing import Protocol

from app.application.dto.checkout import CheckoutSessionRequest, CheckoutSessionResult
from app.domain.entities.payment_event import PaymentEvent


class PaymentProviderPort(Protocol):
    def create_checkout_session(self, *, request: CheckoutSessionRequest) -> CheckoutSessionResult:
        ...

    def verify_webhook(self, *, signature: str, payload: bytes) -> PaymentEvent:
        ...
