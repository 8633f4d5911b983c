from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class CreateCheckoutSessionInput:
    tour_id: str | None
    tour_name: str | None
    price: Decimal | None
    currency: str | None
    site_url: str


@dataclass(frozen=True)
class CreateCheckoutSessionOutput:
    session_id: str
    url: str


@dataclass(frozen=True)
class CheckoutSessionRequest:
    tour_id: str
    tour_name: str
    description: str
    image_url: str
    unit_amount: int
    currency: str
    success_url: str
    cancel_url: str


@dataclass(frozen=True)
class CheckoutSessionResult:
    id: str
    url: str
