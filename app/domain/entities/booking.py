from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Literal


BookingStatus = Literal["confirmed", "failed"]


@dataclass(frozen=True)
class Booking:
    id: str
    session_id: str
    payment_intent_id: str | None
    tour_id: str
    tour_name: str
    customer_email: str | None
    amount: Decimal
    currency: str
    status: BookingStatus
    payment_status: str
    notifications_sent_at: datetime | None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class BookingUpsertResult:
    booking: Booking
    created: bool
