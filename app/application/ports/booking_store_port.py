from __future__ import annotations

from datetime import datetime
from typing import Protocol

from app.domain.entities.booking import Booking, BookingStatus, BookingUpsertResult


class BookingStore(Protocol):
    def upsert_booking(self, *, booking: Booking) -> BookingUpsertResult:
        """Insere a reserva; se a sessao ja existir, devolve a reserva gravada."""
        ...

    def update_status_by_payment_intent_id(
        self,
        *,
        payment_intent_id: str,
        status: BookingStatus,
        payment_status: str,
        now: datetime,
    ) -> Booking | None:
        ...

    def mark_notifications_sent(self, *, session_id: str, now: datetime) -> None:
        ...
