from __future__ import annotations

from decimal import Decimal
from typing import Any, Mapping

from app.domain.entities.booking import Booking


def map_row_to_booking(row: Mapping[str, Any]) -> Booking:
    return Booking(
        id=str(row["id"]),
        session_id=row["session_id"],
        payment_intent_id=row.get("payment_intent_id"),
        tour_id=row["tour_id"],
        tour_name=row["tour_name"],
        customer_email=row.get("customer_email"),
        amount=Decimal(str(row["amount"])),
        currency=row["currency"],
        status=row["status"],
        payment_status=row["payment_status"],
        notifications_sent_at=row.get("notifications_sent_at"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def map_booking_to_params(booking: Booking) -> dict[str, Any]:
    return {
        "id": booking.id,
        "session_id": booking.session_id,
        "payment_intent_id": booking.payment_intent_id,
        "tour_id": booking.tour_id,
        "tour_name": booking.tour_name,
        "customer_email": booking.customer_email,
        "amount": booking.amount,
        "currency": booking.currency,
        "status": booking.status,
        "payment_status": booking.payment_status,
        "notifications_sent_at": booking.notifications_sent_at,
        "created_at": booking.created_at,
        "updated_at": booking.updated_at,
    }
