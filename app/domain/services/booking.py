from __future__ import annotations

from datetime import datetime

from app.domain.entities.booking import Booking
from app.domain.entities.payment_event import CheckoutSessionCompletedEvent
from app.domain.exceptions import WebhookPayloadError
from app.domain.services.money import DEFAULT_CURRENCY, from_minor_units


def build_booking_from_checkout(
    *,
    event: CheckoutSessionCompletedEvent,
    booking_id: str,
    now: datetime,
) -> Booking:
    if not event.tour_id or not event.tour_name:
        raise WebhookPayloadError("Checkout session is missing tour metadata.")
    if event.amount_total is None:
        raise WebhookPayloadError("Checkout session is missing amount_total.")

    return Booking(
        id=booking_id,
        session_id=event.session_id,
        payment_intent_id=event.payment_intent_id,
        tour_id=event.tour_id,
        tour_name=event.tour_name,
        customer_email=event.customer_email,
        amount=from_minor_units(event.amount_total),
        currency=(event.currency or DEFAULT_CURRENCY).upper(),
        status="confirmed",
        payment_status=event.payment_status or "paid",
        notifications_sent_at=None,
        created_at=now,
        updated_at=now,
    )


def booking_notification_data(booking: Booking) -> dict:
    return {
        "booking_id": booking.id,
        "session_id": booking.session_id,
        "tour_id": booking.tour_id,
        "tour_name": booking.tour_name,
        "customer_email": booking.customer_email,
        "amount": str(booking.amount),
        "currency": booking.currency,
        "status": booking.status,
        "payment_status": booking.payment_status,
        "created_at": booking.created_at.isoformat(),
    }
