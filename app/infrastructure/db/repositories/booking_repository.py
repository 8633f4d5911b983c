from __future__ import annotations

from datetime import datetime

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.application.ports.booking_store_port import BookingStore
from app.domain.entities.booking import Booking, BookingStatus, BookingUpsertResult
from app.domain.exceptions import BookingStoreError
from app.infrastructure.db.mappers.booking_mapper import map_booking_to_params, map_row_to_booking


BOOKING_COLUMNS = """
    id, session_id, payment_intent_id, tour_id, tour_name, customer_email, amount, currency,
    status, payment_status, notifications_sent_at, created_at, updated_at
"""


class SqlBookingRepository(BookingStore):
    def __init__(self, engine):
        self._engine = engine

    def upsert_booking(self, *, booking: Booking) -> BookingUpsertResult:
        insert_sql = f"""
            INSERT INTO public.bookings (
                id, session_id, payment_intent_id, tour_id, tour_name, customer_email, amount, currency,
                status, payment_status, notifications_sent_at, created_at, updated_at
            ) VALUES (
                :id, :session_id, :payment_intent_id, :tour_id, :tour_name, :customer_email, :amount, :currency,
                :status, :payment_status, :notifications_sent_at, :created_at, :updated_at
            )
            ON CONFLICT (session_id) DO NOTHING
            RETURNING {BOOKING_COLUMNS}
        """
        select_sql = f"""
            SELECT {BOOKING_COLUMNS}
            FROM public.bookings
            WHERE session_id = :session_id
            LIMIT 1
        """
        try:
            with self._engine.begin() as conn:
                row = conn.execute(text(insert_sql), map_booking_to_params(booking)).mappings().first()
                if row is not None:
                    return BookingUpsertResult(booking=map_row_to_booking(row), created=True)
                existing = conn.execute(
                    text(select_sql),
                    {"session_id": booking.session_id},
                ).mappings().one()
        except SQLAlchemyError as exc:
            raise BookingStoreError("Failed to save booking.") from exc
        return BookingUpsertResult(booking=map_row_to_booking(existing), created=False)

    def update_status_by_payment_intent_id(
        self,
        *,
        payment_intent_id: str,
        status: BookingStatus,
        payment_status: str,
        now: datetime,
    ) -> Booking | None:
        sql = f"""
            UPDATE public.bookings
            SET status = :status,
                payment_status = :payment_status,
                updated_at = :now
            WHERE payment_intent_id = :payment_intent_id
            RETURNING {BOOKING_COLUMNS}
        """
        try:
            with self._engine.begin() as conn:
                row = conn.execute(
                    text(sql),
                    {
                        "payment_intent_id": payment_intent_id,
                        "status": status,
                        "payment_status": payment_status,
                        "now": now,
                    },
                ).mappings().first()
        except SQLAlchemyError as exc:
            raise BookingStoreError("Failed to update booking payment status.") from exc
        if row is None:
            return None
        return map_row_to_booking(row)

    def mark_notifications_sent(self, *, session_id: str, now: datetime) -> None:
        sql = """
            UPDATE public.bookings
            SET notifications_sent_at = :now,
                updated_at = :now
            WHERE session_id = :session_id
              AND notifications_sent_at IS NULL
        """
        try:
            with self._engine.begin() as conn:
                conn.execute(text(sql), {"session_id": session_id, "now": now})
        except SQLAlchemyError as exc:
            raise BookingStoreError("Failed to mark booking notifications as sent.") from exc
