from __future__ import annotations

import logging
from uuid import uuid4

from app.application.dto.webhook import PaymentWebhookInput, PaymentWebhookOutput
from app.application.ports.booking_store_port import BookingStore
from app.application.ports.notifier_port import Notifier
from app.application.ports.payment_provider_port import PaymentProviderPort
from app.domain.entities.payment_event import (
    CheckoutSessionCompletedEvent,
    InvoicePaymentSucceededEvent,
    PaymentEvent,
    PaymentIntentFailedEvent,
    PaymentIntentSucceededEvent,
    SubscriptionEvent,
    UnrecognizedEvent,
)
from app.domain.exceptions import BookingPendingError
from app.domain.services.booking import booking_notification_data, build_booking_from_checkout
from app.domain.services.money import from_minor_units

from .time_utils import utcnow


logger = logging.getLogger(__name__)


class ProcessPaymentWebhookUseCase:
    """Verifica o webhook do provedor e aplica os efeitos de cada tipo de evento.

    O provedor entrega cada evento pelo menos uma vez; todos os handlers
    precisam tolerar reentrega do mesmo evento.
    """

    def __init__(
        self,
        *,
        payment_port: PaymentProviderPort,
        booking_store: BookingStore,
        notifier: Notifier,
        admin_email: str,
        site_name: str,
    ):
        self._payment_port = payment_port
        self._booking_store = booking_store
        self._notifier = notifier
        self._admin_email = admin_email
        self._site_name = site_name

    def execute(self, command: PaymentWebhookInput) -> PaymentWebhookOutput:
        event = self._payment_port.verify_webhook(signature=command.signature, payload=command.payload)
        handled = self._dispatch(event)
        logger.info(
            "payment_webhook: processed event_id=%s event_type=%s handled=%s",
            event.event_id,
            event.event_type,
            handled,
        )
        return PaymentWebhookOutput(event_id=event.event_id, event_type=event.event_type, handled=handled)

    def _dispatch(self, event: PaymentEvent) -> bool:
        if isinstance(event, CheckoutSessionCompletedEvent):
            return self._handle_checkout_completed(event)
        if isinstance(event, PaymentIntentSucceededEvent):
            return self._handle_payment_succeeded(event)
        if isinstance(event, PaymentIntentFailedEvent):
            return self._handle_payment_failed(event)
        if isinstance(event, InvoicePaymentSucceededEvent):
            logger.info("payment_webhook: invoice_payment_succeeded invoice_id=%s", event.invoice_id)
            return False
        if isinstance(event, SubscriptionEvent):
            logger.info(
                "payment_webhook: subscription_event event_type=%s subscription_id=%s status=%s",
                event.event_type,
                event.subscription_id,
                event.status,
            )
            return False
        if isinstance(event, UnrecognizedEvent):
            logger.info("payment_webhook: unhandled_event_type event_type=%s", event.event_type)
            return False
        raise TypeError(f"Unsupported payment event: {type(event).__name__}")

    def _handle_checkout_completed(self, event: CheckoutSessionCompletedEvent) -> bool:
        if not event.tour_id or not event.tour_name or event.amount_total is None:
            logger.warning(
                "payment_webhook: checkout_session_without_tour session_id=%s",
                event.session_id,
            )
            return False

        now = utcnow()
        result = self._booking_store.upsert_booking(
            booking=build_booking_from_checkout(event=event, booking_id=str(uuid4()), now=now)
        )
        booking = result.booking
        if not result.created:
            logger.info(
                "payment_webhook: booking_already_recorded session_id=%s booking_id=%s",
                booking.session_id,
                booking.id,
            )
        if booking.notifications_sent_at is not None:
            return True

        data = booking_notification_data(booking)
        if booking.customer_email:
            self._notifier.notify(
                channel="booking_confirmation",
                payload={
                    "to": booking.customer_email,
                    "subject": f"Booking Confirmation - {self._site_name}",
                    "idempotency_key": f"booking_confirmation:{booking.session_id}",
                    "data": data,
                },
            )
        else:
            logger.warning(
                "payment_webhook: booking_without_customer_email session_id=%s",
                booking.session_id,
            )
        self._notifier.notify(
            channel="admin_booking_notification",
            payload={
                "to": self._admin_email,
                "subject": "New Booking Received",
                "idempotency_key": f"admin_booking_notification:{booking.session_id}",
                "data": data,
            },
        )
        self._booking_store.mark_notifications_sent(session_id=booking.session_id, now=utcnow())
        return True

    def _handle_payment_succeeded(self, event: PaymentIntentSucceededEvent) -> bool:
        booking = self._booking_store.update_status_by_payment_intent_id(
            payment_intent_id=event.payment_intent_id,
            status="confirmed",
            payment_status="paid",
            now=utcnow(),
        )
        if booking is None:
            if event.tour_id:
                # Intent criado pelo checkout do site; a sessao ainda nao foi gravada.
                logger.warning(
                    "payment_webhook: booking_pending_for_payment_intent payment_intent_id=%s tour_id=%s",
                    event.payment_intent_id,
                    event.tour_id,
                )
                raise BookingPendingError(
                    f"No booking recorded yet for payment intent {event.payment_intent_id}."
                )
            logger.info(
                "payment_webhook: payment_intent_without_booking payment_intent_id=%s",
                event.payment_intent_id,
            )
            return False

        recipient = event.receipt_email or booking.customer_email
        if recipient:
            data = booking_notification_data(booking)
            if event.amount_received is not None:
                data["amount"] = str(from_minor_units(event.amount_received))
            if event.currency:
                data["currency"] = event.currency.upper()
            self._notifier.notify(
                channel="payment_confirmation",
                payload={
                    "to": recipient,
                    "subject": f"Payment Received - {self._site_name}",
                    "idempotency_key": f"payment_confirmation:{event.payment_intent_id}",
                    "data": data,
                },
            )
        return True

    def _handle_payment_failed(self, event: PaymentIntentFailedEvent) -> bool:
        booking = self._booking_store.update_status_by_payment_intent_id(
            payment_intent_id=event.payment_intent_id,
            status="failed",
            payment_status="failed",
            now=utcnow(),
        )
        if booking is None:
            logger.warning(
                "payment_webhook: booking_not_found_for_payment_intent payment_intent_id=%s",
                event.payment_intent_id,
            )
            return False

        recipient = event.receipt_email or booking.customer_email
        if recipient:
            data = booking_notification_data(booking)
            data["failure_message"] = event.failure_message
            self._notifier.notify(
                channel="payment_failure",
                payload={
                    "to": recipient,
                    "subject": f"Payment Failed - {self._site_name}",
                    "idempotency_key": f"payment_failure:{event.payment_intent_id}",
                    "data": data,
                },
            )
        return True
