from __future__ import annotations

import json
import logging
from typing import Any

import stripe

from app.application.dto.checkout import CheckoutSessionRequest, CheckoutSessionResult
from app.application.ports.payment_provider_port import PaymentProviderPort
from app.domain.entities.payment_event import (
    CHECKOUT_SESSION_COMPLETED,
    INVOICE_PAYMENT_SUCCEEDED,
    PAYMENT_INTENT_FAILED,
    PAYMENT_INTENT_SUCCEEDED,
    SUBSCRIPTION_EVENT_TYPES,
    CheckoutSessionCompletedEvent,
    InvoicePaymentSucceededEvent,
    PaymentEvent,
    PaymentIntentFailedEvent,
    PaymentIntentSucceededEvent,
    SubscriptionEvent,
    UnrecognizedEvent,
)
from app.domain.exceptions import PaymentProviderError, WebhookPayloadError, WebhookSignatureError


logger = logging.getLogger(__name__)


class StripeClient(PaymentProviderPort):
    def __init__(
        self,
        *,
        secret_key: str,
        webhook_secret: str,
        timeout_seconds: float = 10,
        webhook_tolerance_seconds: int = 300,
        shipping_allowed_countries: list[str] | None = None,
    ):
        stripe.api_key = secret_key
        stripe.default_http_client = stripe.RequestsClient(timeout=timeout_seconds)
        self._webhook_secret = webhook_secret
        self._webhook_tolerance_seconds = webhook_tolerance_seconds
        self._shipping_allowed_countries = list(shipping_allowed_countries or [])

    def create_checkout_session(self, *, request: CheckoutSessionRequest) -> CheckoutSessionResult:
        metadata = {"tourId": request.tour_id, "tourName": request.tour_name}
        payload: dict = {
            "payment_method_types": ["card"],
            "line_items": [
                {
                    "price_data": {
                        "currency": request.currency,
                        "product_data": {
                            "name": request.tour_name,
                            "description": request.description,
                            "images": [request.image_url],
                        },
                        "unit_amount": request.unit_amount,
                    },
                    "quantity": 1,
                }
            ],
            "mode": "payment",
            "success_url": request.success_url,
            "cancel_url": request.cancel_url,
            "metadata": metadata,
            "payment_intent_data": {"metadata": metadata},
            "billing_address_collection": "required",
        }
        if self._shipping_allowed_countries:
            payload["shipping_address_collection"] = {
                "allowed_countries": self._shipping_allowed_countries,
            }

        try:
            session = stripe.checkout.Session.create(**payload)
        except stripe.StripeError as exc:
            logger.exception(
                "stripe_client: create_checkout_session_failed tour_id=%s",
                request.tour_id,
            )
            raise PaymentProviderError("Failed to create Stripe checkout session.") from exc

        session_id = getattr(session, "id", None)
        session_url = getattr(session, "url", None)
        if not session_id or not session_url:
            raise PaymentProviderError("Stripe checkout session response is incomplete.")

        logger.info(
            "stripe_client: checkout_session_created session_id=%s tour_id=%s unit_amount=%s currency=%s",
            session_id,
            request.tour_id,
            request.unit_amount,
            request.currency,
        )
        return CheckoutSessionResult(id=str(session_id), url=str(session_url))

    def verify_webhook(self, *, signature: str, payload: bytes) -> PaymentEvent:
        if not signature:
            raise WebhookSignatureError("Missing Stripe signature header.")
        try:
            body = payload.decode("utf-8")
            stripe.WebhookSignature.verify_header(
                body,
                signature,
                self._webhook_secret,
                tolerance=self._webhook_tolerance_seconds,
            )
        except (UnicodeDecodeError, stripe.SignatureVerificationError) as exc:
            logger.warning("stripe_client: webhook_signature_invalid reason=%s", exc)
            raise WebhookSignatureError("Invalid Stripe webhook signature.") from exc

        try:
            event = json.loads(body)
        except ValueError as exc:
            raise WebhookPayloadError("Stripe webhook payload is not valid JSON.") from exc
        if not isinstance(event, dict):
            raise WebhookPayloadError("Stripe webhook payload must be an object.")
        return parse_stripe_event(event)


def parse_stripe_event(event: dict[str, Any]) -> PaymentEvent:
    event_id = str(event.get("id", ""))
    event_type = str(event.get("type", ""))
    data_object = (event.get("data") or {}).get("object") or {}

    if event_type == CHECKOUT_SESSION_COMPLETED:
        metadata = data_object.get("metadata") or {}
        customer_details = data_object.get("customer_details") or {}
        return CheckoutSessionCompletedEvent(
            event_id=event_id,
            event_type=event_type,
            session_id=str(data_object.get("id")),
            payment_intent_id=_optional_id(data_object.get("payment_intent")),
            tour_id=metadata.get("tourId"),
            tour_name=metadata.get("tourName"),
            customer_email=customer_details.get("email") or data_object.get("customer_email"),
            amount_total=_optional_int(data_object.get("amount_total")),
            currency=data_object.get("currency"),
            payment_status=data_object.get("payment_status"),
        )

    if event_type == PAYMENT_INTENT_SUCCEEDED:
        return PaymentIntentSucceededEvent(
            event_id=event_id,
            event_type=event_type,
            payment_intent_id=str(data_object.get("id")),
            amount_received=_optional_int(data_object.get("amount_received")),
            currency=data_object.get("currency"),
            tour_id=(data_object.get("metadata") or {}).get("tourId"),
            receipt_email=data_object.get("receipt_email"),
        )

    if event_type == PAYMENT_INTENT_FAILED:
        last_error = data_object.get("last_payment_error") or {}
        return PaymentIntentFailedEvent(
            event_id=event_id,
            event_type=event_type,
            payment_intent_id=str(data_object.get("id")),
            failure_message=last_error.get("message"),
            receipt_email=data_object.get("receipt_email"),
        )

    if event_type == INVOICE_PAYMENT_SUCCEEDED:
        return InvoicePaymentSucceededEvent(
            event_id=event_id,
            event_type=event_type,
            invoice_id=str(data_object.get("id")),
        )

    if event_type in SUBSCRIPTION_EVENT_TYPES:
        return SubscriptionEvent(
            event_id=event_id,
            event_type=event_type,
            subscription_id=str(data_object.get("id")),
            status=data_object.get("status"),
        )

    return UnrecognizedEvent(event_id=event_id, event_type=event_type)


def _optional_id(value: Any) -> str | None:
    # payment_intent vem como id ou como objeto expandido.
    if isinstance(value, dict):
        value = value.get("id")
    if not value:
        return None
    return str(value)


def _optional_int(value: Any) -> int | None:
    if value is None:
        return None
    return int(value)
