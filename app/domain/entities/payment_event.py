from __future__ import annotations

from dataclasses import dataclass
from typing import Union


CHECKOUT_SESSION_COMPLETED = "checkout.session.completed"
PAYMENT_INTENT_SUCCEEDED = "payment_intent.succeeded"
PAYMENT_INTENT_FAILED = "payment_intent.payment_failed"
INVOICE_PAYMENT_SUCCEEDED = "invoice.payment_succeeded"
SUBSCRIPTION_EVENT_TYPES = frozenset(
    {
        "customer.subscription.created",
        "customer.subscription.updated",
        "customer.subscription.deleted",
    }
)


@dataclass(frozen=True)
class CheckoutSessionCompletedEvent:
    event_id: str
    event_type: str
    session_id: str
    payment_intent_id: str | None
    tour_id: str | None
    tour_name: str | None
    customer_email: str | None
    amount_total: int | None
    currency: str | None
    payment_status: str | None


@dataclass(frozen=True)
class PaymentIntentSucceededEvent:
    event_id: str
    event_type: str
    payment_intent_id: str
    amount_received: int | None
    currency: str | None
    tour_id: str | None
    receipt_email: str | None


@dataclass(frozen=True)
class PaymentIntentFailedEvent:
    event_id: str
    event_type: str
    payment_intent_id: str
    failure_message: str | None
    receipt_email: str | None


@dataclass(frozen=True)
class InvoicePaymentSucceededEvent:
    event_id: str
    event_type: str
    invoice_id: str


@dataclass(frozen=True)
class SubscriptionEvent:
    event_id: str
    event_type: str
    subscription_id: str
    status: str | None


@dataclass(frozen=True)
class UnrecognizedEvent:
    event_id: str
    event_type: str


PaymentEvent = Union[
    CheckoutSessionCompletedEvent,
    PaymentIntentSucceededEvent,
    PaymentIntentFailedEvent,
    InvoicePaymentSucceededEvent,
    SubscriptionEvent,
    UnrecognizedEvent,
]
