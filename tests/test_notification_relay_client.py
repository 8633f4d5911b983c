from __future__ import annotations

import json

import httpx
import pytest

from app.domain.exceptions import NotificationError
from app.infrastructure.clients.notification_relay_client import HttpNotifier, LogNotifier


def test_http_notifier_posts_payload_with_idempotency_key():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(202, json={"queued": True})

    notifier = HttpNotifier(
        relay_url="https://relay.example.com/notify",
        timeout_seconds=5,
        api_key="relay-key",
        transport=httpx.MockTransport(handler),
    )

    notifier.notify(
        channel="booking_confirmation",
        payload={
            "to": "traveller@example.com",
            "subject": "Booking Confirmation - Baobab Bound Adventures",
            "idempotency_key": "booking_confirmation:cs_test_123",
            "data": {"tour_id": "7-day-baobab-safari"},
        },
    )

    assert len(seen) == 1
    request = seen[0]
    assert str(request.url) == "https://relay.example.com/notify"
    assert request.headers["Idempotency-Key"] == "booking_confirmation:cs_test_123"
    assert request.headers["Authorization"] == "Bearer relay-key"
    body = json.loads(request.content)
    assert body["channel"] == "booking_confirmation"
    assert body["to"] == "traveller@example.com"


def test_http_notifier_raises_on_error_status():
    notifier = HttpNotifier(
        relay_url="https://relay.example.com/notify",
        timeout_seconds=5,
        transport=httpx.MockTransport(lambda request: httpx.Response(503)),
    )

    with pytest.raises(NotificationError):
        notifier.notify(channel="payment_failure", payload={"to": "a@b.co"})


def test_http_notifier_raises_on_timeout():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    notifier = HttpNotifier(
        relay_url="https://relay.example.com/notify",
        timeout_seconds=0.1,
        transport=httpx.MockTransport(handler),
    )

    with pytest.raises(NotificationError):
        notifier.notify(channel="payment_confirmation", payload={"to": "a@b.co"})


def test_log_notifier_does_not_raise():
    LogNotifier().notify(channel="admin_booking_notification", payload={"to": "admin@example.com"})
