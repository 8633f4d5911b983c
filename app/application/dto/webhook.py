from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PaymentWebhookInput:
    signature: str
    payload: bytes


@dataclass(frozen=True)
class PaymentWebhookOutput:
    event_id: str
    event_type: str
    handled: bool
