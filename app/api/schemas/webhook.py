from __future__ import annotations

from pydantic import BaseModel


class PaymentWebhookResponse(BaseModel):
    received: bool = True
