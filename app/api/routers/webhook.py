from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Header, HTTPException, Request

from app.api.deps import get_process_payment_webhook_use_case
from app.api.schemas.webhook import PaymentWebhookResponse
from app.application.dto.webhook import PaymentWebhookInput
from app.application.use_cases.process_payment_webhook import ProcessPaymentWebhookUseCase
from app.domain.exceptions import BookingPendingError, DomainError, WebhookPayloadError, WebhookSignatureError


logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/webhook", response_model=PaymentWebhookResponse)
async def payment_webhook(
    request: Request,
    stripe_signature: str | None = Header(default=None, alias="Stripe-Signature"),
    use_case: ProcessPaymentWebhookUseCase = Depends(get_process_payment_webhook_use_case),
):
    payload = await request.body()
    try:
        use_case.execute(
            PaymentWebhookInput(
                signature=stripe_signature or "",
                payload=payload,
            )
        )
    except WebhookSignatureError as exc:
        raise HTTPException(status_code=400, detail="Webhook signature verification failed") from exc
    except WebhookPayloadError as exc:
        raise HTTPException(status_code=400, detail="Invalid webhook payload") from exc
    except BookingPendingError as exc:
        raise HTTPException(status_code=500, detail="Webhook processing failed") from exc
    except DomainError as exc:
        logger.exception("payment_webhook: processing_failed")
        raise HTTPException(status_code=500, detail="Webhook processing failed") from exc

    return PaymentWebhookResponse(received=True)
