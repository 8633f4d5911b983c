from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response

from app.api.deps import get_create_tour_checkout_session_use_case
from app.api.schemas.checkout import CreateCheckoutSessionRequest, CreateCheckoutSessionResponse
from app.application.dto.checkout import CreateCheckoutSessionInput
from app.application.use_cases.create_tour_checkout_session import CreateTourCheckoutSessionUseCase
from app.domain.exceptions import CheckoutInputError, PaymentProviderError, TourNotFoundError
from app.shared.config import get_settings


CHECKOUT_PATH = "/create-checkout-session"

router = APIRouter()


def checkout_cors_headers() -> dict[str, str]:
    settings = get_settings()
    return {
        "Access-Control-Allow-Origin": settings.cors_allow_origin,
        "Access-Control-Allow-Headers": "Content-Type",
        "Access-Control-Allow-Methods": "POST, OPTIONS",
    }


@router.options(CHECKOUT_PATH, include_in_schema=False)
def checkout_preflight() -> Response:
    return Response(status_code=200, headers=checkout_cors_headers())


@router.api_route(CHECKOUT_PATH, methods=["GET", "PUT", "PATCH", "DELETE"], include_in_schema=False)
def checkout_method_not_allowed():
    raise HTTPException(status_code=405, detail="Method not allowed", headers=checkout_cors_headers())


@router.post(CHECKOUT_PATH, response_model=CreateCheckoutSessionResponse)
def create_checkout_session(
    req: CreateCheckoutSessionRequest,
    response: Response,
    use_case: CreateTourCheckoutSessionUseCase = Depends(get_create_tour_checkout_session_use_case),
):
    headers = checkout_cors_headers()
    for name, value in headers.items():
        response.headers[name] = value

    settings = get_settings()
    if not settings.site_url:
        raise HTTPException(status_code=500, detail="SITE_URL is required.", headers=headers)

    try:
        output = use_case.execute(
            CreateCheckoutSessionInput(
                tour_id=req.tour_id,
                tour_name=req.tour_name,
                price=req.price,
                currency=req.currency,
                site_url=settings.site_url,
            )
        )
    except (CheckoutInputError, TourNotFoundError) as exc:
        raise HTTPException(status_code=400, detail=str(exc), headers=headers) from exc
    except PaymentProviderError as exc:
        raise HTTPException(
            status_code=500,
            detail={
                "error": "Failed to create checkout session",
                "message": "Payment provider is unavailable. Please try again later.",
            },
            headers=headers,
        ) from exc

    return CreateCheckoutSessionResponse(session_id=output.session_id, url=output.url)
