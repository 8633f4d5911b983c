from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class CreateCheckoutSessionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    tour_id: str | None = Field(default=None, alias="tourId")
    tour_name: str | None = Field(default=None, alias="tourName")
    price: Decimal | None = None
    currency: str | None = None


class CreateCheckoutSessionResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(..., alias="sessionId")
    url: str
