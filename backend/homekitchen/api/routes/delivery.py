"""Delivery Routes — delivery fee quote for a kitchen and the calling buyer.

Invariants:
    - An unavailable quote (missing coordinates, beyond 7 km) is a 200 with available=false
    - Out-of-range coordinates are a 400 INVALID_COORDINATE from the core
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from homekitchen.api.dependencies import get_buyer_id, get_delivery_quotes
from homekitchen.core.domain_types import UserId
from homekitchen.schemas.delivery import DeliveryQuoteQuery, DeliveryQuoteResponse
from homekitchen.services.delivery_quotes import DeliveryQuoteService

router = APIRouter(prefix="/api/v1/delivery", tags=["delivery"])


@router.get("/quote", response_model=DeliveryQuoteResponse)
async def quote_delivery(
    params: Annotated[DeliveryQuoteQuery, Query()],
    buyer_id: UserId = Depends(get_buyer_id),
    quotes: DeliveryQuoteService = Depends(get_delivery_quotes),
):
    quote = await quotes.quote(
        params.kitchen_id, buyer_id,
        address_id=params.address_id,
        latitude=params.lat,
        longitude=params.lng,
    )
    return DeliveryQuoteResponse.from_quote(quote)
