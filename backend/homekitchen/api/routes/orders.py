"""Buyer Order Routes — cancellation.

Invariants:
    - Body validated by OrderCancelRequest before the service runs
    - Errors raised by the service reach the global HomeKitchenError handler unchanged
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from homekitchen.api.dependencies import get_buyer_id, get_order_lifecycle
from homekitchen.core.domain_types import UserId
from homekitchen.schemas.order import OrderCancelRequest, OrderResponse
from homekitchen.services.order_lifecycle import OrderLifecycleManager

router = APIRouter(prefix="/api/v1/orders", tags=["orders"])


@router.post("/{order_id}/cancel", response_model=OrderResponse)
async def cancel_order(
    order_id: UUID,
    body: OrderCancelRequest,
    buyer_id: UserId = Depends(get_buyer_id),
    lifecycle: OrderLifecycleManager = Depends(get_order_lifecycle),
):
    """Cancel a PENDING or CONFIRMED order owned by the caller."""
    order = await lifecycle.cancel(order_id, buyer_id, body.reason)
    return OrderResponse.model_validate(order)
