"""Kitchen Routes — order status advances and subscription request decisions.

Invariants:
    - Every endpoint is scoped to the caller's kitchen (X-Kitchen-Id)
    - Routes never contain business logic: they parse, delegate, serialize
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from homekitchen.api.dependencies import (
    get_acting_kitchen_id, get_order_lifecycle, get_subscription_workflow,
)
from homekitchen.core.domain_types import KitchenId
from homekitchen.schemas.order import OrderResponse, OrderStatusUpdate
from homekitchen.schemas.subscription import (
    SubscriptionRejectRequest, SubscriptionRequestResponse,
)
from homekitchen.services.order_lifecycle import OrderLifecycleManager
from homekitchen.services.subscription_workflow import SubscriptionRequestWorkflow

router = APIRouter(prefix="/api/v1/kitchen", tags=["kitchen"])


@router.patch("/orders/{order_id}/status", response_model=OrderResponse)
async def advance_order(
    order_id: UUID,
    body: OrderStatusUpdate,
    kitchen_id: KitchenId = Depends(get_acting_kitchen_id),
    lifecycle: OrderLifecycleManager = Depends(get_order_lifecycle),
):
    """Move an order to its next status (CONFIRMED, PREPARING, DELIVERING, COMPLETED)."""
    order = await lifecycle.advance(order_id, kitchen_id, body.status)
    return OrderResponse.model_validate(order)


@router.patch(
    "/subscription-requests/{request_id}/approve",
    response_model=SubscriptionRequestResponse,
)
async def approve_subscription_request(
    request_id: UUID,
    kitchen_id: KitchenId = Depends(get_acting_kitchen_id),
    workflow: SubscriptionRequestWorkflow = Depends(get_subscription_workflow),
):
    request = await workflow.approve(request_id, kitchen_id)
    return SubscriptionRequestResponse.model_validate(request)


@router.patch(
    "/subscription-requests/{request_id}/reject",
    response_model=SubscriptionRequestResponse,
)
async def reject_subscription_request(
    request_id: UUID,
    body: SubscriptionRejectRequest | None = None,
    kitchen_id: KitchenId = Depends(get_acting_kitchen_id),
    workflow: SubscriptionRequestWorkflow = Depends(get_subscription_workflow),
):
    """Reject a PENDING request; body is optional."""
    reason = body.reason if body else None
    request = await workflow.reject(request_id, kitchen_id, reason)
    return SubscriptionRequestResponse.model_validate(request)
