"""Order Schemas — strict request bodies and public responses for order lifecycle endpoints.

Invariants:
    - Request models forbid unknown fields (extra="forbid")
    - OrderCancelRequest.reason may be blank at the schema level: blankness is a
      lifecycle rule (ReasonRequired), not a shape error
    - OrderStatusUpdate.status must be an OrderStatus value
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from homekitchen.core.domain_types import OrderStatus


class OrderCancelRequest(BaseModel):
    """Buyer cancellation — reason is required by the lifecycle, checked after parsing."""
    model_config = ConfigDict(extra="forbid")

    reason: str | None = Field(None, max_length=1000)


class OrderStatusUpdate(BaseModel):
    """Kitchen status change — target status of the next lifecycle step."""
    model_config = ConfigDict(extra="forbid")

    status: OrderStatus


class OrderResponse(BaseModel):
    """Order response — public-facing order state after a transition."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    kitchen_id: UUID
    total: float
    status: OrderStatus
    notes: str | None = None
    created_at: datetime
    updated_at: datetime | None = None
