"""Subscription Schemas — strict bodies and responses for approve/reject endpoints.

Invariants:
    - Request models forbid unknown fields
    - Rejection reason is optional; whitespace-only is treated as absent
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from homekitchen.core.domain_types import SubscriptionStatus


class SubscriptionRejectRequest(BaseModel):
    """Kitchen rejection — optional reason shown to the buyer."""
    model_config = ConfigDict(extra="forbid")

    reason: str | None = Field(None, max_length=500)

    @field_validator("reason")
    @classmethod
    def blank_reason_is_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        return v or None


class SubscriptionRequestResponse(BaseModel):
    """Subscription request state after approval or rejection."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    kitchen_id: UUID
    plan_id: UUID
    status: SubscriptionStatus
    monthly_price: float
    confirmed_at: datetime | None = None
    cancelled_at: datetime | None = None
    cancellation_reason: str | None = None
