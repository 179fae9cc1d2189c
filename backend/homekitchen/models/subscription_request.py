"""SubscriptionRequest ORM — a buyer's ask to join a kitchen's plan.

Invariants:
    - Created PENDING by the subscribe flow; changed exactly once (ACTIVE or CANCELLED)
    - monthly_price is locked at request time
    - confirmed_at set on approval, cancelled_at + cancellation_reason on rejection

Design Decisions:
    - kitchen_id denormalized from the plan: ownership check is a single-row lookup
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Float, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from homekitchen.core.domain_types import SubscriptionStatus
from homekitchen.db.base import Base


class SubscriptionRequest(Base):
    """Subscription request — PENDING -> ACTIVE | CANCELLED."""
    __tablename__ = "subscription_requests"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, index=True,
    )
    kitchen_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("kitchens.id"), nullable=False, index=True,
    )
    plan_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("subscription_plans.id"), nullable=False,
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=SubscriptionStatus.PENDING.value,
    )
    monthly_price: Mapped[float] = mapped_column(Float, nullable=False)
    delivery_time_slot: Mapped[str | None] = mapped_column(
        String(20), nullable=True,
    )
    delivery_address: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    confirmed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    cancelled_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    cancellation_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
