"""SubscriptionPlan ORM — a kitchen's recurring meal plan and its aggregates.

Invariants:
    - subscriber_count and monthly_revenue reflect exactly the ACTIVE requests of the plan
    - Aggregates change only through SQL-side increments issued by the approval workflow
    - price is the current listed price; approved subscribers keep their locked price

Design Decisions:
    - Denormalized aggregates: dashboards read them without counting requests
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, Float, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from homekitchen.db.base import Base


class SubscriptionPlan(Base):
    """Recurring meal plan published by a kitchen."""
    __tablename__ = "subscription_plans"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    kitchen_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("kitchens.id"), nullable=False, index=True,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    subscriber_count: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
    monthly_revenue: Mapped[float] = mapped_column(
        Float, nullable=False, default=0.0,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
