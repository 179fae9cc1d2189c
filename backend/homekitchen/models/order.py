"""Order ORM — a buyer's order from one kitchen.

Invariants:
    - status is an OrderStatus value; created PENDING by checkout
    - total equals sum(price * quantity) of items at creation and is never rewritten
    - Orders are never deleted: cancellation is a status change
    - status only changes through OrderLifecycleManager's conditional updates

Design Decisions:
    - status stored as String(20) holding the enum value: readable in SQL, no DB enum migrations
    - items loaded with selectin: order responses always include line items
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Float, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from homekitchen.core.domain_types import OrderStatus
from homekitchen.db.base import Base


class Order(Base):
    """Order entity — lifecycle PENDING -> ... -> COMPLETED | CANCELLED."""
    __tablename__ = "orders"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, index=True,
    )
    kitchen_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("kitchens.id"), nullable=False, index=True,
    )
    total: Mapped[float] = mapped_column(Float, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=OrderStatus.PENDING.value,
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )

    items: Mapped[list["OrderItem"]] = relationship(
        "OrderItem", back_populates="order",
        cascade="all, delete-orphan", lazy="selectin",
    )
