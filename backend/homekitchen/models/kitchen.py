"""Kitchen ORM — a seller's home kitchen with its location and revenue aggregates.

Invariants:
    - seller_id identifies the owning user; exactly one kitchen per seller
    - latitude/longitude are nullable until the seller sets a location
    - total_revenue/total_orders only grow, and only when an order completes

Design Decisions:
    - Coordinates stored on the kitchen row: the delivery quote needs no join
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Integer, Float, Boolean, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from homekitchen.db.base import Base


class Kitchen(Base):
    """Kitchen aggregate — owns orders, plans and subscription requests."""
    __tablename__ = "kitchens"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    seller_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, unique=True,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    is_open: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    total_revenue: Mapped[float] = mapped_column(
        Float, nullable=False, default=0.0,
    )
    total_orders: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
