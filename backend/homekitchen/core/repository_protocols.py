"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Notification delivery accessed only through NotificationSink
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - OrderLike / SubscriptionRequestLike let pure formatters read ORM rows
      without importing the ORM
    - Async in NotificationSink: implementations do IO, but the core functions that
      build intents are never async themselves
"""

from datetime import datetime
from typing import Protocol, TYPE_CHECKING
from uuid import UUID

if TYPE_CHECKING:
    from homekitchen.core.format_notifications import NotificationIntent


class OrderLike(Protocol):
    """Structural contract for Order rows read by formatters."""
    id: UUID
    user_id: UUID
    kitchen_id: UUID
    total: float
    status: str
    notes: str | None


class SubscriptionRequestLike(Protocol):
    """Structural contract for SubscriptionRequest rows read by formatters."""
    id: UUID
    user_id: UUID
    kitchen_id: UUID
    plan_id: UUID
    status: str
    monthly_price: float
    confirmed_at: datetime | None
    cancelled_at: datetime | None
    cancellation_reason: str | None


class NotificationSink(Protocol):
    """Contract for notification persistence/delivery — implemented by shell."""
    async def emit(self, intent: "NotificationIntent") -> None: ...
