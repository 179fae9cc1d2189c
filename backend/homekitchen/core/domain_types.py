"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - OrderId, KitchenId, UserId, PlanId, SubscriptionRequestId wrap UUIDs
    - All valid states encoded as Enums — no raw string matching
    - TERMINAL_SUBSCRIPTION_STATUSES is the only source of "request already decided";
      order transitions live in core/enforce_order_lifecycle.py

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: stored as-is in String columns and serialized to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

OrderId = NewType("OrderId", UUID)
KitchenId = NewType("KitchenId", UUID)
UserId = NewType("UserId", UUID)
PlanId = NewType("PlanId", UUID)
SubscriptionRequestId = NewType("SubscriptionRequestId", UUID)


# ─── Value Types ─────────────────────────────────────────────────

Kilometers = NewType("Kilometers", float)
Taka = NewType("Taka", int)             # whole currency units


# ─── Enums ───────────────────────────────────────────────────────

class OrderStatus(str, Enum):
    """Order lifecycle states — maps to orders.status column."""
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    PREPARING = "PREPARING"
    DELIVERING = "DELIVERING"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class SubscriptionStatus(str, Enum):
    """Subscription request states — maps to subscription_requests.status column."""
    PENDING = "PENDING"
    ACTIVE = "ACTIVE"
    CANCELLED = "CANCELLED"


class NotificationKind(str, Enum):
    """Notification severity shown by the client feed."""
    INFO = "INFO"
    SUCCESS = "SUCCESS"
    WARNING = "WARNING"
    ERROR = "ERROR"


class QuoteUnavailableReason(str, Enum):
    """Why a delivery quote carries no fee."""
    MISSING_COORDINATES = "MISSING_COORDINATES"
    OUT_OF_RANGE = "OUT_OF_RANGE"


TERMINAL_SUBSCRIPTION_STATUSES = frozenset({
    SubscriptionStatus.ACTIVE, SubscriptionStatus.CANCELLED,
})
