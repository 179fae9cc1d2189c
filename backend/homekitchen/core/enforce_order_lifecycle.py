"""Order Lifecycle Enforcement — pure validation of order status transitions.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Violations raise typed HomeKitchenError subclasses; success returns the checked value
    - Only PENDING and CONFIRMED accept cancellation
    - advance accepts exactly one successor per status — no same-state, no skipping,
      no CANCELLED target (cancellation has its own operation)
    - Terminal statuses (COMPLETED, CANCELLED) have no outgoing edges

Design Decisions:
    - Transition table as module-level constant: every legal edge visible in one place
    - Raise instead of returning error dicts: callers are request handlers whose error
      path is the global exception handler, not a JSON tool result
"""

from decimal import Decimal

from homekitchen.core.domain_types import OrderStatus
from homekitchen.core.errors import (
    ErrorContext, InvalidTransitionError, NotCancellableError, ReasonRequiredError,
)

# Kitchen-driven forward edges (one successor each)
ADVANCE_TRANSITIONS: dict[OrderStatus, OrderStatus] = {
    OrderStatus.PENDING: OrderStatus.CONFIRMED,
    OrderStatus.CONFIRMED: OrderStatus.PREPARING,
    OrderStatus.PREPARING: OrderStatus.DELIVERING,
    OrderStatus.DELIVERING: OrderStatus.COMPLETED,
}

ORDER_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.CONFIRMED, OrderStatus.CANCELLED}),
    OrderStatus.CONFIRMED: frozenset({OrderStatus.PREPARING, OrderStatus.CANCELLED}),
    OrderStatus.PREPARING: frozenset({OrderStatus.DELIVERING}),
    OrderStatus.DELIVERING: frozenset({OrderStatus.COMPLETED}),
    OrderStatus.COMPLETED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    return target in ORDER_TRANSITIONS[current]


def check_cancellation_reason(reason: str | None) -> str:
    """Return the stripped reason, or raise ReasonRequiredError if blank."""
    cleaned = (reason or "").strip()
    if not cleaned:
        raise ReasonRequiredError()
    return cleaned


def check_cancellable(
    current: OrderStatus, context: ErrorContext | None = None,
) -> None:
    if not can_transition(current, OrderStatus.CANCELLED):
        raise NotCancellableError(current.value, context)


def check_advance(
    current: OrderStatus, target: OrderStatus, context: ErrorContext | None = None,
) -> None:
    if ADVANCE_TRANSITIONS.get(current) != target:
        raise InvalidTransitionError(current.value, target.value, context)


def append_cancellation_note(notes: str | None, reason: str) -> str:
    """Append the buyer's reason to existing order notes."""
    note = f"Cancelled by buyer. Reason: {reason}"
    if notes and notes.strip():
        return f"{notes.rstrip()}\n{note}"
    return note


def format_order_number(order_id: object) -> str:
    """Short display number: last 6 hex chars of the id, upper-cased."""
    return f"#{str(order_id).replace('-', '')[-6:].upper()}"


def kitchen_credit_for_order(total: float, platform_fee: float) -> float:
    """Revenue credited to the kitchen when an order completes (never negative)."""
    credit = Decimal(repr(total)) - Decimal(repr(platform_fee))
    return float(max(Decimal(0), credit))
