"""Subscription Request Enforcement — pure guards for the approve/reject protocol.

Invariants:
    - All functions are PURE
    - Only PENDING requests may be approved or rejected; ACTIVE and CANCELLED are terminal
    - A rejection always records a reason (caller-supplied or the default)
"""

from homekitchen.core.domain_types import (
    SubscriptionStatus, TERMINAL_SUBSCRIPTION_STATUSES,
)
from homekitchen.core.errors import AlreadyProcessedError, ErrorContext

DEFAULT_REJECTION_REASON = "Rejected by chef"


def check_pending(
    current: SubscriptionStatus, context: ErrorContext | None = None,
) -> None:
    if current in TERMINAL_SUBSCRIPTION_STATUSES:
        raise AlreadyProcessedError(current.value, context)


def resolve_rejection_reason(reason: str | None) -> str:
    cleaned = (reason or "").strip()
    return cleaned or DEFAULT_REJECTION_REASON
