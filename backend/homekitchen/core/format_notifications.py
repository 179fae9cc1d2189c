"""Notification Formatting — pure builders for every notification the core emits.

Invariants:
    - All functions are PURE: they describe a notification, they never send it
    - Every intent targets exactly one of user_id / kitchen_id
    - Buyer-facing and kitchen-facing wording differ; kind and title do not

Design Decisions:
    - One builder per lifecycle event: the caller never assembles titles or messages inline
    - Status wording kept in lookup tables next to each other so kitchen and buyer texts
      stay in sync when a status is added
"""

from dataclasses import dataclass
from uuid import UUID

from homekitchen.core.domain_types import NotificationKind, OrderStatus
from homekitchen.core.enforce_order_lifecycle import format_order_number
from homekitchen.core.repository_protocols import OrderLike, SubscriptionRequestLike


@dataclass(frozen=True)
class NotificationIntent:
    """A notification to be persisted for a buyer (user_id) or a kitchen (kitchen_id)."""
    kind: NotificationKind
    title: str
    message: str
    user_id: UUID | None = None
    kitchen_id: UUID | None = None
    action_url: str | None = None

    def __post_init__(self):
        if (self.user_id is None) == (self.kitchen_id is None):
            raise ValueError("NotificationIntent needs exactly one of user_id or kitchen_id")

    @property
    def target(self) -> str:
        if self.user_id is not None:
            return f"user:{self.user_id}"
        return f"kitchen:{self.kitchen_id}"


_STATUS_KIND = {
    OrderStatus.CONFIRMED: NotificationKind.SUCCESS,
    OrderStatus.PREPARING: NotificationKind.INFO,
    OrderStatus.DELIVERING: NotificationKind.INFO,
    OrderStatus.COMPLETED: NotificationKind.SUCCESS,
    OrderStatus.CANCELLED: NotificationKind.WARNING,
}

_STATUS_TITLE = {
    OrderStatus.CONFIRMED: "Order Accepted",
    OrderStatus.PREPARING: "Order Cooking",
    OrderStatus.DELIVERING: "Order Ready",
    OrderStatus.COMPLETED: "Order Delivered",
    OrderStatus.CANCELLED: "Order Cancelled",
}

_KITCHEN_PHRASE = {
    OrderStatus.CONFIRMED: "has been accepted.",
    OrderStatus.PREPARING: "is now being prepared.",
    OrderStatus.DELIVERING: "is ready for pickup/delivery.",
    OrderStatus.COMPLETED: "has been successfully delivered.",
}

_BUYER_PHRASE = {
    OrderStatus.CONFIRMED: "has been accepted and will be prepared soon.",
    OrderStatus.PREPARING: "is now being prepared.",
    OrderStatus.DELIVERING: "is ready for pickup/delivery.",
    OrderStatus.COMPLETED: "has been successfully delivered. Thank you!",
}


def order_cancelled_by_buyer(order: OrderLike, reason: str) -> NotificationIntent:
    """Kitchen-facing notice that the buyer cancelled."""
    return NotificationIntent(
        kitchen_id=order.kitchen_id,
        kind=NotificationKind.WARNING,
        title=_STATUS_TITLE[OrderStatus.CANCELLED],
        message=(
            f"Order {format_order_number(order.id)} has been cancelled "
            f"by the customer. Reason: {reason}"
        ),
    )


def order_status_changed(
    order: OrderLike, status: OrderStatus,
) -> list[NotificationIntent]:
    """Kitchen notice + buyer notice for a kitchen-driven status change."""
    number = format_order_number(order.id)
    return [
        NotificationIntent(
            kitchen_id=order.kitchen_id,
            kind=_STATUS_KIND[status],
            title=_STATUS_TITLE[status],
            message=f"Order {number} {_KITCHEN_PHRASE[status]}",
        ),
        NotificationIntent(
            user_id=order.user_id,
            kind=_STATUS_KIND[status],
            title=_STATUS_TITLE[status],
            message=f"Your order {number} {_BUYER_PHRASE[status]}",
            action_url=f"/orders/{order.id}/track",
        ),
    ]


def payment_received(order: OrderLike, amount: float) -> NotificationIntent:
    return NotificationIntent(
        kitchen_id=order.kitchen_id,
        kind=NotificationKind.SUCCESS,
        title="Payment Received",
        message=f"৳{amount:,.2f} credited from order {format_order_number(order.id)}",
    )


def subscription_approved(
    request: SubscriptionRequestLike, plan_name: str,
) -> NotificationIntent:
    return NotificationIntent(
        user_id=request.user_id,
        kind=NotificationKind.SUCCESS,
        title="Subscription Approved",
        message=(
            f'Your subscription to "{plan_name}" has been approved and is now active!'
        ),
        action_url="/profile/my-subscription",
    )


def subscription_rejected(
    request: SubscriptionRequestLike, plan_name: str, reason: str | None,
) -> NotificationIntent:
    """Buyer notice; the reason is only quoted when the kitchen supplied one."""
    message = f'Your subscription request for "{plan_name}" has been rejected.'
    if reason:
        message = f"{message} Reason: {reason}"
    return NotificationIntent(
        user_id=request.user_id,
        kind=NotificationKind.WARNING,
        title="Subscription Request Rejected",
        message=message,
        action_url="/explore/subscriptions",
    )
