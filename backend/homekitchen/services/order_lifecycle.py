"""Order Lifecycle Manager — buyer cancellation and kitchen-driven status advances.

Invariants:
    - Lookups are scoped: cancel by (order id, buyer id), advance by (order id, kitchen id);
      a miss is NotFound whether or not the order exists for someone else
    - Every status write is a conditional UPDATE on the status read before it;
      zero affected rows means another writer won and the caller gets the error
      matching the winner's state
    - Status write and its bookkeeping (notes append, kitchen revenue) commit together
    - Notifications are dispatched only after commit; their failure never reaches the caller

Design Decisions:
    - Pure rules live in core/enforce_order_lifecycle.py; this class only sequences IO
      around them (read -> check -> conditional write -> commit -> dispatch)
    - synchronize_session=False + refresh after commit: the in-memory row is never
      updated optimistically by an UPDATE that may have matched nothing
"""

import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from homekitchen.core.domain_types import OrderStatus
from homekitchen.core.enforce_order_lifecycle import (
    append_cancellation_note,
    check_advance,
    check_cancellable,
    check_cancellation_reason,
    kitchen_credit_for_order,
)
from homekitchen.core.errors import (
    ConcurrencyError, ErrorContext, InvalidTransitionError,
    NotCancellableError, NotFoundError,
)
from homekitchen.core.format_notifications import (
    order_cancelled_by_buyer, order_status_changed, payment_received,
)
from homekitchen.infrastructure.notification_dispatch import NotificationDispatcher
from homekitchen.models.kitchen import Kitchen
from homekitchen.models.order import Order

logger = logging.getLogger(__name__)


class OrderLifecycleManager:
    """Enforces the order state machine against the database."""

    def __init__(
        self,
        db: AsyncSession,
        notifier: NotificationDispatcher,
        platform_fee_per_order: float = 0.0,
    ):
        self.db = db
        self.notifier = notifier
        self.platform_fee_per_order = platform_fee_per_order

    async def cancel(
        self, order_id: UUID, actor_buyer_id: UUID, reason: str | None,
    ) -> Order:
        """Buyer cancels a PENDING or CONFIRMED order, with a reason."""
        cleaned_reason = check_cancellation_reason(reason)
        order = await self._get_order(
            Order.id == order_id, Order.user_id == actor_buyer_id, order_id=order_id,
        )
        context = ErrorContext(order_id=str(order.id), kitchen_id=str(order.kitchen_id))
        current = OrderStatus(order.status)
        check_cancellable(current, context)

        won = await self._write_status(
            order.id, current, OrderStatus.CANCELLED,
            notes=append_cancellation_note(order.notes, cleaned_reason),
        )
        if not won:
            latest = await self._latest_status(order.id)
            raise NotCancellableError(latest, context)

        await self.db.commit()
        await self.db.refresh(order)
        logger.info(
            f"Order cancelled by buyer (was {current.value})",
            extra={"order_id": order.id, "kitchen_id": order.kitchen_id},
        )

        self.notifier.dispatch(order_cancelled_by_buyer(order, cleaned_reason))
        return order

    async def advance(
        self, order_id: UUID, acting_kitchen_id: UUID, target_status: OrderStatus,
    ) -> Order:
        """Kitchen moves an order one step forward along the lifecycle."""
        order = await self._get_order(
            Order.id == order_id, Order.kitchen_id == acting_kitchen_id,
            order_id=order_id,
        )
        context = ErrorContext(order_id=str(order.id), kitchen_id=str(order.kitchen_id))
        current = OrderStatus(order.status)
        check_advance(current, target_status, context)

        won = await self._write_status(order.id, current, target_status)
        if not won:
            latest = await self._latest_status(order.id)
            raise InvalidTransitionError(latest, target_status.value, context)

        credit = None
        if target_status == OrderStatus.COMPLETED:
            credit = kitchen_credit_for_order(order.total, self.platform_fee_per_order)
            await self.db.execute(
                update(Kitchen)
                .where(Kitchen.id == order.kitchen_id)
                .values(
                    total_revenue=Kitchen.total_revenue + credit,
                    total_orders=Kitchen.total_orders + 1,
                )
                .execution_options(synchronize_session=False),
            )

        await self.db.commit()
        await self.db.refresh(order)
        logger.info(
            f"Order advanced {current.value} -> {target_status.value}",
            extra={"order_id": order.id, "kitchen_id": order.kitchen_id},
        )

        intents = order_status_changed(order, target_status)
        if credit is not None:
            intents.append(payment_received(order, credit))
        self.notifier.dispatch_all(intents)
        return order

    # ─── Persistence helpers ─────────────────────────────────────

    async def _get_order(self, *criteria, order_id: UUID) -> Order:
        result = await self.db.execute(select(Order).where(*criteria))
        order = result.scalar_one_or_none()
        if not order:
            raise NotFoundError("Order", str(order_id))
        return order

    async def _write_status(
        self, order_id: UUID, expected: OrderStatus, target: OrderStatus, **values,
    ) -> bool:
        """Conditional update; True only if the row still had `expected` status."""
        result = await self.db.execute(
            update(Order)
            .where(Order.id == order_id, Order.status == expected.value)
            .values(
                status=target.value,
                updated_at=datetime.now(timezone.utc),
                **values,
            )
            .execution_options(synchronize_session=False),
        )
        return result.rowcount == 1

    async def _latest_status(self, order_id: UUID) -> str:
        await self.db.rollback()
        result = await self.db.execute(
            select(Order.status).where(Order.id == order_id),
        )
        status = result.scalar_one_or_none()
        if status is None:
            raise ConcurrencyError(
                f"Order {order_id} disappeared during update",
                ErrorContext(order_id=str(order_id)),
            )
        logger.warning(
            f"Lost status race, order is now {status}",
            extra={"order_id": order_id},
        )
        return status
