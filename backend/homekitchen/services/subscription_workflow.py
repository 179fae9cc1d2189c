"""Subscription Request Workflow — kitchen approval or rejection of PENDING requests.

Invariants:
    - Only the owning kitchen may act: lookup by (request id, kitchen id), miss is NotFound
    - A request changes status exactly once; a second approve/reject is AlreadyProcessed
    - approve increments plan subscriber_count by 1 and monthly_revenue by the request's
      locked monthly_price in the SAME transaction as the status write
    - reject never touches plan aggregates
    - Buyer notification dispatched after commit; failure is logged only

Design Decisions:
    - Conditional UPDATE on status = PENDING guards the aggregate: two concurrent
      approvals cannot both see rowcount 1, so the plan is incremented once
    - SQL-side increments (col = col + :delta): no read-modify-write on the plan row
"""

import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from homekitchen.core.domain_types import SubscriptionStatus
from homekitchen.core.enforce_subscription import check_pending, resolve_rejection_reason
from homekitchen.core.errors import (
    AlreadyProcessedError, ConcurrencyError, ErrorContext, NotFoundError,
)
from homekitchen.core.format_notifications import (
    subscription_approved, subscription_rejected,
)
from homekitchen.infrastructure.notification_dispatch import NotificationDispatcher
from homekitchen.models.subscription_plan import SubscriptionPlan
from homekitchen.models.subscription_request import SubscriptionRequest

logger = logging.getLogger(__name__)


class SubscriptionRequestWorkflow:
    """Approve/reject protocol for subscription requests."""

    def __init__(self, db: AsyncSession, notifier: NotificationDispatcher):
        self.db = db
        self.notifier = notifier

    async def approve(
        self, request_id: UUID, acting_kitchen_id: UUID,
    ) -> SubscriptionRequest:
        request = await self._get_owned(request_id, acting_kitchen_id)
        context = ErrorContext(
            request_id=str(request.id), kitchen_id=str(request.kitchen_id),
        )
        check_pending(SubscriptionStatus(request.status), context)
        plan_name = await self._plan_name(request.plan_id)

        won = await self._write_status(
            request.id, SubscriptionStatus.ACTIVE,
            confirmed_at=datetime.now(timezone.utc),
        )
        if not won:
            raise AlreadyProcessedError(await self._latest_status(request.id), context)

        await self.db.execute(
            update(SubscriptionPlan)
            .where(SubscriptionPlan.id == request.plan_id)
            .values(
                subscriber_count=SubscriptionPlan.subscriber_count + 1,
                monthly_revenue=SubscriptionPlan.monthly_revenue + request.monthly_price,
            )
            .execution_options(synchronize_session=False),
        )
        await self.db.commit()
        await self.db.refresh(request)
        logger.info(
            "Subscription request approved",
            extra={"request_id": request.id, "kitchen_id": request.kitchen_id},
        )

        self.notifier.dispatch(subscription_approved(request, plan_name))
        return request

    async def reject(
        self, request_id: UUID, acting_kitchen_id: UUID, reason: str | None = None,
    ) -> SubscriptionRequest:
        request = await self._get_owned(request_id, acting_kitchen_id)
        context = ErrorContext(
            request_id=str(request.id), kitchen_id=str(request.kitchen_id),
        )
        check_pending(SubscriptionStatus(request.status), context)
        plan_name = await self._plan_name(request.plan_id)

        won = await self._write_status(
            request.id, SubscriptionStatus.CANCELLED,
            cancelled_at=datetime.now(timezone.utc),
            cancellation_reason=resolve_rejection_reason(reason),
        )
        if not won:
            raise AlreadyProcessedError(await self._latest_status(request.id), context)

        await self.db.commit()
        await self.db.refresh(request)
        logger.info(
            "Subscription request rejected",
            extra={"request_id": request.id, "kitchen_id": request.kitchen_id},
        )

        supplied = (reason or "").strip() or None
        self.notifier.dispatch(subscription_rejected(request, plan_name, supplied))
        return request

    # ─── Persistence helpers ─────────────────────────────────────

    async def _get_owned(
        self, request_id: UUID, kitchen_id: UUID,
    ) -> SubscriptionRequest:
        result = await self.db.execute(
            select(SubscriptionRequest).where(
                SubscriptionRequest.id == request_id,
                SubscriptionRequest.kitchen_id == kitchen_id,
            ),
        )
        request = result.scalar_one_or_none()
        if not request:
            raise NotFoundError("Subscription request", str(request_id))
        return request

    async def _plan_name(self, plan_id: UUID) -> str:
        result = await self.db.execute(
            select(SubscriptionPlan.name).where(SubscriptionPlan.id == plan_id),
        )
        return result.scalar_one()

    async def _write_status(
        self, request_id: UUID, target: SubscriptionStatus, **values,
    ) -> bool:
        result = await self.db.execute(
            update(SubscriptionRequest)
            .where(
                SubscriptionRequest.id == request_id,
                SubscriptionRequest.status == SubscriptionStatus.PENDING.value,
            )
            .values(status=target.value, **values)
            .execution_options(synchronize_session=False),
        )
        return result.rowcount == 1

    async def _latest_status(self, request_id: UUID) -> str:
        await self.db.rollback()
        result = await self.db.execute(
            select(SubscriptionRequest.status).where(
                SubscriptionRequest.id == request_id,
            ),
        )
        status = result.scalar_one_or_none()
        if status is None:
            raise ConcurrencyError(
                f"Subscription request {request_id} disappeared during update",
                ErrorContext(request_id=str(request_id)),
            )
        return status
