"""Subscription Request Workflow — approve/reject against a real session.

Tests cover:
    - approve activates the request, sets confirmed_at, increments plan aggregates
      by exactly one subscriber and the request's locked monthly price
    - second approve (or approve after reject) is AlreadyProcessed, aggregates unchanged
    - reject records the reason (or the default) and never touches plan aggregates
    - buyer notified once per decision, reason quoted only when supplied
    - another kitchen's request is NotFound
    - concurrent approval: the loser fails and the plan is incremented once
"""

from uuid import uuid4

import pytest
from sqlalchemy import update

from homekitchen.core.domain_types import SubscriptionStatus
from homekitchen.core.errors import AlreadyProcessedError, NotFoundError
from homekitchen.models.subscription_request import SubscriptionRequest
from homekitchen.services.subscription_workflow import SubscriptionRequestWorkflow


@pytest.fixture
def workflow(test_db, notifier):
    return SubscriptionRequestWorkflow(test_db, notifier)


# ─── approve ─────────────────────────────────────────────────────

async def test_approve_activates_request(workflow, make_subscription_request, kitchen):
    request = await make_subscription_request()

    result = await workflow.approve(request.id, kitchen.id)

    assert result.status == SubscriptionStatus.ACTIVE.value
    assert result.confirmed_at is not None
    assert result.cancellation_reason is None


async def test_approve_increments_plan_aggregates(
    workflow, make_subscription_request, kitchen, plan, test_db,
):
    request = await make_subscription_request(monthly_price=3000.0)

    await workflow.approve(request.id, kitchen.id)

    await test_db.refresh(plan)
    assert plan.subscriber_count == 5
    assert plan.monthly_revenue == 15000.0


async def test_approve_uses_locked_price_after_plan_price_change(
    workflow, make_subscription_request, kitchen, plan, test_db,
):
    request = await make_subscription_request(monthly_price=3000.0)
    plan.price = 3500.0
    await test_db.commit()

    await workflow.approve(request.id, kitchen.id)

    await test_db.refresh(plan)
    assert plan.monthly_revenue == 15000.0


async def test_approve_notifies_buyer(
    workflow, make_subscription_request, kitchen, buyer_id, notifier, sink,
):
    request = await make_subscription_request()

    await workflow.approve(request.id, kitchen.id)
    await notifier.drain()

    assert len(sink.intents) == 1
    assert sink.intents[0].user_id == buyer_id
    assert sink.intents[0].title == "Subscription Approved"
    assert "Weekday Lunch" in sink.intents[0].message


async def test_double_approve_increments_once(
    workflow, make_subscription_request, kitchen, plan, test_db, notifier, sink,
):
    request = await make_subscription_request()
    await workflow.approve(request.id, kitchen.id)

    with pytest.raises(AlreadyProcessedError) as exc_info:
        await workflow.approve(request.id, kitchen.id)
    await notifier.drain()

    assert exc_info.value.current_status == "ACTIVE"
    await test_db.refresh(plan)
    assert plan.subscriber_count == 5
    assert len(sink.intents) == 1


async def test_approve_other_kitchens_request_is_not_found(
    workflow, make_subscription_request,
):
    request = await make_subscription_request()
    with pytest.raises(NotFoundError):
        await workflow.approve(request.id, uuid4())


# ─── reject ──────────────────────────────────────────────────────

async def test_reject_records_reason(
    workflow, make_subscription_request, kitchen, notifier, sink,
):
    request = await make_subscription_request()

    result = await workflow.reject(request.id, kitchen.id, "Plan is full")
    await notifier.drain()

    assert result.status == SubscriptionStatus.CANCELLED.value
    assert result.cancelled_at is not None
    assert result.cancellation_reason == "Plan is full"
    assert sink.intents[0].message.endswith("Reason: Plan is full")


async def test_reject_without_reason_uses_default(
    workflow, make_subscription_request, kitchen, notifier, sink,
):
    request = await make_subscription_request()

    result = await workflow.reject(request.id, kitchen.id)
    await notifier.drain()

    assert result.cancellation_reason == "Rejected by chef"
    assert "Reason" not in sink.intents[0].message


async def test_reject_leaves_plan_aggregates(
    workflow, make_subscription_request, kitchen, plan, test_db,
):
    request = await make_subscription_request()

    await workflow.reject(request.id, kitchen.id, "Plan is full")

    await test_db.refresh(plan)
    assert plan.subscriber_count == 4
    assert plan.monthly_revenue == 12000.0


async def test_approve_after_reject_is_already_processed(
    workflow, make_subscription_request, kitchen, plan, test_db,
):
    request = await make_subscription_request()
    await workflow.reject(request.id, kitchen.id)

    with pytest.raises(AlreadyProcessedError) as exc_info:
        await workflow.approve(request.id, kitchen.id)

    assert "already cancelled" in exc_info.value.message
    await test_db.refresh(plan)
    assert plan.subscriber_count == 4


async def test_reject_other_kitchens_request_is_not_found(
    workflow, make_subscription_request,
):
    request = await make_subscription_request()
    with pytest.raises(NotFoundError):
        await workflow.reject(request.id, uuid4(), "nope")


# ─── Lost race ───────────────────────────────────────────────────

class _InterleavedWorkflow(SubscriptionRequestWorkflow):
    """Another kitchen session approves the request right after it is read."""

    def __init__(self, *args, session_factory, **kwargs):
        super().__init__(*args, **kwargs)
        self._session_factory = session_factory

    async def _get_owned(self, request_id, kitchen_id):
        request = await super()._get_owned(request_id, kitchen_id)
        async with self._session_factory() as other:
            await other.execute(
                update(SubscriptionRequest)
                .where(SubscriptionRequest.id == request_id)
                .values(status=SubscriptionStatus.ACTIVE.value),
            )
            await other.commit()
        return request


async def test_concurrent_approval_loser_fails_without_increment(
    test_db, test_session_factory, notifier, sink,
    make_subscription_request, kitchen, plan,
):
    request = await make_subscription_request()
    workflow = _InterleavedWorkflow(
        test_db, notifier, session_factory=test_session_factory,
    )

    with pytest.raises(AlreadyProcessedError) as exc_info:
        await workflow.approve(request.id, kitchen.id)
    await notifier.drain()

    assert exc_info.value.current_status == "ACTIVE"
    await test_db.refresh(plan)
    assert plan.subscriber_count == 4
    assert sink.intents == []
