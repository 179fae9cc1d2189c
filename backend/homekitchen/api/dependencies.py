"""Request Dependencies — caller scope and per-request service construction.

Invariants:
    - Buyer scope comes from X-User-Id, kitchen scope from X-Kitchen-Id; both are set by
      the authenticating gateway in front of this service
    - A missing or malformed scope header is a 400 validation error; there is no
      fallback identity
    - Services are constructed per request around the request's AsyncSession

Design Decisions:
    - Header-based scope: authentication/session mechanics live outside this service
"""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from homekitchen.config import get_settings
from homekitchen.core.domain_types import KitchenId, UserId
from homekitchen.infrastructure.database import get_db
from homekitchen.infrastructure.notification_dispatch import (
    NotificationDispatcher, get_notifier,
)
from homekitchen.services.delivery_quotes import DeliveryQuoteService
from homekitchen.services.order_lifecycle import OrderLifecycleManager
from homekitchen.services.subscription_workflow import SubscriptionRequestWorkflow


async def get_buyer_id(x_user_id: Annotated[UUID, Header()]) -> UserId:
    return UserId(x_user_id)


async def get_acting_kitchen_id(x_kitchen_id: Annotated[UUID, Header()]) -> KitchenId:
    return KitchenId(x_kitchen_id)


def get_order_lifecycle(
    db: AsyncSession = Depends(get_db),
    notifier: NotificationDispatcher = Depends(get_notifier),
) -> OrderLifecycleManager:
    return OrderLifecycleManager(
        db, notifier,
        platform_fee_per_order=get_settings().platform_fee_per_order,
    )


def get_subscription_workflow(
    db: AsyncSession = Depends(get_db),
    notifier: NotificationDispatcher = Depends(get_notifier),
) -> SubscriptionRequestWorkflow:
    return SubscriptionRequestWorkflow(db, notifier)


def get_delivery_quotes(
    db: AsyncSession = Depends(get_db),
) -> DeliveryQuoteService:
    return DeliveryQuoteService(db)
