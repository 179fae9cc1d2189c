"""Service test fixtures — async DB, recording notification sink, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db and get_notifier overridden so routes use the test DB and a recording sink
    - db_manager patched for code that opens its own sessions (DatabaseNotificationSink)

Design Decisions:
    - SQLite in-memory: fast, no external dependency; conditional UPDATE rowcounts
      behave the same as on PostgreSQL for single-row writes
    - Recording sink instead of the DB sink in service tests: assertions read the
      intents directly, the DB sink has its own test
"""

import pytest
from uuid import uuid4
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from homekitchen.core.domain_types import OrderStatus, SubscriptionStatus
from homekitchen.db.base import Base
from homekitchen.infrastructure.database import get_db, DatabaseSessionManager
from homekitchen.infrastructure.notification_dispatch import (
    NotificationDispatcher, get_notifier,
)
from homekitchen.models.address import Address
from homekitchen.models.kitchen import Kitchen
from homekitchen.models.order import Order
from homekitchen.models.subscription_plan import SubscriptionPlan
from homekitchen.models.subscription_request import SubscriptionRequest
import homekitchen.infrastructure.database as db_module
from homekitchen.main import app

from tests.services.fake_sinks import RecordingSink

KITCHEN_LAT, KITCHEN_LNG = 23.8103, 90.4125


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def notifier(sink):
    return NotificationDispatcher(sink)


@pytest.fixture
def patched_db_manager(test_engine, test_session_factory):
    """Point the db_manager singleton at the test engine."""
    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager
    yield fake_manager
    db_module.db_manager = original_manager


@pytest.fixture
async def client(test_session_factory, patched_db_manager, notifier):
    """FastAPI test client with DB and notifier dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notifier] = lambda: notifier

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    await notifier.drain()
    app.dependency_overrides.clear()


# ─── Seed data ───────────────────────────────────────────────────

@pytest.fixture
def buyer_id():
    return uuid4()


@pytest.fixture
async def kitchen(test_db):
    kitchen = Kitchen(
        seller_id=uuid4(), name="Amma's Kitchen",
        latitude=KITCHEN_LAT, longitude=KITCHEN_LNG,
    )
    test_db.add(kitchen)
    await test_db.commit()
    await test_db.refresh(kitchen)
    return kitchen


@pytest.fixture
def make_order(test_db, kitchen, buyer_id):
    """Factory: insert an order for the seeded kitchen and buyer in a given status."""
    async def _make(status=OrderStatus.PENDING, total=450.0, notes=None, user_id=None):
        order = Order(
            user_id=user_id or buyer_id,
            kitchen_id=kitchen.id,
            total=total,
            status=status.value,
            notes=notes,
        )
        test_db.add(order)
        await test_db.commit()
        await test_db.refresh(order)
        return order
    return _make


@pytest.fixture
async def plan(test_db, kitchen):
    plan = SubscriptionPlan(
        kitchen_id=kitchen.id, name="Weekday Lunch", price=3000.0,
        subscriber_count=4, monthly_revenue=12000.0,
    )
    test_db.add(plan)
    await test_db.commit()
    await test_db.refresh(plan)
    return plan


@pytest.fixture
def make_subscription_request(test_db, kitchen, plan, buyer_id):
    async def _make(status=SubscriptionStatus.PENDING, monthly_price=3000.0):
        request = SubscriptionRequest(
            user_id=buyer_id,
            kitchen_id=kitchen.id,
            plan_id=plan.id,
            status=status.value,
            monthly_price=monthly_price,
            delivery_time_slot="LUNCH",
        )
        test_db.add(request)
        await test_db.commit()
        await test_db.refresh(request)
        return request
    return _make


@pytest.fixture
def make_address(test_db, buyer_id):
    async def _make(latitude, longitude, is_default=False, user_id=None):
        address = Address(
            user_id=user_id or buyer_id, label="Home",
            address_line="House 12, Road 4",
            latitude=latitude, longitude=longitude, is_default=is_default,
        )
        test_db.add(address)
        await test_db.commit()
        await test_db.refresh(address)
        return address
    return _make
