"""ORM Models — SQLAlchemy declarative models for all persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Kitchen is the ownership root: orders, plans and subscription requests carry kitchen_id

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from homekitchen.models.kitchen import Kitchen  # noqa: F401
from homekitchen.models.address import Address  # noqa: F401
from homekitchen.models.order import Order  # noqa: F401
from homekitchen.models.order_item import OrderItem  # noqa: F401
from homekitchen.models.subscription_plan import SubscriptionPlan  # noqa: F401
from homekitchen.models.subscription_request import SubscriptionRequest  # noqa: F401
from homekitchen.models.notification import Notification  # noqa: F401
