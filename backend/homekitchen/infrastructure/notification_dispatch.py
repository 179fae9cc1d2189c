"""Notification Dispatch — fire-and-forget delivery of NotificationIntents.

Invariants:
    - dispatch() never raises and never blocks the caller on the sink
    - A failed emission is logged at ERROR with kind and target, counted, and dropped:
      no synchronous retry, no rollback of the transition that produced it
    - Dispatch happens only AFTER the owning transaction committed
    - drain() awaits every in-flight emission (shutdown and tests)

Design Decisions:
    - asyncio.Task per intent with a done-set: the task handle is the failure channel,
      the request path only sees the committed state transition
    - DatabaseNotificationSink opens its own session through db_manager: the request
      session is closed by the time the task runs
    - Module-level singleton initialized in lifespan, mirroring db_manager
"""

import asyncio
import logging

from homekitchen.core.format_notifications import NotificationIntent
from homekitchen.core.repository_protocols import NotificationSink
from homekitchen.models.notification import Notification

logger = logging.getLogger(__name__)


class DatabaseNotificationSink:
    """Persists each intent as a Notification row."""

    async def emit(self, intent: NotificationIntent) -> None:
        from homekitchen.infrastructure import database

        if not database.db_manager:
            raise RuntimeError("Database not initialized")
        async with database.db_manager.session() as db:
            db.add(Notification(
                user_id=intent.user_id,
                kitchen_id=intent.kitchen_id,
                kind=intent.kind.value,
                title=intent.title,
                message=intent.message,
                action_url=intent.action_url,
            ))
            await db.commit()


class NotificationDispatcher:
    """Schedules sink emissions as background tasks and logs their failures."""

    def __init__(self, sink: NotificationSink):
        self._sink = sink
        self._pending: set[asyncio.Task] = set()
        self.failed_count = 0

    def dispatch(self, intent: NotificationIntent) -> asyncio.Task:
        task = asyncio.create_task(self._emit(intent))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    def dispatch_all(self, intents: list[NotificationIntent]) -> list[asyncio.Task]:
        return [self.dispatch(intent) for intent in intents]

    async def _emit(self, intent: NotificationIntent) -> None:
        try:
            await self._sink.emit(intent)
        except Exception as e:
            self.failed_count += 1
            logger.error(
                f"Notification emission failed: {e}",
                exc_info=True,
                extra={
                    "notification_kind": intent.kind.value,
                    "notification_target": intent.target,
                },
            )

    @property
    def pending(self) -> int:
        return len(self._pending)

    async def drain(self) -> None:
        """Wait for all in-flight emissions to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending))


# Singleton (initialized on startup)
notification_dispatcher: NotificationDispatcher | None = None


def init_notifications(sink: NotificationSink | None = None) -> NotificationDispatcher:
    global notification_dispatcher
    notification_dispatcher = NotificationDispatcher(sink or DatabaseNotificationSink())
    return notification_dispatcher


def get_notifier() -> NotificationDispatcher:
    """FastAPI dependency for the notification dispatcher."""
    if not notification_dispatcher:
        raise RuntimeError("Notifications not initialized")
    return notification_dispatcher
