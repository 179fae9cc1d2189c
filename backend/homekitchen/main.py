"""HomeKitchen API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map HomeKitchenError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database and notification dispatcher initialized in the lifespan; in-flight
      notifications drained before the engine is disposed

Design Decisions:
    - Lifespan over @app.on_event: cleanup runs in the same scope as setup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from homekitchen.api.error_handlers import register_error_handlers
from homekitchen.api.routes import delivery, health, kitchen, orders
from homekitchen.config import get_settings
from homekitchen.infrastructure import database
from homekitchen.infrastructure.database import init_db
from homekitchen.infrastructure.notification_dispatch import init_notifications
from homekitchen.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    notifier = init_notifications()
    logger.info("HomeKitchen API started")
    yield
    logger.info("HomeKitchen API shutting down")
    await notifier.drain()
    if database.db_manager:
        await database.db_manager.dispose()


app = FastAPI(
    title="HomeKitchen API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(health.router)
app.include_router(orders.router)
app.include_router(kitchen.router)
app.include_router(delivery.router)
