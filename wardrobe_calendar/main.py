"""Wardrobe Calendar API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map WardrobeError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup and disposed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from wardrobe_calendar.api.error_handlers import register_error_handlers
from wardrobe_calendar.api.routes import day_plan_associations, day_plans, health
from wardrobe_calendar.config import get_settings
from wardrobe_calendar.infrastructure import database
from wardrobe_calendar.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Wardrobe calendar API started")
    yield
    if database.db_manager:
        await database.db_manager.dispose()
    logger.info("Wardrobe calendar API shutting down")


app = FastAPI(
    title="Wardrobe Calendar API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(day_plans.router)
app.include_router(day_plan_associations.items_router)
app.include_router(day_plan_associations.outfits_router)

register_error_handlers(app)
