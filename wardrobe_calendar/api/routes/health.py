"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if the database is unreachable, or reachable
      but without the day_plans schema (migrations not applied)
    - Ready responses report the conflict retry budget in effect

Design Decisions:
    - db_manager read through the module at request time: it is assigned on startup
"""

import logging
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from sqlalchemy import select

from wardrobe_calendar.config import get_settings
from wardrobe_calendar.core.errors import StoreUnavailableError
from wardrobe_calendar.infrastructure import database
from wardrobe_calendar.models.day_plan import DayPlan

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])

SERVICE_NAME = "wardrobe-calendar-api"
SERVICE_VERSION = "1.0.0"


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
    }


async def _day_plans_schema_ready(manager: database.DatabaseSessionManager) -> bool:
    try:
        async with manager.session() as db:
            await db.execute(select(DayPlan.id).limit(1))
    except StoreUnavailableError:
        logger.error("day_plans table not queryable; run alembic upgrade head")
        return False
    return True


def _not_ready(reason: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "not_ready", "reason": reason},
    )


@router.get("/ready")
async def readiness_check():
    """Readiness probe — database connectivity, then the day plan schema."""
    manager = database.db_manager
    if not manager or not await manager.health_check():
        return _not_ready("database_unavailable")
    if not await _day_plans_schema_ready(manager):
        return _not_ready("schema_missing")
    return {
        "status": "ready",
        "checks": {"database": "healthy", "day_plans_schema": "healthy"},
        "association_conflict_retries": get_settings().association_conflict_retries,
    }
