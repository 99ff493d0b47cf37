"""Request Dependencies — caller identity and request-scoped services.

Invariants:
    - The user id comes from a header set by the upstream authentication layer;
      it is trusted as-is (no credential verification here)
    - Missing or malformed user id -> AuthenticationError (401)
    - Services are built per request around the request's AsyncSession
"""

from typing import Callable
from uuid import UUID

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from wardrobe_calendar.config import get_settings
from wardrobe_calendar.core.domain_types import EntityKind, UserId
from wardrobe_calendar.core.errors import AuthenticationError
from wardrobe_calendar.infrastructure.database import get_db
from wardrobe_calendar.services.day_plan_associations import (
    DayPlanAssociationService, build_association_service,
)
from wardrobe_calendar.services.day_plans import (
    DayPlanService, build_day_plan_service,
)


async def get_current_user_id(request: Request) -> UserId:
    header = get_settings().user_id_header
    raw = request.headers.get(header)
    if not raw:
        raise AuthenticationError(f"Missing {header} header")
    try:
        return UserId(UUID(raw))
    except ValueError:
        raise AuthenticationError(f"Malformed {header} header")


def association_service_for(
    kind: EntityKind,
) -> Callable[..., DayPlanAssociationService]:
    """Dependency factory: association service of one entity kind."""

    async def _dependency(
        db: AsyncSession = Depends(get_db),
    ) -> DayPlanAssociationService:
        return build_association_service(
            db, kind, get_settings().association_conflict_retries,
        )

    return _dependency


async def get_day_plan_service(
    db: AsyncSession = Depends(get_db),
) -> DayPlanService:
    return build_day_plan_service(
        db, get_settings().association_conflict_retries,
    )
