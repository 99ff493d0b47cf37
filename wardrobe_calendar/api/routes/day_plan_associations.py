"""Day Plan Association Routes — items and outfits attached to a day plan.

Invariants:
    - One router per EntityKind, same shape for both (build_association_router)
    - Denied (missing or foreign plan) -> 404 DayPlanNotFoundError, so other
      users' plan ids are indistinguishable from unknown ones
    - Mutations return {"success": true}; failures surface via the error handlers
    - Reverse lookup only ever lists the caller's own day plans

Routes (kind = item | outfit):
    GET    /api/v1/day-plans/{day_plan_id}/{kind}s
    POST   /api/v1/day-plans/{day_plan_id}/{kind}s
    PUT    /api/v1/day-plans/{day_plan_id}/{kind}s
    DELETE /api/v1/day-plans/{day_plan_id}/{kind}s
    DELETE /api/v1/day-plans/{day_plan_id}/{kind}s/{entity_id}
    GET    /api/v1/{kind}s/{entity_id}/day-plans
"""

import logging
from typing import TypeVar
from uuid import UUID

from fastapi import APIRouter, Depends

from wardrobe_calendar.api.dependencies import (
    association_service_for, get_current_user_id,
)
from wardrobe_calendar.core.domain_types import (
    DayPlanId, EntityId, EntityKind, UserId,
)
from wardrobe_calendar.core.enforce_ownership import Denied
from wardrobe_calendar.core.errors import DayPlanNotFoundError
from wardrobe_calendar.schemas.association import (
    AssociationSetResponse, EntityAdd, EntityDayPlansResponse,
    EntitySetReplace, MutationResponse,
)
from wardrobe_calendar.services.day_plan_associations import (
    DayPlanAssociationService,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def unwrap_denial(result: T | Denied, day_plan_id: UUID | None = None) -> T:
    """Raise 404 for a Denied service result, pass anything else through."""
    if isinstance(result, Denied):
        raise DayPlanNotFoundError(str(day_plan_id or result.day_plan_id))
    return result


def build_association_router(kind: EntityKind) -> APIRouter:
    """Routes for one entity kind's associations."""
    router = APIRouter(prefix="/api/v1", tags=[f"day-plan-{kind.plural}"])
    service_dep = association_service_for(kind)
    collection = f"/day-plans/{{day_plan_id}}/{kind.plural}"

    @router.get(collection, response_model=AssociationSetResponse)
    async def get_associations(
        day_plan_id: UUID,
        user_id: UserId = Depends(get_current_user_id),
        service: DayPlanAssociationService = Depends(service_dep),
    ):
        entity_ids = unwrap_denial(
            await service.get(DayPlanId(day_plan_id), user_id), day_plan_id,
        )
        return AssociationSetResponse(
            day_plan_id=day_plan_id, kind=kind, entity_ids=sorted(entity_ids),
        )

    @router.post(collection, response_model=MutationResponse)
    async def add_association(
        day_plan_id: UUID,
        body: EntityAdd,
        user_id: UserId = Depends(get_current_user_id),
        service: DayPlanAssociationService = Depends(service_dep),
    ):
        success = unwrap_denial(
            await service.add(
                DayPlanId(day_plan_id), EntityId(body.entity_id), user_id,
            ),
            day_plan_id,
        )
        return MutationResponse(success=success)

    @router.put(collection, response_model=MutationResponse)
    async def replace_associations(
        day_plan_id: UUID,
        body: EntitySetReplace,
        user_id: UserId = Depends(get_current_user_id),
        service: DayPlanAssociationService = Depends(service_dep),
    ):
        success = unwrap_denial(
            await service.replace(
                DayPlanId(day_plan_id),
                [EntityId(e) for e in body.entity_ids],
                user_id,
            ),
            day_plan_id,
        )
        return MutationResponse(success=success)

    @router.delete(collection, response_model=MutationResponse)
    async def delete_all_associations(
        day_plan_id: UUID,
        user_id: UserId = Depends(get_current_user_id),
        service: DayPlanAssociationService = Depends(service_dep),
    ):
        success = unwrap_denial(
            await service.delete_all(DayPlanId(day_plan_id), user_id),
            day_plan_id,
        )
        return MutationResponse(success=success)

    @router.delete(
        collection + "/{entity_id}", response_model=MutationResponse,
    )
    async def remove_association(
        day_plan_id: UUID,
        entity_id: UUID,
        user_id: UserId = Depends(get_current_user_id),
        service: DayPlanAssociationService = Depends(service_dep),
    ):
        success = unwrap_denial(
            await service.remove(
                DayPlanId(day_plan_id), EntityId(entity_id), user_id,
            ),
            day_plan_id,
        )
        return MutationResponse(success=success)

    @router.get(
        f"/{kind.plural}/{{entity_id}}/day-plans",
        response_model=EntityDayPlansResponse,
    )
    async def day_plans_for_entity(
        entity_id: UUID,
        user_id: UserId = Depends(get_current_user_id),
        service: DayPlanAssociationService = Depends(service_dep),
    ):
        day_plan_ids = await service.day_plans_for_entity(
            EntityId(entity_id), user_id,
        )
        return EntityDayPlansResponse(
            entity_id=entity_id, kind=kind, day_plan_ids=sorted(day_plan_ids),
        )

    return router


items_router = build_association_router(EntityKind.ITEM)
outfits_router = build_association_router(EntityKind.OUTFIT)
