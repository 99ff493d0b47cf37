"""Day Plan Routes — upsert, read, list and delete the caller's day plans.

Invariants:
    - Every query is scoped to the caller's user id
    - Foreign and missing plans both answer 404
    - /by-date/{date} (GET and DELETE) registered before /{day_plan_id} so the
      literal segment wins
    - start > end on list -> 400
"""

import logging
from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status

from wardrobe_calendar.api.dependencies import (
    get_current_user_id, get_day_plan_service,
)
from wardrobe_calendar.api.routes.day_plan_associations import unwrap_denial
from wardrobe_calendar.core.domain_types import DayPlanId, EntityId, UserId
from wardrobe_calendar.core.errors import ResourceNotFoundError
from wardrobe_calendar.schemas.association import MutationResponse
from wardrobe_calendar.schemas.day_plan import (
    DayPlanListResponse, DayPlanResponse, DayPlanUpsert,
)
from wardrobe_calendar.services.day_plans import DayPlanService, DayPlanView

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/day-plans", tags=["day-plans"])


def _to_response(view: DayPlanView) -> DayPlanResponse:
    return DayPlanResponse(
        id=view.id,
        user_id=view.user_id,
        date=view.plan_date,
        notes=view.notes,
        item_ids=sorted(view.item_ids),
        outfit_ids=sorted(view.outfit_ids),
        created_at=view.created_at,
        updated_at=view.updated_at,
    )


@router.put("", response_model=DayPlanResponse)
async def upsert_day_plan(
    body: DayPlanUpsert,
    user_id: UserId = Depends(get_current_user_id),
    service: DayPlanService = Depends(get_day_plan_service),
):
    """Create the plan for body.date or update it in place."""
    result = await service.upsert(
        user_id,
        body.date,
        notes=body.notes,
        item_ids=(
            [EntityId(i) for i in body.item_ids]
            if body.item_ids is not None else None
        ),
        outfit_ids=(
            [EntityId(o) for o in body.outfit_ids]
            if body.outfit_ids is not None else None
        ),
    )
    return _to_response(unwrap_denial(result))


@router.get("", response_model=DayPlanListResponse)
async def list_day_plans(
    start: date | None = Query(None),
    end: date | None = Query(None),
    user_id: UserId = Depends(get_current_user_id),
    service: DayPlanService = Depends(get_day_plan_service),
):
    if start and end and start > end:
        raise HTTPException(
            status.HTTP_400_BAD_REQUEST,
            detail="start must not be after end",
        )
    views = await service.list_for_user(user_id, start, end)
    return DayPlanListResponse(day_plans=[_to_response(v) for v in views])


@router.get("/by-date/{plan_date}", response_model=DayPlanResponse)
async def get_day_plan_by_date(
    plan_date: date,
    user_id: UserId = Depends(get_current_user_id),
    service: DayPlanService = Depends(get_day_plan_service),
):
    view = await service.get_by_date(user_id, plan_date)
    if view is None:
        raise ResourceNotFoundError("DayPlan", plan_date.isoformat())
    return _to_response(view)


@router.delete("/by-date/{plan_date}", response_model=MutationResponse)
async def delete_day_plan_by_date(
    plan_date: date,
    user_id: UserId = Depends(get_current_user_id),
    service: DayPlanService = Depends(get_day_plan_service),
):
    """Clear items and outfits of the plan for plan_date, then delete it."""
    if not await service.delete_by_date(user_id, plan_date):
        raise ResourceNotFoundError("DayPlan", plan_date.isoformat())
    return MutationResponse()


@router.get("/{day_plan_id}", response_model=DayPlanResponse)
async def get_day_plan(
    day_plan_id: UUID,
    user_id: UserId = Depends(get_current_user_id),
    service: DayPlanService = Depends(get_day_plan_service),
):
    view = unwrap_denial(
        await service.get(DayPlanId(day_plan_id), user_id), day_plan_id,
    )
    return _to_response(view)


@router.delete("/{day_plan_id}", response_model=MutationResponse)
async def delete_day_plan(
    day_plan_id: UUID,
    user_id: UserId = Depends(get_current_user_id),
    service: DayPlanService = Depends(get_day_plan_service),
):
    """Clear items and outfits, then delete the plan."""
    success = unwrap_denial(
        await service.delete(DayPlanId(day_plan_id), user_id), day_plan_id,
    )
    return MutationResponse(success=success)
