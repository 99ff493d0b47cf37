"""Day Plan Service — day plan lifecycle driving the association services.

Invariants:
    - A user sees and mutates only their own day plans (Denied otherwise)
    - upsert keeps at most one plan per (user, date); item_ids / outfit_ids of None
      leave that association set untouched, a list replaces it exactly
    - upsert returns the Denied of a refused association replace, never a view
      missing the requested ids
    - delete authorizes once, then removes both association sets and the plan
      row in a single transaction (no half-deleted plan on failure)
    - Returned views are built from freshly read association sets

Design Decisions:
    - Plan creation/deletion lives here, outside the association core: the
      association services never create or delete a DayPlan
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from wardrobe_calendar.core.domain_types import (
    DayPlanId, EntityId, EntityKind, OwnershipVerdict, UserId,
)
from wardrobe_calendar.core.enforce_ownership import Denied
from wardrobe_calendar.core.errors import ConcurrencyError
from wardrobe_calendar.models.day_plan import DayPlan
from wardrobe_calendar.services.day_plan_associations import (
    DayPlanAssociationService, build_association_service,
)
from wardrobe_calendar.services.day_plan_repository import SqlDayPlanRepository
from wardrobe_calendar.services.ownership_guard import OwnershipGuard

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DayPlanView:
    """A day plan with its current association sets."""
    id: DayPlanId
    user_id: UserId
    plan_date: date
    notes: str | None
    item_ids: frozenset[EntityId]
    outfit_ids: frozenset[EntityId]
    created_at: datetime
    updated_at: datetime


class DayPlanService:
    """Create/read/list/delete day plans and keep their associations in step."""

    def __init__(
        self,
        repository: SqlDayPlanRepository,
        items: DayPlanAssociationService,
        outfits: DayPlanAssociationService,
    ):
        self.repository = repository
        self.guard = OwnershipGuard(repository)
        self.items = items
        self.outfits = outfits

    async def upsert(
        self,
        user_id: UserId,
        plan_date: date,
        notes: str | None = None,
        item_ids: Iterable[EntityId] | None = None,
        outfit_ids: Iterable[EntityId] | None = None,
    ) -> DayPlanView | Denied:
        plan = await self.repository.get_by_date(user_id, plan_date)
        if plan is None:
            try:
                plan = await self.repository.create(user_id, plan_date, notes)
                logger.info(
                    f"Day plan created for {plan_date.isoformat()}",
                    extra={"day_plan_id": str(plan.id)},
                )
            except ConcurrencyError:
                # Lost the create race: the other request's row is now visible
                plan = await self.repository.get_by_date(user_id, plan_date)
                if plan is None:
                    raise
                plan = await self.repository.update_notes(plan, notes)
        else:
            plan = await self.repository.update_notes(plan, notes)

        day_plan_id = DayPlanId(plan.id)
        for service, entity_ids in (
            (self.items, item_ids), (self.outfits, outfit_ids),
        ):
            if entity_ids is None:
                continue
            replaced = await service.replace(day_plan_id, entity_ids, user_id)
            if not replaced:
                # Plan deleted concurrently after it was created or loaded
                return replaced
        return await self._view(day_plan_id)

    async def get(
        self, day_plan_id: DayPlanId, user_id: UserId,
    ) -> DayPlanView | Denied:
        verdict = await self.guard.authorize(day_plan_id, user_id)
        if verdict is not OwnershipVerdict.AUTHORIZED:
            return Denied(verdict, day_plan_id)
        return await self._view(day_plan_id)

    async def get_by_date(
        self, user_id: UserId, plan_date: date,
    ) -> DayPlanView | None:
        plan = await self.repository.get_by_date(user_id, plan_date)
        if plan is None:
            return None
        return await self._build_view(plan)

    async def list_for_user(
        self,
        user_id: UserId,
        start: date | None = None,
        end: date | None = None,
    ) -> list[DayPlanView]:
        plans = await self.repository.list_for_user(user_id, start, end)
        return [await self._build_view(plan) for plan in plans]

    async def delete(
        self, day_plan_id: DayPlanId, user_id: UserId,
    ) -> bool | Denied:
        verdict = await self.guard.authorize(day_plan_id, user_id)
        if verdict is not OwnershipVerdict.AUTHORIZED:
            return Denied(verdict, day_plan_id)
        if not await self.repository.delete_with_associations(day_plan_id):
            return Denied(OwnershipVerdict.NOT_FOUND, day_plan_id)
        logger.info(
            "Day plan deleted", extra={"day_plan_id": str(day_plan_id)},
        )
        return True

    async def delete_by_date(self, user_id: UserId, plan_date: date) -> bool:
        """Delete the caller's plan for a date. False when there is none."""
        plan = await self.repository.get_by_date(user_id, plan_date)
        if plan is None:
            return False
        return bool(await self.delete(DayPlanId(plan.id), user_id))

    async def _view(self, day_plan_id) -> DayPlanView | Denied:
        plan = await self.repository.get(day_plan_id)
        if plan is None:
            return Denied(OwnershipVerdict.NOT_FOUND, day_plan_id)
        return await self._build_view(plan)

    async def _build_view(self, plan: DayPlan) -> DayPlanView:
        # Copy columns before awaiting: a rollback elsewhere would expire them
        day_plan_id = DayPlanId(plan.id)
        fields = {
            "id": day_plan_id,
            "user_id": UserId(plan.user_id),
            "plan_date": plan.plan_date,
            "notes": plan.notes,
            "created_at": plan.created_at,
            "updated_at": plan.updated_at,
        }
        return DayPlanView(
            item_ids=await self.items.store.list_by_day_plan(day_plan_id),
            outfit_ids=await self.outfits.store.list_by_day_plan(day_plan_id),
            **fields,
        )


def build_day_plan_service(
    db: AsyncSession, max_conflict_retries: int = 1,
) -> DayPlanService:
    """Wire repository and both association services for one session."""
    return DayPlanService(
        SqlDayPlanRepository(db),
        build_association_service(db, EntityKind.ITEM, max_conflict_retries),
        build_association_service(db, EntityKind.OUTFIT, max_conflict_retries),
    )
