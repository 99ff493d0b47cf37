"""Day Plan Repository — SQL access to day_plans rows.

Invariants:
    - get_owner returns None for a missing plan (the guard turns that into NOT_FOUND)
    - Queries for a user's plans always filter on user_id
    - Reads refresh already-loaded objects (association writes bump columns
      behind the identity map's back)
    - A duplicate (user_id, date) on create raises ConcurrencyError after rollback
    - delete_with_associations removes both link sets and the plan row in one
      transaction: all three go or none do
"""

import logging
from datetime import date

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from wardrobe_calendar.core.domain_types import DayPlanId, UserId
from wardrobe_calendar.core.errors import (
    ConcurrencyError, ErrorContext, StoreUnavailableError,
)
from wardrobe_calendar.models.day_plan import DayPlan
from wardrobe_calendar.models.day_plan_item import DayPlanItem
from wardrobe_calendar.models.day_plan_outfit import DayPlanOutfit

logger = logging.getLogger(__name__)


class SqlDayPlanRepository:
    """Day plan persistence; also the DayPlanOwnerLookup used by OwnershipGuard."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_owner(self, day_plan_id: DayPlanId) -> UserId | None:
        try:
            owner = await self.db.scalar(
                select(DayPlan.user_id).where(DayPlan.id == day_plan_id),
            )
        except SQLAlchemyError as e:
            logger.error(f"Owner lookup failed: {e}")
            raise StoreUnavailableError(
                "Day plan store unavailable", "owner lookup",
                ErrorContext(day_plan_id=str(day_plan_id)),
            )
        return UserId(owner) if owner is not None else None

    async def get(self, day_plan_id: DayPlanId) -> DayPlan | None:
        result = await self.db.execute(
            select(DayPlan)
            .where(DayPlan.id == day_plan_id)
            .execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    async def get_by_date(
        self, user_id: UserId, plan_date: date,
    ) -> DayPlan | None:
        result = await self.db.execute(
            select(DayPlan)
            .where(DayPlan.user_id == user_id)
            .where(DayPlan.plan_date == plan_date)
            .execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    async def list_for_user(
        self,
        user_id: UserId,
        start: date | None = None,
        end: date | None = None,
    ) -> list[DayPlan]:
        query = (
            select(DayPlan)
            .where(DayPlan.user_id == user_id)
            .order_by(DayPlan.plan_date)
            .execution_options(populate_existing=True)
        )
        if start:
            query = query.where(DayPlan.plan_date >= start)
        if end:
            query = query.where(DayPlan.plan_date <= end)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def create(
        self, user_id: UserId, plan_date: date, notes: str | None,
    ) -> DayPlan:
        plan = DayPlan(user_id=user_id, plan_date=plan_date, notes=notes)
        self.db.add(plan)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConcurrencyError(
                f"Day plan for {plan_date.isoformat()} created concurrently",
            )
        await self.db.refresh(plan)
        return plan

    async def update_notes(self, plan: DayPlan, notes: str | None) -> DayPlan:
        plan.notes = notes
        await self.db.commit()
        await self.db.refresh(plan)
        return plan

    async def delete_with_associations(self, day_plan_id: DayPlanId) -> bool:
        """Delete the plan and its item/outfit links. False if the row was already gone."""
        try:
            for model in (DayPlanItem, DayPlanOutfit):
                await self.db.execute(
                    delete(model)
                    .where(model.day_plan_id == day_plan_id)
                    .execution_options(synchronize_session=False),
                )
            result = await self.db.execute(
                delete(DayPlan)
                .where(DayPlan.id == day_plan_id)
                .execution_options(synchronize_session=False),
            )
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Day plan delete failed: {e}")
            raise StoreUnavailableError(
                "Day plan store unavailable", "delete day plan",
                ErrorContext(day_plan_id=str(day_plan_id)),
            )
        return result.rowcount == 1
