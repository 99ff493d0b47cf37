"""Ownership Guard — verifies owner lookup against the day_plans table."""

from uuid import uuid4

from wardrobe_calendar.core.domain_types import OwnershipVerdict
from wardrobe_calendar.services.day_plan_repository import SqlDayPlanRepository
from wardrobe_calendar.services.ownership_guard import OwnershipGuard


async def test_owner_is_authorized(test_db, seed_day_plan, owner_id):
    guard = OwnershipGuard(SqlDayPlanRepository(test_db))
    verdict = await guard.authorize(seed_day_plan.id, owner_id)
    assert verdict is OwnershipVerdict.AUTHORIZED


async def test_stranger_is_unauthorized(test_db, seed_day_plan, stranger_id):
    guard = OwnershipGuard(SqlDayPlanRepository(test_db))
    verdict = await guard.authorize(seed_day_plan.id, stranger_id)
    assert verdict is OwnershipVerdict.UNAUTHORIZED


async def test_unknown_plan_is_not_found(test_db, owner_id):
    guard = OwnershipGuard(SqlDayPlanRepository(test_db))
    verdict = await guard.authorize(uuid4(), owner_id)
    assert verdict is OwnershipVerdict.NOT_FOUND


async def test_authorize_is_repeatable(test_db, seed_day_plan, owner_id):
    guard = OwnershipGuard(SqlDayPlanRepository(test_db))
    first = await guard.authorize(seed_day_plan.id, owner_id)
    second = await guard.authorize(seed_day_plan.id, owner_id)
    assert first is second is OwnershipVerdict.AUTHORIZED
