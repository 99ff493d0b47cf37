"""Ownership Guard — authorizes a user against a day plan before any read or write.

Invariants:
    - authorize never raises for a missing or foreign day plan: it returns the verdict
    - No side effects; safe to call repeatedly and concurrently
    - Denials logged at debug level only
"""

import logging

from wardrobe_calendar.core.domain_types import (
    DayPlanId, OwnershipVerdict, UserId,
)
from wardrobe_calendar.core.enforce_ownership import check_ownership
from wardrobe_calendar.core.repository_protocols import DayPlanOwnerLookup

logger = logging.getLogger(__name__)


class OwnershipGuard:
    """Looks up a day plan's owner and compares it to the caller."""

    def __init__(self, lookup: DayPlanOwnerLookup):
        self.lookup = lookup

    async def authorize(
        self, day_plan_id: DayPlanId, user_id: UserId,
    ) -> OwnershipVerdict:
        owner_id = await self.lookup.get_owner(day_plan_id)
        verdict = check_ownership(owner_id, user_id)
        if verdict is not OwnershipVerdict.AUTHORIZED:
            logger.debug(
                f"Access to day plan denied: {verdict.value}",
                extra={"day_plan_id": str(day_plan_id)},
            )
        return verdict
