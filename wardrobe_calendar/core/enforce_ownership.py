"""Ownership Enforcement — pure comparison of a caller against a day plan's owner.

Invariants:
    - check_ownership is PURE: the owner lookup happens in the shell (OwnershipGuard)
    - A missing day plan is NOT_FOUND, a foreign one is UNAUTHORIZED
    - Denied is falsy so `if not result:` reads naturally at call sites

Design Decisions:
    - Denials are values, not exceptions: a foreign or missing plan is an
      expected outcome the caller branches on
"""

from dataclasses import dataclass

from wardrobe_calendar.core.domain_types import (
    DayPlanId, OwnershipVerdict, UserId,
)


def check_ownership(
    owner_id: UserId | None, user_id: UserId,
) -> OwnershipVerdict:
    """Compare the looked-up owner (None when the plan is missing) to the caller."""
    if owner_id is None:
        return OwnershipVerdict.NOT_FOUND
    if owner_id != user_id:
        return OwnershipVerdict.UNAUTHORIZED
    return OwnershipVerdict.AUTHORIZED


@dataclass(frozen=True)
class Denied:
    """Negative result returned when the caller may not touch a day plan."""
    verdict: OwnershipVerdict
    day_plan_id: DayPlanId

    def __bool__(self) -> bool:
        return False

    def to_dict(self) -> dict:
        return {
            "status": "denied",
            "error_code": self.verdict.value.upper(),
            "day_plan_id": str(self.day_plan_id),
        }
