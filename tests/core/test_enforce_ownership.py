"""Ownership Enforcement — tests for the pure owner comparison and Denied value."""

from uuid import uuid4

from wardrobe_calendar.core.domain_types import (
    DayPlanId, OwnershipVerdict, UserId,
)
from wardrobe_calendar.core.enforce_ownership import Denied, check_ownership


def test_owner_is_authorized():
    user = UserId(uuid4())
    assert check_ownership(user, user) is OwnershipVerdict.AUTHORIZED


def test_other_user_is_unauthorized():
    assert (
        check_ownership(UserId(uuid4()), UserId(uuid4()))
        is OwnershipVerdict.UNAUTHORIZED
    )


def test_missing_plan_is_not_found():
    assert check_ownership(None, UserId(uuid4())) is OwnershipVerdict.NOT_FOUND


def test_denied_is_falsy():
    denied = Denied(OwnershipVerdict.UNAUTHORIZED, DayPlanId(uuid4()))
    assert not denied


def test_denied_to_dict():
    plan_id = DayPlanId(uuid4())
    assert Denied(OwnershipVerdict.NOT_FOUND, plan_id).to_dict() == {
        "status": "denied",
        "error_code": "NOT_FOUND",
        "day_plan_id": str(plan_id),
    }
