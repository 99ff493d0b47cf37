"""Day Plan Schemas — upsert body and day plan responses.

Invariants:
    - notes stripped; blank notes stored as None
    - item_ids / outfit_ids of None mean "leave unchanged", [] means "clear"
"""

import datetime as dt
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from wardrobe_calendar.schemas.association import MAX_ENTITIES_PER_DAY_PLAN


class DayPlanUpsert(BaseModel):
    """Create or update the caller's plan for a date."""
    date: dt.date
    notes: str | None = Field(None, max_length=2000)
    item_ids: list[UUID] | None = Field(
        None, max_length=MAX_ENTITIES_PER_DAY_PLAN,
    )
    outfit_ids: list[UUID] | None = Field(
        None, max_length=MAX_ENTITIES_PER_DAY_PLAN,
    )

    @field_validator("notes")
    @classmethod
    def strip_notes(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        return v or None


class DayPlanResponse(BaseModel):
    id: UUID
    user_id: UUID
    date: dt.date
    notes: str | None = None
    item_ids: list[UUID]
    outfit_ids: list[UUID]
    created_at: dt.datetime
    updated_at: dt.datetime


class DayPlanListResponse(BaseModel):
    day_plans: list[DayPlanResponse]
