"""Association Schemas — bodies and responses for day plan item/outfit routes.

Invariants:
    - EntitySetReplace.entity_ids holds at most MAX_ENTITIES_PER_DAY_PLAN ids
    - Duplicate ids in a replace body are accepted and collapse to a set
    - Responses list ids sorted so identical sets serialize identically
"""

from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from wardrobe_calendar.core.domain_types import EntityKind

MAX_ENTITIES_PER_DAY_PLAN = 200


class EntityAdd(BaseModel):
    """Attach one item/outfit to a day plan."""
    entity_id: UUID


class EntitySetReplace(BaseModel):
    """Replace a day plan's item/outfit set with exactly these ids."""
    entity_ids: list[UUID] = Field(
        default_factory=list, max_length=MAX_ENTITIES_PER_DAY_PLAN,
    )

    @field_validator("entity_ids")
    @classmethod
    def dedupe(cls, v: list[UUID]) -> list[UUID]:
        return list(dict.fromkeys(v))


class AssociationSetResponse(BaseModel):
    """Current members of one (day plan, kind) association set."""
    day_plan_id: UUID
    kind: EntityKind
    entity_ids: list[UUID]


class EntityDayPlansResponse(BaseModel):
    """Reverse lookup: the caller's day plans containing an item/outfit."""
    entity_id: UUID
    kind: EntityKind
    day_plan_ids: list[UUID]


class MutationResponse(BaseModel):
    success: bool = True
