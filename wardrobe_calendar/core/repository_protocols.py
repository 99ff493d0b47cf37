"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - AssociationStore.apply_diff is atomic per (day_plan_id, entity_kind):
      the whole diff lands or nothing does

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO,
      but the reconciler that consumes their results is never async itself
    - AssociationSnapshot carries a version: apply_diff compares it to detect a
      write that happened between the read and the write
"""

from dataclasses import dataclass, field
from typing import Protocol

from wardrobe_calendar.core.domain_types import (
    DayPlanId, EntityId, EntityKind, UserId,
)
from wardrobe_calendar.core.set_reconciler import ReconciliationDiff


@dataclass(frozen=True)
class AssociationSnapshot:
    """Current association set of one (day plan, entity kind) group."""
    entity_ids: frozenset[EntityId] = field(default_factory=frozenset)
    version: int = 0


class DayPlanOwnerLookup(Protocol):
    """Contract for resolving a day plan's owner — implemented by shell."""
    async def get_owner(self, day_plan_id: DayPlanId) -> UserId | None: ...


class AssociationStore(Protocol):
    """Contract for association persistence, one instance per entity kind."""
    kind: EntityKind

    async def snapshot(self, day_plan_id: DayPlanId) -> AssociationSnapshot: ...
    async def list_by_day_plan(
        self, day_plan_id: DayPlanId,
    ) -> frozenset[EntityId]: ...
    async def list_by_entity(
        self, entity_id: EntityId, user_id: UserId,
    ) -> frozenset[DayPlanId]: ...
    async def apply_diff(
        self,
        day_plan_id: DayPlanId,
        user_id: UserId,
        diff: ReconciliationDiff,
        expected_version: int,
    ) -> None: ...
