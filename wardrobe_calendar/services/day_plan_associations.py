"""Day Plan Association Service — get/add/replace/remove/delete-all and reverse lookup.

Invariants:
    - Per call: authorize -> snapshot read -> reconcile -> apply, strictly in that order
    - Ownership denials are returned as Denied values, never raised
    - An empty diff succeeds without writing (no version bump, no churn)
    - ConcurrencyError restarts the whole sequence (including authorization) with
      fresh state, at most max_conflict_retries times; then PersistentConflictError
    - StoreUnavailableError propagates immediately (never retried here)
    - No mutable state between calls: the service can be built per request

Design Decisions:
    - One service class for both entity kinds: the kind lives in the store
    - Mutations expressed as "current set -> diff" callables so add/remove/replace/
      delete_all share one retry loop
"""

import logging
from typing import Callable, Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from wardrobe_calendar.core.domain_types import (
    DayPlanId, EntityId, EntityKind, OwnershipVerdict, UserId,
)
from wardrobe_calendar.core.enforce_ownership import Denied
from wardrobe_calendar.core.errors import ConcurrencyError, PersistentConflictError
from wardrobe_calendar.core.repository_protocols import AssociationStore
from wardrobe_calendar.core.set_reconciler import (
    ReconciliationDiff, reconcile, reconcile_add, reconcile_remove,
)
from wardrobe_calendar.services.association_store import SqlAssociationStore
from wardrobe_calendar.services.day_plan_repository import SqlDayPlanRepository
from wardrobe_calendar.services.ownership_guard import OwnershipGuard

logger = logging.getLogger(__name__)

DiffPlanner = Callable[[frozenset[EntityId]], ReconciliationDiff]


class DayPlanAssociationService:
    """Keeps one entity kind's association set of a day plan consistent."""

    def __init__(
        self,
        guard: OwnershipGuard,
        store: AssociationStore,
        max_conflict_retries: int = 1,
    ):
        self.guard = guard
        self.store = store
        self.kind: EntityKind = store.kind
        self.max_conflict_retries = max_conflict_retries

    async def get(
        self, day_plan_id: DayPlanId, user_id: UserId,
    ) -> frozenset[EntityId] | Denied:
        verdict = await self.guard.authorize(day_plan_id, user_id)
        if verdict is not OwnershipVerdict.AUTHORIZED:
            return Denied(verdict, day_plan_id)
        return await self.store.list_by_day_plan(day_plan_id)

    async def add(
        self, day_plan_id: DayPlanId, entity_id: EntityId, user_id: UserId,
    ) -> bool | Denied:
        return await self._mutate(
            day_plan_id, user_id, "add",
            lambda current: reconcile_add(current, entity_id),
        )

    async def replace(
        self,
        day_plan_id: DayPlanId,
        entity_ids: Iterable[EntityId],
        user_id: UserId,
    ) -> bool | Denied:
        desired = frozenset(entity_ids)
        return await self._mutate(
            day_plan_id, user_id, "replace",
            lambda current: reconcile(current, desired),
        )

    async def remove(
        self, day_plan_id: DayPlanId, entity_id: EntityId, user_id: UserId,
    ) -> bool | Denied:
        return await self._mutate(
            day_plan_id, user_id, "remove",
            lambda current: reconcile_remove(current, entity_id),
        )

    async def delete_all(
        self, day_plan_id: DayPlanId, user_id: UserId,
    ) -> bool | Denied:
        return await self._mutate(
            day_plan_id, user_id, "delete_all",
            lambda current: reconcile(current, frozenset()),
        )

    async def day_plans_for_entity(
        self, entity_id: EntityId, user_id: UserId,
    ) -> frozenset[DayPlanId]:
        """Caller's day plans containing the entity; other users' plans never appear."""
        return await self.store.list_by_entity(entity_id, user_id)

    async def _mutate(
        self,
        day_plan_id: DayPlanId,
        user_id: UserId,
        operation: str,
        plan_diff: DiffPlanner,
    ) -> bool | Denied:
        attempts = self.max_conflict_retries + 1
        for attempt in range(1, attempts + 1):
            verdict = await self.guard.authorize(day_plan_id, user_id)
            if verdict is not OwnershipVerdict.AUTHORIZED:
                return Denied(verdict, day_plan_id)

            snapshot = await self.store.snapshot(day_plan_id)
            diff = plan_diff(snapshot.entity_ids)
            if diff.is_empty:
                return True

            try:
                await self.store.apply_diff(
                    day_plan_id, user_id, diff, snapshot.version,
                )
            except ConcurrencyError:
                logger.warning(
                    f"Conflict on {self.kind.value} {operation}, "
                    f"attempt {attempt}/{attempts}",
                    extra={
                        "day_plan_id": str(day_plan_id),
                        "entity_kind": self.kind.value,
                        "attempt": attempt,
                    },
                )
                continue

            logger.info(
                f"{self.kind.value} {operation} applied",
                extra={
                    "day_plan_id": str(day_plan_id),
                    "entity_kind": self.kind.value,
                    "attempt": attempt,
                    **diff.summary,
                },
            )
            return True

        error = PersistentConflictError(str(day_plan_id), attempts)
        error.context.entity_kind = self.kind.value
        logger.error(
            f"{self.kind.value} {operation} gave up: {error.message}",
            extra={
                "day_plan_id": str(day_plan_id),
                "entity_kind": self.kind.value,
                "error_code": error.code,
            },
        )
        raise error


def build_association_service(
    db: AsyncSession, kind: EntityKind, max_conflict_retries: int = 1,
) -> DayPlanAssociationService:
    """Wire guard + SQL store for one request-scoped session."""
    guard = OwnershipGuard(SqlDayPlanRepository(db))
    return DayPlanAssociationService(
        guard, SqlAssociationStore(db, kind), max_conflict_retries,
    )
