"""SQL Association Store — persists day plan ↔ item/outfit links with optimistic versioning.

Invariants:
    - One store instance per (AsyncSession, EntityKind)
    - snapshot reads the day plan's version BEFORE the rows: a concurrent commit
      in between can only make the snapshot look older, never newer
    - apply_diff is a single transaction: version bump + deletes + inserts, then commit
    - A version mismatch or a duplicate (day_plan_id, entity_id) row rolls back
      and raises ConcurrencyError; other driver failures raise StoreUnavailableError
    - list_by_entity only returns rows whose user_id is the caller

Design Decisions:
    - Per-kind version column on day_plans instead of row locks: no lock is held
      between the snapshot read and the write
    - Core insert/delete statements instead of ORM unit of work: rows are
      membership facts, never loaded as objects
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from wardrobe_calendar.core.domain_types import (
    DayPlanId, EntityId, EntityKind, UserId,
)
from wardrobe_calendar.core.errors import (
    ConcurrencyError, ErrorContext, StoreUnavailableError,
)
from wardrobe_calendar.core.repository_protocols import AssociationSnapshot
from wardrobe_calendar.core.set_reconciler import ReconciliationDiff
from wardrobe_calendar.models.day_plan import DayPlan
from wardrobe_calendar.models.day_plan_item import DayPlanItem
from wardrobe_calendar.models.day_plan_outfit import DayPlanOutfit

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _LinkTable:
    model: type
    entity_column: str
    version_column: str


_LINK_TABLES: dict[EntityKind, _LinkTable] = {
    EntityKind.ITEM: _LinkTable(DayPlanItem, "item_id", "items_version"),
    EntityKind.OUTFIT: _LinkTable(DayPlanOutfit, "outfit_id", "outfits_version"),
}


class SqlAssociationStore:
    """AssociationStore over the day_plan_items / day_plan_outfits tables."""

    def __init__(self, db: AsyncSession, kind: EntityKind):
        self.db = db
        self.kind = kind
        self._table = _LINK_TABLES[kind]
        self._model = self._table.model
        self._entity_col = getattr(self._model, self._table.entity_column)
        self._version_col = getattr(DayPlan, self._table.version_column)

    async def snapshot(self, day_plan_id: DayPlanId) -> AssociationSnapshot:
        try:
            version = await self.db.scalar(
                select(self._version_col).where(DayPlan.id == day_plan_id),
            )
            rows = await self.db.scalars(
                select(self._entity_col)
                .where(self._model.day_plan_id == day_plan_id),
            )
            entity_ids = frozenset(EntityId(r) for r in rows)
        except SQLAlchemyError as e:
            raise self._unavailable(e, "snapshot", day_plan_id)
        return AssociationSnapshot(entity_ids=entity_ids, version=version or 0)

    async def list_by_day_plan(
        self, day_plan_id: DayPlanId,
    ) -> frozenset[EntityId]:
        return (await self.snapshot(day_plan_id)).entity_ids

    async def list_by_entity(
        self, entity_id: EntityId, user_id: UserId,
    ) -> frozenset[DayPlanId]:
        try:
            rows = await self.db.scalars(
                select(self._model.day_plan_id)
                .where(self._entity_col == entity_id)
                .where(self._model.user_id == user_id),
            )
            return frozenset(DayPlanId(r) for r in rows)
        except SQLAlchemyError as e:
            raise self._unavailable(e, "reverse lookup", None)

    async def apply_diff(
        self,
        day_plan_id: DayPlanId,
        user_id: UserId,
        diff: ReconciliationDiff,
        expected_version: int,
    ) -> None:
        try:
            bumped = await self.db.execute(
                update(DayPlan)
                .where(DayPlan.id == day_plan_id)
                .where(self._version_col == expected_version)
                .values({
                    self._table.version_column: self._version_col + 1,
                    "updated_at": datetime.now(timezone.utc),
                })
                .execution_options(synchronize_session=False),
            )
            if bumped.rowcount != 1:
                await self.db.rollback()
                raise ConcurrencyError(
                    f"Day plan {day_plan_id} {self.kind.plural} changed "
                    f"since version {expected_version}",
                    self._context(day_plan_id),
                )
            if diff.to_delete:
                await self.db.execute(
                    delete(self._model)
                    .where(self._model.day_plan_id == day_plan_id)
                    .where(self._entity_col.in_(sorted(diff.to_delete))),
                )
            if diff.to_insert:
                await self.db.execute(
                    insert(self._model),
                    [
                        {
                            "day_plan_id": day_plan_id,
                            self._table.entity_column: entity_id,
                            "user_id": user_id,
                        }
                        for entity_id in sorted(diff.to_insert)
                    ],
                )
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"Duplicate association rejected: {e}")
            raise ConcurrencyError(
                f"Day plan {day_plan_id} {self.kind.plural} written concurrently",
                self._context(day_plan_id),
            )
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise self._unavailable(e, "apply_diff", day_plan_id)

        logger.debug(
            f"Applied {self.kind.value} diff",
            extra={
                "day_plan_id": str(day_plan_id),
                "entity_kind": self.kind.value,
                **diff.summary,
            },
        )

    def _context(self, day_plan_id: DayPlanId | None) -> ErrorContext:
        return ErrorContext(
            day_plan_id=str(day_plan_id) if day_plan_id else None,
            entity_kind=self.kind.value,
        )

    def _unavailable(
        self, exc: Exception, operation: str, day_plan_id: DayPlanId | None,
    ) -> StoreUnavailableError:
        logger.error(
            f"Association store {operation} failed: {exc}",
            extra={"entity_kind": self.kind.value},
        )
        return StoreUnavailableError(
            "Association store unavailable", operation,
            self._context(day_plan_id),
        )
