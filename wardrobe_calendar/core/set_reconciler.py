"""Set Reconciler — minimal insert/delete diff between a current and desired id set.

Invariants:
    - reconcile is PURE: no persistence, no users, no IO
    - to_insert = desired - current, to_delete = current - desired
    - Ids present in both sets appear in neither half of the diff
    - apply_diff(current, reconcile(current, desired)) == desired
    - reconcile(s, s) is empty for every s

Design Decisions:
    - One reconciler shared by items and outfits: the entity kind only matters
      to the store, never to the set algebra
    - Identity is exact id equality; duplicate ids in the input collapse
"""

from dataclasses import dataclass, field
from typing import Iterable

from wardrobe_calendar.core.domain_types import EntityId


@dataclass(frozen=True)
class ReconciliationDiff:
    """Rows to insert and delete to turn the current set into the desired one."""
    to_insert: frozenset[EntityId] = field(default_factory=frozenset)
    to_delete: frozenset[EntityId] = field(default_factory=frozenset)

    @property
    def is_empty(self) -> bool:
        return not self.to_insert and not self.to_delete

    @property
    def summary(self) -> dict[str, int]:
        return {
            "inserts": len(self.to_insert),
            "deletes": len(self.to_delete),
        }


def reconcile(
    current: Iterable[EntityId], desired: Iterable[EntityId],
) -> ReconciliationDiff:
    """Compute the minimal diff from current to desired."""
    current_set = frozenset(current)
    desired_set = frozenset(desired)
    return ReconciliationDiff(
        to_insert=desired_set - current_set,
        to_delete=current_set - desired_set,
    )


def reconcile_add(
    current: Iterable[EntityId], entity_id: EntityId,
) -> ReconciliationDiff:
    """Diff for adding a single id. Empty when already present."""
    current_set = frozenset(current)
    return reconcile(current_set, current_set | {entity_id})


def reconcile_remove(
    current: Iterable[EntityId], entity_id: EntityId,
) -> ReconciliationDiff:
    """Diff for removing a single id. Empty when absent."""
    current_set = frozenset(current)
    return reconcile(current_set, current_set - {entity_id})


def apply_diff(
    current: Iterable[EntityId], diff: ReconciliationDiff,
) -> frozenset[EntityId]:
    """Set the store would hold after applying diff to current."""
    return (frozenset(current) - diff.to_delete) | diff.to_insert
