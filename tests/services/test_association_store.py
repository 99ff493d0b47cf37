"""SQL Association Store — snapshot, reverse lookup and atomic versioned diffs.

Invariants:
    - apply_diff bumps the per-kind version exactly once per applied diff
    - A stale expected_version raises ConcurrencyError and changes nothing
    - Item and outfit versions are independent
    - list_by_entity never returns another user's day plans
"""

from datetime import date
from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError

from wardrobe_calendar.core.domain_types import EntityKind
from wardrobe_calendar.core.errors import ConcurrencyError, StoreUnavailableError
from wardrobe_calendar.core.set_reconciler import reconcile
from wardrobe_calendar.models.day_plan import DayPlan
from wardrobe_calendar.services.association_store import SqlAssociationStore


async def test_snapshot_of_fresh_plan_is_empty_version_zero(test_db, seed_day_plan):
    store = SqlAssociationStore(test_db, EntityKind.ITEM)
    snapshot = await store.snapshot(seed_day_plan.id)
    assert snapshot.entity_ids == frozenset()
    assert snapshot.version == 0


async def test_apply_diff_inserts_and_bumps_version(test_db, seed_day_plan, owner_id):
    store = SqlAssociationStore(test_db, EntityKind.ITEM)
    item_a, item_b = uuid4(), uuid4()

    await store.apply_diff(
        seed_day_plan.id, owner_id, reconcile(set(), {item_a, item_b}), 0,
    )

    snapshot = await store.snapshot(seed_day_plan.id)
    assert snapshot.entity_ids == {item_a, item_b}
    assert snapshot.version == 1


async def test_apply_diff_deletes_only_listed_ids(test_db, seed_day_plan, owner_id):
    store = SqlAssociationStore(test_db, EntityKind.OUTFIT)
    keep, drop = uuid4(), uuid4()
    await store.apply_diff(seed_day_plan.id, owner_id, reconcile(set(), {keep, drop}), 0)

    await store.apply_diff(seed_day_plan.id, owner_id, reconcile({keep, drop}, {keep}), 1)

    assert await store.list_by_day_plan(seed_day_plan.id) == {keep}


async def test_stale_version_raises_conflict_and_changes_nothing(
    test_db, seed_day_plan, owner_id,
):
    store = SqlAssociationStore(test_db, EntityKind.ITEM)
    first, second = uuid4(), uuid4()
    stale = await store.snapshot(seed_day_plan.id)

    await store.apply_diff(
        seed_day_plan.id, owner_id, reconcile(stale.entity_ids, {first}), stale.version,
    )
    with pytest.raises(ConcurrencyError):
        await store.apply_diff(
            seed_day_plan.id, owner_id,
            reconcile(stale.entity_ids, {second}), stale.version,
        )

    snapshot = await store.snapshot(seed_day_plan.id)
    assert snapshot.entity_ids == {first}
    assert snapshot.version == 1


async def test_apply_diff_on_missing_plan_is_conflict(test_db, owner_id):
    store = SqlAssociationStore(test_db, EntityKind.ITEM)
    with pytest.raises(ConcurrencyError):
        await store.apply_diff(uuid4(), owner_id, reconcile(set(), {uuid4()}), 0)


async def test_item_and_outfit_versions_are_independent(
    test_db, seed_day_plan, owner_id,
):
    items = SqlAssociationStore(test_db, EntityKind.ITEM)
    outfits = SqlAssociationStore(test_db, EntityKind.OUTFIT)

    await items.apply_diff(seed_day_plan.id, owner_id, reconcile(set(), {uuid4()}), 0)
    await outfits.apply_diff(seed_day_plan.id, owner_id, reconcile(set(), {uuid4()}), 0)

    assert (await items.snapshot(seed_day_plan.id)).version == 1
    assert (await outfits.snapshot(seed_day_plan.id)).version == 1


async def test_list_by_entity_is_scoped_to_user(
    test_db, seed_day_plan, owner_id, stranger_id,
):
    stranger_plan = DayPlan(user_id=stranger_id, plan_date=date(2026, 10, 19))
    test_db.add(stranger_plan)
    await test_db.commit()
    await test_db.refresh(stranger_plan)
    store = SqlAssociationStore(test_db, EntityKind.OUTFIT)
    outfit = uuid4()

    await store.apply_diff(seed_day_plan.id, owner_id, reconcile(set(), {outfit}), 0)
    await store.apply_diff(stranger_plan.id, stranger_id, reconcile(set(), {outfit}), 0)

    assert await store.list_by_entity(outfit, owner_id) == {seed_day_plan.id}
    assert await store.list_by_entity(outfit, stranger_id) == {stranger_plan.id}


async def test_driver_failure_maps_to_store_unavailable(
    test_db, seed_day_plan, monkeypatch,
):
    async def _boom(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("connection refused"))

    monkeypatch.setattr(test_db, "scalar", _boom)
    store = SqlAssociationStore(test_db, EntityKind.ITEM)

    with pytest.raises(StoreUnavailableError) as exc_info:
        await store.snapshot(seed_day_plan.id)
    assert exc_info.value.context.entity_kind == "item"
