"""Day Plan Routes — upsert, list, by-date, get and delete over HTTP."""

from uuid import uuid4


async def _upsert(client, headers, **body):
    resp = await client.put("/api/v1/day-plans", json=body, headers=headers)
    assert resp.status_code == 200, resp.text
    return resp.json()


async def test_upsert_creates_and_updates(client, owner_headers, owner_id):
    item = str(uuid4())
    created = await _upsert(
        client, owner_headers,
        date="2026-11-02", notes="  Dinner  ", item_ids=[item],
    )

    assert created["user_id"] == str(owner_id)
    assert created["date"] == "2026-11-02"
    assert created["notes"] == "Dinner"
    assert created["item_ids"] == [item]
    assert created["outfit_ids"] == []

    updated = await _upsert(
        client, owner_headers, date="2026-11-02", notes="   ",
    )
    assert updated["id"] == created["id"]
    assert updated["notes"] is None
    assert updated["item_ids"] == [item]


async def test_upsert_empty_list_clears(client, owner_headers):
    await _upsert(
        client, owner_headers, date="2026-11-02", outfit_ids=[str(uuid4())],
    )

    plan = await _upsert(client, owner_headers, date="2026-11-02", outfit_ids=[])

    assert plan["outfit_ids"] == []


async def test_upsert_invalid_date_400(client, owner_headers):
    resp = await client.put(
        "/api/v1/day-plans", json={"date": "not-a-date"}, headers=owner_headers,
    )

    assert resp.status_code == 400


async def test_list_with_range(client, owner_headers, stranger_headers):
    for day in ("2026-11-01", "2026-11-03", "2026-11-05"):
        await _upsert(client, owner_headers, date=day)
    await _upsert(client, stranger_headers, date="2026-11-03")

    resp = await client.get(
        "/api/v1/day-plans",
        params={"start": "2026-11-02", "end": "2026-11-05"},
        headers=owner_headers,
    )

    assert resp.status_code == 200
    dates = [p["date"] for p in resp.json()["day_plans"]]
    assert dates == ["2026-11-03", "2026-11-05"]


async def test_list_start_after_end_400(client, owner_headers):
    resp = await client.get(
        "/api/v1/day-plans",
        params={"start": "2026-11-05", "end": "2026-11-01"},
        headers=owner_headers,
    )

    assert resp.status_code == 400


async def test_get_by_date(client, seed_day_plan, owner_headers, stranger_headers):
    resp = await client.get(
        "/api/v1/day-plans/by-date/2026-10-19", headers=owner_headers,
    )
    assert resp.status_code == 200
    assert resp.json()["id"] == str(seed_day_plan.id)

    resp = await client.get(
        "/api/v1/day-plans/by-date/2026-10-19", headers=stranger_headers,
    )
    assert resp.status_code == 404


async def test_get_by_id(client, seed_day_plan, owner_headers, stranger_headers):
    resp = await client.get(
        f"/api/v1/day-plans/{seed_day_plan.id}", headers=owner_headers,
    )
    assert resp.status_code == 200
    assert resp.json()["item_ids"] == []

    resp = await client.get(
        f"/api/v1/day-plans/{seed_day_plan.id}", headers=stranger_headers,
    )
    assert resp.status_code == 404


async def test_delete(client, owner_headers, stranger_headers):
    plan = await _upsert(
        client, owner_headers, date="2026-11-02",
        item_ids=[str(uuid4())], outfit_ids=[str(uuid4())],
    )
    url = f"/api/v1/day-plans/{plan['id']}"

    assert (await client.delete(url, headers=stranger_headers)).status_code == 404

    resp = await client.delete(url, headers=owner_headers)
    assert resp.status_code == 200
    assert resp.json() == {"success": True}

    assert (await client.get(url, headers=owner_headers)).status_code == 404


async def test_day_plans_require_user_header(client):
    resp = await client.get("/api/v1/day-plans")

    assert resp.status_code == 401


async def test_delete_by_date(client, owner_headers, stranger_headers):
    plan = await _upsert(
        client, owner_headers, date="2026-11-02", item_ids=[str(uuid4())],
    )
    url = "/api/v1/day-plans/by-date/2026-11-02"

    assert (await client.delete(url, headers=stranger_headers)).status_code == 404

    resp = await client.delete(url, headers=owner_headers)
    assert resp.status_code == 200
    assert resp.json() == {"success": True}

    assert (await client.get(url, headers=owner_headers)).status_code == 404
    resp = await client.get(
        f"/api/v1/day-plans/{plan['id']}/items", headers=owner_headers,
    )
    assert resp.status_code == 404


async def test_delete_by_date_without_plan_404(client, owner_headers):
    resp = await client.delete(
        "/api/v1/day-plans/by-date/2030-01-01", headers=owner_headers,
    )

    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "RESOURCE_NOT_FOUND"
