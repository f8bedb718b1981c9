"""Chore routes — add, assign, complete, delete, list, history."""

from uuid import uuid4


async def _add(client, household, name="Dishes"):
    res = await client.post(
        f"/api/v1/households/{household}/chores",
        json={"display_name": name, "description": "after dinner"},
    )
    assert res.status_code == 201
    return res.json()["id"]


async def test_empty_household_has_no_chores(client):
    res = await client.get(f"/api/v1/households/{uuid4()}/chores")
    assert res.status_code == 200
    assert res.json() == []


async def test_added_chores_listed_in_creation_order(client, household):
    await _add(client, household, "Dishes")
    await _add(client, household, "Laundry")
    res = await client.get(f"/api/v1/households/{household}/chores")
    assert [c["display_name"] for c in res.json()] == ["Dishes", "Laundry"]


async def test_last_assignment_wins(client, household):
    chore = await _add(client, household)
    a, b = str(uuid4()), str(uuid4())
    base = f"/api/v1/households/{household}/chores/{chore}/assign"
    await client.post(base, json={"member_ids": [a]})
    res = await client.post(base, json={"member_ids": [b]})
    assert res.json() == {"chore_id": chore, "assigned_to": [b], "assigned_to_all": False}

    [listed] = (await client.get(f"/api/v1/households/{household}/chores")).json()
    assert listed["assigned_to"] == [b]


async def test_assign_to_all(client, household):
    chore = await _add(client, household)
    await client.post(
        f"/api/v1/households/{household}/chores/{chore}/assign", json={"assign_to_all": True},
    )
    [listed] = (await client.get(f"/api/v1/households/{household}/chores")).json()
    assert listed["assigned_to_all"] is True


async def test_assign_to_all_ignores_member_ids(client, household):
    chore = await _add(client, household)
    res = await client.post(
        f"/api/v1/households/{household}/chores/{chore}/assign",
        json={"assign_to_all": True, "member_ids": [str(uuid4())]},
    )
    assert res.json() == {"chore_id": chore, "assigned_to": None, "assigned_to_all": True}

    [listed] = (await client.get(f"/api/v1/households/{household}/chores")).json()
    assert listed["assigned_to"] is None
    assert listed["assigned_to_all"] is True


async def test_complete_returns_receipt(client, household):
    chore = await _add(client, household)
    member = str(uuid4())
    res = await client.post(
        f"/api/v1/households/{household}/chores/{chore}/complete",
        json={"member_id": member, "completed_at": "2024-05-01T10:00:00Z"},
    )
    assert res.status_code == 200
    body = res.json()
    assert body["chore_id"] == chore
    assert body["completed_by"] == member
    assert body["completed_at"].startswith("2024-05-01T10:00:00")


async def test_complete_defaults_to_receipt_time(client, household):
    chore = await _add(client, household)
    res = await client.post(
        f"/api/v1/households/{household}/chores/{chore}/complete",
        json={"member_id": str(uuid4())},
    )
    assert res.status_code == 200
    assert res.json()["completed_at"]


async def test_history_is_newest_completed_at_first(client, household):
    chore = await _add(client, household)
    member = str(uuid4())
    url = f"/api/v1/households/{household}/chores/{chore}/complete"
    await client.post(url, json={"member_id": member, "completed_at": "2024-05-02T10:00:00Z"})
    await client.post(url, json={"member_id": member, "completed_at": "2024-05-01T10:00:00Z"})

    res = await client.get(f"/api/v1/households/{household}/chores/{chore}/history")
    stamps = [e["completed_at"][:10] for e in res.json()]
    assert stamps == ["2024-05-02", "2024-05-01"]

    [listed] = (await client.get(f"/api/v1/households/{household}/chores")).json()
    assert listed["last_completion"]["completed_at"].startswith("2024-05-02")


async def test_delete_with_admin_pin_hides_chore(client, household):
    chore = await _add(client, household)
    res = await client.post(
        f"/api/v1/households/{household}/chores/{chore}/delete", json={"pin_code": 1234},
    )
    assert res.status_code == 200
    assert (await client.get(f"/api/v1/households/{household}/chores")).json() == []


async def test_delete_twice_is_still_success(client, household):
    chore = await _add(client, household)
    url = f"/api/v1/households/{household}/chores/{chore}/delete"
    await client.post(url, json={"pin_code": 1234})
    res = await client.post(url, json={"pin_code": 1234})
    assert res.status_code == 200


async def test_delete_with_wrong_pin_is_403(client, household):
    chore = await _add(client, household)
    res = await client.post(
        f"/api/v1/households/{household}/chores/{chore}/delete", json={"pin_code": 9999},
    )
    assert res.status_code == 403
    assert len((await client.get(f"/api/v1/households/{household}/chores")).json()) == 1


async def test_delete_unknown_chore_is_404(client, household):
    res = await client.post(
        f"/api/v1/households/{household}/chores/{uuid4()}/delete", json={"pin_code": 1234},
    )
    assert res.status_code == 404
