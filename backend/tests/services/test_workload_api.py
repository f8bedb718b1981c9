"""Workload routes — my-chores for a member, admin-gated team overview."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4


async def _chore(client, household, name, **assign):
    chore = (await client.post(
        f"/api/v1/households/{household}/chores", json={"display_name": name},
    )).json()["id"]
    if assign:
        await client.post(f"/api/v1/households/{household}/chores/{chore}/assign", json=assign)
    return chore


async def _complete(client, household, chore, member, completed_at=None):
    body = {"member_id": member}
    if completed_at:
        body["completed_at"] = completed_at.isoformat()
    await client.post(f"/api/v1/households/{household}/chores/{chore}/complete", json=body)


async def test_my_chores_split_pending_and_completed(client, household, join):
    luna = await join(household, "Luna")
    await _chore(client, household, "Trash", member_ids=[luna])
    await _chore(client, household, "Dishes", assign_to_all=True)
    done = await _chore(client, household, "Plants", member_ids=[luna])
    await _chore(client, household, "Garage")
    await _complete(client, household, done, luna)

    res = await client.get(f"/api/v1/households/{household}/my-chores", params={"memberId": luna})

    assert res.status_code == 200
    body = res.json()
    assert [c["display_name"] for c in body["pending"]] == ["Dishes", "Trash"]
    assert [c["display_name"] for c in body["completed"]] == ["Plants"]


async def test_my_chores_completed_newest_first(client, household, join):
    luna = await join(household, "Luna")
    early = await _chore(client, household, "Early", member_ids=[luna])
    late = await _chore(client, household, "Late", member_ids=[luna])
    now = datetime.now(timezone.utc)
    await _complete(client, household, late, luna, now - timedelta(hours=1))
    await _complete(client, household, early, luna, now - timedelta(hours=5))

    res = await client.get(f"/api/v1/households/{household}/my-chores", params={"memberId": luna})
    assert [c["display_name"] for c in res.json()["completed"]] == ["Late", "Early"]


async def test_my_chores_unknown_member_is_404(client, household):
    res = await client.get(
        f"/api/v1/households/{household}/my-chores", params={"memberId": str(uuid4())},
    )
    assert res.status_code == 404


async def test_my_chores_requires_member_id(client, household):
    res = await client.get(f"/api/v1/households/{household}/my-chores")
    assert res.status_code == 400


async def test_team_overview_counts_per_member(client, household, join):
    luna = await join(household, "Luna")
    sol = await join(household, "Sol")
    dishes = await _chore(client, household, "Dishes", assign_to_all=True)
    await _chore(client, household, "Trash", member_ids=[sol])
    await _complete(client, household, dishes, sol)

    res = await client.get(f"/api/v1/households/{household}/team", headers={"X-Pin-Code": "1234"})

    assert res.status_code == 200
    members = res.json()["members"]
    assert [(m["nickname"], m["total_chores"], m["completed_count"]) for m in members] == [
        ("Sol", 2, 1), ("Luna", 1, 0),
    ]
    assert [c["status"] for c in members[0]["chores"]] == ["pending", "completed"]
    assert members[1]["member_id"] == luna


async def test_team_overview_pin_errors(client, household):
    url = f"/api/v1/households/{household}/team"
    assert (await client.get(url)).status_code == 401
    assert (await client.get(url, headers={"X-Pin-Code": "abc"})).status_code == 401
    assert (await client.get(url, headers={"X-Pin-Code": "9999"})).status_code == 403
    unknown = await client.get(
        f"/api/v1/households/{uuid4()}/team", headers={"X-Pin-Code": "1234"},
    )
    assert unknown.status_code == 403
