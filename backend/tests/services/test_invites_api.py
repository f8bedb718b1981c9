"""Invite routes — generate supersedes, GET is 404 until the first invite."""


async def test_no_invite_yet_is_404(client, household):
    res = await client.get(f"/api/v1/households/{household}/invite")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_generate_returns_link_under_base_url(client, household):
    res = await client.post(f"/api/v1/households/{household}/invite")
    body = res.json()
    assert res.status_code == 200
    assert body["link"] == f"https://chores.test/join/{body['invite_id']}"


async def test_latest_invite_is_current(client, household):
    await client.post(f"/api/v1/households/{household}/invite")
    latest = (await client.post(f"/api/v1/households/{household}/invite")).json()
    current = (await client.get(f"/api/v1/households/{household}/invite")).json()
    assert current["invite_id"] == latest["invite_id"]
