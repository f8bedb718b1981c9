"""Household routes — creation, pin access and the "Unknown" name contract."""

from uuid import UUID, uuid4

import pytest

from chorehub.core.errors import UnauthorizedError
from chorehub.services import handle_household


async def test_access_with_correct_pin_returns_name(client, household):
    res = await client.post(f"/api/v1/households/{household}/access", json={"pin_code": 1234})
    assert res.status_code == 200
    assert res.json() == {"success": True, "name": "Smiths"}


async def test_access_with_wrong_pin_is_401_without_name(client, household):
    res = await client.post(f"/api/v1/households/{household}/access", json={"pin_code": 4321})
    assert res.status_code == 401
    assert "Smiths" not in res.text
    assert res.json()["error"]["code"] == "UNAUTHORIZED"


async def test_unknown_household_access_looks_like_wrong_pin(client, household):
    wrong_pin = await client.post(
        f"/api/v1/households/{household}/access", json={"pin_code": 4321},
    )
    unknown = await client.post(f"/api/v1/households/{uuid4()}/access", json={"pin_code": 1234})
    assert unknown.status_code == wrong_pin.status_code == 401
    strip = lambda body: {k: v for k, v in body["error"].items() if k != "timestamp"}  # noqa: E731
    assert strip(unknown.json()) == strip(wrong_pin.json())


async def test_get_name(client, household):
    res = await client.get(f"/api/v1/households/{household}")
    assert res.json()["name"] == "Smiths"


async def test_unknown_household_name_is_unknown(client):
    res = await client.get(f"/api/v1/households/{uuid4()}")
    assert res.status_code == 200
    assert res.json()["name"] == "Unknown"


async def test_duplicate_creation_conflicts_and_keeps_original(client):
    hid = str(uuid4())
    first = await client.post(
        "/api/v1/households", json={"name": "Smiths", "pin_code": 1234, "household_id": hid},
    )
    second = await client.post(
        "/api/v1/households", json={"name": "Joneses", "pin_code": 1, "household_id": hid},
    )
    assert first.status_code == 201
    assert second.status_code == 409
    assert second.json()["error"]["code"] == "CONCURRENCY_CONFLICT"
    assert (await client.get(f"/api/v1/households/{hid}")).json()["name"] == "Smiths"


async def test_invalid_create_payload_is_400(client):
    res = await client.post("/api/v1/households", json={"name": "   ", "pin_code": 1234})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_negative_pin_rejected(client):
    res = await client.post("/api/v1/households", json={"name": "Smiths", "pin_code": -1})
    assert res.status_code == 400


@pytest.fixture
def counted_verifications(monkeypatch):
    credentials = []
    real_verify = handle_household.verify_pin

    def counting_verify(pin_code, credential, params):
        credentials.append(credential)
        return real_verify(pin_code, credential, params)

    monkeypatch.setattr(handle_household, "verify_pin", counting_verify)
    return credentials


async def test_unknown_household_runs_same_pin_hashing(services, household, counted_verifications):
    with pytest.raises(UnauthorizedError):
        await services.households.access(UUID(household), 4321)
    with pytest.raises(UnauthorizedError):
        await services.households.access(uuid4(), 4321)

    assert len(counted_verifications) == 2
    assert counted_verifications[1] == handle_household.decoy_credential(
        services.households.pin_params,
    )


async def test_admin_commands_hash_for_unknown_household(client, counted_verifications):
    res = await client.post(
        f"/api/v1/households/{uuid4()}/chores/{uuid4()}/delete", json={"pin_code": 1234},
    )
    assert res.status_code == 403
    assert len(counted_verifications) == 1
