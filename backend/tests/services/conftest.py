"""Service test fixtures — in-memory services + FastAPI test client.

Invariants:
    - Every test gets fresh services (empty in-memory event store)
    - Services are injected into create_app, so no lifespan is needed for
      httpx's ASGITransport
    - Pin hashing uses the cheapest Argon2 costs

Design Decisions:
    - Memory backend for route tests; the SQL backend is covered by the
      infrastructure contract tests
"""

import pytest
from httpx import ASGITransport, AsyncClient

from chorehub.config import Settings
from chorehub.main import create_app
from chorehub.services.composition import build_services


@pytest.fixture
def settings() -> Settings:
    return Settings(
        event_store_backend="memory",
        pin_hash_time_cost=1,
        pin_hash_memory_cost=8,
        invite_base_url="https://chores.test/join",
        activity_max_items=50,
        log_format="text",
    )


@pytest.fixture
def services(settings):
    return build_services(settings)


@pytest.fixture
def app(settings, services):
    return create_app(settings, services)


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
async def household(client):
    """A created household "Smiths" with pin 1234."""
    res = await client.post("/api/v1/households", json={"name": "Smiths", "pin_code": 1234})
    assert res.status_code == 201
    return res.json()["id"]


@pytest.fixture
async def join(client):
    """Join a member through a fresh invite; returns the member id."""
    async def _join(household_id: str, nickname: str) -> str:
        invite = (await client.post(f"/api/v1/households/{household_id}/invite")).json()
        res = await client.post(
            f"/api/v1/households/{household_id}/join",
            json={"invite_id": invite["invite_id"], "nickname": nickname},
        )
        assert res.status_code == 200
        return res.json()["member_id"]
    return _join
