"""Infrastructure fixtures — SQL stores on in-memory SQLite (aiosqlite).

Invariants:
    - Every test gets a fresh database with tables created from Base.metadata
    - event_store is parametrized so both backends run the same contract tests
"""

import pytest

from chorehub.infrastructure.database import DatabaseSessionManager
from chorehub.infrastructure.memory_event_store import InMemoryEventStore
from chorehub.infrastructure.sql_event_store import SqlEventStore


@pytest.fixture
async def sql_db():
    db = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture(params=["memory", "sql"])
async def event_store(request, sql_db):
    if request.param == "memory":
        return InMemoryEventStore()
    return SqlEventStore(sql_db, any_append_retries=3)
