"""DatabaseSessionManager — pool choice per URL and file-backed SQLite."""

import pytest
from sqlalchemy.pool import StaticPool

from chorehub.infrastructure.database import DatabaseSessionManager, is_memory_sqlite


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("sqlite+aiosqlite:///:memory:", True),
        ("sqlite+aiosqlite://", True),
        ("sqlite+aiosqlite:///file:chores?mode=memory&cache=shared&uri=true", True),
        ("sqlite+aiosqlite:///./chorehub.db", False),
        ("postgresql+asyncpg://u:p@localhost/chorehub", False),
    ],
)
def test_is_memory_sqlite(url, expected):
    assert is_memory_sqlite(url) is expected


async def test_memory_sqlite_shares_one_connection():
    db = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    assert isinstance(db.engine.pool, StaticPool)
    await db.dispose()


async def test_file_sqlite_uses_a_regular_pool(tmp_path):
    db = DatabaseSessionManager(f"sqlite+aiosqlite:///{tmp_path / 'chores.db'}")
    assert not isinstance(db.engine.pool, StaticPool)

    await db.create_all()
    assert await db.health_check()
    await db.dispose()
