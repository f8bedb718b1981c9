"""Activity repositories — whole-view replace, None before the first build."""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from chorehub.core.activity import ActivityItem, ActivityView
from chorehub.core.domain_types import ActivityType
from chorehub.infrastructure.activity_store import (
    InMemoryActivityRepository, SqlActivityRepository,
)

T0 = datetime(2024, 3, 1, 8, 0, tzinfo=timezone.utc)


@pytest.fixture(params=["memory", "sql"])
def repository(request, sql_db):
    if request.param == "memory":
        return InMemoryActivityRepository()
    return SqlActivityRepository(sql_db)


def _view(household_id, *texts):
    return ActivityView(
        household_id=household_id,
        items=tuple(ActivityItem(ActivityType.CHORE_CREATED, T0, t) for t in texts),
        positions={"chores-x": len(texts)},
        rebuilt_at=T0,
    )


async def test_get_before_build_is_none(repository):
    assert await repository.get(uuid4()) is None


async def test_replace_then_get(repository):
    hid = uuid4()
    await repository.replace(_view(hid, "a", "b"))
    view = await repository.get(hid)
    assert [i.text for i in view.items] == ["a", "b"]
    assert view.positions == {"chores-x": 2}
    assert view.rebuilt_at == T0


async def test_replace_overwrites_whole_view(repository):
    hid = uuid4()
    await repository.replace(_view(hid, "a", "b", "c"))
    await repository.replace(_view(hid, "z"))
    assert [i.text for i in (await repository.get(hid)).items] == ["z"]


async def test_households_are_isolated(repository):
    h1, h2 = uuid4(), uuid4()
    await repository.replace(_view(h1, "a"))
    assert await repository.get(h2) is None
