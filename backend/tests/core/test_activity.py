"""Activity rendering — one entry per fact, newest first, readable texts."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

from chorehub.core.activity import (
    ActivityItem, filter_activities, insert_newest_first, items_from_json, items_to_json,
    render_activities, render_appended,
)
from chorehub.core.domain_types import ActivityType
from chorehub.core.events import (
    ChoreAssigned, ChoreCompleted, ChoreCreated, ChoreDeleted, HouseholdCreated,
    InviteGenerated, MemberJoinedHousehold, MemberNicknameChanged, MemberRemoved,
    MemberStatusChanged,
)

H = uuid4()
T0 = datetime(2024, 3, 1, 8, 0, tzinfo=timezone.utc)


def _at(minutes: int) -> datetime:
    return T0 + timedelta(minutes=minutes)


def _texts(household, chores):
    return [item.text for item in render_activities(household, chores)]


def test_one_entry_per_fact():
    luna, dishes = uuid4(), uuid4()
    household = [
        HouseholdCreated(H, "Smiths", "x", occurred_at=_at(0)),
        InviteGenerated(H, uuid4(), "link", occurred_at=_at(1)),
        MemberJoinedHousehold(luna, H, "Luna", occurred_at=_at(2)),
    ]
    chores = [
        ChoreCreated(dishes, H, "Dishes", "", occurred_at=_at(3)),
        ChoreCompleted(dishes, H, luna, _at(4), occurred_at=_at(4)),
    ]
    assert len(render_activities(household, chores)) == 5


def test_newest_first():
    luna, dishes = uuid4(), uuid4()
    household = [MemberJoinedHousehold(luna, H, "Luna", occurred_at=_at(0))]
    chores = [
        ChoreCreated(dishes, H, "Dishes", "", occurred_at=_at(1)),
        ChoreCompleted(dishes, H, luna, _at(5), occurred_at=_at(2)),
    ]
    assert _texts(household, chores) == [
        "Luna completed Dishes",
        "New chore: Dishes",
        "Luna joined the household",
    ]


def test_completion_uses_completed_at_timestamp():
    dishes, luna = uuid4(), uuid4()
    completed_at = _at(-600)
    [item] = render_activities([], [ChoreCompleted(dishes, H, luna, completed_at)])
    assert item.timestamp == completed_at
    assert item.type is ActivityType.COMPLETION


def test_member_texts_use_current_nicknames():
    luna = uuid4()
    household = [
        MemberJoinedHousehold(luna, H, "Luna", occurred_at=_at(0)),
        MemberNicknameChanged(luna, H, "Luna", "Lu", occurred_at=_at(1)),
        MemberStatusChanged(luna, H, "on holiday", occurred_at=_at(2)),
        MemberRemoved(luna, H, "Lu", occurred_at=_at(3)),
    ]
    assert _texts(household, []) == [
        "Lu left the household",
        "Lu: on holiday",
        "Luna is now Lu",
        "Luna joined the household",
    ]


def test_assignment_texts():
    luna, max_, dishes = uuid4(), uuid4(), uuid4()
    household = [
        MemberJoinedHousehold(luna, H, "Luna", occurred_at=_at(0)),
        MemberJoinedHousehold(max_, H, "Max", occurred_at=_at(0)),
    ]
    chores = [
        ChoreCreated(dishes, H, "Dishes", "", occurred_at=_at(1)),
        ChoreAssigned(dishes, H, None, True, occurred_at=_at(2)),
        ChoreAssigned(dishes, H, (luna,), False, luna, occurred_at=_at(3)),
        ChoreAssigned(dishes, H, (luna, max_), False, luna, occurred_at=_at(4)),
        ChoreAssigned(dishes, H, (), False, occurred_at=_at(5)),
    ]
    texts = _texts(household, chores)
    assert texts[:4] == [
        "Dishes was unassigned",
        "Dishes assigned to Luna, Max",
        "Luna claimed Dishes",
        "Dishes assigned to everyone",
    ]


def test_unknown_names_fall_back():
    [item] = render_activities([], [ChoreCompleted(uuid4(), H, uuid4(), T0)])
    assert item.text == "Someone completed a chore"


def test_chore_name_comes_from_first_creation():
    dishes = uuid4()
    chores = [
        ChoreCreated(dishes, H, "Dishes", "", occurred_at=_at(0)),
        ChoreCreated(dishes, H, "Plates", "", occurred_at=_at(1)),
        ChoreDeleted(dishes, H, occurred_at=_at(2)),
    ]
    assert _texts([], chores)[0] == "Someone deleted Dishes"


def test_filter_by_days_then_limit():
    now = _at(0)
    items = [
        ActivityItem(ActivityType.CHORE_CREATED, now - timedelta(days=d), f"d{d}")
        for d in (0, 1, 2, 10)
    ]
    assert [i.text for i in filter_activities(items, now=now, days=3)] == ["d0", "d1", "d2"]
    assert [i.text for i in filter_activities(items, now=now, days=3, limit=2)] == ["d0", "d1"]
    assert len(filter_activities(items, now=now)) == 4


def test_items_json_round_trip_restores_enum_and_ids():
    item = ActivityItem(
        ActivityType.COMPLETION, T0, "Luna completed Dishes",
        chore_id=uuid4(), chore_name="Dishes", actor_id=uuid4(), actor_nickname="Luna",
    )
    [restored] = items_from_json(items_to_json([item]))
    assert restored == item


def test_appended_nickname_change_uses_previous_name():
    luna = uuid4()
    prior = [MemberJoinedHousehold(luna, H, "Luna", occurred_at=_at(0))]
    item = render_appended(
        MemberNicknameChanged(luna, H, "Luna", "Moon", occurred_at=_at(1)), prior, [],
    )
    assert item.text == "Luna is now Moon"


def test_appended_completion_resolves_names():
    luna, dishes = uuid4(), uuid4()
    household = [MemberJoinedHousehold(luna, H, "Luna", occurred_at=_at(0))]
    chores = [ChoreCreated(dishes, H, "Dishes", "", occurred_at=_at(1))]
    event = ChoreCompleted(dishes, H, luna, _at(2), occurred_at=_at(3))
    item = render_appended(event, household, [*chores, event])
    assert item.text == "Luna completed Dishes"
    assert item.timestamp == _at(2)


def test_insert_places_backdated_entry_and_caps():
    items = tuple(
        ActivityItem(ActivityType.CHORE_CREATED, _at(m), f"c{m}") for m in (30, 20, 10)
    )
    backdated = ActivityItem(ActivityType.COMPLETION, _at(15), "done")
    assert [a.text for a in insert_newest_first(items, backdated, 3)] == ["c30", "c20", "done"]
