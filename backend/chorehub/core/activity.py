"""Activity Rendering — turns both household streams into human-readable entries.

Invariants:
    - One ActivityItem per folded fact, so a full rebuild's entry count equals
      the number of facts replayed (before any size cap)
    - Household stream is replayed first to learn nicknames; chore names come
      from the FIRST ChoreCreated per chore id
    - Completion entries are stamped with completed_at; all others with occurred_at
    - Unknown members render as "Someone", unknown chores as "a chore"
    - Output is newest first; equal timestamps keep replay order
    - filter_activities applies the day window before the count cap
    - render_appended produces the same entry a rebuild would, except that
      chore-stream entries use nicknames as of the append

Design Decisions:
    - Pure rendering here; persistence and locking live in the read model service
    - TypeAdapter for the stored JSON form, mirroring the event codec
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Iterable
from uuid import UUID

from pydantic import TypeAdapter

from chorehub.core.domain_types import ActivityType, utcnow
from chorehub.core.events import (
    ChoreAssigned,
    ChoreCompleted,
    ChoreCreated,
    ChoreDeleted,
    DomainEvent,
    HouseholdCreated,
    InviteGenerated,
    MemberJoinedHousehold,
    MemberNicknameChanged,
    MemberRemoved,
    MemberStatusChanged,
)

UNKNOWN_MEMBER = "Someone"
UNKNOWN_CHORE = "a chore"


@dataclass(frozen=True)
class ActivityItem:
    type: ActivityType
    timestamp: datetime
    text: str
    chore_id: UUID | None = None
    chore_name: str | None = None
    actor_id: UUID | None = None
    actor_nickname: str | None = None


@dataclass(frozen=True)
class ActivityView:
    """A materialized activity list as published by one rebuild."""
    household_id: UUID
    items: tuple[ActivityItem, ...]
    positions: dict[str, int] = field(default_factory=dict)
    rebuilt_at: datetime = field(default_factory=utcnow)


_ITEMS_ADAPTER = TypeAdapter(tuple[ActivityItem, ...])


def items_to_json(items: Iterable[ActivityItem]) -> list[dict]:
    return _ITEMS_ADAPTER.dump_python(tuple(items), mode="json")


def items_from_json(data: list[dict]) -> tuple[ActivityItem, ...]:
    return _ITEMS_ADAPTER.validate_python(data)


# ─── Rendering ───────────────────────────────────────────────────

def _render_household_event(
    event: DomainEvent, nicknames: dict[UUID, str],
) -> ActivityItem | None:
    match event:
        case HouseholdCreated():
            return ActivityItem(
                ActivityType.HOUSEHOLD_CREATED, event.occurred_at,
                f"{event.name} was created",
            )
        case InviteGenerated():
            return ActivityItem(
                ActivityType.INVITE_GENERATED, event.occurred_at,
                "A new invite link was generated",
            )
        case MemberJoinedHousehold():
            nicknames[event.member_id] = event.nickname
            return ActivityItem(
                ActivityType.MEMBER_JOINED, event.occurred_at,
                f"{event.nickname} joined the household",
                actor_id=event.member_id, actor_nickname=event.nickname,
            )
        case MemberNicknameChanged():
            old = nicknames.get(event.member_id, UNKNOWN_MEMBER)
            nicknames[event.member_id] = event.new_nickname
            return ActivityItem(
                ActivityType.NICKNAME_CHANGED, event.occurred_at,
                f"{old} is now {event.new_nickname}",
                actor_id=event.member_id, actor_nickname=event.new_nickname,
            )
        case MemberStatusChanged():
            name = nicknames.get(event.member_id, UNKNOWN_MEMBER)
            return ActivityItem(
                ActivityType.STATUS_CHANGED, event.occurred_at,
                f"{name}: {event.status}",
                actor_id=event.member_id, actor_nickname=name,
            )
        case MemberRemoved():
            return ActivityItem(
                ActivityType.MEMBER_REMOVED, event.occurred_at,
                f"{event.nickname} left the household",
                actor_id=event.removed_by,
                actor_nickname=nicknames.get(event.removed_by) if event.removed_by else None,
            )
        case _:
            return None


def _assignment_text(
    event: ChoreAssigned, chore_name: str, nicknames: dict[UUID, str],
) -> str:
    member_ids = event.member_ids or ()
    claimed = (
        not event.assign_to_all
        and len(member_ids) == 1
        and event.assigned_by is not None
        and member_ids[0] == event.assigned_by
    )
    if claimed:
        return f"{nicknames.get(event.assigned_by, UNKNOWN_MEMBER)} claimed {chore_name}"
    if event.assign_to_all:
        return f"{chore_name} assigned to everyone"
    if not member_ids:
        return f"{chore_name} was unassigned"
    names = ", ".join(nicknames.get(m, UNKNOWN_MEMBER) for m in member_ids)
    return f"{chore_name} assigned to {names}"


def _render_chore_event(
    event: DomainEvent, nicknames: dict[UUID, str], chore_names: dict[UUID, str],
) -> ActivityItem | None:
    match event:
        case ChoreCreated():
            return ActivityItem(
                ActivityType.CHORE_CREATED, event.occurred_at,
                f"New chore: {event.display_name}",
                chore_id=event.chore_id, chore_name=event.display_name,
            )
        case ChoreAssigned():
            chore_name = chore_names.get(event.chore_id, UNKNOWN_CHORE)
            assigner = (
                nicknames.get(event.assigned_by, UNKNOWN_MEMBER)
                if event.assigned_by else None
            )
            return ActivityItem(
                ActivityType.CHORE_ASSIGNED, event.occurred_at,
                _assignment_text(event, chore_name, nicknames),
                chore_id=event.chore_id, chore_name=chore_name,
                actor_id=event.assigned_by, actor_nickname=assigner,
            )
        case ChoreCompleted():
            chore_name = chore_names.get(event.chore_id, UNKNOWN_CHORE)
            name = nicknames.get(event.member_id, UNKNOWN_MEMBER)
            return ActivityItem(
                ActivityType.COMPLETION, event.completed_at,
                f"{name} completed {chore_name}",
                chore_id=event.chore_id, chore_name=chore_name,
                actor_id=event.member_id, actor_nickname=name,
            )
        case ChoreDeleted():
            chore_name = chore_names.get(event.chore_id, UNKNOWN_CHORE)
            name = (
                nicknames.get(event.deleted_by, UNKNOWN_MEMBER)
                if event.deleted_by else UNKNOWN_MEMBER
            )
            return ActivityItem(
                ActivityType.CHORE_DELETED, event.occurred_at,
                f"{name} deleted {chore_name}",
                chore_id=event.chore_id, chore_name=chore_name,
                actor_id=event.deleted_by, actor_nickname=name,
            )
        case _:
            return None


def _first_chore_names(chore_events: Iterable[DomainEvent]) -> dict[UUID, str]:
    chore_names: dict[UUID, str] = {}
    for event in chore_events:
        if isinstance(event, ChoreCreated):
            chore_names.setdefault(event.chore_id, event.display_name)
    return chore_names


def render_appended(
    event: DomainEvent,
    prior_household_events: Iterable[DomainEvent],
    chore_events: Iterable[DomainEvent],
) -> ActivityItem | None:
    """Render one freshly appended fact.

    prior_household_events are the household facts before this one; names
    are resolved as they stood when the fact was recorded.
    """
    nicknames: dict[UUID, str] = {}
    for prior in prior_household_events:
        _render_household_event(prior, nicknames)
    item = _render_household_event(event, nicknames)
    if item is not None:
        return item
    return _render_chore_event(event, nicknames, _first_chore_names(chore_events))


def insert_newest_first(
    items: Iterable[ActivityItem], item: ActivityItem, max_items: int,
) -> tuple[ActivityItem, ...]:
    """Place item by timestamp among newest-first items, then cap."""
    merged = sorted([item, *items], key=lambda a: a.timestamp, reverse=True)
    return tuple(merged[:max_items])


def render_activities(
    household_events: Iterable[DomainEvent], chore_events: Iterable[DomainEvent],
) -> list[ActivityItem]:
    """Render every fact of both streams, newest first."""
    chore_events = list(chore_events)
    chore_names = _first_chore_names(chore_events)

    nicknames: dict[UUID, str] = {}
    items: list[ActivityItem] = []
    for event in household_events:
        item = _render_household_event(event, nicknames)
        if item is not None:
            items.append(item)
    for event in chore_events:
        item = _render_chore_event(event, nicknames, chore_names)
        if item is not None:
            items.append(item)

    return sorted(items, key=lambda a: a.timestamp, reverse=True)


def filter_activities(
    items: Iterable[ActivityItem],
    *,
    now: datetime,
    days: int | None = None,
    limit: int | None = None,
) -> list[ActivityItem]:
    """Window to the last `days` days, then cap to `limit`. Input is newest first."""
    selected = list(items)
    if days is not None:
        cutoff = now - timedelta(days=days)
        selected = [a for a in selected if a.timestamp >= cutoff]
    if limit is not None:
        selected = selected[:limit]
    return selected
