"""Event Catalog — the closed set of immutable facts a household log can hold.

Invariants:
    - Every fact is a frozen dataclass; nothing mutates after construction
    - Every fact names the household it belongs to (broadcast routing)
    - occurred_at is informational only: "last wins" reducers use log position
    - DomainEvent is the closed union; EVENT_TYPES maps names to classes 1:1

Design Decisions:
    - Tagged union + match/case in reducers over subclass dispatch: reducers
      stay total and reviewable in one place
    - Tuples for id collections: facts stay hashable and immutable
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Union
from uuid import UUID

from chorehub.core.domain_types import utcnow


# ─── Household stream ────────────────────────────────────────────

@dataclass(frozen=True)
class HouseholdCreated:
    household_id: UUID
    name: str
    pin_credential: str
    occurred_at: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class InviteGenerated:
    household_id: UUID
    invite_id: UUID
    link: str
    occurred_at: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class MemberJoinedHousehold:
    member_id: UUID
    household_id: UUID
    nickname: str
    invite_id: UUID | None = None
    occurred_at: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class MemberNicknameChanged:
    member_id: UUID
    household_id: UUID
    old_nickname: str
    new_nickname: str
    occurred_at: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class MemberStatusChanged:
    member_id: UUID
    household_id: UUID
    status: str
    occurred_at: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class MemberRemoved:
    member_id: UUID
    household_id: UUID
    nickname: str
    removed_by: UUID | None = None
    occurred_at: datetime = field(default_factory=utcnow)


# ─── Chore stream ────────────────────────────────────────────────

@dataclass(frozen=True)
class ChoreCreated:
    chore_id: UUID
    household_id: UUID
    display_name: str
    description: str
    occurred_at: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class ChoreAssigned:
    chore_id: UUID
    household_id: UUID
    member_ids: tuple[UUID, ...] | None = None
    assign_to_all: bool = False
    assigned_by: UUID | None = None
    occurred_at: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class ChoreCompleted:
    chore_id: UUID
    household_id: UUID
    member_id: UUID
    completed_at: datetime
    occurred_at: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class ChoreDeleted:
    chore_id: UUID
    household_id: UUID
    deleted_by: UUID | None = None
    occurred_at: datetime = field(default_factory=utcnow)


DomainEvent = Union[
    HouseholdCreated,
    InviteGenerated,
    MemberJoinedHousehold,
    MemberNicknameChanged,
    MemberStatusChanged,
    MemberRemoved,
    ChoreCreated,
    ChoreAssigned,
    ChoreCompleted,
    ChoreDeleted,
]

EVENT_TYPES: dict[str, type] = {
    cls.__name__: cls
    for cls in (
        HouseholdCreated,
        InviteGenerated,
        MemberJoinedHousehold,
        MemberNicknameChanged,
        MemberStatusChanged,
        MemberRemoved,
        ChoreCreated,
        ChoreAssigned,
        ChoreCompleted,
        ChoreDeleted,
    )
}


def event_type_name(event: DomainEvent) -> str:
    return type(event).__name__


# ─── Envelope ────────────────────────────────────────────────────

@dataclass(frozen=True)
class RecordedEvent:
    """A fact as returned by the event store: positioned within its stream."""
    stream_key: str
    version: int  # 1-based, gapless within the stream
    event: DomainEvent
    recorded_at: datetime = field(default_factory=utcnow)


def unwrap(records: list[RecordedEvent]) -> list[DomainEvent]:
    """Strip envelopes, keeping append order."""
    return [record.event for record in records]
