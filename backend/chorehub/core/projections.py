"""Projection Engine — pure left folds from an ordered fact sequence to read views.

Invariants:
    - fold(events, initial, reducer) is deterministic and side-effect free;
      replaying the same prefix always yields the same intermediate state
    - Reducer states are immutable; each step returns a new state
    - Household identity: FIRST HouseholdCreated wins
    - Chore display fields: FIRST ChoreCreated per chore id wins
    - Chore assignment: LAST ChoreAssigned per chore id by log position
    - Invite: LAST InviteGenerated by log position
    - Roster: join inserts, nickname/status update only present members
      (silent no-op otherwise), removal deletes for good
    - Chore history: completed_at descending, ties in append order
    - Member workload: a chore counts for a member while its LAST assignment
      names them or everyone; it is completed once that member has any
      completion of it
    - Empty streams fold to empty/absent views, never errors

Design Decisions:
    - match/case over the closed DomainEvent union, with an explicit
      catch-all for facts a reducer ignores
    - Household streams are small (no snapshotting), so copying mappings on
      each step is acceptable
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from functools import reduce
from types import MappingProxyType
from typing import Callable, Iterable, Mapping, TypeVar
from uuid import UUID

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

S = TypeVar("S")

_EMPTY: Mapping = MappingProxyType({})


def fold(
    events: Iterable[DomainEvent], initial: S, reducer: Callable[[S, DomainEvent], S],
) -> S:
    """Left-fold events in append order."""
    return reduce(reducer, events, initial)


def _with(mapping: Mapping, key, value) -> Mapping:
    return MappingProxyType({**mapping, key: value})


def _without(mapping: Mapping, key) -> Mapping:
    return MappingProxyType({k: v for k, v in mapping.items() if k != key})


# ─── Household ───────────────────────────────────────────────────

@dataclass(frozen=True)
class HouseholdView:
    household_id: UUID
    name: str
    pin_credential: str


def reduce_household(
    state: HouseholdView | None, event: DomainEvent,
) -> HouseholdView | None:
    match event:
        case HouseholdCreated() if state is None:
            return HouseholdView(event.household_id, event.name, event.pin_credential)
        case _:
            return state


def project_household(events: Iterable[DomainEvent]) -> HouseholdView | None:
    """The household as created, or None when no creation fact exists."""
    return fold(events, None, reduce_household)


def household_name(events: Iterable[DomainEvent]) -> str | None:
    household = project_household(events)
    return household.name if household else None


# ─── Chores ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class Assignment:
    member_ids: tuple[UUID, ...] | None
    assign_to_all: bool
    assigned_by: UUID | None


@dataclass(frozen=True)
class Completion:
    chore_id: UUID
    member_id: UUID
    completed_at: datetime


@dataclass(frozen=True)
class ChoreView:
    chore_id: UUID
    household_id: UUID
    display_name: str
    description: str
    assignment: Assignment | None = None
    last_completion: Completion | None = None


@dataclass(frozen=True)
class ChoreCatalogState:
    created: Mapping[UUID, ChoreCreated] = field(default_factory=lambda: _EMPTY)
    assignments: Mapping[UUID, Assignment] = field(default_factory=lambda: _EMPTY)
    last_completions: Mapping[UUID, Completion] = field(default_factory=lambda: _EMPTY)
    deleted: frozenset[UUID] = frozenset()


def reduce_chore_catalog(state: ChoreCatalogState, event: DomainEvent) -> ChoreCatalogState:
    match event:
        case ChoreCreated(chore_id=chore_id) if chore_id not in state.created:
            return replace(state, created=_with(state.created, chore_id, event))
        case ChoreAssigned(chore_id=chore_id):
            assignment = Assignment(
                event.member_ids, event.assign_to_all, event.assigned_by,
            )
            return replace(state, assignments=_with(state.assignments, chore_id, assignment))
        case ChoreCompleted(chore_id=chore_id):
            previous = state.last_completions.get(chore_id)
            if previous is not None and previous.completed_at >= event.completed_at:
                return state
            completion = Completion(chore_id, event.member_id, event.completed_at)
            return replace(
                state, last_completions=_with(state.last_completions, chore_id, completion),
            )
        case ChoreDeleted(chore_id=chore_id):
            return replace(state, deleted=state.deleted | {chore_id})
        case _:
            return state


def project_chores(events: Iterable[DomainEvent]) -> list[ChoreView]:
    """Live chores in order of first creation, with current assignment."""
    state = fold(events, ChoreCatalogState(), reduce_chore_catalog)
    return [
        ChoreView(
            chore_id=chore_id,
            household_id=created.household_id,
            display_name=created.display_name,
            description=created.description,
            assignment=state.assignments.get(chore_id),
            last_completion=state.last_completions.get(chore_id),
        )
        for chore_id, created in state.created.items()
        if chore_id not in state.deleted
    ]


def find_chore(events: Iterable[DomainEvent], chore_id: UUID) -> ChoreView | None:
    return next((c for c in project_chores(events) if c.chore_id == chore_id), None)


def chore_was_deleted(events: Iterable[DomainEvent], chore_id: UUID) -> bool:
    return chore_id in fold(events, ChoreCatalogState(), reduce_chore_catalog).deleted


def chore_exists(events: Iterable[DomainEvent], chore_id: UUID) -> bool:
    """True once any creation fact exists, deleted or not."""
    return chore_id in fold(events, ChoreCatalogState(), reduce_chore_catalog).created


def _collect_completions(chore_id: UUID):
    def reducer(state: tuple[Completion, ...], event: DomainEvent) -> tuple[Completion, ...]:
        match event:
            case ChoreCompleted() if event.chore_id == chore_id:
                return state + (Completion(chore_id, event.member_id, event.completed_at),)
            case _:
                return state
    return reducer


def project_chore_history(events: Iterable[DomainEvent], chore_id: UUID) -> list[Completion]:
    """Completions of one chore, newest completed_at first.

    completed_at may be supplied by the caller, so this order can differ from
    log order. sorted() is stable, so equal timestamps keep append order.
    """
    completions = fold(events, (), _collect_completions(chore_id))
    return sorted(completions, key=lambda c: c.completed_at, reverse=True)


# ─── Invites ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class InviteView:
    household_id: UUID
    invite_id: UUID
    link: str


def reduce_invite(state: InviteView | None, event: DomainEvent) -> InviteView | None:
    match event:
        case InviteGenerated():
            return InviteView(event.household_id, event.invite_id, event.link)
        case _:
            return state


def project_invite(events: Iterable[DomainEvent]) -> InviteView | None:
    """The current invite; any earlier invite is superseded."""
    return fold(events, None, reduce_invite)


# ─── Members ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class MemberView:
    member_id: UUID
    household_id: UUID
    nickname: str
    status: str | None = None


@dataclass(frozen=True)
class RosterState:
    members: Mapping[UUID, MemberView] = field(default_factory=lambda: _EMPTY)
    removed: frozenset[UUID] = frozenset()


def reduce_roster(state: RosterState, event: DomainEvent) -> RosterState:
    match event:
        case MemberJoinedHousehold(member_id=member_id) if member_id not in state.removed:
            member = MemberView(member_id, event.household_id, event.nickname)
            return replace(state, members=_with(state.members, member_id, member))
        case MemberNicknameChanged(member_id=member_id) if member_id in state.members:
            member = replace(state.members[member_id], nickname=event.new_nickname)
            return replace(state, members=_with(state.members, member_id, member))
        case MemberStatusChanged(member_id=member_id) if member_id in state.members:
            member = replace(state.members[member_id], status=event.status)
            return replace(state, members=_with(state.members, member_id, member))
        case MemberRemoved(member_id=member_id):
            return RosterState(
                members=_without(state.members, member_id),
                removed=state.removed | {member_id},
            )
        case _:
            return state


def project_roster_state(events: Iterable[DomainEvent]) -> RosterState:
    return fold(events, RosterState(), reduce_roster)


def project_members(events: Iterable[DomainEvent]) -> list[MemberView]:
    """Current members in join order."""
    return list(project_roster_state(events).members.values())


# ─── Per-member workload ─────────────────────────────────────────

class ChoreProgress(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"


@dataclass(frozen=True)
class MemberChore:
    chore_id: UUID
    display_name: str
    last_completed_at: datetime | None = None

    @property
    def progress(self) -> ChoreProgress:
        return ChoreProgress.COMPLETED if self.last_completed_at else ChoreProgress.PENDING


@dataclass(frozen=True)
class MemberWorkload:
    member_id: UUID
    nickname: str
    chores: tuple[MemberChore, ...]

    @property
    def completed_count(self) -> int:
        return sum(1 for c in self.chores if c.progress is ChoreProgress.COMPLETED)


def is_assigned_to(assignment: Assignment | None, member_id: UUID) -> bool:
    if assignment is None:
        return False
    return assignment.assign_to_all or member_id in (assignment.member_ids or ())


def reduce_member_completions(
    state: Mapping[tuple[UUID, UUID], datetime], event: DomainEvent,
) -> Mapping[tuple[UUID, UUID], datetime]:
    match event:
        case ChoreCompleted():
            key = (event.chore_id, event.member_id)
            previous = state.get(key)
            if previous is not None and previous >= event.completed_at:
                return state
            return _with(state, key, event.completed_at)
        case _:
            return state


def project_member_chores(
    chore_events: Iterable[DomainEvent], member_id: UUID,
) -> list[MemberChore]:
    """Live chores assigned to the member (directly or to everyone), with
    the member's own latest completion, in order of first creation."""
    chore_events = list(chore_events)
    completions = fold(chore_events, _EMPTY, reduce_member_completions)
    return [
        MemberChore(
            chore.chore_id, chore.display_name,
            completions.get((chore.chore_id, member_id)),
        )
        for chore in project_chores(chore_events)
        if is_assigned_to(chore.assignment, member_id)
    ]


def project_team(
    household_events: Iterable[DomainEvent], chore_events: Iterable[DomainEvent],
) -> list[MemberWorkload]:
    """Every current member's workload, busiest first; ties keep join order."""
    chore_events = list(chore_events)
    team = [
        MemberWorkload(
            member.member_id, member.nickname,
            tuple(project_member_chores(chore_events, member.member_id)),
        )
        for member in project_members(household_events)
    ]
    return sorted(team, key=lambda m: len(m.chores), reverse=True)
