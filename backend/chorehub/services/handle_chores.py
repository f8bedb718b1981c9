"""Chore Handlers — add, assign, complete, delete, list, history and workload views.

Invariants:
    - Every command appends exactly one fact to the household's chore stream
      under ANY, except a delete of an already deleted chore, which appends nothing
    - A caller-supplied completed_at is kept (normalized to UTC); otherwise
      the completion is stamped with receipt time
    - delete is admin-gated: a wrong pin and an unknown household are both
      ForbiddenError; an unknown chore is ResourceNotFoundError
    - list/history of an empty stream are empty lists, never errors
    - my_chores requires a current member (ResourceNotFoundError otherwise);
      team_overview is admin-gated like delete

Design Decisions:
    - assign/complete do not validate member or chore existence; the
      projections tolerate stray ids and the activity view renders fallbacks
    - assign_to_all drops any member_ids sent with it, so the fact and every
      response name either everyone or an explicit list, never both
"""

import logging
from datetime import datetime
from uuid import UUID, uuid4

from chorehub.core.append_protocol import StreamState
from chorehub.core.domain_types import as_utc, utcnow
from chorehub.core.errors import ErrorContext, ForbiddenError, ResourceNotFoundError
from chorehub.core.events import (
    ChoreAssigned, ChoreCompleted, ChoreCreated, ChoreDeleted, unwrap,
)
from chorehub.core.pin_hasher import PinHashParams
from chorehub.core.projections import (
    Assignment, ChoreView, Completion, MemberChore, MemberWorkload,
    chore_exists, chore_was_deleted, project_chore_history, project_chores,
    project_member_chores, project_roster_state, project_team,
)
from chorehub.core.repository_protocols import EventStore
from chorehub.core.stream_keys import chore_stream, household_stream
from chorehub.services.handle_household import decoy_credential, verify_household_pin

logger = logging.getLogger(__name__)


class ChoreHandler:
    def __init__(self, store: EventStore, pin_params: PinHashParams):
        self.store = store
        self.pin_params = pin_params
        decoy_credential(pin_params)

    async def _chore_events(self, household_id: UUID):
        return unwrap(await self.store.load(chore_stream(household_id)))

    async def add(
        self, household_id: UUID, display_name: str, description: str,
        chore_id: UUID | None = None,
    ) -> UUID:
        chore_id = chore_id or uuid4()
        event = ChoreCreated(chore_id, household_id, display_name, description)
        await self.store.append(chore_stream(household_id), event, StreamState.ANY)
        return chore_id

    async def assign(
        self,
        household_id: UUID,
        chore_id: UUID,
        member_ids: list[UUID] | None = None,
        assign_to_all: bool = False,
        assigned_by: UUID | None = None,
    ) -> Assignment:
        members = tuple(member_ids) if member_ids is not None and not assign_to_all else None
        event = ChoreAssigned(chore_id, household_id, members, assign_to_all, assigned_by)
        await self.store.append(chore_stream(household_id), event, StreamState.ANY)
        return Assignment(members, assign_to_all, assigned_by)

    async def complete(
        self,
        household_id: UUID,
        chore_id: UUID,
        member_id: UUID,
        completed_at: datetime | None = None,
    ) -> Completion:
        completed_at = as_utc(completed_at) if completed_at else utcnow()
        event = ChoreCompleted(chore_id, household_id, member_id, completed_at)
        await self.store.append(chore_stream(household_id), event, StreamState.ANY)
        return Completion(chore_id, member_id, completed_at)

    async def delete(
        self,
        household_id: UUID,
        chore_id: UUID,
        pin_code: int,
        deleted_by: UUID | None = None,
    ) -> bool:
        """Delete a chore. Returns False when it was already deleted."""
        household_events = unwrap(await self.store.load(household_stream(household_id)))
        if not await verify_household_pin(household_events, pin_code, self.pin_params):
            raise ForbiddenError(ErrorContext(household_id=str(household_id)))

        events = await self._chore_events(household_id)
        if not chore_exists(events, chore_id):
            raise ResourceNotFoundError("Chore", str(chore_id))
        if chore_was_deleted(events, chore_id):
            return False

        event = ChoreDeleted(chore_id, household_id, deleted_by)
        await self.store.append(chore_stream(household_id), event, StreamState.ANY)
        logger.info("Chore deleted", extra={"household_id": household_id})
        return True

    async def list_chores(self, household_id: UUID) -> list[ChoreView]:
        return project_chores(await self._chore_events(household_id))

    async def history(self, household_id: UUID, chore_id: UUID) -> list[Completion]:
        return project_chore_history(await self._chore_events(household_id), chore_id)

    async def my_chores(self, household_id: UUID, member_id: UUID) -> list[MemberChore]:
        """Chores assigned to a current member, with that member's completions."""
        household_events = unwrap(await self.store.load(household_stream(household_id)))
        if member_id not in project_roster_state(household_events).members:
            raise ResourceNotFoundError("Member", str(member_id))
        return project_member_chores(await self._chore_events(household_id), member_id)

    async def team_overview(self, household_id: UUID, pin_code: int) -> list[MemberWorkload]:
        household_events = unwrap(await self.store.load(household_stream(household_id)))
        if not await verify_household_pin(household_events, pin_code, self.pin_params):
            raise ForbiddenError(ErrorContext(household_id=str(household_id)))
        return project_team(household_events, await self._chore_events(household_id))
