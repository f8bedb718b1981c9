"""Member Handlers — join via invite, nickname/status changes, removal, roster.

Invariants:
    - join succeeds only with the household's CURRENT invite id; any other
      id (superseded, unknown, or no invite at all) is INVALID_INVITE
    - Commands on members outside the roster raise ResourceNotFoundError
    - A nickname change to the current nickname appends nothing
    - remove is admin-gated (pin from the X-Pin-Code header): wrong pin or
      unknown household -> ForbiddenError; already removed and self-removal
      are business-rule violations
    - MemberRemoved records the nickname the member had at removal time
"""

import logging
from uuid import UUID, uuid4

from chorehub.core.append_protocol import StreamState
from chorehub.core.errors import (
    BusinessRuleError, ErrorContext, ForbiddenError, ResourceNotFoundError,
)
from chorehub.core.events import (
    MemberJoinedHousehold, MemberNicknameChanged, MemberRemoved, MemberStatusChanged,
    unwrap,
)
from chorehub.core.pin_hasher import PinHashParams
from chorehub.core.projections import (
    MemberView, project_invite, project_members, project_roster_state,
)
from chorehub.core.repository_protocols import EventStore
from chorehub.core.stream_keys import household_stream
from chorehub.services.handle_household import decoy_credential, verify_household_pin

logger = logging.getLogger(__name__)


class MemberHandler:
    def __init__(self, store: EventStore, pin_params: PinHashParams):
        self.store = store
        self.pin_params = pin_params
        decoy_credential(pin_params)

    async def _events(self, household_id: UUID):
        return unwrap(await self.store.load(household_stream(household_id)))

    async def _present_member(self, household_id: UUID, member_id: UUID) -> MemberView:
        roster = project_roster_state(await self._events(household_id))
        member = roster.members.get(member_id)
        if member is None:
            raise ResourceNotFoundError(
                "Member", str(member_id), ErrorContext(household_id=str(household_id)),
            )
        return member

    async def join(self, household_id: UUID, invite_id: UUID, nickname: str) -> MemberView:
        invite = project_invite(await self._events(household_id))
        if invite is None or invite.invite_id != invite_id:
            raise BusinessRuleError(
                "Invite is invalid or has been replaced", "INVALID_INVITE",
                ErrorContext(household_id=str(household_id)),
            )
        member_id = uuid4()
        event = MemberJoinedHousehold(member_id, household_id, nickname, invite_id)
        await self.store.append(household_stream(household_id), event, StreamState.ANY)
        logger.info("Member joined", extra={"household_id": household_id})
        return MemberView(member_id, household_id, nickname)

    async def change_nickname(
        self, household_id: UUID, member_id: UUID, nickname: str,
    ) -> MemberView:
        member = await self._present_member(household_id, member_id)
        if member.nickname == nickname:
            return member
        event = MemberNicknameChanged(member_id, household_id, member.nickname, nickname)
        await self.store.append(household_stream(household_id), event, StreamState.ANY)
        return MemberView(member_id, household_id, nickname, member.status)

    async def change_status(
        self, household_id: UUID, member_id: UUID, status: str,
    ) -> MemberView:
        member = await self._present_member(household_id, member_id)
        event = MemberStatusChanged(member_id, household_id, status)
        await self.store.append(household_stream(household_id), event, StreamState.ANY)
        return MemberView(member_id, household_id, member.nickname, status)

    async def remove(
        self, household_id: UUID, member_id: UUID, removed_by: UUID, pin_code: int,
    ) -> None:
        events = await self._events(household_id)
        context = ErrorContext(household_id=str(household_id))
        if not await verify_household_pin(events, pin_code, self.pin_params):
            raise ForbiddenError(context)

        roster = project_roster_state(events)
        if member_id in roster.removed:
            raise BusinessRuleError("Member already removed", "MEMBER_ALREADY_REMOVED", context)
        member = roster.members.get(member_id)
        if member is None:
            raise ResourceNotFoundError("Member", str(member_id), context)
        if member_id == removed_by:
            raise BusinessRuleError("Cannot remove yourself", "CANNOT_REMOVE_SELF", context)

        event = MemberRemoved(member_id, household_id, member.nickname, removed_by)
        await self.store.append(household_stream(household_id), event, StreamState.ANY)
        logger.info("Member removed", extra={"household_id": household_id})

    async def list_members(self, household_id: UUID) -> list[MemberView]:
        return project_members(await self._events(household_id))
