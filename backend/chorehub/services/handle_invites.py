"""Invite Handlers — generate a new invite, read the current one.

Invariants:
    - Each generate appends one InviteGenerated and supersedes earlier invites
    - Link = "<invite_base_url>/<invite_id>"
    - current() raises ResourceNotFoundError when no invite was ever generated
"""

from uuid import UUID, uuid4

from chorehub.core.append_protocol import StreamState
from chorehub.core.errors import ErrorContext, ResourceNotFoundError
from chorehub.core.events import InviteGenerated, unwrap
from chorehub.core.projections import InviteView, project_invite
from chorehub.core.repository_protocols import EventStore
from chorehub.core.stream_keys import household_stream


class InviteHandler:
    def __init__(self, store: EventStore, invite_base_url: str):
        self.store = store
        self.invite_base_url = invite_base_url.rstrip("/")

    async def generate(self, household_id: UUID) -> InviteView:
        invite_id = uuid4()
        link = f"{self.invite_base_url}/{invite_id}"
        event = InviteGenerated(household_id, invite_id, link)
        await self.store.append(household_stream(household_id), event, StreamState.ANY)
        return InviteView(household_id, invite_id, link)

    async def current(self, household_id: UUID) -> InviteView:
        invite = project_invite(unwrap(await self.store.load(household_stream(household_id))))
        if invite is None:
            raise ResourceNotFoundError(
                "Invite", str(household_id), ErrorContext(household_id=str(household_id)),
            )
        return invite
