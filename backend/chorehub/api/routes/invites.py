"""Invite Routes — generate and read the household's current invite."""

from uuid import UUID

from fastapi import APIRouter, Depends

from chorehub.api.dependencies import get_services
from chorehub.core.projections import InviteView
from chorehub.schemas.invite import InviteResponse
from chorehub.services.composition import Services

router = APIRouter(prefix="/api/v1/households/{household_id}/invite", tags=["invites"])


def _to_response(invite: InviteView) -> InviteResponse:
    return InviteResponse(
        household_id=invite.household_id, invite_id=invite.invite_id, link=invite.link,
    )


@router.post("", response_model=InviteResponse)
async def generate_invite(household_id: UUID, services: Services = Depends(get_services)):
    return _to_response(await services.invites.generate(household_id))


@router.get("", response_model=InviteResponse)
async def get_invite(household_id: UUID, services: Services = Depends(get_services)):
    return _to_response(await services.invites.current(household_id))
