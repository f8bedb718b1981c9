"""Member Routes — join, roster, nickname/status and admin removal.

Invariants:
    - remove reads the admin pin from X-Pin-Code (see dependencies.admin_pin)
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from chorehub.api.dependencies import admin_pin, get_services
from chorehub.core.projections import MemberView
from chorehub.schemas.member import (
    JoinRequest, MemberResponse, NicknameChange, RemoveMemberRequest, StatusChange,
)
from chorehub.services.composition import Services

router = APIRouter(prefix="/api/v1/households/{household_id}", tags=["members"])


def _to_response(member: MemberView) -> MemberResponse:
    return MemberResponse(
        member_id=member.member_id,
        household_id=member.household_id,
        nickname=member.nickname,
        status=member.status,
    )


@router.post("/join", response_model=MemberResponse)
async def join_household(
    household_id: UUID, body: JoinRequest, services: Services = Depends(get_services),
):
    member = await services.members.join(household_id, body.invite_id, body.nickname)
    return _to_response(member)


@router.get("/members", response_model=list[MemberResponse])
async def list_members(household_id: UUID, services: Services = Depends(get_services)):
    return [_to_response(m) for m in await services.members.list_members(household_id)]


@router.post("/members/{member_id}/nickname", response_model=MemberResponse)
async def change_nickname(
    household_id: UUID, member_id: UUID, body: NicknameChange,
    services: Services = Depends(get_services),
):
    member = await services.members.change_nickname(household_id, member_id, body.nickname)
    return _to_response(member)


@router.post("/members/{member_id}/status", response_model=MemberResponse)
async def change_status(
    household_id: UUID, member_id: UUID, body: StatusChange,
    services: Services = Depends(get_services),
):
    member = await services.members.change_status(household_id, member_id, body.status)
    return _to_response(member)


@router.post("/members/{member_id}/remove")
async def remove_member(
    household_id: UUID,
    member_id: UUID,
    body: RemoveMemberRequest,
    pin: int = Depends(admin_pin),
    services: Services = Depends(get_services),
):
    await services.members.remove(household_id, member_id, body.removed_by, pin)
    return {"success": True}
