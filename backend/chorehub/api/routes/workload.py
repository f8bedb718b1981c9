"""Workload Routes — per-member chore views.

Invariants:
    - my-chores answers 404 for anyone who is not a current member
    - team is admin-gated through X-Pin-Code (401 missing, 403 wrong)
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from chorehub.api.dependencies import admin_pin, get_services
from chorehub.core.projections import ChoreProgress, MemberChore, MemberWorkload
from chorehub.schemas.chore import (
    ChoreStatusEntry, MemberOverview, MyChoreEntry, MyChoresResponse,
    MyCompletedChore, TeamOverviewResponse,
)
from chorehub.services.composition import Services

router = APIRouter(prefix="/api/v1/households/{household_id}", tags=["workload"])


def _status_order(chore: MemberChore) -> tuple:
    return (chore.progress is ChoreProgress.COMPLETED, chore.display_name)


def _to_overview(workload: MemberWorkload) -> MemberOverview:
    return MemberOverview(
        member_id=workload.member_id,
        nickname=workload.nickname,
        total_chores=len(workload.chores),
        completed_count=workload.completed_count,
        chores=[
            ChoreStatusEntry(
                chore_id=c.chore_id,
                display_name=c.display_name,
                status=c.progress.value,
                last_completed_at=c.last_completed_at,
            )
            for c in sorted(workload.chores, key=_status_order)
        ],
    )


@router.get("/my-chores", response_model=MyChoresResponse)
async def my_chores(
    household_id: UUID,
    member_id: UUID = Query(alias="memberId"),
    services: Services = Depends(get_services),
):
    chores = await services.chores.my_chores(household_id, member_id)
    pending = [c for c in chores if c.progress is ChoreProgress.PENDING]
    completed = [c for c in chores if c.progress is ChoreProgress.COMPLETED]
    return MyChoresResponse(
        pending=[
            MyChoreEntry(chore_id=c.chore_id, display_name=c.display_name)
            for c in sorted(pending, key=lambda c: c.display_name)
        ],
        completed=[
            MyCompletedChore(
                chore_id=c.chore_id, display_name=c.display_name,
                completed_at=c.last_completed_at,
            )
            for c in sorted(completed, key=lambda c: c.last_completed_at, reverse=True)
        ],
    )


@router.get("/team", response_model=TeamOverviewResponse)
async def team_overview(
    household_id: UUID,
    pin: int = Depends(admin_pin),
    services: Services = Depends(get_services),
):
    team = await services.chores.team_overview(household_id, pin)
    return TeamOverviewResponse(members=[_to_overview(w) for w in team])
