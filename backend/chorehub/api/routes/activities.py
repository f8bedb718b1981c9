"""Activity Routes — read and rebuild the household activity feed."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from chorehub.api.dependencies import get_services
from chorehub.schemas.activity import ActivityEntry, RebuildResponse
from chorehub.services.composition import Services

router = APIRouter(prefix="/api/v1/households/{household_id}/activities", tags=["activities"])


@router.get("", response_model=list[ActivityEntry])
async def list_activities(
    household_id: UUID,
    days: int | None = Query(None, ge=1, le=3650),
    limit: int | None = Query(None, ge=1, le=1000),
    services: Services = Depends(get_services),
):
    items = await services.activities.get_activities(household_id, days=days, limit=limit)
    return [
        ActivityEntry(
            type=item.type.value,
            timestamp=item.timestamp,
            text=item.text,
            chore_id=item.chore_id,
            chore_name=item.chore_name,
            actor_id=item.actor_id,
            actor_nickname=item.actor_nickname,
        )
        for item in items
    ]


@router.post("/rebuild", response_model=RebuildResponse)
async def rebuild_activities(household_id: UUID, services: Services = Depends(get_services)):
    count = await services.activities.rebuild(household_id)
    return RebuildResponse(household_id=household_id, count=count)
