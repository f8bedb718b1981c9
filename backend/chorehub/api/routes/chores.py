"""Chore Routes — catalog commands and queries for one household."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from chorehub.api.dependencies import get_services
from chorehub.core.projections import ChoreView
from chorehub.schemas.chore import (
    AssignmentResponse, ChoreAssign, ChoreCreate, ChoreCreatedResponse,
    ChoreDeleteRequest, ChoreDeleteResponse, ChoreResponse, CompleteRequest,
    CompletionReceipt, HistoryEntry, LastCompletion,
)
from chorehub.services.composition import Services

router = APIRouter(prefix="/api/v1/households/{household_id}/chores", tags=["chores"])


def _to_response(chore: ChoreView) -> ChoreResponse:
    assignment = chore.assignment
    last = chore.last_completion
    return ChoreResponse(
        id=chore.chore_id,
        display_name=chore.display_name,
        description=chore.description,
        assigned_to=(
            list(assignment.member_ids)
            if assignment and assignment.member_ids and not assignment.assign_to_all
            else None
        ),
        assigned_to_all=bool(assignment and assignment.assign_to_all),
        last_completion=(
            LastCompletion(member_id=last.member_id, completed_at=last.completed_at)
            if last else None
        ),
    )


@router.post("", response_model=ChoreCreatedResponse, status_code=status.HTTP_201_CREATED)
async def add_chore(
    household_id: UUID, body: ChoreCreate, services: Services = Depends(get_services),
):
    chore_id = await services.chores.add(
        household_id, body.display_name, body.description, body.chore_id,
    )
    return ChoreCreatedResponse(id=chore_id)


@router.get("", response_model=list[ChoreResponse])
async def list_chores(household_id: UUID, services: Services = Depends(get_services)):
    return [_to_response(c) for c in await services.chores.list_chores(household_id)]


@router.post("/{chore_id}/assign", response_model=AssignmentResponse)
async def assign_chore(
    household_id: UUID, chore_id: UUID, body: ChoreAssign,
    services: Services = Depends(get_services),
):
    assignment = await services.chores.assign(
        household_id, chore_id, body.member_ids, body.assign_to_all, body.assigned_by,
    )
    return AssignmentResponse(
        chore_id=chore_id,
        assigned_to=list(assignment.member_ids) if assignment.member_ids is not None else None,
        assigned_to_all=assignment.assign_to_all,
    )


@router.post("/{chore_id}/complete", response_model=CompletionReceipt)
async def complete_chore(
    household_id: UUID, chore_id: UUID, body: CompleteRequest,
    services: Services = Depends(get_services),
):
    completion = await services.chores.complete(
        household_id, chore_id, body.member_id, body.completed_at,
    )
    return CompletionReceipt(
        chore_id=chore_id,
        completed_by=completion.member_id,
        completed_at=completion.completed_at,
    )


@router.post("/{chore_id}/delete", response_model=ChoreDeleteResponse)
async def delete_chore(
    household_id: UUID, chore_id: UUID, body: ChoreDeleteRequest,
    services: Services = Depends(get_services),
):
    await services.chores.delete(household_id, chore_id, body.pin_code, body.deleted_by)
    return ChoreDeleteResponse()


@router.get("/{chore_id}/history", response_model=list[HistoryEntry])
async def chore_history(
    household_id: UUID, chore_id: UUID, services: Services = Depends(get_services),
):
    return [
        HistoryEntry(member_id=c.member_id, completed_at=c.completed_at)
        for c in await services.chores.history(household_id, chore_id)
    ]
