"""Chore Schemas — request/response models for the chore catalog.

Invariants:
    - ChoreCreate.display_name: 1-100 chars, stripped, non-empty
    - ChoreAssign: member_ids may be empty or null (unassign) unless
      assign_to_all is set, in which case member_ids is ignored
    - CompleteRequest.completed_at is optional; the server defaults it to receipt time
    - MyChoresResponse: pending by display name, completed newest first
"""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from chorehub.schemas.household import PIN_MAX


class ChoreCreate(BaseModel):
    display_name: str = Field(min_length=1, max_length=100)
    description: str = Field("", max_length=1000)
    chore_id: UUID | None = None

    @field_validator("display_name")
    @classmethod
    def strip_display_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("display_name cannot be empty or whitespace")
        return v


class ChoreCreatedResponse(BaseModel):
    id: UUID


class ChoreAssign(BaseModel):
    member_ids: list[UUID] | None = None
    assign_to_all: bool = False
    assigned_by: UUID | None = None


class AssignmentResponse(BaseModel):
    chore_id: UUID
    assigned_to: list[UUID] | None
    assigned_to_all: bool


class CompleteRequest(BaseModel):
    member_id: UUID
    completed_at: datetime | None = None


class CompletionReceipt(BaseModel):
    chore_id: UUID
    completed_by: UUID
    completed_at: datetime


class ChoreDeleteRequest(BaseModel):
    pin_code: int = Field(ge=0, le=PIN_MAX)
    deleted_by: UUID | None = None


class ChoreDeleteResponse(BaseModel):
    success: bool = True


class LastCompletion(BaseModel):
    member_id: UUID
    completed_at: datetime


class ChoreResponse(BaseModel):
    id: UUID
    display_name: str
    description: str
    assigned_to: list[UUID] | None = None
    assigned_to_all: bool = False
    last_completion: LastCompletion | None = None


class HistoryEntry(BaseModel):
    member_id: UUID
    completed_at: datetime


class MyChoreEntry(BaseModel):
    chore_id: UUID
    display_name: str


class MyCompletedChore(MyChoreEntry):
    completed_at: datetime


class MyChoresResponse(BaseModel):
    pending: list[MyChoreEntry]
    completed: list[MyCompletedChore]


class ChoreStatusEntry(BaseModel):
    chore_id: UUID
    display_name: str
    status: Literal["pending", "completed"]
    last_completed_at: datetime | None = None


class MemberOverview(BaseModel):
    member_id: UUID
    nickname: str
    total_chores: int
    completed_count: int
    chores: list[ChoreStatusEntry]


class TeamOverviewResponse(BaseModel):
    members: list[MemberOverview]
