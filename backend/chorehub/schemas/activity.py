"""Activity Schemas — the rendered activity feed and rebuild receipt."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class ActivityEntry(BaseModel):
    type: str
    timestamp: datetime
    text: str
    chore_id: UUID | None = None
    chore_name: str | None = None
    actor_id: UUID | None = None
    actor_nickname: str | None = None


class RebuildResponse(BaseModel):
    household_id: UUID
    count: int
