"""Invite Schemas."""

from uuid import UUID

from pydantic import BaseModel


class InviteResponse(BaseModel):
    household_id: UUID
    invite_id: UUID
    link: str
