"""Member Schemas — join, roster and member commands.

Invariants:
    - Nicknames: 1-50 chars, stripped, non-empty
    - Status is free text (0-100 chars); empty clears it
"""

from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class JoinRequest(BaseModel):
    invite_id: UUID
    nickname: str = Field(min_length=1, max_length=50)

    @field_validator("nickname")
    @classmethod
    def strip_nickname(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("nickname cannot be empty or whitespace")
        return v


class MemberResponse(BaseModel):
    member_id: UUID
    household_id: UUID
    nickname: str
    status: str | None = None


class NicknameChange(BaseModel):
    nickname: str = Field(min_length=1, max_length=50)

    @field_validator("nickname")
    @classmethod
    def strip_nickname(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("nickname cannot be empty or whitespace")
        return v


class StatusChange(BaseModel):
    status: str = Field(max_length=100)


class RemoveMemberRequest(BaseModel):
    removed_by: UUID
