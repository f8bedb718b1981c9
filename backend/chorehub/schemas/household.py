"""Household Schemas — request/response models for household creation and access.

Invariants:
    - Pins are non-negative integers of at most 8 digits
    - HouseholdCreate.name: 1-100 chars, stripped, non-empty
    - AccessResponse carries the name only on success; failures use the
      uniform 401 error envelope instead
"""

from uuid import UUID

from pydantic import BaseModel, Field, field_validator

PIN_MAX = 99_999_999


class HouseholdCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    pin_code: int = Field(ge=0, le=PIN_MAX)
    household_id: UUID | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class HouseholdCreatedResponse(BaseModel):
    id: UUID
    name: str


class AccessRequest(BaseModel):
    pin_code: int = Field(ge=0, le=PIN_MAX)


class AccessResponse(BaseModel):
    success: bool = True
    name: str


class HouseholdNameResponse(BaseModel):
    id: UUID
    name: str
