"""Household Routes — create, pin access and name lookup.

Invariants:
    - Unknown households read as name "Unknown" (200), never 404
    - Failed access is the uniform 401 envelope, with no name
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from chorehub.api.dependencies import get_services
from chorehub.schemas.household import (
    AccessRequest, AccessResponse, HouseholdCreate, HouseholdCreatedResponse,
    HouseholdNameResponse,
)
from chorehub.services.composition import Services

router = APIRouter(prefix="/api/v1/households", tags=["households"])

UNKNOWN_HOUSEHOLD_NAME = "Unknown"


@router.post("", response_model=HouseholdCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_household(body: HouseholdCreate, services: Services = Depends(get_services)):
    household = await services.households.create(body.name, body.pin_code, body.household_id)
    return HouseholdCreatedResponse(id=household.household_id, name=household.name)


@router.post("/{household_id}/access", response_model=AccessResponse)
async def access_household(
    household_id: UUID, body: AccessRequest, services: Services = Depends(get_services),
):
    name = await services.households.access(household_id, body.pin_code)
    return AccessResponse(name=name)


@router.get("/{household_id}", response_model=HouseholdNameResponse)
async def get_household_name(household_id: UUID, services: Services = Depends(get_services)):
    name = await services.households.household_name(household_id)
    return HouseholdNameResponse(id=household_id, name=name or UNKNOWN_HOUSEHOLD_NAME)
