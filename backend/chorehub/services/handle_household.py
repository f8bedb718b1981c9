"""Household Handlers — create, access (pin check) and name lookup.

Invariants:
    - Creation appends exactly one HouseholdCreated under NO_STREAM; a second
      creation for the same id is a terminal ConcurrencyError (409)
    - access() reveals the name only after a successful pin check; a missing
      household and a wrong pin raise the same UnauthorizedError after the
      same amount of hashing work
    - household_name() never raises for an empty stream; it returns None

Design Decisions:
    - Argon2 runs in a worker thread (asyncio.to_thread) so hashing never
      blocks the event loop
    - verify_household_pin is shared with the admin-gated chore and member commands
"""

import asyncio
import logging
from functools import lru_cache
from typing import Iterable
from uuid import UUID, uuid4

from chorehub.core.append_protocol import StreamState
from chorehub.core.errors import UnauthorizedError
from chorehub.core.events import DomainEvent, HouseholdCreated, unwrap
from chorehub.core.pin_hasher import PinHashParams, create_pin_credential, verify_pin
from chorehub.core.projections import HouseholdView, project_household
from chorehub.core.repository_protocols import EventStore
from chorehub.core.stream_keys import household_stream

logger = logging.getLogger(__name__)


@lru_cache(maxsize=8)
def decoy_credential(params: PinHashParams) -> str:
    """Credential checked in place of an absent household's; built once per params."""
    return create_pin_credential(0, params)


async def verify_household_pin(
    events: Iterable[DomainEvent], pin_code: int, params: PinHashParams,
) -> bool:
    """False for a wrong pin and for a household with no creation fact alike.

    An absent household still costs one Argon2 verification, against a decoy
    credential, so response time does not reveal which ids exist.
    """
    household = project_household(events)
    if household is None:
        await asyncio.to_thread(verify_pin, pin_code, decoy_credential(params), params)
        return False
    return await asyncio.to_thread(verify_pin, pin_code, household.pin_credential, params)


class HouseholdHandler:
    def __init__(self, store: EventStore, pin_params: PinHashParams):
        self.store = store
        self.pin_params = pin_params
        decoy_credential(pin_params)

    async def create(
        self, name: str, pin_code: int, household_id: UUID | None = None,
    ) -> HouseholdView:
        household_id = household_id or uuid4()
        credential = await asyncio.to_thread(
            create_pin_credential, pin_code, self.pin_params,
        )
        event = HouseholdCreated(household_id, name, credential)
        await self.store.append(household_stream(household_id), event, StreamState.NO_STREAM)
        logger.info("Household created", extra={"household_id": household_id})
        return HouseholdView(household_id, name, credential)

    async def access(self, household_id: UUID, pin_code: int) -> str:
        """Return the household name, or raise UnauthorizedError."""
        events = unwrap(await self.store.load(household_stream(household_id)))
        if not await verify_household_pin(events, pin_code, self.pin_params):
            logger.info("Household access denied")
            raise UnauthorizedError()
        return project_household(events).name

    async def household_name(self, household_id: UUID) -> str | None:
        household = project_household(
            unwrap(await self.store.load(household_stream(household_id))),
        )
        return household.name if household else None
