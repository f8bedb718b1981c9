"""Real-time Notifications — household broadcast groups over WebSockets.

Invariants:
    - A message is sent only after the append it describes has succeeded
    - Delivery is best-effort: a failing socket is logged and dropped from
      its group, and never fails the command that produced the fact
    - Only household-visible facts are broadcast (see BROADCAST_EVENTS);
      HouseholdCreated carries the pin credential and is never sent
    - Messages are {"type": <fact name>, "data": <codec payload>}

Design Decisions:
    - PublishingEventStore decorates any EventStore and notifies its
      subscribers in order (activity recorder, then this broadcaster), so
      handlers stay unaware
    - One failing subscriber does not stop the next one
    - Groups live in process memory; a multi-process deployment would need
      an external fan-out (not provided)
"""

import asyncio
import logging
from uuid import UUID

from fastapi import WebSocket

from chorehub.core.append_protocol import ExpectedVersion
from chorehub.core.event_codec import encode_event
from chorehub.core.events import (
    ChoreAssigned,
    ChoreCompleted,
    ChoreCreated,
    ChoreDeleted,
    DomainEvent,
    MemberJoinedHousehold,
    MemberNicknameChanged,
    MemberRemoved,
    MemberStatusChanged,
    RecordedEvent,
)
from chorehub.core.repository_protocols import EventPublisher, EventStore

logger = logging.getLogger(__name__)

BROADCAST_EVENTS: tuple[type, ...] = (
    ChoreCreated,
    ChoreAssigned,
    ChoreCompleted,
    ChoreDeleted,
    MemberJoinedHousehold,
    MemberRemoved,
    MemberStatusChanged,
    MemberNicknameChanged,
)


class HouseholdBroadcaster:
    """Tracks connected sockets per household and fans facts out to them."""

    def __init__(self):
        self._groups: dict[UUID, set[WebSocket]] = {}
        self._lock = asyncio.Lock()

    async def join(self, household_id: UUID, websocket: WebSocket) -> None:
        async with self._lock:
            self._groups.setdefault(household_id, set()).add(websocket)
        logger.info("Client joined household group", extra={"household_id": household_id})

    async def leave(self, household_id: UUID, websocket: WebSocket) -> None:
        async with self._lock:
            group = self._groups.get(household_id)
            if group is None:
                return
            group.discard(websocket)
            if not group:
                del self._groups[household_id]

    def connection_count(self, household_id: UUID) -> int:
        return len(self._groups.get(household_id, ()))

    async def publish(self, record: RecordedEvent) -> None:
        event = record.event
        if not isinstance(event, BROADCAST_EVENTS):
            return
        household_id = event.household_id
        event_type, payload = encode_event(event)
        message = {"type": event_type, "data": payload}

        async with self._lock:
            targets = list(self._groups.get(household_id, ()))
        for websocket in targets:
            try:
                await websocket.send_json(message)
            except Exception as e:  # noqa: BLE001
                logger.warning(
                    f"Dropping websocket after send failure: {e}",
                    extra={"household_id": household_id, "event_type": event_type},
                )
                await self.leave(household_id, websocket)


class PublishingEventStore:
    """EventStore decorator: append, then notify every subscriber in order."""

    def __init__(self, inner: EventStore, *publishers: EventPublisher):
        self._inner = inner
        self._publishers = publishers

    async def load(self, stream_key: str) -> list[RecordedEvent]:
        return await self._inner.load(stream_key)

    async def fetch(self, stream_key: str) -> list[RecordedEvent]:
        return await self._inner.fetch(stream_key)

    async def append(
        self, stream_key: str, event: DomainEvent, expected_version: ExpectedVersion,
    ) -> int:
        version = await self._inner.append(stream_key, event, expected_version)
        record = RecordedEvent(stream_key, version, event)
        for publisher in self._publishers:
            try:
                await publisher.publish(record)
            except Exception as e:  # noqa: BLE001
                logger.error(
                    f"Publishing failed after append: {e}",
                    extra={"stream_key": stream_key, "version": version},
                    exc_info=True,
                )
        return version
