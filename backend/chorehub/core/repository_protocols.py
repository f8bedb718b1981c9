"""Repository Protocols — the storage seams handlers and read models depend on.

Invariants:
    - load and fetch are synonyms: full history in append order, [] for an
      unknown stream
    - append returns the new stream version and raises ConcurrencyError when
      the expected version does not hold
    - ActivityRepository.replace publishes a whole view atomically
    - EventPublisher receives the positioned record, after the append succeeded

Design Decisions:
    - typing.Protocol over abstract base classes: backends and test doubles
      satisfy the contract structurally
"""

from typing import Protocol
from uuid import UUID

from chorehub.core.activity import ActivityView
from chorehub.core.append_protocol import ExpectedVersion
from chorehub.core.events import DomainEvent, RecordedEvent


class EventStore(Protocol):
    async def load(self, stream_key: str) -> list[RecordedEvent]: ...

    async def fetch(self, stream_key: str) -> list[RecordedEvent]: ...

    async def append(
        self, stream_key: str, event: DomainEvent, expected_version: ExpectedVersion,
    ) -> int: ...


class ActivityRepository(Protocol):
    async def get(self, household_id: UUID) -> ActivityView | None: ...

    async def replace(self, view: ActivityView) -> None: ...


class EventPublisher(Protocol):
    async def publish(self, record: RecordedEvent) -> None: ...
