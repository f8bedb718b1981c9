"""In-Memory Event Store — process-local append-only log for tests and local runs.

Invariants:
    - Versions are 1-based and gapless per stream
    - Appends are serialized by one asyncio.Lock, so the version check and the
      write happen together
    - A stream's list is replaced (never mutated in place), so a concurrent
      load always sees a consistent prefix
    - load returns a copy; callers cannot alter the log

Design Decisions:
    - Events are kept as decoded objects; the codec is exercised by the SQL store
"""

import asyncio
import logging

from chorehub.core.append_protocol import ExpectedVersion, check_expected_version
from chorehub.core.events import DomainEvent, RecordedEvent, event_type_name

logger = logging.getLogger(__name__)


class InMemoryEventStore:
    def __init__(self):
        self._streams: dict[str, list[RecordedEvent]] = {}
        self._lock = asyncio.Lock()

    async def load(self, stream_key: str) -> list[RecordedEvent]:
        return list(self._streams.get(stream_key, ()))

    async def fetch(self, stream_key: str) -> list[RecordedEvent]:
        return await self.load(stream_key)

    async def append(
        self, stream_key: str, event: DomainEvent, expected_version: ExpectedVersion,
    ) -> int:
        async with self._lock:
            existing = self._streams.get(stream_key, [])
            check_expected_version(stream_key, expected_version, len(existing))
            version = len(existing) + 1
            record = RecordedEvent(stream_key, version, event)
            self._streams[stream_key] = [*existing, record]

        logger.debug(
            "Appended event",
            extra={
                "stream_key": stream_key,
                "event_type": event_type_name(event),
                "version": version,
            },
        )
        return version
