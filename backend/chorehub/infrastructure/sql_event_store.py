"""SQL Event Store — append-only log on SQLAlchemy async, one row per fact.

Invariants:
    - Version check and insert run in one transaction; the unique
      (stream_key, version) constraint decides any race between writers
    - A lost race under NO_STREAM or an exact version is a ConcurrencyError
    - A lost race under ANY is retried (bounded by any_append_retries), since
      ANY never fails on precondition grounds
    - Exhausted ANY retries surface as DatabaseError, not ConcurrencyError
    - Reads decode through the event codec; timestamps come back as UTC

Design Decisions:
    - MAX(version) lookup instead of a separate stream table: one table, and
      the unique index makes the lookup an index scan
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from chorehub.core.append_protocol import (
    ExpectedVersion, StreamState, check_expected_version, describe_expected,
)
from chorehub.core.domain_types import as_utc
from chorehub.core.errors import ConcurrencyError, DatabaseError
from chorehub.core.event_codec import decode_event, encode_event
from chorehub.core.events import DomainEvent, RecordedEvent
from chorehub.infrastructure.database import DatabaseSessionManager
from chorehub.models.stored_event import StoredEvent

logger = logging.getLogger(__name__)


class SqlEventStore:
    def __init__(self, db: DatabaseSessionManager, any_append_retries: int = 5):
        self._db = db
        self._any_append_retries = any_append_retries

    async def load(self, stream_key: str) -> list[RecordedEvent]:
        async with self._db.session() as session:
            result = await session.execute(
                select(StoredEvent)
                .where(StoredEvent.stream_key == stream_key)
                .order_by(StoredEvent.version),
            )
            rows = result.scalars().all()
        return [
            RecordedEvent(
                stream_key=row.stream_key,
                version=row.version,
                event=decode_event(row.event_type, row.payload),
                recorded_at=as_utc(row.recorded_at),
            )
            for row in rows
        ]

    async def fetch(self, stream_key: str) -> list[RecordedEvent]:
        return await self.load(stream_key)

    async def append(
        self, stream_key: str, event: DomainEvent, expected_version: ExpectedVersion,
    ) -> int:
        event_type, payload = encode_event(event)
        attempts = 1
        if expected_version is StreamState.ANY:
            attempts += self._any_append_retries

        for attempt in range(1, attempts + 1):
            try:
                version = await self._try_append(
                    stream_key, event_type, payload, expected_version,
                )
            except IntegrityError:
                logger.warning(
                    "Lost version race on append (attempt %d/%d)", attempt, attempts,
                    extra={"stream_key": stream_key, "event_type": event_type},
                )
                if expected_version is not StreamState.ANY:
                    raise ConcurrencyError(
                        stream_key,
                        describe_expected(expected_version),
                        await self._current_version(stream_key),
                    )
                continue
            logger.debug(
                "Appended event",
                extra={"stream_key": stream_key, "event_type": event_type, "version": version},
            )
            return version

        raise DatabaseError(
            f"append to '{stream_key}' lost {attempts} version races", "append",
        )

    async def _current_version(self, stream_key: str) -> int:
        async with self._db.session() as session:
            return await self._max_version(session, stream_key)

    @staticmethod
    async def _max_version(session, stream_key: str) -> int:
        result = await session.execute(
            select(func.coalesce(func.max(StoredEvent.version), 0))
            .where(StoredEvent.stream_key == stream_key),
        )
        return int(result.scalar_one())

    async def _try_append(
        self, stream_key: str, event_type: str, payload: dict,
        expected_version: ExpectedVersion,
    ) -> int:
        async with self._db.session() as session:
            current = await self._max_version(session, stream_key)
            check_expected_version(stream_key, expected_version, current)
            version = current + 1
            session.add(StoredEvent(
                stream_key=stream_key,
                version=version,
                event_type=event_type,
                payload=payload,
            ))
            await session.commit()
        return version
