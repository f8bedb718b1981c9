"""Activity Read Model — the one materialized view over both household streams.

Invariants:
    - rebuild() replays both streams from version 1, renders one entry per
      fact, keeps the newest activity_max_items, publishes the view in one
      repository write, and returns the stored entry count
    - append_activity() folds exactly the next fact of a stream into an
      existing view; a fact already covered by positions is skipped, and a
      gap (a missed fact) falls back to a full rebuild
    - Writes for one household are serialized by a per-household asyncio.Lock;
      different households proceed independently
    - Readers see either the previous view or the new one, never a mix
    - get_activities() builds the view first when none exists, unless the
      household has no facts at all, in which case nothing is stored and the
      answer is []
    - The view is a cache: dropping it loses nothing

Design Decisions:
    - ActivityRecorder subscribes to the publishing event store, so every
      successful append updates the view without handlers knowing about it
    - positions records the last version folded from each stream; it is what
      makes append_activity idempotent and gap-aware
"""

import asyncio
import logging
from datetime import datetime
from uuid import UUID

from chorehub.core.activity import (
    ActivityItem, ActivityView, filter_activities, insert_newest_first,
    render_activities, render_appended,
)
from chorehub.core.domain_types import utcnow
from chorehub.core.events import RecordedEvent, unwrap
from chorehub.core.repository_protocols import ActivityRepository, EventStore
from chorehub.core.stream_keys import chore_stream, household_stream

logger = logging.getLogger(__name__)


class ActivityReadModel:
    def __init__(
        self, store: EventStore, repository: ActivityRepository, max_items: int = 500,
    ):
        self.store = store
        self.repository = repository
        self.max_items = max_items
        self._locks: dict[UUID, asyncio.Lock] = {}

    def _lock_for(self, household_id: UUID) -> asyncio.Lock:
        return self._locks.setdefault(household_id, asyncio.Lock())

    async def _rebuild_locked(self, household_id: UUID) -> ActivityView:
        household_key = household_stream(household_id)
        chores_key = chore_stream(household_id)
        household_records = await self.store.load(household_key)
        chore_records = await self.store.load(chores_key)

        items = render_activities(unwrap(household_records), unwrap(chore_records))
        view = ActivityView(
            household_id=household_id,
            items=tuple(items[: self.max_items]),
            positions={
                household_key: household_records[-1].version if household_records else 0,
                chores_key: chore_records[-1].version if chore_records else 0,
            },
        )
        await self.repository.replace(view)
        logger.info(
            "Activity view rebuilt",
            extra={"household_id": household_id, "activity_count": len(view.items)},
        )
        return view

    async def rebuild(self, household_id: UUID) -> int:
        """Recompute the household's activity view from scratch."""
        async with self._lock_for(household_id):
            view = await self._rebuild_locked(household_id)
        return len(view.items)

    async def append_activity(self, record: RecordedEvent) -> None:
        """Fold one just-appended fact into the stored view."""
        household_id = record.event.household_id
        household_key = household_stream(household_id)

        async with self._lock_for(household_id):
            view = await self.repository.get(household_id)
            if view is None:
                await self._rebuild_locked(household_id)
                return
            folded = view.positions.get(record.stream_key, 0)
            if record.version <= folded:
                return
            if record.version != folded + 1:
                logger.warning(
                    "Activity view missed a fact, rebuilding",
                    extra={"household_id": household_id, "stream_key": record.stream_key},
                )
                await self._rebuild_locked(household_id)
                return

            household_records = await self.store.load(household_key)
            prior = [
                r.event for r in household_records
                if record.stream_key != household_key or r.version < record.version
            ]
            chore_events = unwrap(await self.store.load(chore_stream(household_id)))
            item = render_appended(record.event, prior, chore_events)

            items = view.items
            if item is not None:
                items = insert_newest_first(items, item, self.max_items)
            await self.repository.replace(ActivityView(
                household_id=household_id,
                items=items,
                positions={**view.positions, record.stream_key: record.version},
                rebuilt_at=view.rebuilt_at,
            ))

    async def _build_if_missing(self, household_id: UUID) -> ActivityView | None:
        has_history = (
            await self.store.load(household_stream(household_id))
            or await self.store.load(chore_stream(household_id))
        )
        if not has_history:
            return None
        async with self._lock_for(household_id):
            view = await self.repository.get(household_id)
            if view is None:
                view = await self._rebuild_locked(household_id)
        return view

    async def get_activities(
        self,
        household_id: UUID,
        days: int | None = None,
        limit: int | None = None,
        now: datetime | None = None,
    ) -> list[ActivityItem]:
        view = await self.repository.get(household_id)
        if view is None:
            view = await self._build_if_missing(household_id)
        if view is None:
            return []
        return filter_activities(view.items, now=now or utcnow(), days=days, limit=limit)


class ActivityRecorder:
    """Event publisher that keeps the activity view current after each append."""

    def __init__(self, read_model: ActivityReadModel):
        self.read_model = read_model

    async def publish(self, record: RecordedEvent) -> None:
        await self.read_model.append_activity(record)
