"""Activity Stores — persistence for the materialized activity view.

Invariants:
    - replace() publishes a whole view at once: in memory by swapping the
      dict entry, in SQL by merging the single household row in one commit
    - get() returns None when no view was ever built

Design Decisions:
    - Items stored as JSON via the activity TypeAdapter helpers, so the row
      schema does not track ActivityItem fields
"""

import logging
from uuid import UUID

from chorehub.core.activity import ActivityView, items_from_json, items_to_json
from chorehub.core.domain_types import as_utc
from chorehub.infrastructure.database import DatabaseSessionManager
from chorehub.models.activity_view import ActivityViewRow

logger = logging.getLogger(__name__)


class InMemoryActivityRepository:
    def __init__(self):
        self._views: dict[UUID, ActivityView] = {}

    async def get(self, household_id: UUID) -> ActivityView | None:
        return self._views.get(household_id)

    async def replace(self, view: ActivityView) -> None:
        self._views[view.household_id] = view


class SqlActivityRepository:
    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    async def get(self, household_id: UUID) -> ActivityView | None:
        async with self._db.session() as session:
            row = await session.get(ActivityViewRow, household_id)
        if row is None:
            return None
        return ActivityView(
            household_id=row.household_id,
            items=items_from_json(row.items),
            positions=dict(row.positions),
            rebuilt_at=as_utc(row.rebuilt_at),
        )

    async def replace(self, view: ActivityView) -> None:
        async with self._db.session() as session:
            await session.merge(ActivityViewRow(
                household_id=view.household_id,
                items=items_to_json(view.items),
                positions=dict(view.positions),
                rebuilt_at=view.rebuilt_at,
            ))
            await session.commit()
        logger.debug(
            "Activity view stored",
            extra={"household_id": view.household_id, "activity_count": len(view.items)},
        )
