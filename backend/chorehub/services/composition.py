"""Service Composition — wires stores, broadcaster and handlers from Settings.

Invariants:
    - Every handler receives its collaborators explicitly; nothing is looked
      up from module globals at call time
    - All handlers write through the PublishingEventStore, so every
      successful append updates the activity view and reaches the
      household's live group
    - db is set only for the SQL backend and must be disposed on shutdown
"""

import logging
from dataclasses import dataclass

from chorehub.config import Settings
from chorehub.core.repository_protocols import EventStore
from chorehub.infrastructure.activity_store import (
    InMemoryActivityRepository, SqlActivityRepository,
)
from chorehub.infrastructure.database import DatabaseSessionManager
from chorehub.infrastructure.memory_event_store import InMemoryEventStore
from chorehub.infrastructure.realtime import HouseholdBroadcaster, PublishingEventStore
from chorehub.infrastructure.sql_event_store import SqlEventStore
from chorehub.services.activity_read_model import ActivityReadModel, ActivityRecorder
from chorehub.services.handle_chores import ChoreHandler
from chorehub.services.handle_household import HouseholdHandler
from chorehub.services.handle_invites import InviteHandler
from chorehub.services.handle_members import MemberHandler

logger = logging.getLogger(__name__)


@dataclass
class Services:
    event_store: EventStore
    broadcaster: HouseholdBroadcaster
    households: HouseholdHandler
    chores: ChoreHandler
    members: MemberHandler
    invites: InviteHandler
    activities: ActivityReadModel
    db: DatabaseSessionManager | None = None

    async def close(self) -> None:
        if self.db is not None:
            await self.db.dispose()


def build_services(settings: Settings) -> Services:
    db = None
    if settings.event_store_backend == "sql":
        db = DatabaseSessionManager(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
        inner = SqlEventStore(db, settings.any_append_retries)
        activity_repository = SqlActivityRepository(db)
    else:
        inner = InMemoryEventStore()
        activity_repository = InMemoryActivityRepository()

    broadcaster = HouseholdBroadcaster()
    activities = ActivityReadModel(inner, activity_repository, settings.activity_max_items)
    store = PublishingEventStore(inner, ActivityRecorder(activities), broadcaster)
    pin_params = settings.pin_hash_params
    logger.info(f"Event store backend: {settings.event_store_backend}")

    return Services(
        event_store=store,
        broadcaster=broadcaster,
        households=HouseholdHandler(store, pin_params),
        chores=ChoreHandler(store, pin_params),
        members=MemberHandler(store, pin_params),
        invites=InviteHandler(store, settings.invite_base_url),
        activities=activities,
        db=db,
    )
