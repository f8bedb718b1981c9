"""ORM Models — the append-only event log and the activity cache.

Invariants:
    - stored_events is the only source of truth; activity_views is rebuildable

Design Decisions:
    - One file per table; all imported here so Base.metadata is complete
      before create_all or Alembic autogenerate runs
"""

from chorehub.models.stored_event import StoredEvent  # noqa: F401
from chorehub.models.activity_view import ActivityViewRow  # noqa: F401
