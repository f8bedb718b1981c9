"""Domain Types — identity types and enums shared across the codebase.

Invariants:
    - HouseholdId, MemberId, ChoreId, InviteId wrap UUIDs
    - All valid states encoded as Enums, no raw string matching
    - Stored timestamps are timezone-aware UTC

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from datetime import datetime, timezone
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

HouseholdId = NewType("HouseholdId", UUID)
MemberId = NewType("MemberId", UUID)
ChoreId = NewType("ChoreId", UUID)
InviteId = NewType("InviteId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class StreamKind(str, Enum):
    """Aggregate kinds that own a stream. Both are keyed by household."""
    HOUSEHOLD = "household"
    CHORES = "chores"


class ActivityType(str, Enum):
    """Kinds of rendered activity entries."""
    HOUSEHOLD_CREATED = "household_created"
    INVITE_GENERATED = "invite_generated"
    MEMBER_JOINED = "member_joined"
    NICKNAME_CHANGED = "nickname_changed"
    STATUS_CHANGED = "status_changed"
    MEMBER_REMOVED = "member_removed"
    CHORE_CREATED = "chore_created"
    CHORE_ASSIGNED = "chore_assigned"
    COMPLETION = "completion"
    CHORE_DELETED = "chore_deleted"


# ─── Time ────────────────────────────────────────────────────────

def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC; aware ones are converted."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
