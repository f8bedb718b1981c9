"""Stream Addressing — deterministic (kind, household) -> stream key mapping.

Invariants:
    - Injective over StreamKind x household id: "<kind>-<canonical uuid>"
    - No kind value is a prefix of another, and the UUID is rendered canonically
      (lowercase, hyphenated), so two pairs never share a key
    - All chores of one household share the single CHORES stream
"""

from uuid import UUID

from chorehub.core.domain_types import StreamKind


def stream_key(kind: StreamKind, household_id: UUID | str) -> str:
    """Return the stream key for a household-scoped aggregate."""
    canonical = household_id if isinstance(household_id, UUID) else UUID(household_id)
    return f"{StreamKind(kind).value}-{canonical}"


def household_stream(household_id: UUID) -> str:
    return stream_key(StreamKind.HOUSEHOLD, household_id)


def chore_stream(household_id: UUID) -> str:
    return stream_key(StreamKind.CHORES, household_id)
