"""Domain Types — identity wrappers, enums and UTC helpers."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

from chorehub.core.domain_types import (
    ActivityType, ChoreId, HouseholdId, StreamKind, as_utc, utcnow,
)


def test_identity_types_wrap_uuid():
    uid = uuid4()
    assert HouseholdId(uid) == uid
    assert ChoreId(uid) == uid


def test_enums_serialize_to_strings():
    assert StreamKind.HOUSEHOLD.value == "household"
    assert ActivityType.COMPLETION == "completion"


def test_utcnow_is_aware():
    assert utcnow().tzinfo is not None


def test_as_utc_treats_naive_as_utc():
    naive = datetime(2024, 5, 1, 12, 0)
    assert as_utc(naive) == datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def test_as_utc_converts_offsets():
    cest = timezone(timedelta(hours=2))
    value = datetime(2024, 5, 1, 14, 0, tzinfo=cest)
    converted = as_utc(value)
    assert converted.tzinfo == timezone.utc
    assert converted.hour == 12
