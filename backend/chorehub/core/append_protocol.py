"""Append Protocol — expected-version preconditions for stream appends.

Invariants:
    - NO_STREAM: append only to an empty stream (household creation)
    - ANY: no precondition; never fails on version grounds
    - int N: append only when the stream is exactly at version N
    - A failed precondition raises ConcurrencyError and is never retried
      or turned into an update

Design Decisions:
    - One pure check shared by every store backend so the policy cannot drift
"""

from enum import Enum
from typing import Union

from chorehub.core.errors import ConcurrencyError


class StreamState(str, Enum):
    NO_STREAM = "no_stream"
    ANY = "any"


ExpectedVersion = Union[StreamState, int]


def describe_expected(expected: ExpectedVersion) -> str:
    if isinstance(expected, StreamState):
        return expected.value
    return f"version {expected}"


def check_expected_version(
    stream_key: str, expected: ExpectedVersion, current_version: int,
) -> None:
    """Raise ConcurrencyError when current_version violates the expectation."""
    if expected is StreamState.ANY:
        return
    if expected is StreamState.NO_STREAM:
        if current_version != 0:
            raise ConcurrencyError(stream_key, describe_expected(expected), current_version)
        return
    if isinstance(expected, bool) or not isinstance(expected, int) or expected < 0:
        raise ValueError(f"Invalid expected version: {expected!r}")
    if current_version != expected:
        raise ConcurrencyError(stream_key, describe_expected(expected), current_version)
