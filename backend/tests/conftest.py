"""Root conftest — shared test configuration.

Every test runs against the in-memory backend unless it builds a SQL store
itself, and pin hashing uses the cheapest Argon2 costs.
"""

import os

import pytest

os.environ.setdefault("EVENT_STORE_BACKEND", "memory")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("PIN_HASH_TIME_COST", "1")
os.environ.setdefault("PIN_HASH_MEMORY_COST", "8")
os.environ.setdefault("LOG_FORMAT", "text")

from chorehub.core.pin_hasher import PinHashParams  # noqa: E402


@pytest.fixture
def fast_pin_params() -> PinHashParams:
    return PinHashParams(time_cost=1, memory_cost=8, parallelism=1)
