"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache): single instance per process
    - Pin hashing costs must match the ones existing credentials were made with

Design Decisions:
    - Defaults for every setting: works out-of-the-box against a local Postgres
    - event_store_backend="memory" runs without a database (tests, demos)
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from chorehub.core.pin_hasher import PinHashParams


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Event store
    event_store_backend: Literal["sql", "memory"] = "sql"
    any_append_retries: int = Field(5, ge=0)

    # Database
    database_url: str = "postgresql+asyncpg://chorehub:chorehub@db:5432/chorehub"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting platforms hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Invites
    invite_base_url: str = "http://localhost:5173/join"

    # Pin hashing (Argon2id; memory cost in KiB)
    pin_hash_time_cost: int = Field(3, ge=1)
    pin_hash_memory_cost: int = Field(65536, ge=8)
    pin_hash_parallelism: int = Field(1, ge=1)

    # Activity read model
    activity_max_items: int = Field(500, ge=1)

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def pin_hash_params(self) -> PinHashParams:
        return PinHashParams(
            time_cost=self.pin_hash_time_cost,
            memory_cost=self.pin_hash_memory_cost,
            parallelism=self.pin_hash_parallelism,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
