"""Stored Event ORM — one row per appended fact.

Invariants:
    - (stream_key, version) is unique: two writers can never both claim a version
    - Rows are inserted, never updated or deleted
    - payload is the codec's JSON form; event_type names the catalog entry

Design Decisions:
    - Autoincrement id only for physical ordering/debugging; reads order by version
"""

from datetime import datetime, timezone

from sqlalchemy import JSON, BigInteger, DateTime, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from chorehub.db.base import Base


class StoredEvent(Base):
    __tablename__ = "stored_events"
    __table_args__ = (
        UniqueConstraint("stream_key", "version", name="uq_stored_events_stream_version"),
    )

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True,
    )
    stream_key: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    event_type: Mapped[str] = mapped_column(String(64), nullable=False)
    payload: Mapped[dict] = mapped_column(JSON, nullable=False)
    recorded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
