"""Activity View ORM — one row per household holding the materialized activity list.

Invariants:
    - A rebuild replaces the whole row in one statement; readers never see a
      partially written list
"""

import uuid
from datetime import datetime

from sqlalchemy import JSON, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from chorehub.db.base import Base


class ActivityViewRow(Base):
    __tablename__ = "activity_views"

    household_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    items: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    # stream key -> last folded version
    positions: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    rebuilt_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
