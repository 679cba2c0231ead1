"""Durable queue of creations made while offline."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class PendingWrite(Base):
    """Queue item holding a full creation payload awaiting replay."""

    __tablename__ = "pending_write"
    # AUTOINCREMENT keeps local ids monotonic even after the newest row is deleted.
    __table_args__ = {"sqlite_autoincrement": True}

    local_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    entity_type: Mapped[str] = mapped_column(String(40), index=True)
    payload_json: Mapped[dict] = mapped_column(JSON)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    def __repr__(self) -> str:
        return f"<PendingWrite {self.entity_type}#{self.local_id}>"
