"""Mirrors of remote entities and remote read results."""

from __future__ import annotations

from sqlalchemy import Integer, JSON, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin


class CachedEntity(TimestampMixin, Base):
    """Last-known copy of one remote entity, keyed by its remote id."""

    __tablename__ = "cached_entity"
    __table_args__ = (
        UniqueConstraint("entity_type", "remote_id", name="uq_cached_entity_remote"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    entity_type: Mapped[str] = mapped_column(String(40), index=True)
    remote_id: Mapped[int] = mapped_column(Integer)
    # e.g. survey id for a survey question, center id for a center group
    parent_id: Mapped[int | None] = mapped_column(Integer, default=None, index=True)
    payload_json: Mapped[dict] = mapped_column(JSON)

    def __repr__(self) -> str:
        return f"<CachedEntity {self.entity_type}:{self.remote_id}>"


class CachedDocument(TimestampMixin, Base):
    """A non-entity read result (accounts, templates, associations)."""

    __tablename__ = "cached_document"
    __table_args__ = (
        UniqueConstraint("entity_type", "kind", "key", name="uq_cached_document_key"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    entity_type: Mapped[str] = mapped_column(String(40), index=True)
    kind: Mapped[str] = mapped_column(String(40))
    key: Mapped[str] = mapped_column(String(100))
    payload_json: Mapped[dict | list] = mapped_column(JSON)

    def __repr__(self) -> str:
        return f"<CachedDocument {self.entity_type}/{self.kind}:{self.key}>"
