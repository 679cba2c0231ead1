"""Local cache store: entity mirrors, cached documents and the pending queue.

Every method opens its own session and commits before returning, so each
call is one transaction. SQLAlchemy failures surface as ``StorageError``;
nothing here ever raises a transport error.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Iterable

from sqlalchemy import func, select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from .errors import EntityNotCached, PendingRecordNotFound, StorageError
from .models import CachedDocument, CachedEntity, PendingWrite
from .schemas import Page, PendingWriteRecord

logger = logging.getLogger(__name__)


def _remote_id(entity_type: str, entity: Any) -> int:
    if not isinstance(entity, dict):
        raise StorageError(f"Cannot cache {entity_type}: expected a JSON object")
    rid = entity.get("id")
    if isinstance(rid, bool) or not isinstance(rid, int):
        raise StorageError(f"Cannot cache {entity_type} without an integer id")
    return rid


class LocalCacheStore:
    """Keyed durable storage for one device."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    @classmethod
    def default(cls) -> "LocalCacheStore":
        from .database import async_session_factory

        return cls(async_session_factory)

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[AsyncSession]:
        async with self._session_factory() as session:
            try:
                yield session
            except SQLAlchemyError as exc:
                await session.rollback()
                raise StorageError(f"Local store failure: {exc}") from exc

    # ------------------------------------------------------------------
    # Entity mirrors
    # ------------------------------------------------------------------

    @staticmethod
    def _entity_upsert(entity_type: str, entity: dict[str, Any], parent_id: int | None):
        stmt = sqlite_insert(CachedEntity).values(
            entity_type=entity_type,
            remote_id=_remote_id(entity_type, entity),
            parent_id=parent_id,
            payload_json=dict(entity),
        )
        return stmt.on_conflict_do_update(
            index_elements=["entity_type", "remote_id"],
            set_={
                "payload_json": stmt.excluded.payload_json,
                "parent_id": stmt.excluded.parent_id,
                "updated_at": func.now(),
            },
        )

    async def upsert(
        self, entity_type: str, entity: dict[str, Any], parent_id: int | None = None
    ) -> dict[str, Any]:
        """Insert or replace one entity, last write wins."""
        stmt = self._entity_upsert(entity_type, entity, parent_id)
        async with self._session() as db:
            await db.execute(stmt)
            await db.commit()
        return entity

    async def upsert_many(
        self,
        entity_type: str,
        entities: Iterable[dict[str, Any]],
        parent_id: int | None = None,
    ) -> list[dict[str, Any]]:
        items = list(entities)
        stmts = [self._entity_upsert(entity_type, e, parent_id) for e in items]
        async with self._session() as db:
            for stmt in stmts:
                await db.execute(stmt)
            await db.commit()
        logger.debug("Cached %d %s rows", len(items), entity_type)
        return items

    async def read_all(self, entity_type: str) -> Page:
        stmt = (
            select(CachedEntity.payload_json)
            .where(CachedEntity.entity_type == entity_type)
            .order_by(CachedEntity.remote_id.asc())
        )
        async with self._session() as db:
            rows = (await db.execute(stmt)).scalars().all()
        return Page.of(list(rows))

    async def read_one(self, entity_type: str, remote_id: int) -> dict[str, Any]:
        stmt = select(CachedEntity.payload_json).where(
            CachedEntity.entity_type == entity_type,
            CachedEntity.remote_id == remote_id,
        )
        async with self._session() as db:
            payload = (await db.execute(stmt)).scalar_one_or_none()
        if payload is None:
            raise EntityNotCached(entity_type, remote_id)
        return payload

    async def read_children(self, entity_type: str, parent_id: int) -> list[dict[str, Any]]:
        stmt = (
            select(CachedEntity.payload_json)
            .where(
                CachedEntity.entity_type == entity_type,
                CachedEntity.parent_id == parent_id,
            )
            .order_by(CachedEntity.remote_id.asc())
        )
        async with self._session() as db:
            return list((await db.execute(stmt)).scalars().all())

    # ------------------------------------------------------------------
    # Documents (accounts, templates, associations)
    # ------------------------------------------------------------------

    async def save_document(
        self, entity_type: str, kind: str, key: int | str, payload: Any
    ) -> Any:
        stmt = sqlite_insert(CachedDocument).values(
            entity_type=entity_type, kind=kind, key=str(key), payload_json=payload
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["entity_type", "kind", "key"],
            set_={"payload_json": stmt.excluded.payload_json, "updated_at": func.now()},
        )
        async with self._session() as db:
            await db.execute(stmt)
            await db.commit()
        return payload

    async def read_document(self, entity_type: str, kind: str, key: int | str) -> Any:
        stmt = select(CachedDocument.payload_json).where(
            CachedDocument.entity_type == entity_type,
            CachedDocument.kind == kind,
            CachedDocument.key == str(key),
        )
        async with self._session() as db:
            payload = (await db.execute(stmt)).scalar_one_or_none()
        if payload is None:
            raise EntityNotCached(f"{entity_type}/{kind}", key)
        return payload

    # ------------------------------------------------------------------
    # Pending write queue
    # ------------------------------------------------------------------

    @staticmethod
    def _to_record(row: PendingWrite) -> PendingWriteRecord:
        return PendingWriteRecord(
            local_id=row.local_id,
            entity_type=row.entity_type,
            payload=row.payload_json,
            created_at=row.created_at,
        )

    @staticmethod
    async def _pending_rows(db: AsyncSession, entity_type: str) -> list[PendingWrite]:
        stmt = (
            select(PendingWrite)
            .where(PendingWrite.entity_type == entity_type)
            .order_by(PendingWrite.local_id.asc())
        )
        return list((await db.execute(stmt)).scalars().all())

    async def append_pending(
        self, entity_type: str, payload: dict[str, Any]
    ) -> PendingWriteRecord:
        """Queue a creation payload; the store assigns the local id."""
        async with self._session() as db:
            row = PendingWrite(entity_type=entity_type, payload_json=dict(payload))
            db.add(row)
            await db.commit()
            await db.refresh(row)
            record = self._to_record(row)
        logger.info("Queued offline %s creation as #%d", entity_type, record.local_id)
        return record

    async def read_pending_all(self, entity_type: str) -> list[PendingWriteRecord]:
        """Pending records for one entity type, oldest first."""
        async with self._session() as db:
            rows = await self._pending_rows(db, entity_type)
            return [self._to_record(r) for r in rows]

    async def update_pending(
        self,
        local_id: int,
        payload: dict[str, Any],
        entity_type: str | None = None,
    ) -> PendingWriteRecord:
        """Replace the stored payload; id and creation time are kept."""
        async with self._session() as db:
            row = await db.get(PendingWrite, local_id)
            if row is None or (entity_type and row.entity_type != entity_type):
                raise PendingRecordNotFound(local_id, entity_type)
            row.payload_json = dict(payload)
            await db.commit()
            await db.refresh(row)
            return self._to_record(row)

    async def delete_pending_and_reload(
        self, entity_type: str, local_id: int
    ) -> list[PendingWriteRecord]:
        """Delete one record and return what remains, in one transaction."""
        async with self._session() as db:
            row = await db.get(PendingWrite, local_id)
            if row is None or row.entity_type != entity_type:
                raise PendingRecordNotFound(local_id, entity_type)
            await db.delete(row)
            await db.flush()
            remaining = [self._to_record(r) for r in await self._pending_rows(db, entity_type)]
            await db.commit()
        return remaining
