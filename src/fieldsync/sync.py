"""Sync coordinator - replays queued offline creations against the remote."""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable

from .errors import FieldSyncError, TransportError
from .schemas import SaveResult, SyncReport
from .store import LocalCacheStore

logger = logging.getLogger(__name__)

# Entity types with a replay in progress in this process.
_running: set[str] = set()


class SyncInProgress(FieldSyncError):
    """Another replay of the same entity type's queue is still running."""

    def __init__(self, entity_type: str):
        super().__init__(f"A {entity_type} sync is already running")
        self.entity_type = entity_type


class SyncCoordinator:
    """Drains one entity type's pending queue, oldest record first.

    Each record is sent with the remote create call; once the remote
    confirms, the record is deleted and the queue reloaded in a single
    store call. The first transport failure stops the run: later records
    are not attempted, so creation order is kept and nothing is dropped.
    Records already synced stay deleted.

    After a replay the entity cache is left alone; it refreshes on the
    next online read.
    """

    def __init__(
        self,
        entity_type: str,
        store: LocalCacheStore,
        create: Callable[[dict[str, Any]], Awaitable[SaveResult]],
    ):
        self.entity_type = entity_type
        self._store = store
        self._create = create

    async def run(self) -> SyncReport:
        if self.entity_type in _running:
            raise SyncInProgress(self.entity_type)
        _running.add(self.entity_type)
        try:
            return await self._replay()
        finally:
            _running.discard(self.entity_type)

    async def _replay(self) -> SyncReport:
        queue = await self._store.read_pending_all(self.entity_type)
        report = SyncReport(entity_type=self.entity_type, remaining=queue)
        if not queue:
            return report

        logger.info("Syncing %d pending %s record(s)", len(queue), self.entity_type)
        while queue:
            record = queue[0]
            try:
                result = await self._create(record.payload)
            except TransportError as exc:
                logger.warning(
                    "Sync of %s #%d failed, halting batch: %s",
                    self.entity_type, record.local_id, exc,
                )
                report.failed = record
                report.error = exc
                break

            queue = await self._store.delete_pending_and_reload(
                self.entity_type, record.local_id
            )
            report.synced.append(result)
            report.synced_ids.append(record.local_id)
            report.remaining = queue
            logger.info(
                "Synced %s #%d as remote id %s",
                self.entity_type, record.local_id, result.remote_id,
            )

        return report
