"""Data layer facade wiring every router to one gateway, store and mode."""

from __future__ import annotations

import logging
from typing import Any

from .errors import FieldSyncError
from .mode import ModeProvider
from .routing import (
    QUEUEING_ENTITY_TYPES,
    CenterRouter,
    ClientRouter,
    EntityRouter,
    OfficeRouter,
    QueueingRouter,
    SurveyRouter,
)
from .schemas import SyncReport
from .store import LocalCacheStore
from .tasks import BackgroundTasks

logger = logging.getLogger(__name__)


class DataLayer:
    """Routers for all entity types sharing one set of collaborators.

    Usage:
        async with ApiClient.from_settings() as api:
            layer = DataLayer(api, LocalCacheStore.default(), ModeState.from_settings())
            page = await layer.clients.get_all_clients(offset=0, limit=100)
            report = await layer.sync("client")
    """

    def __init__(
        self,
        api: Any,
        store: LocalCacheStore,
        mode: ModeProvider,
        tasks: BackgroundTasks | None = None,
    ):
        self.mode = mode
        self.store = store
        self.tasks = tasks if tasks is not None else BackgroundTasks()
        self.clients = ClientRouter(api, store, mode, self.tasks)
        self.centers = CenterRouter(api, store, mode, self.tasks)
        self.offices = OfficeRouter(api, store, mode, self.tasks)
        self.surveys = SurveyRouter(api, store, mode, self.tasks)

    def router(self, entity_type: str) -> EntityRouter:
        routers: dict[str, EntityRouter] = {
            r.entity_type: r
            for r in (self.clients, self.centers, self.offices, self.surveys)
        }
        try:
            return routers[entity_type]
        except KeyError:
            raise FieldSyncError(f"Unknown entity type: {entity_type}") from None

    def queueing_router(self, entity_type: str) -> QueueingRouter:
        router = self.router(entity_type)
        if not isinstance(router, QueueingRouter):
            raise FieldSyncError(f"{entity_type} entities cannot be created offline")
        return router

    async def sync(self, entity_type: str) -> SyncReport:
        return await self.queueing_router(entity_type).coordinator().run()

    async def sync_all(self) -> list[SyncReport]:
        """Replay every queue; a halted queue does not block the others."""
        reports = []
        for entity_type in QUEUEING_ENTITY_TYPES:
            report = await self.sync(entity_type)
            if not report.ok:
                logger.warning("%s queue halted with %d left", entity_type, len(report.remaining))
            reports.append(report)
        return reports

    async def aclose(self) -> None:
        await self.tasks.drain()
