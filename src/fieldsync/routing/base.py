"""Generic connectivity-aware router.

One ``EntityRouter`` subclass exists per entity type. Subclasses do not
branch on the connectivity mode themselves; they describe each read as a
``ReadOp`` (which remote call, which local read, what default, how to
mirror) and hand it to ``route()``. Creations go through ``create()``,
which queues a pending write record while offline.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, ClassVar, Generic, TypeVar

from ..mode import ConnectivityMode, ModeProvider
from ..schemas import Page, PendingWriteRecord, SaveResult
from ..store import LocalCacheStore
from ..tasks import BackgroundTasks

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class ReadOp(Generic[T]):
    """How one read operation behaves in each connectivity mode.

    ``default`` is returned for UNKNOWN mode and for offline requests past
    the first page. ``mirror`` receives the remote result and writes it to
    the local store as a background task.
    """

    name: str
    remote: Callable[[], Awaitable[T]]
    local: Callable[[], Awaitable[T]]
    default: Callable[[], T]
    mirror: Callable[[T], Awaitable[Any]] | None = None


class EntityRouter:
    """Routes one entity type's operations to the remote or the local store."""

    entity_type: ClassVar[str]

    def __init__(
        self,
        api: Any,
        store: LocalCacheStore,
        mode: ModeProvider,
        tasks: BackgroundTasks | None = None,
    ):
        self._api = api
        self._store = store
        self._mode = mode
        self._tasks = tasks if tasks is not None else BackgroundTasks()

    @property
    def tasks(self) -> BackgroundTasks:
        return self._tasks

    async def route(self, op: ReadOp[T], *, offset: int = 0) -> T:
        """Run a read through the path selected by the current mode.

        Remote failures propagate unchanged. Offline requests with a
        non-zero offset get ``op.default()`` without touching the store:
        only the first page is available offline.
        """
        mode = self._mode.current_mode()

        if mode is ConnectivityMode.ONLINE:
            result = await op.remote()
            if op.mirror is not None:
                self._tasks.spawn(
                    op.mirror(result),
                    label=f"mirror:{self.entity_type}:{op.name}",
                )
            return result

        if mode is ConnectivityMode.OFFLINE:
            if offset > 0:
                return op.default()
            return await op.local()

        return op.default()

    async def create(
        self,
        payload: dict[str, Any],
        remote: Callable[[dict[str, Any]], Awaitable[SaveResult]],
    ) -> SaveResult:
        """Create remotely when online, queue a pending write when offline.

        The offline result is unsynced: it carries the local ``pending_id``
        and no remote id. UNKNOWN mode persists nothing.
        """
        mode = self._mode.current_mode()

        if mode is ConnectivityMode.ONLINE:
            return await remote(payload)

        if mode is ConnectivityMode.OFFLINE:
            record = await self._store.append_pending(self.entity_type, payload)
            return SaveResult.pending(record.local_id)

        logger.debug("Create %s ignored: connectivity mode unknown", self.entity_type)
        return SaveResult.empty()

    # ------------------------------------------------------------------
    # Local mirror helpers shared by every entity type
    # ------------------------------------------------------------------

    async def all_database_entities(self) -> Page:
        """Everything cached for this entity type, regardless of mode."""
        return await self._store.read_all(self.entity_type)

    async def sync_in_database(self, entity: dict[str, Any]) -> dict[str, Any]:
        """Save one entity into the local cache (explicit download)."""
        return await self._store.upsert(self.entity_type, entity)

    async def _mirror_page(self, page: Page) -> None:
        await self._store.upsert_many(self.entity_type, page.page_items)

    async def _mirror_list(self, items: list[dict[str, Any]]) -> None:
        await self._store.upsert_many(self.entity_type, items)

    async def _mirror_one(self, entity: dict[str, Any]) -> None:
        await self._store.upsert(self.entity_type, entity)


class QueueingRouter(EntityRouter):
    """Router for entity types that may be created offline.

    Adds the pending-write queue operations and the sync coordinator.
    Subclasses implement ``remote_create``.
    """

    async def remote_create(self, payload: dict[str, Any]) -> SaveResult:
        raise NotImplementedError

    async def pending_payloads(self) -> list[PendingWriteRecord]:
        """Unsynced creations, oldest first."""
        return await self._store.read_pending_all(self.entity_type)

    async def update_pending_payload(
        self, local_id: int, payload: dict[str, Any]
    ) -> PendingWriteRecord:
        """Edit an unsynced draft. Callers must not race this with a sync run."""
        return await self._store.update_pending(local_id, payload, self.entity_type)

    async def delete_and_reload_payloads(self, local_id: int) -> list[PendingWriteRecord]:
        return await self._store.delete_pending_and_reload(self.entity_type, local_id)

    def coordinator(self):
        from ..sync import SyncCoordinator

        return SyncCoordinator(self.entity_type, self._store, self.remote_create)
