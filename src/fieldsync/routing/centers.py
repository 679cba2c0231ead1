"""Center router."""

from __future__ import annotations

from typing import Any

from ..config import settings
from ..schemas import GenericResult, Page, SaveResult
from .base import QueueingRouter, ReadOp


class CenterRouter(QueueingRouter):
    entity_type = "center"

    async def get_centers(
        self, paged: bool = True, offset: int = 0, limit: int | None = None
    ) -> Page:
        """One page of centers; offline only the first page is served."""
        if limit is None:
            limit = settings.page_limit
        return await self.route(
            ReadOp(
                "get_centers",
                remote=lambda: self._api.centers.list(paged=paged, offset=offset, limit=limit),
                local=lambda: self._store.read_all(self.entity_type),
                default=Page,
                mirror=self._mirror_page,
            ),
            offset=offset,
        )

    async def get_center_with_associations(self, center_id: int) -> dict[str, Any]:
        """A center and the groups attached to it."""

        async def _save(center: dict[str, Any]) -> None:
            await self._store.save_document(self.entity_type, "associations", center_id, center)

        return await self.route(
            ReadOp(
                "get_center_with_associations",
                remote=lambda: self._api.centers.with_groups(center_id),
                local=lambda: self._store.read_document(
                    self.entity_type, "associations", center_id
                ),
                default=dict,
                mirror=_save,
            )
        )

    async def get_centers_group_and_meeting(self, center_id: int) -> dict[str, Any]:
        """Collection sheet data (groups + meeting calendar). Online only."""
        return await self._api.centers.with_groups_and_meeting(center_id)

    async def sync_center_accounts(self, center_id: int) -> dict[str, Any]:
        accounts = await self._api.centers.accounts(center_id)
        return await self._store.save_document(
            self.entity_type, "accounts", center_id, accounts
        )

    async def create_center(self, payload: dict[str, Any]) -> SaveResult:
        return await self.create(payload, self.remote_create)

    async def remote_create(self, payload: dict[str, Any]) -> SaveResult:
        return await self._api.centers.create(payload)

    async def all_database_centers(self) -> Page:
        return await self.all_database_entities()

    async def get_offices(self) -> list[dict[str, Any]]:
        """Offices for the center creation form, straight from the remote."""
        return await self._api.offices.list()

    async def activate_center(
        self, center_id: int, payload: dict[str, Any] | None = None
    ) -> GenericResult:
        return await self._api.centers.activate(center_id, payload)
