"""Office router."""

from __future__ import annotations

from typing import Any

from .base import EntityRouter, ReadOp


class OfficeRouter(EntityRouter):
    entity_type = "office"

    async def _read_cached(self) -> list[dict[str, Any]]:
        return (await self._store.read_all(self.entity_type)).page_items

    async def get_offices(self) -> list[dict[str, Any]]:
        return await self.route(
            ReadOp(
                "get_offices",
                remote=lambda: self._api.offices.list(),
                local=self._read_cached,
                default=list,
                mirror=self._mirror_list,
            )
        )
