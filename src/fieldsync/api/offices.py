"""Offices API."""

from __future__ import annotations

from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from .client import ApiClient


class OfficesAPI:
    def __init__(self, client: "ApiClient"):
        self._client = client

    async def list(self) -> list[dict[str, Any]]:
        """All offices of the organisation (not paginated)."""
        return await self._client._get("/offices")
