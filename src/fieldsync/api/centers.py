"""Centers API - center (group of groups) operations on the remote service."""

from __future__ import annotations

from typing import Any, TYPE_CHECKING

from ..schemas import GenericResult, Page, SaveResult

if TYPE_CHECKING:
    from .client import ApiClient


class CentersAPI:
    """Centers API.

    Usage:
        async with ApiClient.from_settings() as api:
            page = await api.centers.list(paged=True, offset=0, limit=100)
            groups = await api.centers.with_groups(7)
    """

    def __init__(self, client: "ApiClient"):
        self._client = client

    async def list(self, paged: bool = True, offset: int = 0, limit: int = 100) -> Page:
        data = await self._client._get(
            "/centers", paged=str(paged).lower(), offset=offset, limit=limit
        )
        return self._client._parse(Page.from_api, data, "/centers")

    async def accounts(self, center_id: int) -> dict[str, Any]:
        return await self._client._get(f"/centers/{center_id}/accounts")

    async def with_groups(self, center_id: int) -> dict[str, Any]:
        """Center with its member groups.

        Returns:
            {"id": ..., "name": ..., "groupMembers": [...]}
        """
        return await self._client._get(
            f"/centers/{center_id}", associations="groupMembers"
        )

    async def with_groups_and_meeting(self, center_id: int) -> dict[str, Any]:
        """Center with member groups and the collection meeting calendar."""
        return await self._client._get(
            f"/centers/{center_id}",
            associations="groupMembers,collectionMeetingCalendar",
        )

    async def create(self, payload: dict[str, Any]) -> SaveResult:
        data = await self._client._post("/centers", payload)
        return self._client._parse(SaveResult.model_validate, data, "/centers")

    async def activate(self, center_id: int, payload: dict[str, Any] | None) -> GenericResult:
        endpoint = f"/centers/{center_id}"
        data = await self._client._post(endpoint, payload, command="activate")
        return self._client._parse(GenericResult.model_validate, data, endpoint)
