"""Clients API - client operations on the remote service."""

from __future__ import annotations

from typing import Any, TYPE_CHECKING

from ..schemas import GenericResult, Page, SaveResult

if TYPE_CHECKING:
    from .client import ApiClient

PINPOINT_DATATABLE = "client_pinpoint_location"


class ClientsAPI:
    """Clients API.

    Usage:
        async with ApiClient.from_settings() as api:
            page = await api.clients.list(paged=True, offset=0, limit=100)
            client = await api.clients.get(42)
            saved = await api.clients.create({"firstname": "Ada", ...})
    """

    def __init__(self, client: "ApiClient"):
        self._client = client

    async def list(self, paged: bool = True, offset: int = 0, limit: int = 100) -> Page:
        """List clients, one page at a time.

        Returns:
            Page with ``page_items`` and ``total_filtered_records``
        """
        data = await self._client._get(
            "/clients", paged=str(paged).lower(), offset=offset, limit=limit
        )
        return self._client._parse(Page.from_api, data, "/clients")

    async def get(self, client_id: int) -> dict[str, Any]:
        return await self._client._get(f"/clients/{client_id}")

    async def accounts(self, client_id: int) -> dict[str, Any]:
        """Loan and savings accounts of a client."""
        return await self._client._get(f"/clients/{client_id}/accounts")

    async def template(self) -> dict[str, Any]:
        """Options needed to build a client creation form (offices, staff, ...)."""
        return await self._client._get("/clients/template")

    async def create(self, payload: dict[str, Any]) -> SaveResult:
        data = await self._client._post("/clients", payload)
        return self._client._parse(SaveResult.model_validate, data, "/clients")

    async def activate(self, client_id: int, payload: dict[str, Any] | None) -> GenericResult:
        endpoint = f"/clients/{client_id}"
        data = await self._client._post(endpoint, payload, command="activate")
        return self._client._parse(GenericResult.model_validate, data, endpoint)

    # Identifiers
    async def identifiers(self, client_id: int) -> list[dict[str, Any]]:
        return await self._client._get(f"/clients/{client_id}/identifiers")

    async def create_identifier(
        self, client_id: int, payload: dict[str, Any]
    ) -> GenericResult:
        endpoint = f"/clients/{client_id}/identifiers"
        data = await self._client._post(endpoint, payload)
        return self._client._parse(GenericResult.model_validate, data, endpoint)

    async def identifier_template(self, client_id: int) -> dict[str, Any]:
        return await self._client._get(f"/clients/{client_id}/identifiers/template")

    async def delete_identifier(self, client_id: int, identifier_id: int) -> GenericResult:
        endpoint = f"/clients/{client_id}/identifiers/{identifier_id}"
        data = await self._client._delete(endpoint)
        return self._client._parse(GenericResult.model_validate, data, endpoint)

    # Pinpoint locations (stored in a datatable on the server)
    async def pinpoint_locations(self, client_id: int) -> list[dict[str, Any]]:
        return await self._client._get(f"/datatables/{PINPOINT_DATATABLE}/{client_id}")

    async def add_pinpoint_location(
        self, client_id: int, address: dict[str, Any]
    ) -> GenericResult:
        endpoint = f"/datatables/{PINPOINT_DATATABLE}/{client_id}"
        data = await self._client._post(endpoint, address)
        return self._client._parse(GenericResult.model_validate, data, endpoint)

    async def update_pinpoint_location(
        self, apptable_id: int, datatable_id: int, address: dict[str, Any]
    ) -> GenericResult:
        endpoint = f"/datatables/{PINPOINT_DATATABLE}/{apptable_id}/{datatable_id}"
        data = await self._client._put(endpoint, address)
        return self._client._parse(GenericResult.model_validate, data, endpoint)

    async def delete_pinpoint_location(
        self, apptable_id: int, datatable_id: int
    ) -> GenericResult:
        endpoint = f"/datatables/{PINPOINT_DATATABLE}/{apptable_id}/{datatable_id}"
        data = await self._client._delete(endpoint)
        return self._client._parse(GenericResult.model_validate, data, endpoint)

    # Profile image
    async def upload_image(
        self,
        client_id: int,
        filename: str,
        content: bytes,
        content_type: str = "image/png",
    ) -> GenericResult:
        endpoint = f"/clients/{client_id}/images"
        data = await self._client._upload(
            endpoint, files={"file": (filename, content, content_type)}
        )
        return self._client._parse(GenericResult.model_validate, data, endpoint)

    async def delete_image(self, client_id: int) -> GenericResult:
        endpoint = f"/clients/{client_id}/images"
        data = await self._client._delete(endpoint)
        return self._client._parse(GenericResult.model_validate, data, endpoint)
