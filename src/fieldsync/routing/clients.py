"""Client router."""

from __future__ import annotations

from typing import Any

from ..config import settings
from ..schemas import GenericResult, Page, SaveResult
from .base import QueueingRouter, ReadOp

TEMPLATE_KEY = "default"


class ClientRouter(QueueingRouter):
    """Client reads, offline client creation and online-only client commands."""

    entity_type = "client"

    async def get_all_clients(
        self, paged: bool = True, offset: int = 0, limit: int | None = None
    ) -> Page:
        """One page of clients.

        Offline, the first request returns every cached client in one page;
        later offsets return an empty page.
        """
        if limit is None:
            limit = settings.page_limit
        return await self.route(
            ReadOp(
                "get_all_clients",
                remote=lambda: self._api.clients.list(paged=paged, offset=offset, limit=limit),
                local=lambda: self._store.read_all(self.entity_type),
                default=Page,
                mirror=self._mirror_page,
            ),
            offset=offset,
        )

    async def get_client(self, client_id: int) -> dict[str, Any]:
        return await self.route(
            ReadOp(
                "get_client",
                remote=lambda: self._api.clients.get(client_id),
                local=lambda: self._store.read_one(self.entity_type, client_id),
                default=dict,
                mirror=self._mirror_one,
            )
        )

    async def get_client_accounts(self, client_id: int) -> dict[str, Any]:
        """Loan and savings accounts of a client."""

        async def _save(accounts: dict[str, Any]) -> None:
            await self._store.save_document(self.entity_type, "accounts", client_id, accounts)

        return await self.route(
            ReadOp(
                "get_client_accounts",
                remote=lambda: self._api.clients.accounts(client_id),
                local=lambda: self._store.read_document(self.entity_type, "accounts", client_id),
                default=dict,
                mirror=_save,
            )
        )

    async def sync_client_accounts(self, client_id: int) -> dict[str, Any]:
        """Download a client's accounts and store them before returning.

        Unlike the mirrored read, the local write is awaited: this is the
        explicit "make available offline" action.
        """
        accounts = await self._api.clients.accounts(client_id)
        return await self._store.save_document(
            self.entity_type, "accounts", client_id, accounts
        )

    async def get_client_template(self) -> dict[str, Any]:
        """Options for the client creation form, cached for offline drafting."""

        async def _save(template: dict[str, Any]) -> None:
            await self._store.save_document(self.entity_type, "template", TEMPLATE_KEY, template)

        return await self.route(
            ReadOp(
                "get_client_template",
                remote=lambda: self._api.clients.template(),
                local=lambda: self._store.read_document(self.entity_type, "template", TEMPLATE_KEY),
                default=dict,
                mirror=_save,
            )
        )

    async def create_client(self, payload: dict[str, Any]) -> SaveResult:
        return await self.create(payload, self.remote_create)

    async def remote_create(self, payload: dict[str, Any]) -> SaveResult:
        return await self._api.clients.create(payload)

    async def all_database_clients(self) -> Page:
        return await self.all_database_entities()

    # Online-only commands: these need a remote id.

    async def activate_client(
        self, client_id: int, payload: dict[str, Any] | None = None
    ) -> GenericResult:
        return await self._api.clients.activate(client_id, payload)

    async def get_client_identifiers(self, client_id: int) -> list[dict[str, Any]]:
        return await self._api.clients.identifiers(client_id)

    async def create_client_identifier(
        self, client_id: int, payload: dict[str, Any]
    ) -> GenericResult:
        return await self._api.clients.create_identifier(client_id, payload)

    async def get_client_identifier_template(self, client_id: int) -> dict[str, Any]:
        return await self._api.clients.identifier_template(client_id)

    async def delete_client_identifier(
        self, client_id: int, identifier_id: int
    ) -> GenericResult:
        return await self._api.clients.delete_identifier(client_id, identifier_id)

    async def get_client_pinpoint_locations(self, client_id: int) -> list[dict[str, Any]]:
        return await self._api.clients.pinpoint_locations(client_id)

    async def add_client_pinpoint_location(
        self, client_id: int, address: dict[str, Any]
    ) -> GenericResult:
        return await self._api.clients.add_pinpoint_location(client_id, address)

    async def update_client_pinpoint_location(
        self, apptable_id: int, datatable_id: int, address: dict[str, Any]
    ) -> GenericResult:
        return await self._api.clients.update_pinpoint_location(
            apptable_id, datatable_id, address
        )

    async def delete_client_pinpoint_location(
        self, apptable_id: int, datatable_id: int
    ) -> GenericResult:
        return await self._api.clients.delete_pinpoint_location(apptable_id, datatable_id)

    async def upload_client_image(
        self, client_id: int, filename: str, content: bytes, content_type: str = "image/png"
    ) -> GenericResult:
        return await self._api.clients.upload_image(client_id, filename, content, content_type)

    async def delete_client_image(self, client_id: int) -> GenericResult:
        return await self._api.clients.delete_image(client_id)
