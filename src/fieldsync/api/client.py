"""Remote gateway - typed async wrapper for the field-operations REST API.

Every HTTP failure (connection error, timeout, non-2xx status, undecodable
or wrongly shaped body) is raised as ``TransportError`` with the ``httpx``
or ``pydantic`` exception chained.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, TYPE_CHECKING, TypeVar

import httpx
from pydantic import ValidationError

from ..errors import TransportError

if TYPE_CHECKING:
    from .clients import ClientsAPI
    from .centers import CentersAPI
    from .offices import OfficesAPI
    from .surveys import SurveysAPI

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class ApiConfig:
    """Remote API configuration."""

    base_url: str
    tenant: str = "default"
    username: str | None = None
    password: str | None = None
    timeout: float = 30.0

    @classmethod
    def from_settings(cls) -> "ApiConfig":
        from ..config import settings

        return cls(
            base_url=settings.api_base_url,
            tenant=settings.api_tenant,
            username=settings.api_username,
            password=settings.api_password,
            timeout=settings.api_timeout_seconds,
        )

    def to_dict(self) -> dict[str, Any]:
        """Export config as dictionary (password redacted)."""
        return {
            "base_url": self.base_url,
            "tenant": self.tenant,
            "username": self.username,
            "password": "***" if self.password else None,
            "timeout": self.timeout,
        }


class ApiClient:
    """REST client with per-entity sub-APIs.

    Usage:
        async with ApiClient.from_settings() as api:
            page = await api.clients.list(paged=True, offset=0, limit=100)
    """

    TENANT_HEADER = "Fineract-Platform-TenantId"

    def __init__(self, config: ApiConfig):
        self.config = config
        self._client: httpx.AsyncClient | None = None

        # Domain APIs (initialized on enter)
        self._clients: ClientsAPI | None = None
        self._centers: CentersAPI | None = None
        self._offices: OfficesAPI | None = None
        self._surveys: SurveysAPI | None = None

    @classmethod
    def from_settings(cls) -> "ApiClient":
        return cls(ApiConfig.from_settings())

    async def __aenter__(self) -> "ApiClient":
        auth = None
        if self.config.username and self.config.password:
            auth = httpx.BasicAuth(self.config.username, self.config.password)

        self._client = httpx.AsyncClient(
            base_url=self.config.base_url,
            timeout=self.config.timeout,
            auth=auth,
            headers={
                "Accept": "application/json",
                self.TENANT_HEADER: self.config.tenant,
            },
        )
        self._init_apis()
        return self

    def _init_apis(self) -> None:
        from .clients import ClientsAPI
        from .centers import CentersAPI
        from .offices import OfficesAPI
        from .surveys import SurveysAPI

        self._clients = ClientsAPI(self)
        self._centers = CentersAPI(self)
        self._offices = OfficesAPI(self)
        self._surveys = SurveysAPI(self)

    async def __aexit__(self, *args):
        if self._client:
            await self._client.aclose()

    # Domain API properties
    @property
    def clients(self) -> "ClientsAPI":
        """Clients API."""
        if not self._clients:
            raise RuntimeError("Client not initialized. Use 'async with' context.")
        return self._clients

    @property
    def centers(self) -> "CentersAPI":
        """Centers API."""
        if not self._centers:
            raise RuntimeError("Client not initialized. Use 'async with' context.")
        return self._centers

    @property
    def offices(self) -> "OfficesAPI":
        """Offices API."""
        if not self._offices:
            raise RuntimeError("Client not initialized. Use 'async with' context.")
        return self._offices

    @property
    def surveys(self) -> "SurveysAPI":
        """Surveys API."""
        if not self._surveys:
            raise RuntimeError("Client not initialized. Use 'async with' context.")
        return self._surveys

    # HTTP methods
    async def _send(self, method: str, endpoint: str, **kwargs) -> Any:
        if self._client is None:
            raise RuntimeError("Client not initialized. Use 'async with' context.")
        logger.debug("%s %s", method, endpoint)
        try:
            resp = await self._client.request(method, endpoint, **kwargs)
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise TransportError(
                f"{method} {endpoint} failed with HTTP {exc.response.status_code}",
                endpoint=endpoint,
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise TransportError(
                f"{method} {endpoint} failed: {exc}", endpoint=endpoint
            ) from exc

        if resp.status_code == 204 or not resp.content:
            return {}
        try:
            return resp.json()
        except ValueError as exc:
            raise TransportError(
                f"{method} {endpoint} returned a non-JSON body",
                endpoint=endpoint,
                status_code=resp.status_code,
            ) from exc

    async def _get(self, endpoint: str, **params) -> Any:
        """Make GET request."""
        return await self._send("GET", endpoint, params=params or None)

    async def _post(self, endpoint: str, data: Any = None, **params) -> Any:
        """Make POST request."""
        return await self._send("POST", endpoint, json=data, params=params or None)

    async def _put(self, endpoint: str, data: Any = None) -> Any:
        """Make PUT request."""
        return await self._send("PUT", endpoint, json=data)

    async def _delete(self, endpoint: str) -> Any:
        """Make DELETE request."""
        return await self._send("DELETE", endpoint)

    async def _upload(self, endpoint: str, files: dict[str, Any]) -> Any:
        """Make multipart POST request."""
        return await self._send("POST", endpoint, files=files)

    def _parse(self, parse: Callable[[Any], T], data: Any, endpoint: str) -> T:
        """Build a typed result from a decoded body.

        A body of the wrong shape is a transport failure like any other.
        """
        try:
            return parse(data)
        except ValidationError as exc:
            raise TransportError(
                f"{endpoint} returned an unexpected body: {exc.error_count()} error(s)",
                endpoint=endpoint,
            ) from exc
