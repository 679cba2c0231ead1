"""Shared test fixtures for the fieldsync test suite."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from fieldsync.mode import ConnectivityMode, ModeState
from fieldsync.models import Base
from fieldsync.schemas import Page, SaveResult
from fieldsync.store import LocalCacheStore
from fieldsync.tasks import BackgroundTasks

# Sample IDs used across tests
SAMPLE_OFFICE_ID = 1
SAMPLE_CLIENT_ID = 42
SAMPLE_CENTER_ID = 7
SAMPLE_SURVEY_ID = 3


# ============================================================================
# Mock Response Data
# ============================================================================

MOCK_CLIENT = {
    "id": SAMPLE_CLIENT_ID,
    "accountNo": "000000042",
    "displayName": "Ada Lovelace",
    "officeId": SAMPLE_OFFICE_ID,
    "active": True,
}

MOCK_CLIENT_PAYLOAD = {
    "firstname": "Grace",
    "lastname": "Hopper",
    "officeId": SAMPLE_OFFICE_ID,
    "active": False,
    "dateFormat": "dd MMMM yyyy",
    "locale": "en",
}

MOCK_CENTER = {
    "id": SAMPLE_CENTER_ID,
    "name": "North Market",
    "officeId": SAMPLE_OFFICE_ID,
    "active": True,
}

MOCK_CENTER_PAYLOAD = {
    "name": "River Bank",
    "officeId": SAMPLE_OFFICE_ID,
    "active": False,
}

MOCK_OFFICES = [
    {"id": 1, "name": "Head Office"},
    {"id": 2, "name": "Branch East"},
]

MOCK_SURVEY = {
    "id": SAMPLE_SURVEY_ID,
    "key": "ppi_kenya",
    "name": "PPI Kenya",
    "questionDatas": [
        {
            "id": 11,
            "text": "How many children?",
            "responseDatas": [{"id": 101, "text": "None", "value": 0}],
        }
    ],
}


def make_clients(count: int, start: int = 1) -> list[dict[str, Any]]:
    return [
        {"id": i, "displayName": f"Client {i}", "officeId": SAMPLE_OFFICE_ID}
        for i in range(start, start + count)
    ]


# ============================================================================
# Local store fixtures
# ============================================================================


@pytest_asyncio.fixture
async def engine():
    eng = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def store(engine):
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    return LocalCacheStore(session_factory)


@pytest.fixture
def mock_store():
    """A store double that records calls and touches nothing."""
    return AsyncMock(spec=LocalCacheStore)


# ============================================================================
# Mode and side tasks
# ============================================================================


@pytest.fixture
def mode():
    return ModeState(ConnectivityMode.ONLINE)


@pytest_asyncio.fixture
async def tasks():
    bg = BackgroundTasks()
    yield bg
    await bg.cancel_all()


# ============================================================================
# Remote gateway fixtures
# ============================================================================


@pytest.fixture
def mock_api():
    """Gateway double exposing the four sub-APIs with canned results."""
    api = MagicMock()

    api.clients = AsyncMock()
    api.clients.list = AsyncMock(return_value=Page.of([MOCK_CLIENT]))
    api.clients.get = AsyncMock(return_value=MOCK_CLIENT)
    api.clients.accounts = AsyncMock(return_value={"loanAccounts": [], "savingsAccounts": []})
    api.clients.template = AsyncMock(return_value={"officeOptions": MOCK_OFFICES})
    api.clients.create = AsyncMock(
        return_value=SaveResult(office_id=SAMPLE_OFFICE_ID, client_id=99, resource_id=99)
    )

    api.centers = AsyncMock()
    api.centers.list = AsyncMock(return_value=Page.of([MOCK_CENTER]))
    api.centers.with_groups = AsyncMock(
        return_value={**MOCK_CENTER, "groupMembers": [{"id": 70, "name": "Group A"}]}
    )
    api.centers.create = AsyncMock(
        return_value=SaveResult(office_id=SAMPLE_OFFICE_ID, group_id=77, resource_id=77)
    )

    api.offices = AsyncMock()
    api.offices.list = AsyncMock(return_value=MOCK_OFFICES)

    api.surveys = AsyncMock()
    api.surveys.list = AsyncMock(return_value=[MOCK_SURVEY])
    api.surveys.get = AsyncMock(return_value=MOCK_SURVEY)

    return api


@pytest.fixture
def mock_response():
    """Factory fixture to create mock HTTP responses."""
    def _create_response(data: Any, status_code: int = 200):
        import json

        response = MagicMock()
        response.status_code = status_code
        response.content = json.dumps(data).encode()
        response.json.return_value = data
        response.raise_for_status = MagicMock()
        if status_code >= 400:
            from httpx import HTTPStatusError
            response.raise_for_status.side_effect = HTTPStatusError(
                f"HTTP {status_code}", request=MagicMock(), response=response
            )
        return response
    return _create_response


@pytest.fixture
def mock_http_client(mock_response):
    """Create a mock httpx.AsyncClient."""
    client = AsyncMock()
    client.request = AsyncMock(return_value=mock_response({}))
    return client


@pytest.fixture
def api_client(mock_http_client):
    """ApiClient with initialized sub-APIs and a mocked transport."""
    from fieldsync.api.client import ApiClient, ApiConfig

    client = ApiClient(
        ApiConfig(
            base_url="https://fineract.test/fineract-provider/api/v1",
            tenant="default",
            username="mifos",
            password="password",
        )
    )
    client._client = mock_http_client
    client._init_apis()
    return client


# ============================================================================
# CLI Testing Fixtures
# ============================================================================


@pytest.fixture
def cli_runner():
    """Create a Typer CLI test runner."""
    from typer.testing import CliRunner
    return CliRunner()
