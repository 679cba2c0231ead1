"""Tests for the fieldsync CLI commands."""

import json
from datetime import datetime, timezone

import pytest
from unittest.mock import patch, MagicMock, AsyncMock

from fieldsync.cli import app
from fieldsync.errors import PendingRecordNotFound, TransportError
from fieldsync.schemas import Page, PendingWriteRecord
from tests.conftest import MOCK_CENTER, MOCK_CLIENT, MOCK_CLIENT_PAYLOAD


def _record(local_id: int, entity_type: str = "client") -> PendingWriteRecord:
    return PendingWriteRecord(
        local_id=local_id,
        entity_type=entity_type,
        payload={**MOCK_CLIENT_PAYLOAD, "externalId": f"draft-{local_id}"},
        created_at=datetime(2026, 3, 1, 9, 30, tzinfo=timezone.utc),
    )


@pytest.fixture
def patched_store(mock_store):
    with patch("fieldsync.cli._store", return_value=mock_store):
        yield mock_store


@pytest.fixture
def patched_api(mock_api):
    """Replace ApiClient so the sync command never opens a connection."""
    instance = MagicMock()
    instance.__aenter__ = AsyncMock(return_value=mock_api)
    instance.__aexit__ = AsyncMock(return_value=None)
    with patch("fieldsync.cli.ApiClient") as MockClient:
        MockClient.from_settings.return_value = instance
        yield mock_api


class TestPendingCommands:
    """Tests for 'fieldsync pending' commands."""

    def test_list_pending(self, cli_runner, patched_store):
        patched_store.read_pending_all.return_value = [_record(1), _record(2)]

        result = cli_runner.invoke(app, ["pending", "list", "client"])

        assert result.exit_code == 0
        assert "Pending client records" in result.output
        patched_store.read_pending_all.assert_awaited_once_with("client")

    def test_list_pending_json(self, cli_runner, patched_store):
        patched_store.read_pending_all.return_value = [_record(5)]

        result = cli_runner.invoke(app, ["pending", "list", "client", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data[0]["local_id"] == 5
        assert data[0]["payload"]["externalId"] == "draft-5"

    def test_list_empty(self, cli_runner, patched_store):
        patched_store.read_pending_all.return_value = []

        result = cli_runner.invoke(app, ["pending", "list", "center"])

        assert result.exit_code == 0
        assert "No pending center records" in result.output

    def test_list_read_only_entity(self, cli_runner, patched_store):
        result = cli_runner.invoke(app, ["pending", "list", "office"])

        assert result.exit_code == 2
        assert "cannot be created offline" in result.output
        patched_store.read_pending_all.assert_not_called()

    def test_drop_pending(self, cli_runner, patched_store):
        patched_store.delete_pending_and_reload.return_value = [_record(2)]

        result = cli_runner.invoke(app, ["pending", "drop", "client", "1"])

        assert result.exit_code == 0
        assert "1 pending left" in result.output
        patched_store.delete_pending_and_reload.assert_awaited_once_with("client", 1)

    def test_drop_missing(self, cli_runner, patched_store):
        patched_store.delete_pending_and_reload.side_effect = PendingRecordNotFound(9, "client")

        result = cli_runner.invoke(app, ["pending", "drop", "client", "9"])

        assert result.exit_code == 1
        assert "not found" in result.output


class TestSyncCommand:
    """Tests for 'fieldsync sync'."""

    def test_sync_client_queue(self, cli_runner, patched_store, patched_api):
        patched_store.read_pending_all.return_value = [_record(1)]
        patched_store.delete_pending_and_reload.return_value = []

        result = cli_runner.invoke(app, ["sync", "client"])

        assert result.exit_code == 0
        assert "Sync results" in result.output
        patched_api.clients.create.assert_awaited_once_with(_record(1).payload)
        patched_store.delete_pending_and_reload.assert_awaited_once_with("client", 1)

    def test_sync_halted(self, cli_runner, patched_store, patched_api):
        patched_store.read_pending_all.return_value = [_record(1), _record(2)]
        patched_api.clients.create.side_effect = TransportError("POST /clients failed")

        result = cli_runner.invoke(app, ["sync", "client"])

        assert result.exit_code == 1
        assert "halted" in result.output
        patched_store.delete_pending_and_reload.assert_not_called()

    def test_sync_all(self, cli_runner, patched_store, patched_api):
        patched_store.read_pending_all.return_value = []

        result = cli_runner.invoke(app, ["sync"])

        assert result.exit_code == 0
        called = [c.args[0] for c in patched_store.read_pending_all.await_args_list]
        assert called == ["client", "center"]
        patched_api.clients.create.assert_not_called()

    def test_sync_read_only_entity(self, cli_runner, patched_store, patched_api):
        result = cli_runner.invoke(app, ["sync", "survey"])

        assert result.exit_code == 2


class TestCacheCommand:
    """Tests for 'fieldsync cache show'."""

    def test_show_cached_clients(self, cli_runner, patched_store):
        patched_store.read_all.return_value = Page.of([MOCK_CLIENT])

        result = cli_runner.invoke(app, ["cache", "show", "client"])

        assert result.exit_code == 0
        assert "Ada Lovelace" in result.output

    def test_show_json(self, cli_runner, patched_store):
        patched_store.read_all.return_value = Page.of([MOCK_CENTER])

        result = cli_runner.invoke(app, ["cache", "show", "center", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["totalFilteredRecords"] == 1
        assert data["pageItems"][0]["name"] == "North Market"

    def test_show_unknown_entity(self, cli_runner, patched_store):
        result = cli_runner.invoke(app, ["cache", "show", "loan"])

        assert result.exit_code == 2
        patched_store.read_all.assert_not_called()


class TestInitDbCommand:
    """Tests for 'fieldsync init-db'."""

    def test_init_db_creates_tables(self, cli_runner):
        with patch("fieldsync.database.create_tables", new_callable=AsyncMock) as create:
            result = cli_runner.invoke(app, ["init-db"])

        assert result.exit_code == 0
        assert "Local cache ready" in result.output
        create.assert_awaited_once()
