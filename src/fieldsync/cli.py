"""fieldsync CLI - inspect the local cache and replay offline creations."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .api import ApiClient
from .config import settings
from .errors import FieldSyncError
from .layer import DataLayer
from .mode import ConnectivityMode, ModeState
from .routing import QUEUEING_ENTITY_TYPES, ROUTERS
from .schemas import SyncReport
from .store import LocalCacheStore

app = typer.Typer(
    name="fieldsync",
    help="fieldsync - offline cache and sync queue for field operations",
    no_args_is_help=True,
)
console = Console()

pending_app = typer.Typer(help="Offline creations waiting to be synced")
cache_app = typer.Typer(help="Locally cached entities")

app.add_typer(pending_app, name="pending")
app.add_typer(cache_app, name="cache")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    logging.basicConfig(
        level="DEBUG" if verbose else settings.log_level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _store() -> LocalCacheStore:
    return LocalCacheStore.default()


def _output_result(result: Any) -> None:
    console.print_json(json.dumps(result, default=str, indent=2))


def _check_queueing(entity: str) -> None:
    if entity not in QUEUEING_ENTITY_TYPES:
        console.print(
            f"[red]{entity} cannot be created offline.[/red] "
            f"Choose one of: {', '.join(QUEUEING_ENTITY_TYPES)}"
        )
        raise typer.Exit(2)


@app.command("init-db")
def init_db():
    """Create the local cache tables."""
    from .database import create_tables

    asyncio.run(create_tables())
    console.print(f"[green]Local cache ready:[/green] {settings.database_url}")


# ============================================================================
# Pending queue
# ============================================================================


@pending_app.command("list")
def pending_list(
    entity: str = typer.Argument(..., help="Entity type (client, center)"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
):
    """List unsynced creations, oldest first."""
    _check_queueing(entity)
    records = asyncio.run(_store().read_pending_all(entity))

    if json_output:
        _output_result([r.model_dump(mode="json") for r in records])
        return

    if not records:
        console.print(f"[dim]No pending {entity} records.[/dim]")
        return

    table = Table(title=f"Pending {entity} records")
    table.add_column("Local ID", justify="right")
    table.add_column("Created")
    table.add_column("Payload")
    for record in records:
        table.add_row(
            str(record.local_id),
            record.created_at.isoformat(timespec="seconds"),
            json.dumps(record.payload, default=str)[:80],
        )
    console.print(table)


@pending_app.command("drop")
def pending_drop(
    entity: str = typer.Argument(..., help="Entity type (client, center)"),
    local_id: int = typer.Argument(..., help="Local id of the pending record"),
):
    """Discard an unsynced draft."""
    _check_queueing(entity)
    try:
        remaining = asyncio.run(_store().delete_pending_and_reload(entity, local_id))
    except FieldSyncError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    console.print(f"Dropped {entity} #{local_id}; {len(remaining)} pending left.")


# ============================================================================
# Sync
# ============================================================================


async def _run_sync(entity_types: list[str]) -> list[SyncReport]:
    store = _store()
    async with ApiClient.from_settings() as api:
        layer = DataLayer(api, store, ModeState(ConnectivityMode.ONLINE))
        try:
            return [await layer.sync(t) for t in entity_types]
        finally:
            await layer.aclose()


@app.command("sync")
def sync(
    entity: str = typer.Argument("all", help="Entity type to sync, or 'all'"),
):
    """Replay offline creations against the remote service."""
    if entity == "all":
        entity_types = list(QUEUEING_ENTITY_TYPES)
    else:
        _check_queueing(entity)
        entity_types = [entity]

    try:
        reports = asyncio.run(_run_sync(entity_types))
    except FieldSyncError as e:
        console.print(f"[red]Sync error:[/red] {e}")
        raise typer.Exit(1)

    table = Table(title="Sync results")
    table.add_column("Entity")
    table.add_column("Synced", justify="right")
    table.add_column("Remaining", justify="right")
    table.add_column("Status")
    for report in reports:
        if report.ok:
            status = "[green]ok[/green]"
        else:
            status = f"[red]halted at #{report.failed.local_id}: {report.error}[/red]"
        table.add_row(
            report.entity_type,
            str(len(report.synced)),
            str(len(report.remaining)),
            status,
        )
    console.print(table)

    if not all(r.ok for r in reports):
        raise typer.Exit(1)


# ============================================================================
# Cache
# ============================================================================


@cache_app.command("show")
def cache_show(
    entity: str = typer.Argument(..., help="Entity type (client, center, office, survey)"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
):
    """Show the cached copies of one entity type."""
    if entity not in ROUTERS:
        console.print(f"[red]Unknown entity type:[/red] {entity}")
        raise typer.Exit(2)

    page = asyncio.run(_store().read_all(entity))

    if json_output:
        _output_result(page.model_dump(by_alias=True))
        return

    table = Table(title=f"Cached {entity} ({page.total_filtered_records})")
    table.add_column("ID", justify="right")
    table.add_column("Name")
    for item in page.page_items:
        name = item.get("displayName") or item.get("name") or ""
        table.add_row(str(item.get("id")), str(name))
    console.print(table)


if __name__ == "__main__":
    app()
