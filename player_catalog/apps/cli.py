"""
Command-line interface for the player catalog.
Usage examples:
  python -m player_catalog.apps.cli init-db
  python -m player_catalog.apps.cli sync --club-id 5 --club-id 27
  python -m player_catalog.apps.cli sync --club-id 5 --overwrite
  python -m player_catalog.apps.cli schedule --duration-minutes 10
  python -m player_catalog.apps.cli serve --port 8000
"""

import asyncio
import json
from typing import Optional

import click

from player_catalog.common.logging_utils import configure_logging, get_logger
from player_catalog.core.config import Settings, settings
from player_catalog.data_collection.orchestrator import create_orchestrator
from player_catalog.data_collection.scheduler import SyncScheduler
from player_catalog.database.manager import DatabaseManager
from player_catalog.database.services.players import PlayerRepository

logger = get_logger(__name__)


def _setup_logging(cfg: Settings, service: str) -> None:
    configure_logging(service=service, level=cfg.log_level, fmt=cfg.log_format)


async def cmd_init_db(cfg: Settings) -> int:
    db = DatabaseManager(cfg)
    await db.initialize()
    try:
        await db.create_tables()
    finally:
        await db.close()
    return 0


async def cmd_sync(cfg: Settings, club_ids: list[str], overwrite: bool) -> dict:
    db = DatabaseManager(cfg)
    await db.initialize()
    orch = create_orchestrator(cfg, PlayerRepository(db))
    try:
        await orch.initialize()
        results = await orch.sync_clubs(club_ids, overwrite=overwrite)
    finally:
        await orch.cleanup()
        await db.close()
    return {club_id: result.to_response() for club_id, result in results.items()}


async def cmd_schedule(cfg: Settings, duration_minutes: Optional[int]) -> int:
    db = DatabaseManager(cfg)
    await db.initialize()
    orch = create_orchestrator(cfg, PlayerRepository(db))
    await orch.initialize()

    scheduler = SyncScheduler(orch, cfg)
    try:
        if duration_minutes:
            task = asyncio.create_task(scheduler.start_schedule())
            await asyncio.sleep(max(duration_minutes, 1) * 60)
            scheduler.stop()
            await task
        else:
            await scheduler.start_schedule()
    finally:
        scheduler.stop()
        await orch.cleanup()
        await db.close()
    return 0


@click.group()
def cli():
    """Player catalog operations"""


@cli.command(name="init-db")
def init_db():
    """Create the players table and its indexes (idempotent)"""
    _setup_logging(settings, "cli")
    exit_code = asyncio.run(cmd_init_db(settings))
    click.echo(f"Table {settings.players_table} ready")
    raise SystemExit(exit_code)


@cli.command()
@click.option(
    "--club-id",
    "club_ids",
    multiple=True,
    required=True,
    help="Provider club id; repeat the option to sync several clubs",
)
@click.option("--overwrite", is_flag=True, default=False, help="Also overwrite records flagged TO_UPDATE")
def sync(club_ids: tuple[str, ...], overwrite: bool):
    """Sync players of one or more clubs from the provider"""
    _setup_logging(settings, "sync")
    try:
        results = asyncio.run(cmd_sync(settings, list(club_ids), overwrite))
    except Exception as e:
        logger.error(f"Sync failed: {e}")
        raise SystemExit(1)
    click.echo(json.dumps(results, indent=2))


@cli.command()
@click.option(
    "--duration-minutes",
    type=int,
    default=None,
    help="Stop after N minutes; runs until interrupted when omitted",
)
def schedule(duration_minutes: Optional[int]):
    """Run periodic syncs for SYNC_CLUB_IDS"""
    _setup_logging(settings, "scheduler")
    try:
        exit_code = asyncio.run(cmd_schedule(settings, duration_minutes))
    except KeyboardInterrupt:
        exit_code = 0
    raise SystemExit(exit_code)


@cli.command()
@click.option("--host", default=None, help="Bind host (default: API_HOST)")
@click.option("--port", type=int, default=None, help="Bind port (default: API_PORT)")
def serve(host: Optional[str], port: Optional[int]):
    """Run the HTTP API with uvicorn"""
    import uvicorn

    _setup_logging(settings, "api")
    uvicorn.run(
        "player_catalog.api.main:create_app",
        factory=True,
        host=host or settings.api_host,
        port=port or settings.api_port,
        log_level=settings.log_level.lower(),
    )


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
