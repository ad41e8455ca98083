"""
Sync Scheduler
Periodische Sync-Läufe für die konfigurierten Clubs
"""

import asyncio
import logging
from typing import Any, Optional

from player_catalog.core.config import Settings
from player_catalog.data_collection.orchestrator import PlayerSyncOrchestrator


class SyncScheduler:
    """Scheduler für regelmäßige Player-Sync-Jobs"""

    def __init__(self, orchestrator: PlayerSyncOrchestrator, settings: Settings):
        self.orchestrator = orchestrator
        self.settings = settings
        self.logger = logging.getLogger("sync_scheduler")
        self.running = False
        self.task: Optional[asyncio.Task] = None
        self.last_results: dict[str, Any] = {}

    async def start_schedule(self):
        """Startet den Scheduler"""
        if not self.settings.sync_club_ids:
            self.logger.warning("No clubs configured (SYNC_CLUB_IDS); scheduler idle")
            return

        self.running = True
        self.task = asyncio.create_task(self._sync_loop())
        try:
            await self.task
        except asyncio.CancelledError:
            self.logger.info("Sync loop cancelled")
        finally:
            self.running = False

    async def _sync_loop(self):
        """Sync aller Clubs, dann Pause bis zum nächsten Intervall"""
        while self.running:
            try:
                results = await self.orchestrator.sync_clubs(
                    self.settings.sync_club_ids, overwrite=self.settings.sync_overwrite
                )
                self.last_results = {cid: r.to_response() for cid, r in results.items()}
                self.logger.info(f"Scheduled sync done: {self.last_results}")
                await asyncio.sleep(self.settings.sync_interval_seconds)
            except asyncio.CancelledError:
                raise
            except Exception as e:
                self.logger.error(f"Sync loop error: {e}")
                await asyncio.sleep(self.settings.sync_error_backoff_seconds)

    def stop(self):
        """Stoppt den Scheduler"""
        self.running = False
        if self.task and not self.task.done():
            self.task.cancel()
        self.logger.info("Sync scheduler stopped")
