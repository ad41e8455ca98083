"""
Player Sync Orchestrator

Holt den Kader eines Clubs vom Provider, löst den Aktiv-Status jedes Spielers
auf und schreibt das Ergebnis als einen atomaren Merge-Batch in den Speicher.
"""

import asyncio
import logging
import time
from typing import Optional

from player_catalog.common.constants import UpdateStatus
from player_catalog.data_collection.collectors.base import PlayerProvider
from player_catalog.database.services.players import PlayerRepository
from player_catalog.domain.contracts import MergeGuard, MergeResult, UpsertOperation
from player_catalog.domain.models import Player


class PlayerSyncOrchestrator:
    """Orchestriert Sync-Läufe vom Provider in den Player-Speicher"""

    def __init__(
        self,
        provider: PlayerProvider,
        repository: PlayerRepository,
        *,
        concurrency: int = 8,
        metrics=None,
    ):
        self.provider = provider
        self.repository = repository
        self.concurrency = max(concurrency, 1)
        self.metrics = metrics
        self.logger = logging.getLogger("player_sync_orchestrator")

    async def _resolve_active_status(self, players: list[Player]) -> list[Player]:
        semaphore = asyncio.Semaphore(self.concurrency)

        async def resolve(player: Player) -> Player:
            async with semaphore:
                is_active = await self.provider.get_active_status(player.id)
            return player.model_copy(update={"is_active": is_active})

        tasks = [asyncio.create_task(resolve(p)) for p in players]
        try:
            return list(await asyncio.gather(*tasks))
        finally:
            # first failure aborts the run; no lookup may outlive it
            pending = [t for t in tasks if not t.done()]
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)

    @staticmethod
    def build_operations(players: list[Player], guard: MergeGuard) -> list[UpsertOperation]:
        operations = []
        for player in players:
            document = player.model_copy(
                update={"update_status": UpdateStatus.UPDATED}
            ).to_document()
            operations.append(UpsertOperation(key=player.id, document=document, guard=guard))
        return operations

    async def sync(self, club_id: str, overwrite: bool = False) -> MergeResult:
        """Synchronisiert alle Spieler eines Clubs"""
        club_id = str(club_id)
        start_time = time.perf_counter()
        self.logger.info(f"Starting player sync for club {club_id} (overwrite={overwrite})")

        try:
            players = await self.provider.list_players_by_club(club_id)
            players = [p.model_copy(update={"club_id": club_id}) for p in players]
            self.logger.info(f"Fetched {len(players)} players for club {club_id}")

            if not players:
                result = MergeResult(club_id=club_id)
            else:
                players = await self._resolve_active_status(players)
                guard = MergeGuard.for_overwrite(overwrite)
                result = await self.repository.bulk_upsert(self.build_operations(players, guard))
                result.club_id = club_id
        except Exception:
            self.logger.exception(f"Player sync failed for club {club_id}")
            if self.metrics is not None:
                self.metrics.record_sync("error", time.perf_counter() - start_time)
            raise

        if self.metrics is not None:
            self.metrics.record_sync("success", time.perf_counter() - start_time, result)
        self.logger.info(
            f"Player sync for club {club_id} done: "
            f"{result.inserted_count} inserted, {result.modified_count} modified"
        )
        return result

    async def sync_clubs(
        self, club_ids: list[str], overwrite: bool = False
    ) -> dict[str, MergeResult]:
        """Synchronisiert mehrere Clubs nacheinander; bricht beim ersten Fehler ab"""
        results: dict[str, MergeResult] = {}
        for club_id in club_ids:
            results[str(club_id)] = await self.sync(club_id, overwrite=overwrite)
        return results

    async def initialize(self):
        await self.provider.initialize()

    async def cleanup(self):
        try:
            await self.provider.cleanup()
        except Exception as e:
            self.logger.error(f"Cleanup failed for {self.provider.name}: {e}")


def create_orchestrator(
    settings, repository: PlayerRepository, *, provider: Optional[PlayerProvider] = None, metrics=None
) -> PlayerSyncOrchestrator:
    """Baut den Orchestrator mit dem Transfermarkt Collector als Default-Provider"""
    if provider is None:
        from player_catalog.data_collection.collectors.transfermarkt_api_collector import (
            TransfermarktApiCollector,
        )

        provider = TransfermarktApiCollector(settings)
    return PlayerSyncOrchestrator(
        provider,
        repository,
        concurrency=settings.sync_concurrency,
        metrics=metrics,
    )
