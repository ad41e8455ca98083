"""
Transfermarkt API Collector
Liest Kader und Karrierestatus von einer Transfermarkt-API Instanz
"""

import asyncio
from typing import Any, Optional

import aiohttp

from player_catalog.common.errors import ProviderDataError, ProviderUnavailableError
from player_catalog.core.config import Settings, settings as default_settings
from player_catalog.domain.models import Player
from .base import PlayerProvider, RateLimiter

RETRYABLE_STATUSES = frozenset({429, 502, 503, 504})


class TransfermarktApiCollector(PlayerProvider):
    """Datensammler für die Transfermarkt API (clubs/{id}/players, players/{id}/profile)"""

    def __init__(self, settings: Optional[Settings] = None):
        super().__init__("transfermarkt_api")
        self.settings = settings or default_settings
        self.base_url = self.settings.provider_base_url.rstrip("/")
        self.max_retries = max(self.settings.provider_max_retries, 0)
        self.backoff_base = self.settings.provider_backoff_base
        self.rate_limiter = RateLimiter(self.settings.provider_rate_limit)
        self.session = None  # type: Optional[aiohttp.ClientSession]

    async def initialize(self):
        """Öffnet die HTTP Session"""
        if self.session is not None and not self.session.closed:
            return
        self.session = aiohttp.ClientSession(
            headers={"Accept": "application/json"},
            timeout=aiohttp.ClientTimeout(total=self.settings.provider_timeout_seconds),
        )
        self.logger.info(f"Transfermarkt API session opened ({self.base_url})")

    async def cleanup(self):
        """Räumt Ressourcen auf"""
        if self.session:
            await self.session.close()
        self.session = None

    async def _make_request(self, endpoint: str) -> Any:
        """Macht einen API Request mit Rate Limiting und Retries"""
        if self.session is None:
            await self.initialize()

        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        last_error: Optional[BaseException] = None

        for attempt in range(self.max_retries + 1):
            await self.rate_limiter.acquire()
            try:
                async with self.session.get(url) as response:
                    if response.status in RETRYABLE_STATUSES:
                        raise aiohttp.ClientResponseError(
                            response.request_info,
                            response.history,
                            status=response.status,
                            message=response.reason or "",
                        )
                    if response.status >= 400:
                        raise ProviderUnavailableError(
                            f"Provider request failed: {url} returned HTTP {response.status}",
                            url=url,
                            status=response.status,
                        )
                    if response.status == 204:
                        return None
                    try:
                        return await response.json(content_type=None)
                    except ValueError as e:
                        raise ProviderUnavailableError(
                            f"Provider returned a malformed body: {url}",
                            url=url,
                            status=response.status,
                        ) from e
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                last_error = e
                if attempt < self.max_retries:
                    delay = self.backoff_base * (2 ** attempt)
                    self.logger.warning(
                        f"Attempt {attempt + 1} failed for {url}: {e}; retrying in {delay:.1f}s"
                    )
                    await asyncio.sleep(delay)

        status = getattr(last_error, "status", None)
        self.logger.error(f"API request failed: {url} - {last_error}")
        raise ProviderUnavailableError(
            f"Provider request failed after {self.max_retries + 1} attempts: {url}",
            url=url,
            status=status,
        ) from last_error

    async def list_players_by_club(self, club_id: str) -> list[Player]:
        data = await self._make_request(f"clubs/{club_id}/players")
        raw_players = data.get("players") if isinstance(data, dict) else None

        players = []
        for player_data in raw_players or []:
            players.append(Player.model_validate({**player_data, "clubId": club_id}))

        self.logger.debug(f"Club {club_id}: {len(players)} players from provider")
        return players

    async def get_active_status(self, player_id: str) -> bool:
        data = await self._make_request(f"players/{player_id}/profile")

        if not data or not isinstance(data, dict) or "isRetired" not in data:
            raise ProviderDataError(
                f"Unable to fetch retirement status for player {player_id}"
            )
        return not data["isRetired"]
