"""
Base classes for player providers in the Player Catalog.
"""

from abc import ABC, abstractmethod
from typing import Optional
import asyncio
import logging

from player_catalog.domain.models import Player


class RateLimiter:
    """Token bucket rate limiter for API requests."""

    def __init__(self, rate_limit: int, time_window: float = 1.0):
        """
        Initialize rate limiter.

        Args:
            rate_limit: Maximum number of requests per time window
            time_window: Time window in seconds (default 1.0 for per-second limiting)
        """
        if rate_limit <= 0:
            raise ValueError("rate_limit must be positive")
        self.rate_limit = rate_limit
        self.time_window = time_window
        self.tokens = float(rate_limit)
        self.last_refill: Optional[float] = None
        self._lock = asyncio.Lock()

    async def acquire(self):
        """Acquire a token, waiting if necessary."""
        async with self._lock:
            now = asyncio.get_running_loop().time()
            if self.last_refill is None:
                self.last_refill = now
            # Refill tokens based on elapsed time
            time_passed = now - self.last_refill
            self.tokens = min(
                self.rate_limit,
                self.tokens + time_passed * (self.rate_limit / self.time_window)
            )
            self.last_refill = now

            if self.tokens >= 1:
                self.tokens -= 1
                return

            # Wait until we can get a token
            wait_time = (1 - self.tokens) * (self.time_window / self.rate_limit)
            await asyncio.sleep(wait_time)
            self.last_refill = asyncio.get_running_loop().time()
            self.tokens = 0  # We'll consume the token we waited for


class PlayerProvider(ABC):
    """Abstract source of authoritative player data."""

    def __init__(self, name: str):
        self.name = name
        self.logger = logging.getLogger(f"provider.{name}")

    async def initialize(self):
        """Open network resources; no-op by default."""

    async def cleanup(self):
        """Release network resources; no-op by default."""

    async def __aenter__(self):
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.cleanup()

    @abstractmethod
    async def list_players_by_club(self, club_id: str) -> list[Player]:
        """All players of a club's current squad.

        Args:
            club_id: provider club identifier

        Returns:
            Players stamped with ``club_id``; an empty list when the provider
            reports no squad.
        """
        pass

    @abstractmethod
    async def get_active_status(self, player_id: str) -> bool:
        """True unless the provider reports the player as retired.

        Raises ProviderDataError when the retirement flag is missing.
        """
        pass
