from .base import PlayerProvider, RateLimiter
from .transfermarkt_api_collector import TransfermarktApiCollector

__all__ = ["PlayerProvider", "RateLimiter", "TransfermarktApiCollector"]
