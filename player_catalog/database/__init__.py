"""
Database Module
asyncpg Pool und JSONB Dokument-Speicher für Spieler
"""

from .manager import DatabaseManager
from .services.players import PlayerRepository

__all__ = [
    "DatabaseManager",
    "PlayerRepository",
]
