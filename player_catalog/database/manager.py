"""
Database Manager
Async PostgreSQL pool (asyncpg) holding the player documents as JSONB
"""

import json
import logging
import re
from contextlib import asynccontextmanager
from typing import Any, Optional

import asyncpg

from player_catalog.common.errors import StorageNotInitializedError
from player_catalog.core.config import Settings, settings as default_settings

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def quote_table_name(name: str) -> str:
    """Validate a configured table name and return it double-quoted."""
    if not _IDENTIFIER.match(name or ""):
        raise ValueError(f"Invalid table name: {name!r}")
    return f'"{name}"'


async def _init_connection(conn: asyncpg.Connection) -> None:
    # JSONB columns and parameters as Python objects instead of raw text
    await conn.set_type_codec(
        "jsonb", encoder=json.dumps, decoder=json.loads, schema="pg_catalog"
    )
    await conn.set_type_codec(
        "json", encoder=json.dumps, decoder=json.loads, schema="pg_catalog"
    )


class DatabaseManager:
    """Datenbankverwaltung: ein langlebiger asyncpg Pool für alle Engines"""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or default_settings
        self.pool: Optional[asyncpg.Pool] = None
        self.logger = logging.getLogger(__name__)

    @property
    def players_table(self) -> str:
        return quote_table_name(self.settings.players_table)

    async def initialize(self):
        """Initialisiert den asyncpg Pool auf Basis von DATABASE_URL"""
        if self.pool is not None:
            return
        dsn = self.settings.database_url
        # asyncpg expects postgresql:// without a driver suffix
        if "+asyncpg" in dsn:
            dsn = dsn.replace("+asyncpg", "")
        try:
            self.pool = await asyncpg.create_pool(
                dsn=dsn,
                min_size=self.settings.database_pool_min_size,
                max_size=self.settings.database_pool_max_size,
                command_timeout=self.settings.database_command_timeout,
                init=_init_connection,
            )
            async with self.pool.acquire() as conn:
                await conn.fetchval("SELECT 1")
            self.logger.info("Async database pool initialized (asyncpg)")
        except Exception as e:
            self.logger.error(f"Failed to initialize async database pool: {e}")
            self.pool = None
            raise

    @asynccontextmanager
    async def get_async_connection(self):
        """Context manager for a pooled asyncpg connection"""
        if not self.pool:
            raise StorageNotInitializedError("Async database pool not initialized")

        async with self.pool.acquire() as connection:
            yield connection

    async def execute(self, query: str, *args) -> str:
        async with self.get_async_connection() as conn:
            return await conn.execute(query, *args)

    async def create_tables(self):
        """Legt die Player-Tabelle und ihre Indizes an (idempotent)"""
        table = self.players_table
        raw = self.settings.players_table
        statements = [
            f"""
            CREATE TABLE IF NOT EXISTS {table} (
                seq BIGSERIAL NOT NULL,
                id TEXT PRIMARY KEY,
                doc JSONB NOT NULL,
                created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
                updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
            )
            """,
            f'CREATE INDEX IF NOT EXISTS "{raw}_seq_idx" ON {table} (seq)',
            f'CREATE INDEX IF NOT EXISTS "{raw}_update_status_idx" ON {table} ((doc -> \'updateStatus\'))',
            f'CREATE INDEX IF NOT EXISTS "{raw}_club_idx" ON {table} ((doc -> \'clubId\'))',
            f'CREATE INDEX IF NOT EXISTS "{raw}_position_idx" ON {table} ((doc -> \'position\'))',
            f'CREATE INDEX IF NOT EXISTS "{raw}_dob_idx" ON {table} ((doc ->> \'dateOfBirth\'))',
        ]
        async with self.get_async_connection() as conn:
            async with conn.transaction():
                for stmt in statements:
                    await conn.execute(stmt)
        self.logger.info(f"Ensured table {table} and indexes")

    async def health_check(self) -> dict[str, Any]:
        """Gesundheitscheck der Datenbank"""
        try:
            async with self.get_async_connection() as conn:
                result = await conn.fetchval("SELECT 1")
            return {
                "async_pool": "healthy" if result == 1 else "unhealthy",
                "pool_size": self.pool.get_size() if self.pool else 0,
                "pool_idle": self.pool.get_idle_size() if self.pool else 0,
            }
        except Exception as e:
            self.logger.error(f"Database health check failed: {e}")
            return {"async_pool": "unhealthy", "error": str(e)}

    async def close(self):
        """Schließt den Pool"""
        if self.pool:
            await self.pool.close()
            self.pool = None
            self.logger.info("Async database pool closed")
