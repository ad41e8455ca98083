"""
Database services for player-document persistence.

Two operations form the storage boundary shared by the query engine and the
synchronization engine:

``count_and_page``
    one statement that counts every matching document and returns a slice of
    them in insertion order, so count and page always describe the same
    snapshot.

``bulk_upsert``
    one ``INSERT ... ON CONFLICT`` statement for the whole batch, executed in a
    transaction. The optional guard keeps documents flagged ``TO_UPDATE`` out of
    the update branch.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Sequence

from player_catalog.common.constants import UpdateStatus
from player_catalog.database.manager import DatabaseManager
from player_catalog.database.query_compiler import compile_clauses
from player_catalog.domain.contracts import MergeGuard, MergeResult, UpsertOperation
from player_catalog.domain.filter import Clause


class PlayerRepository:
    """Player documents stored one JSONB row per provider id."""

    def __init__(self, db: DatabaseManager):
        self.db = db
        self.logger = logging.getLogger("player_repository")

    @property
    def table(self) -> str:
        return self.db.players_table

    def build_count_and_page_sql(
        self, clauses: Iterable[Clause], skip: int, limit: Optional[int] = None
    ) -> tuple[str, list[Any]]:
        predicate = compile_clauses(clauses)
        args = list(predicate.args)

        args.append(max(int(skip), 0))
        page_window = f"OFFSET ${len(args)}"
        if limit is not None:
            args.append(max(int(limit), 0))
            page_window += f" LIMIT ${len(args)}"

        sql = f"""
            WITH matched AS (
                SELECT seq, doc FROM {self.table} WHERE {predicate.sql}
            )
            SELECT
                (SELECT COUNT(*) FROM matched) AS total_count,
                COALESCE(
                    (
                        SELECT jsonb_agg(page.doc ORDER BY page.seq)
                        FROM (
                            SELECT seq, doc FROM matched ORDER BY seq {page_window}
                        ) AS page
                    ),
                    '[]'::jsonb
                ) AS records
        """
        return sql, args

    async def count_and_page(
        self, clauses: Iterable[Clause], skip: int, limit: Optional[int] = None
    ) -> tuple[int, list[dict[str, Any]]]:
        """Return ``(total_count, documents)`` for the clauses and the page window."""
        sql, args = self.build_count_and_page_sql(clauses, skip, limit)
        async with self.db.get_async_connection() as conn:
            row = await conn.fetchrow(sql, *args)

        if row is None:
            return 0, []
        return int(row["total_count"] or 0), list(row["records"] or [])

    def build_bulk_upsert_sql(self, guard: MergeGuard) -> str:
        guard_sql = ""
        if guard is MergeGuard.EXCLUDE_FLAGGED:
            guard_sql = "AND stored.doc ->> 'updateStatus' IS DISTINCT FROM $2"

        # xmax = 0 only for rows created by this statement
        return f"""
            INSERT INTO {self.table} AS stored (id, doc)
            SELECT op ->> 'key', op -> 'document'
            FROM jsonb_array_elements($1::jsonb) AS op
            ON CONFLICT (id) DO UPDATE
                SET doc = stored.doc || EXCLUDED.doc,
                    updated_at = NOW()
                WHERE stored.doc IS DISTINCT FROM stored.doc || EXCLUDED.doc
                {guard_sql}
            RETURNING (xmax = 0) AS inserted
        """

    @staticmethod
    def _batch_guard(operations: Sequence[UpsertOperation]) -> MergeGuard:
        guards = {op.guard for op in operations}
        if len(guards) != 1:
            raise ValueError(f"A merge batch must use a single guard, got {sorted(g.value for g in guards)}")
        return guards.pop()

    @staticmethod
    def _dedupe(operations: Sequence[UpsertOperation]) -> list[UpsertOperation]:
        # one statement cannot touch the same row twice; the last occurrence wins
        by_key: dict[str, UpsertOperation] = {}
        for op in operations:
            by_key.pop(op.key, None)
            by_key[op.key] = op
        return list(by_key.values())

    async def bulk_upsert(self, operations: Sequence[UpsertOperation]) -> MergeResult:
        """Upsert the batch atomically and report inserted / modified counts."""
        if not operations:
            return MergeResult()

        guard = self._batch_guard(operations)
        ops = self._dedupe(operations)
        if len(ops) != len(operations):
            self.logger.warning(
                f"Dropped {len(operations) - len(ops)} duplicate keys from merge batch"
            )

        sql = self.build_bulk_upsert_sql(guard)
        payload = [{"key": op.key, "document": op.document} for op in ops]
        args: list[Any] = [payload]
        if guard is MergeGuard.EXCLUDE_FLAGGED:
            args.append(UpdateStatus.TO_UPDATE.value)

        async with self.db.get_async_connection() as conn:
            async with conn.transaction():
                rows = await conn.fetch(sql, *args)

        inserted = sum(1 for r in rows if r["inserted"])
        result = MergeResult(inserted_count=inserted, modified_count=len(rows) - inserted)
        self.logger.info(
            f"Bulk upsert into {self.table}: {len(ops)} submitted, "
            f"{result.inserted_count} inserted, {result.modified_count} modified"
        )
        return result
