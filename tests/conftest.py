"""Global pytest fixtures for the player catalog test suite.

Centralizes:
 - Project root path insertion (so individual tests don't repeat sys.path hacks)
 - Player document stubs shaped like the Transfermarkt API payloads
 - An in-memory PlayerRepository stand-in with the same merge semantics
"""

import sys
from pathlib import Path
from typing import Any

import pytest

# Ensure project root (containing player_catalog/) is on sys.path once
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from player_catalog.common.constants import UpdateStatus  # noqa: E402
from player_catalog.domain.contracts import MergeGuard, MergeResult  # noqa: E402
from player_catalog.domain.filter import Between, Equals  # noqa: E402


# -------------------- Player Fixtures -------------------- #

@pytest.fixture
def maignan_doc() -> dict[str, Any]:
    return {
        "id": "182906",
        "name": "Mike Maignan",
        "position": "Goalkeeper",
        "dateOfBirth": "1995-07-03",
        "age": 29,
        "nationality": ["France", "French Guiana"],
        "height": 191,
        "foot": "right",
        "joinedOn": "2021-07-01",
        "signedFrom": "LOSC Lille",
        "contract": "2026-06-30",
        "marketValue": 35000000,
        "status": "Team captain",
        "clubId": "5",
        "isActive": True,
        "updateStatus": "UPDATED",
    }


def make_club_docs(club_id: str = "5", count: int = 10) -> list[dict[str, Any]]:
    positions = ["Goalkeeper", "Centre-Back", "Central Midfield", "Centre-Forward"]
    return [
        {
            "id": str(1000 + i),
            "name": f"Player {i}",
            "position": positions[i % len(positions)],
            "dateOfBirth": f"{1990 + i}-05-17",
            "nationality": ["Italy"],
            "marketValue": 1_000_000 * (i + 1),
            "clubId": club_id,
            "isActive": True,
            "updateStatus": "UPDATED",
        }
        for i in range(count)
    ]


@pytest.fixture
def club_docs() -> list[dict[str, Any]]:
    return make_club_docs()


# -------------------- In-memory storage -------------------- #

def _matches(doc: dict[str, Any], clause) -> bool:
    if isinstance(clause, Equals):
        return doc.get(clause.field) == clause.value
    if isinstance(clause, Between):
        value = doc.get(clause.field)
        if value is None:
            return False
        if clause.gte is not None and value < clause.gte:
            return False
        if clause.lte is not None and value > clause.lte:
            return False
        return True
    raise TypeError(clause)


class InMemoryPlayerRepository:
    """Dict-backed repository mirroring PlayerRepository's contract."""

    def __init__(self, docs: list[dict[str, Any]] | None = None):
        self.docs: dict[str, dict[str, Any]] = {}
        self.upsert_calls: list[list] = []
        for doc in docs or []:
            self.docs[doc["id"]] = dict(doc)

    async def count_and_page(self, clauses, skip, limit=None):
        clauses = list(clauses)
        matched = [d for d in self.docs.values() if all(_matches(d, c) for c in clauses)]
        end = None if limit is None else skip + limit
        return len(matched), [dict(d) for d in matched[skip:end]]

    async def bulk_upsert(self, operations):
        self.upsert_calls.append(list(operations))
        result = MergeResult()
        by_key = {op.key: op for op in operations}
        for op in by_key.values():
            stored = self.docs.get(op.key)
            if stored is None:
                self.docs[op.key] = dict(op.document)
                result.inserted_count += 1
                continue
            if (
                op.guard is MergeGuard.EXCLUDE_FLAGGED
                and stored.get("updateStatus") == UpdateStatus.TO_UPDATE.value
            ):
                continue
            merged = {**stored, **op.document}
            if merged != stored:
                self.docs[op.key] = merged
                result.modified_count += 1
        return result


@pytest.fixture
def memory_repository(club_docs):
    return InMemoryPlayerRepository(club_docs)


@pytest.fixture
def make_docs():
    return make_club_docs


@pytest.fixture
def make_repository():
    return InMemoryPlayerRepository
