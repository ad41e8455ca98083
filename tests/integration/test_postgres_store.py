"""
PlayerRepository against a real PostgreSQL server.

Runs only when TEST_DATABASE_URL points at a database the tests may write to;
each test works in its own uniquely named table.
"""

import os
import uuid
from unittest.mock import AsyncMock, Mock

import pytest
import pytest_asyncio

from player_catalog.catalog.query_engine import PlayerQueryEngine
from player_catalog.core.config import Settings
from player_catalog.data_collection.orchestrator import PlayerSyncOrchestrator
from player_catalog.database.manager import DatabaseManager
from player_catalog.database.services.players import PlayerRepository
from player_catalog.domain.contracts import MergeGuard, UpsertOperation
from player_catalog.domain.filter import BirthYearRange, Filter
from player_catalog.domain.models import Player
from player_catalog.domain.pagination import Pagination

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL")

pytestmark = [
    pytest.mark.postgres,
    pytest.mark.skipif(not TEST_DATABASE_URL, reason="TEST_DATABASE_URL not set"),
]


@pytest_asyncio.fixture
async def db():
    settings = Settings(
        database_url=TEST_DATABASE_URL or "",
        players_table=f"players_test_{uuid.uuid4().hex[:12]}",
        database_pool_min_size=1,
        database_pool_max_size=2,
    )
    manager = DatabaseManager(settings)
    await manager.initialize()
    await manager.create_tables()
    try:
        yield manager
    finally:
        await manager.execute(f"DROP TABLE IF EXISTS {manager.players_table}")
        await manager.close()


def _ops(docs, guard=MergeGuard.EXCLUDE_FLAGGED):
    return [UpsertOperation(key=d["id"], document=d, guard=guard) for d in docs]


@pytest.mark.asyncio
async def test_create_tables_is_idempotent(db):
    await db.create_tables()
    health = await db.health_check()
    assert health["async_pool"] == "healthy"


@pytest.mark.asyncio
async def test_insert_then_modify_counts(db, make_docs):
    repo = PlayerRepository(db)
    docs = make_docs(count=5)

    first = await repo.bulk_upsert(_ops(docs))
    unchanged = await repo.bulk_upsert(_ops(docs))
    docs[0]["marketValue"] += 1
    changed = await repo.bulk_upsert(_ops(docs))

    assert (first.inserted_count, first.modified_count) == (5, 0)
    assert (unchanged.inserted_count, unchanged.modified_count) == (0, 0)
    assert (changed.inserted_count, changed.modified_count) == (0, 1)


@pytest.mark.asyncio
async def test_flagged_documents_resist_guarded_merge(db, make_docs):
    repo = PlayerRepository(db)
    docs = make_docs(count=3)
    docs[1]["updateStatus"] = "TO_UPDATE"
    await repo.bulk_upsert(_ops(docs, MergeGuard.NONE))

    incoming = [{**d, "name": "Renamed", "updateStatus": "UPDATED"} for d in docs]
    guarded = await repo.bulk_upsert(_ops(incoming))
    total, flagged = await repo.count_and_page(Filter(update_status="TO_UPDATE").clauses(), 0, None)

    assert guarded.modified_count == 2
    assert total == 1
    assert flagged[0]["name"] == docs[1]["name"]

    overwritten = await repo.bulk_upsert(_ops(incoming, MergeGuard.NONE))
    assert overwritten.modified_count == 1


@pytest.mark.asyncio
async def test_count_and_page_in_insertion_order(db, make_docs):
    repo = PlayerRepository(db)
    await repo.bulk_upsert(_ops(make_docs(count=10)))
    engine = PlayerQueryEngine(repo)

    page = await engine.query(pagination=Pagination(page=2, page_size=4))
    beyond = await engine.query(pagination=Pagination(page=5, page_size=4))
    born = await engine.query(Filter(position="Goalkeeper", birth_year_range=BirthYearRange(1990, 1995)))

    assert [p.id for p in page.records] == ["1004", "1005", "1006", "1007"]
    assert page.total_count == beyond.total_count == 10
    assert beyond.records == []
    assert [p.id for p in born.records] == ["1000", "1004"]


@pytest.mark.asyncio
async def test_boolean_and_club_filters(db, make_docs):
    repo = PlayerRepository(db)
    docs = make_docs(count=4)
    docs[3]["isActive"] = False
    await repo.bulk_upsert(_ops(docs))
    engine = PlayerQueryEngine(repo)

    inactive = await engine.query(Filter(is_active=False))
    other_club = await engine.query(Filter(club_id="27"))

    assert [p.id for p in inactive.records] == ["1003"]
    assert other_club.total_count == 0


@pytest.mark.asyncio
async def test_sync_end_to_end_with_stub_provider(db, make_docs):
    provider = Mock()
    provider.list_players_by_club = AsyncMock(
        return_value=[Player.model_validate(d) for d in make_docs(count=5)]
    )
    provider.get_active_status = AsyncMock(return_value=True)
    orchestrator = PlayerSyncOrchestrator(provider, PlayerRepository(db))

    assert (await orchestrator.sync("5")).to_response() == {"success": True, "insertedPlayers": 5}
    assert (await orchestrator.sync("5")).to_response() == {"success": True}
