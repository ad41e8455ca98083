"""
API Dependencies
Dependency Injection für FastAPI
"""

from fastapi import HTTPException, Request

from player_catalog.catalog.query_engine import PlayerQueryEngine
from player_catalog.data_collection.orchestrator import PlayerSyncOrchestrator


async def get_query_engine(request: Request) -> PlayerQueryEngine:
    engine = getattr(request.app.state, "query_engine", None)
    if engine is None:
        raise HTTPException(status_code=500, detail="Server Error: query engine not available")
    return engine


async def get_sync_orchestrator(request: Request) -> PlayerSyncOrchestrator:
    orchestrator = getattr(request.app.state, "sync_orchestrator", None)
    if orchestrator is None:
        raise HTTPException(status_code=500, detail="Server Error: sync orchestrator not available")
    return orchestrator
