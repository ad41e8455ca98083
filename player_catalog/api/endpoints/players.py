"""
Players API Endpoints
API Routen für Spieler-Abfrage und Provider-Sync
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from player_catalog.api.dependencies import get_query_engine, get_sync_orchestrator
from player_catalog.api.models import (
    BIRTH_YEAR_RANGE_REGEX,
    GetPlayersParams,
    GetPlayersResponse,
    SyncRequest,
    SyncResponse,
    parse_is_active,
)
from player_catalog.catalog.query_engine import PlayerQueryEngine
from player_catalog.common.constants import DEFAULT_PAGE, DEFAULT_PAGE_SIZE
from player_catalog.common.errors import ProviderError
from player_catalog.data_collection.orchestrator import PlayerSyncOrchestrator

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/players", response_model=GetPlayersResponse, response_model_exclude_none=True)
async def get_players(
    position: Optional[str] = Query(default=None, description="The position of a player in the club"),
    birth_year_range: Optional[str] = Query(
        default=None,
        alias="birthYearRange",
        pattern=BIRTH_YEAR_RANGE_REGEX,
        description="The range of birth years of the players, e.g. 1992-2000",
    ),
    is_active: Optional[str] = Query(
        default=None,
        alias="isActive",
        description="Whether the player is still active; all players when not specified",
    ),
    club_id: Optional[str] = Query(default=None, alias="clubId", description="The club the player is playing for"),
    page: int = Query(default=DEFAULT_PAGE, description="The page number to retrieve"),
    page_size: int = Query(default=DEFAULT_PAGE_SIZE, alias="pageSize", description="The number of players per page"),
    query_engine: PlayerQueryEngine = Depends(get_query_engine),
):
    """Listet Spieler nach Filter, seitenweise"""
    params = GetPlayersParams(
        position=position,
        birth_year_range=birth_year_range,
        is_active=parse_is_active(is_active),
        club_id=club_id,
        page=page,
        page_size=page_size,
    )
    try:
        result = await query_engine.query(params.to_filter(), params.to_pagination())
    except Exception as e:
        logger.exception("GET /players failed")
        raise HTTPException(status_code=500, detail=f"Server Error: {e}") from e

    return GetPlayersResponse.from_page(result)


@router.post("/players/sync", response_model=SyncResponse, response_model_exclude_none=True)
async def sync_players(
    request: SyncRequest,
    orchestrator: PlayerSyncOrchestrator = Depends(get_sync_orchestrator),
):
    """Synchronisiert die Spieler eines Clubs vom Provider"""
    try:
        result = await orchestrator.sync(request.club_id, overwrite=request.overwrite)
    except ProviderError as e:
        logger.exception(f"Provider failure while syncing club {request.club_id}")
        raise HTTPException(status_code=502, detail=f"Provider Error: {e}") from e
    except Exception as e:
        logger.exception(f"Sync failed for club {request.club_id}")
        raise HTTPException(status_code=500, detail=f"Server Error: {e}") from e

    return SyncResponse.from_result(result)
