"""
Aggregated API router for versioned endpoints.
"""

from fastapi import APIRouter

from player_catalog.api.endpoints import players


api_router = APIRouter()

# Register endpoint routers here to keep create_fastapi_app clean
api_router.include_router(players.router, tags=["players"])
