"""
FastAPI Application Main
Hauptanwendung für die Player Catalog API
"""

import logging
import os
import time
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from player_catalog import __version__
from player_catalog.api.models import HealthResponse
from player_catalog.catalog.query_engine import PlayerQueryEngine
from player_catalog.core.config import Settings
from player_catalog.data_collection.orchestrator import PlayerSyncOrchestrator, create_orchestrator
from player_catalog.database.manager import DatabaseManager
from player_catalog.database.services.players import PlayerRepository
from player_catalog.monitoring.prometheus_metrics import PrometheusMetrics

API_PREFIX = "/api/v1"


def _endpoint_label(request: Request) -> str:
    """Route template including the mount prefix, e.g. /api/v1/players"""
    route = request.scope.get("route")
    path = getattr(route, "path", None)
    if path is None:
        return request.url.path
    # included routers may report their path relative to the prefix
    if request.url.path.startswith(API_PREFIX + "/") and not path.startswith(API_PREFIX):
        path = API_PREFIX + path
    return path


def create_fastapi_app(
    settings: Settings,
    *,
    db_manager: Optional[DatabaseManager] = None,
    metrics: Optional[PrometheusMetrics] = None,
    query_engine: Optional[PlayerQueryEngine] = None,
    sync_orchestrator: Optional[PlayerSyncOrchestrator] = None,
):
    """Factory function to create the FastAPI app.

    Injected collaborators are used as-is and never closed by the app. Missing
    ones are built in the lifespan from ``settings``. SAFE_MODE (env var
    FASTAPI_SAFE_MODE=1) skips the database pool for a quick startup check.
    """
    safe_mode = os.getenv("FASTAPI_SAFE_MODE", "0") == "1"

    if metrics is None and settings.enable_metrics:
        metrics = PrometheusMetrics(settings, db_manager)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application Lifespan Management"""
        logger = logging.getLogger(__name__)
        logger.info("Starting Player Catalog API")

        owns_db = False
        owns_orchestrator = False

        if app.state.db is None and not safe_mode:
            app.state.db = DatabaseManager(settings)
            owns_db = True
            try:
                await app.state.db.initialize()
            except Exception:
                logger.exception("Database initialization failed")
        elif safe_mode:
            logger.info("SAFE_MODE enabled: skipping DB initialization")

        if app.state.metrics is not None and app.state.metrics.db_manager is None:
            app.state.metrics.db_manager = app.state.db

        if app.state.db is not None:
            repository = PlayerRepository(app.state.db)
            if app.state.query_engine is None:
                app.state.query_engine = PlayerQueryEngine(
                    repository,
                    default_page_size=settings.default_page_size,
                    metrics=app.state.metrics,
                )
            if app.state.sync_orchestrator is None:
                app.state.sync_orchestrator = create_orchestrator(
                    settings, repository, metrics=app.state.metrics
                )
                owns_orchestrator = True
                await app.state.sync_orchestrator.initialize()

        logger.info("Application startup complete")
        yield

        # Shutdown
        logger.info("Shutting down application")
        if owns_orchestrator:
            await app.state.sync_orchestrator.cleanup()
        if owns_db and app.state.db:
            await app.state.db.close()

    app = FastAPI(
        title="Player Catalog API",
        description="Football player catalog with filtered reads and provider synchronization",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.db = db_manager
    app.state.metrics = metrics
    app.state.query_engine = query_engine
    app.state.sync_orchestrator = sync_orchestrator
    app.state.safe_mode = safe_mode

    # CORS Middleware (tighten in non-development)
    cors_origins = settings.cors_origins
    if settings.environment != "development":
        cors_origins = [o for o in cors_origins if o != "*"] or []
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def metrics_http_middleware(request: Request, call_next):
        start = time.time()
        response = None
        try:
            response = await call_next(request)
            return response
        finally:
            if app.state.metrics is not None:
                app.state.metrics.record_api_request(
                    method=request.method,
                    endpoint=_endpoint_label(request),
                    status=str(getattr(response, "status_code", 500)),
                    duration=time.time() - start,
                )

    @app.get("/health", response_model=HealthResponse)
    async def health_check():
        """Basic health check endpoint"""
        database = None
        status = "healthy"
        if app.state.db is not None:
            database = await app.state.db.health_check()
            if database.get("async_pool") != "healthy":
                status = "degraded"
        return HealthResponse(status=status, timestamp=datetime.now(), database=database)

    @app.get("/metrics", response_class=PlainTextResponse)
    async def prometheus_metrics():
        """Prometheus exposition format"""
        if app.state.metrics is None:
            return PlainTextResponse("# metrics disabled\n", status_code=404)
        return PlainTextResponse(app.state.metrics.export_metrics())

    # Include aggregated API router
    from player_catalog.api.router import api_router
    app.include_router(api_router, prefix=API_PREFIX)

    return app


def create_app() -> FastAPI:
    """ASGI factory for ``uvicorn --factory player_catalog.api.main:create_app``"""
    from player_catalog.core.config import settings

    return create_fastapi_app(settings)
