"""
Prometheus Metrics für den Player Catalog

Implementiert Metriken-Sammlung und -Export für Monitoring.
"""

import logging
from typing import Any, Optional

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    Info,
    generate_latest,
)

from player_catalog import __version__
from player_catalog.core.config import Settings
from player_catalog.domain.contracts import MergeResult


class PrometheusMetrics:
    """Prometheus Metriken für den Player Catalog"""

    def __init__(self, settings: Settings, db_manager: Optional[Any] = None):
        self.settings = settings
        self.db_manager = db_manager
        self.logger = logging.getLogger("prometheus_metrics")

        # Custom Registry für bessere Kontrolle
        self.registry = CollectorRegistry()

        # API Metriken
        self.api_requests_total = Counter(
            "api_requests_total",
            "Total number of API requests",
            ["method", "endpoint", "status"],
            registry=self.registry,
        )

        self.api_request_duration = Histogram(
            "api_request_duration_seconds",
            "API request duration in seconds",
            ["method", "endpoint"],
            registry=self.registry,
        )

        # Query Engine
        self.player_query_duration = Histogram(
            "player_query_duration_seconds",
            "Duration of count-and-page player queries in seconds",
            registry=self.registry,
        )

        # Sync Engine
        self.sync_runs_total = Counter(
            "player_sync_runs_total",
            "Total number of player sync runs",
            ["status"],
            registry=self.registry,
        )

        self.sync_duration = Histogram(
            "player_sync_duration_seconds",
            "Player sync run duration in seconds",
            registry=self.registry,
        )

        self.players_merged_total = Counter(
            "players_merged_total",
            "Total number of player documents written by sync runs",
            ["outcome"],
            registry=self.registry,
        )

        # Database Metriken
        self.database_connections_active = Gauge(
            "database_connections_active",
            "Number of active database connections",
            registry=self.registry,
        )

        # Application Info
        self.app_info = Info(
            "player_catalog_info",
            "Player Catalog application info",
            registry=self.registry,
        )

        self.app_info.info(
            {
                "version": __version__,
                "environment": self.settings.environment,
                "database_url": (
                    self.settings.database_url.split("@")[1]
                    if "@" in self.settings.database_url
                    else "hidden"
                ),
            }
        )

    def record_api_request(self, method: str, endpoint: str, status: str, duration: float):
        """Zeichnet API Request auf"""
        self.api_requests_total.labels(method=method, endpoint=endpoint, status=status).inc()
        self.api_request_duration.labels(method=method, endpoint=endpoint).observe(duration)

    def record_query(self, duration: float):
        self.player_query_duration.observe(duration)

    def record_sync(self, status: str, duration: float, result: Optional[MergeResult] = None):
        """Zeichnet einen Sync-Lauf auf"""
        self.sync_runs_total.labels(status=status).inc()
        self.sync_duration.observe(duration)

        if result is not None:
            if result.inserted_count:
                self.players_merged_total.labels(outcome="inserted").inc(result.inserted_count)
            if result.modified_count:
                self.players_merged_total.labels(outcome="modified").inc(result.modified_count)

    def update_database_metrics(self):
        """Aktualisiert Database-Metriken"""
        pool = getattr(self.db_manager, "pool", None)
        if pool is None:
            self.database_connections_active.set(0)
            return
        self.database_connections_active.set(pool.get_size() - pool.get_idle_size())

    def export_metrics(self) -> str:
        """Exportiert Metriken im Prometheus Format"""
        try:
            self.update_database_metrics()
            return generate_latest(self.registry).decode("utf-8")
        except Exception as e:
            self.logger.error(f"Failed to export metrics: {e}")
            return f"# Error exporting metrics: {e}\n"
