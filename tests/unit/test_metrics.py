from unittest.mock import Mock

from player_catalog.core.config import Settings
from player_catalog.domain.contracts import MergeResult
from player_catalog.monitoring.prometheus_metrics import PrometheusMetrics


def _metrics(db_manager=None):
    return PrometheusMetrics(Settings(database_url="postgresql://u:secret@db:5432/players"), db_manager)


def test_private_registries_do_not_collide():
    _metrics()
    _metrics()


def test_sync_outcomes_are_counted():
    metrics = _metrics()
    metrics.record_sync("success", 0.5, MergeResult(inserted_count=3, modified_count=2))
    metrics.record_sync("error", 0.1)

    registry = metrics.registry
    assert registry.get_sample_value("player_sync_runs_total", {"status": "success"}) == 1
    assert registry.get_sample_value("player_sync_runs_total", {"status": "error"}) == 1
    assert registry.get_sample_value("players_merged_total", {"outcome": "inserted"}) == 3
    assert registry.get_sample_value("players_merged_total", {"outcome": "modified"}) == 2


def test_api_and_query_metrics_are_exported():
    pool = Mock()
    pool.get_size.return_value = 5
    pool.get_idle_size.return_value = 3
    metrics = _metrics(Mock(pool=pool))
    metrics.record_api_request("GET", "/api/v1/players", "200", 0.02)
    metrics.record_query(0.01)

    text = metrics.export_metrics()
    registry = metrics.registry
    labels = {"method": "GET", "endpoint": "/api/v1/players", "status": "200"}
    assert registry.get_sample_value("api_requests_total", labels) == 1
    assert registry.get_sample_value("player_query_duration_seconds_count") == 1
    assert registry.get_sample_value("database_connections_active") == 2
    assert "api_requests_total" in text
    assert "secret" not in text
