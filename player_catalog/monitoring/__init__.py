"""
Monitoring Module
Prometheus Metriken für API, Queries und Sync-Läufe
"""

from .prometheus_metrics import PrometheusMetrics

__all__ = ["PrometheusMetrics"]
