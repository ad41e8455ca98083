"""
Data Collection Module
Provider-Anbindung, Sync-Orchestrierung und Scheduling
"""

from .orchestrator import PlayerSyncOrchestrator, create_orchestrator
from .scheduler import SyncScheduler

__all__ = [
    "PlayerSyncOrchestrator",
    "SyncScheduler",
    "create_orchestrator",
]
