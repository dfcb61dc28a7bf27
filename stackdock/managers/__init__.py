"""
Managers for stackdock.

This package contains the components behind the engine:
- StorageManager: Snapshot persistence to the data directory
- Gateway / SimulatedGateway: Remote source of record
- MutationEngine: Optimistic mutations with commit/rollback
- selectors: Pure queries over a snapshot
"""

from stackdock.managers.storage_manager import StorageManager
from stackdock.managers.gateway import Gateway, SimulatedGateway
from stackdock.managers.engine import MutationEngine, MutationResult
from stackdock.managers import selectors

__all__ = [
    "Gateway",
    "MutationEngine",
    "MutationResult",
    "SimulatedGateway",
    "StorageManager",
    "selectors",
]
