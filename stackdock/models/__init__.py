"""
Data models for stackdock.

Import models explicitly from their modules to avoid circular imports:
    from stackdock.models.base import Stack, Card, CoverType, SyncStatus
    from stackdock.models.updates import StackUpdate, CardUpdate, NewCard
    from stackdock.models.files import Snapshot, ConfigFile
"""

from .base import Card, CoverType, Stack, SyncStatus
from .files import ConfigFile, Snapshot
from .updates import CardUpdate, NewCard, StackUpdate

__all__ = [
    "Card",
    "CardUpdate",
    "ConfigFile",
    "CoverType",
    "NewCard",
    "Snapshot",
    "Stack",
    "StackUpdate",
    "SyncStatus",
]
