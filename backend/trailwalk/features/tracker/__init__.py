"""
Tracker feature.

Per-user orchestration of ledger, progression, calendar and achievements.

Usage:
    from trailwalk.features.tracker import TrackerService, InMemoryPersistence, Preferences
"""

from .locks import UserLockRegistry, user_locks
from .persistence import TrackerPersistence, InMemoryPersistence, SqlPersistence
from .preferences import Preferences
from .service import TrackerService, ActivityUpdate, BadgeOverview, UnlockedBadge

__all__ = [
    "UserLockRegistry",
    "user_locks",
    "TrackerPersistence",
    "InMemoryPersistence",
    "SqlPersistence",
    "Preferences",
    "TrackerService",
    "ActivityUpdate",
    "BadgeOverview",
    "UnlockedBadge",
]
