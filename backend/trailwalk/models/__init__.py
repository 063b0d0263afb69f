"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy.
"""

from trailwalk.db.base import Base
from trailwalk.features.ledger.models import ActivityEntryRecord
from trailwalk.features.progression.models import TrailRunRecord
from trailwalk.features.achievements.models import EarnedBadgeRecord

__all__ = [
    "Base",
    "ActivityEntryRecord",
    "TrailRunRecord",
    "EarnedBadgeRecord",
]
