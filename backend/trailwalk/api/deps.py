"""
API dependencies.

Authentication is handled outside this service; the user id comes from
the path and the subscription tier from the `premium` query flag.
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from trailwalk.config import settings
from trailwalk.db.session import get_async_db
from trailwalk.features.trails.catalog import TrailCatalog
from trailwalk.features.trails.entitlement import TierEntitlement
from trailwalk.features.tracker.persistence import SqlPersistence
from trailwalk.features.tracker.preferences import Preferences
from trailwalk.features.tracker.service import TrackerService
from trailwalk.shared.clock import SystemClock
from trailwalk.shared.constants import DistanceUnit


@lru_cache
def get_catalog() -> TrailCatalog:
    """Singleton catalog (loaded once, cached)."""
    catalog = TrailCatalog(settings.trails_path)
    catalog.load()
    return catalog


def get_entitlement(
    premium: bool = Query(False, description="Caller has a premium subscription"),
    catalog: TrailCatalog = Depends(get_catalog),
) -> TierEntitlement:
    free_ids = settings.free_trail_ids or catalog.free_trail_ids()
    return TierEntitlement(free_ids, premium=premium)


def get_preferences(
    daily_goal: Optional[int] = Query(None, gt=0),
    stride_length_cm: Optional[float] = Query(None, gt=0),
    unit: Optional[DistanceUnit] = Query(None),
) -> Preferences:
    """Preferences from query parameters, falling back to settings."""
    defaults = Preferences.from_settings(settings)
    return Preferences(
        daily_goal=daily_goal or defaults.daily_goal,
        stride_length_cm=stride_length_cm or defaults.stride_length_cm,
        distance_unit=unit or defaults.distance_unit,
    )


def get_tracker_service(
    db: AsyncSession = Depends(get_async_db),
    catalog: TrailCatalog = Depends(get_catalog),
    entitlement: TierEntitlement = Depends(get_entitlement),
) -> TrackerService:
    return TrackerService(
        SqlPersistence(db),
        catalog,
        entitlement,
        SystemClock(settings.timezone),
        goal_history_days=settings.goal_history_days,
    )
