"""
Achievements API Routes

Badges and dashboard statistics.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from trailwalk.api.deps import get_preferences, get_tracker_service
from trailwalk.api.v1.schemas import BadgeSchema
from trailwalk.features.tracker.preferences import Preferences
from trailwalk.features.tracker.service import TrackerService

router = APIRouter()


# === Pydantic schemas ===


class BadgeProgressSchema(BaseModel):
    badge: BadgeSchema
    current: float
    target: float
    percent: int


class BadgesResponse(BaseModel):
    earned: list[BadgeSchema] = []
    next: list[BadgeProgressSchema] = []


class WeeklySchema(BaseModel):
    this_week: int
    last_week: int
    change_percent: int
    trend: str


class GoalSchema(BaseModel):
    rate: int
    days_hit: int
    total_days: int


class RecordsSchema(BaseModel):
    best_day: Optional[date] = None
    best_day_steps: int = 0
    best_week_start: Optional[date] = None
    best_week_steps: int = 0
    best_month: Optional[str] = None
    best_month_steps: int = 0


class ChartPointSchema(BaseModel):
    day: date
    label: str
    steps: int


class DashboardResponse(BaseModel):
    weekly: WeeklySchema
    monthly_steps: int
    goal_achievement: GoalSchema
    records: RecordsSchema
    landmarks_reached: int
    chart: list[ChartPointSchema] = []


def _badge(badge, earned=None) -> BadgeSchema:
    return BadgeSchema(
        id=badge.id,
        name=badge.name,
        description=badge.description,
        icon=badge.icon,
        collection=badge.collection,
        period=earned.period if earned else None,
        unlocked_at=earned.unlocked_at if earned else None,
    )


# === Endpoints ===


@router.get("/{user_id}/badges", response_model=BadgesResponse)
async def badges(
    user_id: str,
    limit: int = Query(3, ge=0, le=20),
    prefs: Preferences = Depends(get_preferences),
    service: TrackerService = Depends(get_tracker_service),
):
    """Earned badges and the ones closest to unlocking."""
    overview = await service.get_badges(user_id, prefs, limit=limit)
    return BadgesResponse(
        earned=[_badge(u.badge, u.earned) for u in overview.earned],
        next=[
            BadgeProgressSchema(
                badge=_badge(p.badge),
                current=p.current,
                target=p.target,
                percent=int(p.fraction * 100),
            )
            for p in overview.next
        ],
    )


@router.get("/{user_id}/dashboard", response_model=DashboardResponse)
async def dashboard(
    user_id: str,
    prefs: Preferences = Depends(get_preferences),
    service: TrackerService = Depends(get_tracker_service),
):
    stats = await service.get_dashboard(user_id, prefs)
    return DashboardResponse(
        weekly=WeeklySchema(**vars(stats.weekly)),
        monthly_steps=stats.monthly_steps,
        goal_achievement=GoalSchema(**vars(stats.goal_achievement)),
        records=RecordsSchema(**vars(stats.records)),
        landmarks_reached=stats.landmarks_reached,
        chart=[ChartPointSchema(**vars(p)) for p in stats.chart],
    )
