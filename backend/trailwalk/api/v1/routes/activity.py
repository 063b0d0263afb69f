"""
Activity API Routes

Ledger writes and the views derived from the daily history.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from trailwalk.api.deps import get_preferences, get_tracker_service
from trailwalk.api.v1.schemas import (
    ActivityEntrySchema,
    BadgeSchema,
    CompletedTrailSchema,
    DayStatusSchema,
    ProgressUpdateSchema,
    StreakSchema,
)
from trailwalk.features.tracker.preferences import Preferences
from trailwalk.features.tracker.service import TrackerService
from trailwalk.shared.constants import DayStatus

router = APIRouter()


# === Pydantic schemas ===


class ActivityRequest(BaseModel):
    steps: int = Field(ge=0)
    distance_m: Optional[float] = Field(default=None, ge=0)


class ActivityResponse(BaseModel):
    entry: ActivityEntrySchema
    day_status: DayStatus
    progress: list[ProgressUpdateSchema] = []
    completed_trails: list[CompletedTrailSchema] = []
    paused_trail_ids: list[str] = []
    unlocked_badges: list[BadgeSchema] = []
    streaks: StreakSchema


class MonthCalendarSchema(BaseModel):
    year: int
    month: int
    leading_blanks: int
    achieved_count: int
    failed_count: int
    days: list[DayStatusSchema] = []


# === Endpoints ===


@router.put("/{user_id}/activity/{day}", response_model=ActivityResponse)
async def record_activity(
    user_id: str,
    day: str,
    body: ActivityRequest,
    prefs: Preferences = Depends(get_preferences),
    service: TrackerService = Depends(get_tracker_service),
):
    """Record (or replace) one day's activity."""
    update = await service.record_activity(user_id, day, body.steps, prefs, distance_m=body.distance_m)
    return ActivityResponse(
        entry=ActivityEntrySchema.model_validate(update.entry),
        day_status=update.day_status,
        progress=[ProgressUpdateSchema.build(u, prefs.distance_unit) for u in update.progress],
        completed_trails=[CompletedTrailSchema.model_validate(c) for c in update.completed_trails],
        paused_trail_ids=update.paused_trail_ids,
        unlocked_badges=[
            BadgeSchema(
                id=u.badge.id,
                name=u.badge.name,
                description=u.badge.description,
                icon=u.badge.icon,
                collection=u.badge.collection,
                period=u.earned.period,
                unlocked_at=u.earned.unlocked_at,
            )
            for u in update.unlocked_badges
        ],
        streaks=StreakSchema.model_validate(update.streaks),
    )


@router.get("/{user_id}/activity", response_model=list[ActivityEntrySchema])
async def list_activity(
    user_id: str,
    start: date = Query(...),
    end: date = Query(...),
    service: TrackerService = Depends(get_tracker_service),
):
    """Logged days between start and end (inclusive, no gap filling)."""
    entries = await service.get_activity(user_id, start, end)
    return [ActivityEntrySchema.model_validate(e) for e in entries]


@router.get("/{user_id}/days", response_model=list[DayStatusSchema])
async def day_statuses(
    user_id: str,
    start: date = Query(...),
    end: date = Query(...),
    prefs: Preferences = Depends(get_preferences),
    service: TrackerService = Depends(get_tracker_service),
):
    """Goal status for every day between start and end."""
    days = await service.get_day_statuses(user_id, start, end, prefs)
    return [DayStatusSchema.model_validate(d) for d in days]


@router.get("/{user_id}/calendar", response_model=list[MonthCalendarSchema])
async def calendar(
    user_id: str,
    prefs: Preferences = Depends(get_preferences),
    service: TrackerService = Depends(get_tracker_service),
):
    """Previous and current month calendar."""
    months = await service.get_calendar(user_id, prefs)
    return [
        MonthCalendarSchema(
            year=m.year,
            month=m.month,
            leading_blanks=m.leading_blanks,
            achieved_count=m.achieved_count,
            failed_count=m.failed_count,
            days=[DayStatusSchema.model_validate(d) for d in m.days],
        )
        for m in months
    ]


@router.get("/{user_id}/streaks", response_model=StreakSchema)
async def streaks(
    user_id: str,
    prefs: Preferences = Depends(get_preferences),
    service: TrackerService = Depends(get_tracker_service),
):
    summary = await service.get_streaks(user_id, prefs)
    return StreakSchema.model_validate(summary)
