"""
Trail Run API Routes

Start, extend and inspect a user's trail runs.
"""

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, Field

from trailwalk.api.deps import get_preferences, get_tracker_service
from trailwalk.api.v1.schemas import CompletedTrailSchema, ProgressUpdateSchema, SnapshotSchema
from trailwalk.features.tracker.preferences import Preferences
from trailwalk.features.tracker.service import TrackerService

router = APIRouter()


# === Pydantic schemas ===


class StartRunRequest(BaseModel):
    trail_id: str
    goal_days: int = Field(ge=1)


class ExtendRunRequest(BaseModel):
    additional_days: int = Field(ge=1)


# === Endpoints ===


@router.post("/{user_id}/runs", response_model=ProgressUpdateSchema)
async def start_run(
    user_id: str,
    body: StartRunRequest,
    prefs: Preferences = Depends(get_preferences),
    service: TrackerService = Depends(get_tracker_service),
):
    """Start a trail (returns the existing run if already started)."""
    update = await service.start_trail(user_id, body.trail_id, body.goal_days)
    return ProgressUpdateSchema.build(update, prefs.distance_unit)


@router.get("/{user_id}/runs", response_model=list[SnapshotSchema])
async def list_runs(
    user_id: str,
    prefs: Preferences = Depends(get_preferences),
    service: TrackerService = Depends(get_tracker_service),
):
    runs = await service.get_runs(user_id)
    return [
        SnapshotSchema.build(service.calculator.snapshot(run), prefs.distance_unit)
        for run in runs
    ]


@router.get("/{user_id}/runs/completed", response_model=list[CompletedTrailSchema])
async def completed_runs(
    user_id: str,
    service: TrackerService = Depends(get_tracker_service),
):
    """Completion summaries, oldest first."""
    summaries = await service.get_completed_trails(user_id)
    return [CompletedTrailSchema.model_validate(s) for s in summaries]


@router.get("/{user_id}/runs/{trail_id}", response_model=SnapshotSchema)
async def get_run(
    user_id: str,
    trail_id: str,
    prefs: Preferences = Depends(get_preferences),
    service: TrackerService = Depends(get_tracker_service),
):
    snapshot = await service.get_progress(user_id, trail_id)
    return SnapshotSchema.build(snapshot, prefs.distance_unit)


@router.post("/{user_id}/runs/{trail_id}/extend", response_model=SnapshotSchema)
async def extend_run(
    user_id: str,
    trail_id: str,
    body: ExtendRunRequest,
    prefs: Preferences = Depends(get_preferences),
    service: TrackerService = Depends(get_tracker_service),
):
    """Add days to a run's goal."""
    snapshot = await service.extend_trail(user_id, trail_id, body.additional_days)
    return SnapshotSchema.build(snapshot, prefs.distance_unit)


@router.delete("/{user_id}/runs/{trail_id}", status_code=204)
async def cancel_run(
    user_id: str,
    trail_id: str,
    service: TrackerService = Depends(get_tracker_service),
):
    """Abandon an active run (completed runs are kept)."""
    await service.cancel_trail(user_id, trail_id)
    return Response(status_code=204)
