"""
API response schemas.

Distances are always returned in meters plus a formatted display string
in the caller's unit.
"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from trailwalk.features.progression.schemas import ProgressSnapshot, ProgressUpdate
from trailwalk.shared.constants import DayStatus, DistanceUnit
from trailwalk.shared.formatters import format_distance, format_percent


class LandmarkSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    distance_m: float
    description: str = ""
    image: Optional[str] = None


class TrailSchema(BaseModel):
    id: str
    name: str
    description: str
    difficulty: str
    total_distance_m: float
    total_distance: str
    premium: bool
    locked: bool
    landmarks: list[LandmarkSchema] = []


class SnapshotSchema(BaseModel):
    trail_id: str
    trail_name: str
    cumulative_distance_m: float
    total_distance_m: float
    progress_fraction: float
    progress: str
    next_landmark: Optional[LandmarkSchema] = None
    distance_remaining_m: float
    distance_remaining: str
    distance_to_finish_m: float
    landmarks_reached: int
    landmarks_total: int
    goal_days: int
    daily_target_m: float
    completed: bool

    @classmethod
    def build(cls, snapshot: ProgressSnapshot, unit: DistanceUnit) -> "SnapshotSchema":
        return cls(
            trail_id=snapshot.trail_id,
            trail_name=snapshot.trail_name,
            cumulative_distance_m=snapshot.cumulative_distance_m,
            total_distance_m=snapshot.total_distance_m,
            progress_fraction=snapshot.progress_fraction,
            progress=format_percent(snapshot.progress_fraction),
            next_landmark=(
                LandmarkSchema.model_validate(snapshot.next_landmark)
                if snapshot.next_landmark else None
            ),
            distance_remaining_m=snapshot.distance_remaining_m,
            distance_remaining=format_distance(snapshot.distance_remaining_m, unit),
            distance_to_finish_m=snapshot.distance_to_finish_m,
            landmarks_reached=snapshot.landmarks_reached,
            landmarks_total=snapshot.landmarks_total,
            goal_days=snapshot.goal_days,
            daily_target_m=snapshot.daily_target_m,
            completed=snapshot.completed,
        )


class ProgressUpdateSchema(BaseModel):
    snapshot: SnapshotSchema
    started_at: datetime
    completed_at: Optional[datetime] = None
    arrivals: list[LandmarkSchema] = []
    milestones: list[int] = []
    completed_now: bool = False

    @classmethod
    def build(cls, update: ProgressUpdate, unit: DistanceUnit) -> "ProgressUpdateSchema":
        return cls(
            snapshot=SnapshotSchema.build(update.snapshot, unit),
            started_at=update.run.started_at,
            completed_at=update.run.completed_at,
            arrivals=[LandmarkSchema.model_validate(a.landmark) for a in update.arrivals],
            milestones=update.milestones,
            completed_now=update.completion is not None,
        )


class ActivityEntrySchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    day: date
    steps: int
    distance_m: float


class CompletedTrailSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    trail_id: str
    started_at: datetime
    completed_at: datetime
    total_steps: int
    total_distance_m: float
    total_days: int
    avg_steps_per_day: int
    max_steps_in_one_day: int


class BadgeSchema(BaseModel):
    id: str
    name: str
    description: str
    icon: str
    collection: str
    period: Optional[str] = None
    unlocked_at: Optional[datetime] = None


class StreakSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    current: int
    longest: int


class DayStatusSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    day: date
    status: DayStatus
    steps: int
    distance_m: float
