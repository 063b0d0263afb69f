"""
Progression value types.

TrailRun is the persisted state; the rest are derived views and events
returned by the calculator.
"""

from dataclasses import dataclass, field
from datetime import date, datetime

from trailwalk.features.trails.route import Landmark


@dataclass(frozen=True)
class TrailRun:
    """
    One user's attempt at one trail.

    cumulative_distance_m never decreases; completed_at is set once.
    """

    user_id: str
    trail_id: str
    started_at: datetime
    goal_days: int
    cumulative_distance_m: float = 0.0
    completed_at: datetime | None = None

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None

    def start_day(self, tz=None) -> date:
        """Calendar day the run started on (in `tz` when given)."""
        started = self.started_at.astimezone(tz) if tz is not None else self.started_at
        return started.date()


@dataclass(frozen=True)
class LandmarkArrival:
    """Emitted once when cumulative distance first reaches a landmark."""

    trail_id: str
    landmark: Landmark
    arrived_at: datetime


@dataclass(frozen=True)
class TrailCompleted:
    """Emitted once when a run first reaches the trail's total distance."""

    trail_id: str
    completed_at: datetime
    total_distance_m: float


@dataclass(frozen=True)
class ProgressSnapshot:
    """Read-only view of a run's position on its trail."""

    trail_id: str
    trail_name: str
    cumulative_distance_m: float
    total_distance_m: float
    progress_fraction: float
    next_landmark: Landmark | None
    distance_remaining_m: float
    distance_to_finish_m: float
    landmarks_reached: int
    landmarks_total: int
    goal_days: int
    daily_target_m: float
    completed: bool


@dataclass(frozen=True)
class ProgressUpdate:
    """Result of advancing a run."""

    run: TrailRun
    snapshot: ProgressSnapshot
    arrivals: list[LandmarkArrival] = field(default_factory=list)
    milestones: list[int] = field(default_factory=list)
    completion: TrailCompleted | None = None


@dataclass(frozen=True)
class CompletedTrailSummary:
    """Stats shown when a trail is finished."""

    trail_id: str
    started_at: datetime
    completed_at: datetime
    total_steps: int
    total_distance_m: float
    total_days: int
    avg_steps_per_day: int
    max_steps_in_one_day: int
