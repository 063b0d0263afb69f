"""
Trail progression calculator.

Maps a run's cumulative distance onto its trail: position, next landmark,
arrivals, milestones and completion. All methods are pure; updated runs
are returned as new objects.
"""

import logging
import math
from dataclasses import replace
from datetime import datetime

from trailwalk.features.trails.catalog import TrailCatalog
from trailwalk.features.trails.entitlement import EntitlementGate, ensure_entitled
from trailwalk.features.trails.route import Trail
from trailwalk.shared.constants import MILESTONE_PERCENTS
from trailwalk.shared.errors import InvalidMeasurementError, NonMonotonicDistanceError
from .schemas import (
    LandmarkArrival,
    ProgressSnapshot,
    ProgressUpdate,
    TrailCompleted,
    TrailRun,
)

logger = logging.getLogger(__name__)


class TrailProgressionCalculator:
    """
    Progression over a trail catalog, gated by entitlement.

    Usage:
        calc = TrailProgressionCalculator(catalog, TierEntitlement(FREE_TRAIL_IDS))
        run = calc.start_run("user-1", "10k-classic", goal_days=7, now=now)
        update = calc.advance(run, 6000.0, now)
        for arrival in update.arrivals:
            ...
    """

    def __init__(self, catalog: TrailCatalog, entitlement: EntitlementGate):
        self.catalog = catalog
        self.entitlement = entitlement

    def _trail_for(self, trail_id: str) -> Trail:
        trail = self.catalog.require_trail(trail_id)
        ensure_entitled(self.entitlement, trail_id)
        return trail

    def start_run(self, user_id: str, trail_id: str, goal_days: int, now: datetime) -> TrailRun:
        """
        Begin a run at distance zero.

        Raises:
            UnknownTrailError: trail not in catalog
            NotEntitledError: trail is locked for this user
            InvalidMeasurementError: goal_days < 1
        """
        self._trail_for(trail_id)
        _check_days(goal_days, "goal_days")
        logger.info(f"User {user_id} started trail {trail_id} ({goal_days} day goal)")
        return TrailRun(
            user_id=user_id,
            trail_id=trail_id,
            started_at=now,
            goal_days=goal_days,
        )

    def extend_run(self, run: TrailRun, additional_days: int) -> TrailRun:
        """Add days to a run's goal."""
        _check_days(additional_days, "additional_days")
        return replace(run, goal_days=run.goal_days + additional_days)

    def advance(self, run: TrailRun, new_cumulative_m: float, now: datetime) -> ProgressUpdate:
        """
        Move a run to a new cumulative distance.

        Args:
            run: Current run state (not modified)
            new_cumulative_m: Total distance walked since the run started
            now: Timestamp for events and completion

        Returns:
            ProgressUpdate with the new run, snapshot and events

        Raises:
            UnknownTrailError, NotEntitledError,
            NonMonotonicDistanceError: new distance below the current one
            InvalidMeasurementError: negative or non-finite distance
        """
        trail = self._trail_for(run.trail_id)
        _check_distance(new_cumulative_m)

        previous_m = run.cumulative_distance_m
        if new_cumulative_m < previous_m:
            raise NonMonotonicDistanceError(previous_m, new_cumulative_m)

        arrivals = [
            LandmarkArrival(trail_id=trail.id, landmark=lm, arrived_at=now)
            for lm in trail.landmarks_between(previous_m, new_cumulative_m)
        ]
        milestones = [
            p for p in MILESTONE_PERCENTS
            if previous_m < trail.total_distance_m * p / 100 <= new_cumulative_m
        ]

        completion = None
        completed_at = run.completed_at
        if completed_at is None and new_cumulative_m >= trail.total_distance_m:
            completed_at = now
            completion = TrailCompleted(
                trail_id=trail.id,
                completed_at=now,
                total_distance_m=trail.total_distance_m,
            )
            logger.info(f"User {run.user_id} completed trail {trail.id}")

        for arrival in arrivals:
            logger.info(f"User {run.user_id} reached {arrival.landmark.name} on {trail.id}")

        new_run = replace(run, cumulative_distance_m=new_cumulative_m, completed_at=completed_at)
        return ProgressUpdate(
            run=new_run,
            snapshot=self._snapshot(trail, new_run),
            arrivals=arrivals,
            milestones=milestones,
            completion=completion,
        )

    def add_distance(self, run: TrailRun, delta_m: float, now: datetime) -> ProgressUpdate:
        """Advance by a distance delta (must be >= 0)."""
        _check_finite(delta_m)
        if delta_m < 0:
            raise NonMonotonicDistanceError(
                run.cumulative_distance_m, run.cumulative_distance_m + delta_m
            )
        return self.advance(run, run.cumulative_distance_m + delta_m, now)

    def snapshot(self, run: TrailRun) -> ProgressSnapshot:
        """Current position without emitting events or checking entitlement."""
        return self._snapshot(self.catalog.require_trail(run.trail_id), run)

    def _snapshot(self, trail: Trail, run: TrailRun) -> ProgressSnapshot:
        cumulative = run.cumulative_distance_m
        upcoming = trail.next_landmark(cumulative)
        return ProgressSnapshot(
            trail_id=trail.id,
            trail_name=trail.name,
            cumulative_distance_m=cumulative,
            total_distance_m=trail.total_distance_m,
            progress_fraction=trail.progress_fraction(cumulative),
            next_landmark=upcoming,
            distance_remaining_m=trail.distance_remaining_to(upcoming, cumulative) if upcoming else 0.0,
            distance_to_finish_m=max(trail.total_distance_m - cumulative, 0.0),
            landmarks_reached=len(trail.reached_landmarks(cumulative)),
            landmarks_total=len(trail.landmarks),
            goal_days=run.goal_days,
            daily_target_m=trail.total_distance_m / run.goal_days,
            completed=run.is_completed,
        )


def _check_finite(value: float) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise InvalidMeasurementError(f"Distance must be a finite number, got {value!r}")


def _check_distance(value: float) -> None:
    _check_finite(value)
    if value < 0:
        raise InvalidMeasurementError(f"Distance must be non-negative, got {value!r}")


def _check_days(value: int, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidMeasurementError(f"{name} must be a positive integer, got {value!r}")
