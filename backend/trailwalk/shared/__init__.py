"""
Shared utilities (NOT business logic).

Usage:
    from trailwalk.shared import steps_to_distance, DistanceUnit
    from trailwalk.shared.formatters import format_distance
"""
from .constants import (
    DistanceUnit,
    DayStatus,
    METERS_PER_KM,
    METERS_PER_MILE,
    DEFAULT_DAILY_GOAL_STEPS,
    DEFAULT_STRIDE_LENGTH_CM,
    FREE_TRAIL_IDS,
    MILESTONE_PERCENTS,
)
from .errors import (
    TrailEngineError,
    InvalidDateError,
    InvalidMeasurementError,
    InvalidStrideError,
    NonMonotonicDistanceError,
    UnknownTrailError,
    NotEntitledError,
    RunNotFoundError,
    RunAlreadyCompletedError,
)
from .units import (
    steps_to_distance,
    distance_to_display,
    display_to_distance,
)
from .formatters import (
    format_distance,
    format_steps,
    format_percent,
)
from .dates import parse_day, iter_days, month_bounds
from .clock import Clock, SystemClock, FixedClock

__all__ = [
    # constants
    "DistanceUnit",
    "DayStatus",
    "METERS_PER_KM",
    "METERS_PER_MILE",
    "DEFAULT_DAILY_GOAL_STEPS",
    "DEFAULT_STRIDE_LENGTH_CM",
    "FREE_TRAIL_IDS",
    "MILESTONE_PERCENTS",
    # errors
    "TrailEngineError",
    "InvalidDateError",
    "InvalidMeasurementError",
    "InvalidStrideError",
    "NonMonotonicDistanceError",
    "UnknownTrailError",
    "NotEntitledError",
    "RunNotFoundError",
    "RunAlreadyCompletedError",
    # units
    "steps_to_distance",
    "distance_to_display",
    "display_to_distance",
    # formatters
    "format_distance",
    "format_steps",
    "format_percent",
    # dates
    "parse_day",
    "iter_days",
    "month_bounds",
    # clock
    "Clock",
    "SystemClock",
    "FixedClock",
]
