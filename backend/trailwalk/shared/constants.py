"""
Unified constants for units, day statuses and engine defaults.

Single source of truth for the enums shared across features.
"""

from enum import Enum


class DistanceUnit(str, Enum):
    """Display unit for distances (storage is always meters)."""
    KM = "km"
    MI = "mi"


class DayStatus(str, Enum):
    """
    Goal classification of one calendar day.

    FUTURE covers both days that have not started yet and today while
    the goal is still open.
    """
    ACHIEVED = "achieved"
    FAILED = "failed"
    FUTURE = "future"


# === Units ===
METERS_PER_KM = 1000.0
METERS_PER_MILE = 1609.344
CM_PER_METER = 100.0

# === Preference defaults ===
DEFAULT_DAILY_GOAL_STEPS = 10000
DEFAULT_STRIDE_LENGTH_CM = 76.2  # ~2.5 feet

# === Free tier ===
FREE_TRAIL_IDS: tuple[str, ...] = (
    "5k-challenge",
    "10k-classic",
    "new-york-marathon",
)

# === Progression ===
# Progress percentages reported as milestones (100 is the completion event)
MILESTONE_PERCENTS: tuple[int, ...] = (25, 50, 75)

# === Dashboard ===
GOAL_HISTORY_DAYS = 14
CHART_DAYS = 7

# === Calendar ===
# Longest span a single day-status query may cover
MAX_DAY_RANGE_DAYS = 366
