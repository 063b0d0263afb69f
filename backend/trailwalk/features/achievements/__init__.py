"""
Achievements feature.

Streaks and badges derived from the classified day history.
"""

from .streaks import StreakSummary, current_streak, longest_streak, summarize_streaks
from .badges import (
    Badge,
    BadgeAggregates,
    BadgeCondition,
    BadgeScope,
    BADGES,
    BADGES_BY_ID,
    LIFETIME_PERIOD,
)
from .evaluator import BadgeEvaluator, BadgeProgress, EarnedBadge, build_aggregates

__all__ = [
    "StreakSummary",
    "current_streak",
    "longest_streak",
    "summarize_streaks",
    "Badge",
    "BadgeAggregates",
    "BadgeCondition",
    "BadgeScope",
    "BADGES",
    "BADGES_BY_ID",
    "LIFETIME_PERIOD",
    "BadgeEvaluator",
    "BadgeProgress",
    "EarnedBadge",
    "build_aggregates",
]
