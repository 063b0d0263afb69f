"""
Dashboard feature.

Aggregate statistics over the activity ledger and trail runs.
"""

from .stats import (
    WeeklyStats,
    GoalAchievementStats,
    PersonalRecords,
    ChartPoint,
    DashboardStats,
    weekly_stats,
    monthly_steps,
    goal_achievement_rate,
    personal_records,
    landmarks_reached,
    chart_data,
    build_dashboard,
)

__all__ = [
    "WeeklyStats",
    "GoalAchievementStats",
    "PersonalRecords",
    "ChartPoint",
    "DashboardStats",
    "weekly_stats",
    "monthly_steps",
    "goal_achievement_rate",
    "personal_records",
    "landmarks_reached",
    "chart_data",
    "build_dashboard",
]
