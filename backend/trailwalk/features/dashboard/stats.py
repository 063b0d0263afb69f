"""
Dashboard statistics.

Weeks start on Sunday. Percentages are whole numbers rounded half-up.
"""

import math
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Iterable

from trailwalk.features.ledger.ledger import ActivityLedger
from trailwalk.features.progression.schemas import TrailRun
from trailwalk.features.trails.catalog import TrailCatalog
from trailwalk.shared.constants import CHART_DAYS, GOAL_HISTORY_DAYS
from trailwalk.shared.dates import week_start


@dataclass(frozen=True)
class WeeklyStats:
    this_week: int
    last_week: int
    change_percent: int
    trend: str  # "up" | "down" | "same"


@dataclass(frozen=True)
class GoalAchievementStats:
    rate: int  # 0-100
    days_hit: int
    total_days: int


@dataclass(frozen=True)
class PersonalRecords:
    best_day: date | None = None
    best_day_steps: int = 0
    best_week_start: date | None = None
    best_week_steps: int = 0
    best_month: str | None = None  # "YYYY-MM"
    best_month_steps: int = 0


@dataclass(frozen=True)
class ChartPoint:
    day: date
    label: str
    steps: int


@dataclass(frozen=True)
class DashboardStats:
    weekly: WeeklyStats
    monthly_steps: int
    goal_achievement: GoalAchievementStats
    records: PersonalRecords
    landmarks_reached: int
    chart: list[ChartPoint] = field(default_factory=list)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def weekly_stats(ledger: ActivityLedger, today: date) -> WeeklyStats:
    """Steps this week vs. last week."""
    this_start = week_start(today)
    last_start = this_start - timedelta(days=7)

    this_week = sum(e.steps for e in ledger.range(this_start, today))
    last_week = sum(e.steps for e in ledger.range(last_start, this_start - timedelta(days=1)))

    if last_week > 0:
        change = _round_half_up((this_week - last_week) / last_week * 100)
    else:
        change = 100 if this_week > 0 else 0

    trend = "up" if change > 0 else "down" if change < 0 else "same"
    return WeeklyStats(this_week=this_week, last_week=last_week, change_percent=change, trend=trend)


def monthly_steps(ledger: ActivityLedger, today: date) -> int:
    return sum(e.steps for e in ledger.range(today.replace(day=1), today))


def goal_achievement_rate(
    ledger: ActivityLedger,
    goal: int,
    today: date,
    days: int = GOAL_HISTORY_DAYS,
) -> GoalAchievementStats:
    """Share of the last `days` days (today included) that met the goal."""
    start = today - timedelta(days=days - 1)
    hit = sum(1 for e in ledger.range(start, today) if e.steps >= goal)
    return GoalAchievementStats(rate=_round_half_up(hit / days * 100), days_hit=hit, total_days=days)


def personal_records(ledger: ActivityLedger) -> PersonalRecords:
    """Best day, Sunday-start week and calendar month by steps."""
    best_day, best_day_steps = None, 0
    weeks: dict[date, int] = defaultdict(int)
    months: dict[str, int] = defaultdict(int)

    for entry in ledger.entries():
        if entry.steps > best_day_steps:
            best_day, best_day_steps = entry.day, entry.steps
        weeks[week_start(entry.day)] += entry.steps
        months[entry.day.strftime("%Y-%m")] += entry.steps

    best_week, best_week_steps = None, 0
    for start, steps in sorted(weeks.items()):
        if steps > best_week_steps:
            best_week, best_week_steps = start, steps

    best_month, best_month_steps = None, 0
    for month, steps in sorted(months.items()):
        if steps > best_month_steps:
            best_month, best_month_steps = month, steps

    return PersonalRecords(
        best_day=best_day,
        best_day_steps=best_day_steps,
        best_week_start=best_week,
        best_week_steps=best_week_steps,
        best_month=best_month,
        best_month_steps=best_month_steps,
    )


def landmarks_reached(runs: Iterable[TrailRun], catalog: TrailCatalog) -> int:
    """Landmarks reached across all runs (every landmark for completed runs)."""
    count = 0
    for run in runs:
        trail = catalog.get_trail(run.trail_id)
        if trail is None:
            continue
        if run.is_completed:
            count += len(trail.landmarks)
        else:
            count += len(trail.reached_landmarks(run.cumulative_distance_m))
    return count


def chart_data(ledger: ActivityLedger, today: date, days: int = CHART_DAYS) -> list[ChartPoint]:
    """Steps for the last `days` days, oldest first, gaps as zero."""
    points = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        points.append(ChartPoint(day=day, label=day.strftime("%a"), steps=ledger.steps_on(day)))
    return points


def build_dashboard(
    ledger: ActivityLedger,
    runs: Iterable[TrailRun],
    catalog: TrailCatalog,
    goal: int,
    today: date,
    goal_history_days: int = GOAL_HISTORY_DAYS,
) -> DashboardStats:
    return DashboardStats(
        weekly=weekly_stats(ledger, today),
        monthly_steps=monthly_steps(ledger, today),
        goal_achievement=goal_achievement_rate(ledger, goal, today, goal_history_days),
        records=personal_records(ledger),
        landmarks_reached=landmarks_reached(runs, catalog),
        chart=chart_data(ledger, today),
    )
