"""
Badge definitions.

Every badge is a threshold over one aggregate value, picked by its
BadgeCondition. Adding a badge kind means adding a condition and its
accessor in VALUE_ACCESSORS; the evaluator loop stays the same.

Collections:
- steps / distance: monthly challenges, re-earnable every month
- monthly / yearly: Monthly Master (10 of the 15 monthly challenges)
  and Yearly Champion (12 Monthly Masters in one year)
- trails, streaks, distance-lifetime, records: lifetime badges
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable

MONTHLY_MASTER_REQUIREMENT = 10
YEARLY_CHAMPION_REQUIREMENT = 12
LIFETIME_PERIOD = "lifetime"


class BadgeCondition(str, Enum):
    MONTHLY_STEPS = "monthly_steps"
    MONTHLY_DISTANCE = "monthly_distance"
    MONTHLY_MASTER = "monthly_master"
    YEARLY_CHAMPION = "yearly_champion"
    TRAILS_COMPLETED = "trails_completed"
    ALL_TRAILS_COMPLETED = "all_trails_completed"
    STREAK_DAYS = "streak_days"
    LIFETIME_DISTANCE = "lifetime_distance"
    SINGLE_DAY_STEPS = "single_day_steps"


class BadgeScope(str, Enum):
    """How often a badge can be earned."""
    MONTHLY = "monthly"
    YEARLY = "yearly"
    LIFETIME = "lifetime"


@dataclass(frozen=True)
class BadgeAggregates:
    """Values badge predicates are evaluated over."""

    total_lifetime_steps: int = 0
    total_lifetime_distance_m: float = 0.0
    current_streak: int = 0
    longest_streak: int = 0
    trails_completed_count: int = 0
    total_trails_count: int = 0
    single_day_max_steps: int = 0
    steps_this_month: int = 0
    distance_this_month_m: float = 0.0
    monthly_badges_this_month: int = 0
    months_mastered_this_year: int = 0


def _all_trails_value(a: BadgeAggregates) -> int:
    return int(a.total_trails_count > 0 and a.trails_completed_count >= a.total_trails_count)


VALUE_ACCESSORS: dict[BadgeCondition, Callable[[BadgeAggregates], float]] = {
    BadgeCondition.MONTHLY_STEPS: lambda a: a.steps_this_month,
    BadgeCondition.MONTHLY_DISTANCE: lambda a: a.distance_this_month_m,
    BadgeCondition.MONTHLY_MASTER: lambda a: a.monthly_badges_this_month,
    BadgeCondition.YEARLY_CHAMPION: lambda a: a.months_mastered_this_year,
    BadgeCondition.TRAILS_COMPLETED: lambda a: a.trails_completed_count,
    BadgeCondition.ALL_TRAILS_COMPLETED: _all_trails_value,
    BadgeCondition.STREAK_DAYS: lambda a: a.longest_streak,
    BadgeCondition.LIFETIME_DISTANCE: lambda a: a.total_lifetime_distance_m,
    BadgeCondition.SINGLE_DAY_STEPS: lambda a: a.single_day_max_steps,
}


@dataclass(frozen=True)
class Badge:
    id: str
    name: str
    description: str
    icon: str
    condition: BadgeCondition
    threshold: float
    collection: str
    scope: BadgeScope = BadgeScope.LIFETIME

    def value(self, aggregates: BadgeAggregates) -> float:
        return VALUE_ACCESSORS[self.condition](aggregates)

    def holds(self, aggregates: BadgeAggregates) -> bool:
        return self.value(aggregates) >= self.threshold

    def period_for(self, now: datetime) -> str:
        """Period key an unlock at `now` is recorded under."""
        if self.scope == BadgeScope.MONTHLY:
            return f"{now.year:04d}-{now.month:02d}"
        if self.scope == BadgeScope.YEARLY:
            return f"{now.year:04d}"
        return LIFETIME_PERIOD


def _monthly(id, name, description, icon, condition, threshold, collection) -> Badge:
    return Badge(id, name, description, icon, condition, threshold, collection, BadgeScope.MONTHLY)


MONTHLY_STEP_BADGES: list[Badge] = [
    _monthly("step-5k", "First Steps", "Walk 5,000 steps this month", "👶", BadgeCondition.MONTHLY_STEPS, 5000, "steps"),
    _monthly("step-10k", "Getting Moving", "Walk 10,000 steps this month", "🚶", BadgeCondition.MONTHLY_STEPS, 10000, "steps"),
    _monthly("step-25k", "Stride Master", "Walk 25,000 steps this month", "🎯", BadgeCondition.MONTHLY_STEPS, 25000, "steps"),
    _monthly("step-50k", "Step Champion", "Walk 50,000 steps this month", "⭐", BadgeCondition.MONTHLY_STEPS, 50000, "steps"),
    _monthly("step-100k", "Century Walker", "Walk 100,000 steps this month", "💯", BadgeCondition.MONTHLY_STEPS, 100000, "steps"),
    _monthly("step-250k", "Step Legend", "Walk 250,000 steps this month", "🌟", BadgeCondition.MONTHLY_STEPS, 250000, "steps"),
    _monthly("step-500k", "Step Titan", "Walk 500,000 steps this month", "👑", BadgeCondition.MONTHLY_STEPS, 500000, "steps"),
]

MONTHLY_DISTANCE_BADGES: list[Badge] = [
    _monthly("dist-5k", "5K Explorer", "Cover 5 km this month", "📏", BadgeCondition.MONTHLY_DISTANCE, 5000, "distance"),
    _monthly("dist-10k", "10K Traveler", "Cover 10 km this month", "🏃", BadgeCondition.MONTHLY_DISTANCE, 10000, "distance"),
    _monthly("dist-21k", "Half Marathon", "Cover 21 km this month", "🎖️", BadgeCondition.MONTHLY_DISTANCE, 21000, "distance"),
    _monthly("dist-42k", "Marathon Master", "Cover 42 km this month", "🏁", BadgeCondition.MONTHLY_DISTANCE, 42000, "distance"),
    _monthly("dist-50k", "Ultra Runner", "Cover 50 km this month", "🦅", BadgeCondition.MONTHLY_DISTANCE, 50000, "distance"),
    _monthly("dist-100k", "Century Seeker", "Cover 100 km this month", "🚀", BadgeCondition.MONTHLY_DISTANCE, 100000, "distance"),
    _monthly("dist-150k", "Distance King", "Cover 150 km this month", "🌍", BadgeCondition.MONTHLY_DISTANCE, 150000, "distance"),
    _monthly("dist-200k", "Distance Demon", "Cover 200 km this month", "👹", BadgeCondition.MONTHLY_DISTANCE, 200000, "distance"),
]

# Ids of the challenges counted towards Monthly Master
MONTHLY_CHALLENGE_IDS = frozenset(b.id for b in MONTHLY_STEP_BADGES + MONTHLY_DISTANCE_BADGES)

MONTHLY_MASTER_BADGE = _monthly(
    "monthly-master", "Monthly Master",
    f"Earn {MONTHLY_MASTER_REQUIREMENT} monthly challenges in one month", "📅",
    BadgeCondition.MONTHLY_MASTER, MONTHLY_MASTER_REQUIREMENT, "monthly",
)

YEARLY_CHAMPION_BADGE = Badge(
    "yearly-champion", "Yearly Champion",
    "Become Monthly Master in all 12 months of a year", "🏆",
    BadgeCondition.YEARLY_CHAMPION, YEARLY_CHAMPION_REQUIREMENT, "yearly", BadgeScope.YEARLY,
)

TRAIL_BADGES: list[Badge] = [
    Badge("trail-1", "Trail Starter", "Complete your first trail", "🥇", BadgeCondition.TRAILS_COMPLETED, 1, "trails"),
    Badge("trail-3", "Path Finder", "Complete 3 trails", "🗺️", BadgeCondition.TRAILS_COMPLETED, 3, "trails"),
    Badge("trail-5", "Trail Blazer", "Complete 5 trails", "🔥", BadgeCondition.TRAILS_COMPLETED, 5, "trails"),
    Badge("trail-all", "Trail Conqueror", "Complete all trails", "👑", BadgeCondition.ALL_TRAILS_COMPLETED, 1, "trails"),
]

STREAK_BADGES: list[Badge] = [
    Badge(f"streak-{n}", name, f"Reach your daily goal {n} days in a row", icon, BadgeCondition.STREAK_DAYS, n, "streaks")
    for n, name, icon in [
        (3, "Warming Up", "🔥"),
        (7, "Week Warrior", "📆"),
        (14, "Fortnight Force", "💪"),
        (30, "Monthly Marcher", "🗓️"),
        (100, "Unstoppable", "⚡"),
    ]
]

LIFETIME_DISTANCE_BADGES: list[Badge] = [
    Badge(f"lifetime-{km}k", name, f"Cover {km} km in total", icon, BadgeCondition.LIFETIME_DISTANCE, km * 1000, "distance-lifetime")
    for km, name, icon in [
        (100, "Hundred Club", "🥾"),
        (500, "Long Hauler", "🧭"),
        (1000, "Thousand Miler", "🌐"),
    ]
]

RECORD_BADGES: list[Badge] = [
    Badge("day-20k", "Big Day", "Walk 20,000 steps in a single day", "🌞", BadgeCondition.SINGLE_DAY_STEPS, 20000, "records"),
    Badge("day-30k", "Epic Day", "Walk 30,000 steps in a single day", "🌋", BadgeCondition.SINGLE_DAY_STEPS, 30000, "records"),
]

# Evaluation order: monthly challenges must come before Monthly Master,
# and Monthly Master before Yearly Champion.
BADGES: list[Badge] = [
    *MONTHLY_STEP_BADGES,
    *MONTHLY_DISTANCE_BADGES,
    MONTHLY_MASTER_BADGE,
    YEARLY_CHAMPION_BADGE,
    *TRAIL_BADGES,
    *STREAK_BADGES,
    *LIFETIME_DISTANCE_BADGES,
    *RECORD_BADGES,
]

BADGES_BY_ID: dict[str, Badge] = {b.id: b for b in BADGES}
