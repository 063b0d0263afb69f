"""
Badge evaluator.

Walks badge definitions in order and reports every badge whose predicate
holds and that has not been earned for the current period. Earned badges
are never revoked.
"""

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Iterable

from trailwalk.features.calendar.classifier import DayClassification
from trailwalk.features.ledger.ledger import ActivityLedger
from trailwalk.shared.dates import month_bounds
from .badges import (
    BADGES,
    MONTHLY_CHALLENGE_IDS,
    MONTHLY_MASTER_BADGE,
    Badge,
    BadgeAggregates,
    BadgeCondition,
)
from .streaks import current_streak, longest_streak

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EarnedBadge:
    badge_id: str
    period: str
    unlocked_at: datetime

    @property
    def key(self) -> tuple[str, str]:
        return self.badge_id, self.period


@dataclass(frozen=True)
class BadgeProgress:
    """How close an unearned badge is."""
    badge: Badge
    current: float
    target: float
    fraction: float


def build_aggregates(
    ledger: ActivityLedger,
    history: list[DayClassification],
    trails_completed: int,
    total_trails: int,
    now: datetime,
    earned: Iterable[EarnedBadge] = (),
) -> BadgeAggregates:
    """
    Compute badge aggregates for `now`.

    Args:
        ledger: User's activity ledger
        history: Classified days, ascending (for streaks)
        trails_completed: Number of completed trail runs
        total_trails: Number of trails in the catalog
        now: Evaluation instant (defines current month/year)
        earned: Already earned badges (for Monthly Master / Yearly Champion)
    """
    first, last = month_bounds(now.year, now.month)
    month_entries = ledger.range(first, last)
    month_distance = 0.0
    for entry in month_entries:
        month_distance += entry.distance_m

    month_key = f"{now.year:04d}-{now.month:02d}"
    year_prefix = f"{now.year:04d}-"
    earned = list(earned)

    return BadgeAggregates(
        total_lifetime_steps=ledger.total_steps(),
        total_lifetime_distance_m=ledger.total_distance_m(),
        current_streak=current_streak(history),
        longest_streak=longest_streak(history),
        trails_completed_count=trails_completed,
        total_trails_count=total_trails,
        single_day_max_steps=max((e.steps for e in ledger.entries()), default=0),
        steps_this_month=sum(e.steps for e in month_entries),
        distance_this_month_m=month_distance,
        monthly_badges_this_month=sum(
            1 for e in earned if e.badge_id in MONTHLY_CHALLENGE_IDS and e.period == month_key
        ),
        months_mastered_this_year=len({
            e.period for e in earned
            if e.badge_id == MONTHLY_MASTER_BADGE.id and e.period.startswith(year_prefix)
        }),
    )


class BadgeEvaluator:
    """
    Evaluates badge definitions against aggregates.

    Usage:
        evaluator = BadgeEvaluator()
        unlocked = evaluator.evaluate(aggregates, earned, now)
    """

    def __init__(self, badges: list[Badge] | None = None):
        self.badges = list(badges) if badges is not None else list(BADGES)

    def evaluate(
        self,
        aggregates: BadgeAggregates,
        earned: Iterable[EarnedBadge],
        now: datetime,
        period_at: datetime | None = None,
    ) -> list[EarnedBadge]:
        """
        Return every newly unlocked badge, in definition order.

        Monthly challenges unlocked during this pass count towards Monthly
        Master in the same pass (and Monthly Master towards Yearly Champion).

        Args:
            aggregates: Values for the evaluated month
            earned: Badges already earned
            now: Unlock timestamp
            period_at: Instant inside the evaluated month, when it is not
                the current one (backfills)
        """
        earned_keys = {e.key for e in earned}
        unlocked: list[EarnedBadge] = []

        for badge in self.badges:
            period = badge.period_for(period_at or now)
            if (badge.id, period) in earned_keys:
                continue
            if not badge.holds(aggregates):
                continue

            new = EarnedBadge(badge_id=badge.id, period=period, unlocked_at=now)
            unlocked.append(new)
            earned_keys.add(new.key)
            logger.info(f"Badge unlocked: {badge.id} ({period})")

            if badge.id in MONTHLY_CHALLENGE_IDS:
                aggregates = replace(
                    aggregates, monthly_badges_this_month=aggregates.monthly_badges_this_month + 1
                )
            elif badge.condition == BadgeCondition.MONTHLY_MASTER:
                aggregates = replace(
                    aggregates, months_mastered_this_year=aggregates.months_mastered_this_year + 1
                )

        return unlocked

    def next_badges(
        self,
        aggregates: BadgeAggregates,
        earned: Iterable[EarnedBadge],
        now: datetime,
        limit: int = 3,
    ) -> list[BadgeProgress]:
        """Unearned badges closest to unlocking, by fraction complete."""
        earned_keys = {e.key for e in earned}
        candidates = []
        for badge in self.badges:
            if (badge.id, badge.period_for(now)) in earned_keys:
                continue
            if badge.condition == BadgeCondition.ALL_TRAILS_COMPLETED:
                current = aggregates.trails_completed_count
                target = aggregates.total_trails_count
                if target <= 0:
                    continue
            else:
                current = badge.value(aggregates)
                target = badge.threshold
            fraction = min(current / target, 1.0)
            candidates.append(BadgeProgress(badge=badge, current=current, target=target, fraction=fraction))

        # stable sort keeps definition order among ties
        candidates.sort(key=lambda p: p.fraction, reverse=True)
        return candidates[:limit]
