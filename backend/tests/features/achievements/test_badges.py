"""
Tests for badge definitions, aggregates and the evaluator.
"""

from datetime import datetime, timezone

import pytest

from trailwalk.features.achievements import (
    BADGES,
    BadgeAggregates,
    BadgeCondition,
    BadgeEvaluator,
    EarnedBadge,
    build_aggregates,
)
from trailwalk.config import CONTENT_DIR
from trailwalk.features.calendar import classify_history
from trailwalk.features.ledger import ActivityLedger
from trailwalk.features.trails import TrailCatalog


NOW = datetime(2024, 3, 10, 12, 0, tzinfo=timezone.utc)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def evaluator():
    return BadgeEvaluator()


def _ids(unlocked):
    return [b.badge_id for b in unlocked]


# =============================================================================
# Test definitions
# =============================================================================

class TestDefinitions:
    """Static badge table."""

    def test_unique_ids(self):
        ids = [b.id for b in BADGES]
        assert len(ids) == len(set(ids))

    def test_fifteen_monthly_challenges(self):
        monthly = [b for b in BADGES if b.condition in (BadgeCondition.MONTHLY_STEPS, BadgeCondition.MONTHLY_DISTANCE)]
        assert len(monthly) == 15

    def test_every_condition_has_a_badge(self):
        assert {b.condition for b in BADGES} == set(BadgeCondition)

    def test_periods(self):
        by_id = {b.id: b for b in BADGES}
        assert by_id["step-5k"].period_for(NOW) == "2024-03"
        assert by_id["yearly-champion"].period_for(NOW) == "2024"
        assert by_id["trail-1"].period_for(NOW) == "lifetime"


# =============================================================================
# Test evaluator
# =============================================================================

class TestBadgeEvaluator:
    """Tests for BadgeEvaluator.evaluate."""

    def test_nothing_for_empty_aggregates(self, evaluator):
        assert evaluator.evaluate(BadgeAggregates(), [], NOW) == []

    def test_all_satisfied_badges_reported_in_order(self, evaluator):
        aggregates = BadgeAggregates(steps_this_month=26000, distance_this_month_m=11000)
        assert _ids(evaluator.evaluate(aggregates, [], NOW)) == [
            "step-5k", "step-10k", "step-25k", "dist-5k", "dist-10k",
        ]

    def test_already_earned_not_reported(self, evaluator):
        aggregates = BadgeAggregates(steps_this_month=6000)
        earned = [EarnedBadge("step-5k", "2024-03", NOW)]
        assert evaluator.evaluate(aggregates, earned, NOW) == []

    def test_monthly_badge_earned_again_next_month(self, evaluator):
        aggregates = BadgeAggregates(steps_this_month=6000)
        earned = [EarnedBadge("step-5k", "2024-02", NOW)]
        unlocked = evaluator.evaluate(aggregates, earned, NOW)
        assert _ids(unlocked) == ["step-5k"]
        assert unlocked[0].period == "2024-03"

    def test_monthly_master_in_same_pass(self, evaluator):
        """Ten challenges unlocked in one pass also unlock Monthly Master."""
        aggregates = BadgeAggregates(steps_this_month=100000, distance_this_month_m=50000)
        ids = _ids(evaluator.evaluate(aggregates, [], NOW))
        assert "monthly-master" in ids
        assert ids.index("monthly-master") > ids.index("dist-50k")

    def test_yearly_champion_after_twelfth_master(self, evaluator):
        aggregates = BadgeAggregates(
            steps_this_month=100000,
            distance_this_month_m=50000,
            months_mastered_this_year=11,
        )
        assert "yearly-champion" in _ids(evaluator.evaluate(aggregates, [], NOW))

    def test_lifetime_badges(self, evaluator):
        aggregates = BadgeAggregates(
            longest_streak=7,
            trails_completed_count=3,
            total_trails_count=6,
            total_lifetime_distance_m=150000,
            single_day_max_steps=21000,
        )
        ids = _ids(evaluator.evaluate(aggregates, [], NOW))
        assert ids == [
            "trail-1", "trail-3", "streak-3", "streak-7", "lifetime-100k", "day-20k",
        ]

    def test_trail_counts_reachable_with_packaged_catalog(self):
        catalog = TrailCatalog(CONTENT_DIR / "trails.yaml")
        thresholds = [b.threshold for b in BADGES if b.condition == BadgeCondition.TRAILS_COMPLETED]
        assert thresholds
        assert max(thresholds) <= len(catalog.trails)

    def test_all_trails(self, evaluator):
        done = BadgeAggregates(trails_completed_count=2, total_trails_count=2)
        assert "trail-all" in _ids(evaluator.evaluate(done, [], NOW))
        empty_catalog = BadgeAggregates(trails_completed_count=0, total_trails_count=0)
        assert "trail-all" not in _ids(evaluator.evaluate(empty_catalog, [], NOW))

    def test_backfilled_month_uses_its_own_period(self, evaluator):
        feb = datetime(2024, 2, 15, tzinfo=timezone.utc)
        unlocked = evaluator.evaluate(BadgeAggregates(steps_this_month=6000), [], NOW, period_at=feb)
        assert [(b.badge_id, b.period) for b in unlocked] == [("step-5k", "2024-02")]
        assert unlocked[0].unlocked_at == NOW

    def test_never_revoked(self, evaluator):
        """A lower aggregate later does not produce revocations, only no new unlocks."""
        first = evaluator.evaluate(BadgeAggregates(longest_streak=3), [], NOW)
        assert _ids(first) == ["streak-3"]
        assert evaluator.evaluate(BadgeAggregates(longest_streak=0), first, NOW) == []

    def test_next_badges(self, evaluator):
        aggregates = BadgeAggregates(steps_this_month=9000, distance_this_month_m=4000)
        earned = [EarnedBadge("step-5k", "2024-03", NOW)]
        upcoming = evaluator.next_badges(aggregates, earned, NOW, limit=2)
        assert [p.badge.id for p in upcoming] == ["step-10k", "dist-5k"]
        assert upcoming[0].fraction == pytest.approx(0.9)


# =============================================================================
# Test aggregates
# =============================================================================

class TestBuildAggregates:
    """Tests for build_aggregates."""

    def test_from_ledger(self):
        ledger = ActivityLedger()
        ledger.upsert("2024-02-28", 30000, 22500.0)
        ledger.upsert("2024-03-08", 11000, 8250.0)
        ledger.upsert("2024-03-09", 12000, 9000.0)
        earned = [
            EarnedBadge("step-5k", "2024-03", NOW),
            EarnedBadge("step-5k", "2024-02", NOW),
            EarnedBadge("monthly-master", "2024-01", NOW),
            EarnedBadge("monthly-master", "2023-12", NOW),
        ]
        history = classify_history(ledger, 10000, NOW)
        agg = build_aggregates(ledger, history, trails_completed=1, total_trails=6, now=NOW, earned=earned)

        assert agg.total_lifetime_steps == 53000
        assert agg.total_lifetime_distance_m == pytest.approx(39750.0)
        assert agg.steps_this_month == 23000
        assert agg.distance_this_month_m == pytest.approx(17250.0)
        assert agg.single_day_max_steps == 30000
        assert agg.current_streak == 2
        assert agg.longest_streak == 2
        assert agg.monthly_badges_this_month == 1
        assert agg.months_mastered_this_year == 1
        assert agg.trails_completed_count == 1
