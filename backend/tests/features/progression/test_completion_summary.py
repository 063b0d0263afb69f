"""
Tests for the trail completion summary.
"""

from datetime import datetime, timezone

import pytest

from trailwalk.features.ledger import ActivityLedger
from trailwalk.features.progression import TrailRun, summarize_completion


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def ledger():
    ledger = ActivityLedger()
    ledger.upsert("2024-02-28", 50000, 37500.0)  # before the run
    ledger.upsert("2024-03-01", 8000, 6000.0)
    ledger.upsert("2024-03-02", 12000, 9000.0)
    ledger.upsert("2024-03-03", 3000, 2250.0)
    return ledger


def _run(started, completed):
    return TrailRun(
        user_id="u",
        trail_id="ridge",
        started_at=started,
        goal_days=7,
        cumulative_distance_m=17250.0,
        completed_at=completed,
    )


# =============================================================================
# Tests
# =============================================================================

class TestSummarizeCompletion:
    """Tests for summarize_completion."""

    def test_totals_only_cover_the_run(self, ledger):
        run = _run(
            datetime(2024, 3, 1, 8, 0, tzinfo=timezone.utc),
            datetime(2024, 3, 3, 20, 0, tzinfo=timezone.utc),
        )
        summary = summarize_completion(run, ledger)
        assert summary.total_steps == 23000
        assert summary.total_distance_m == pytest.approx(17250.0)
        assert summary.max_steps_in_one_day == 12000

    def test_partial_days_round_up(self, ledger):
        """2.5 elapsed days count as 3."""
        run = _run(
            datetime(2024, 3, 1, 8, 0, tzinfo=timezone.utc),
            datetime(2024, 3, 3, 20, 0, tzinfo=timezone.utc),
        )
        summary = summarize_completion(run, ledger)
        assert summary.total_days == 3
        assert summary.avg_steps_per_day == 7667  # 23000 / 3

    def test_same_day_completion_is_one_day(self, ledger):
        run = _run(
            datetime(2024, 3, 2, 8, 0, tzinfo=timezone.utc),
            datetime(2024, 3, 2, 9, 0, tzinfo=timezone.utc),
        )
        summary = summarize_completion(run, ledger)
        assert summary.total_days == 1
        assert summary.total_steps == 12000

    def test_max_steps_falls_back_to_average(self):
        run = _run(
            datetime(2024, 3, 1, tzinfo=timezone.utc),
            datetime(2024, 3, 2, tzinfo=timezone.utc),
        )
        summary = summarize_completion(run, ActivityLedger())
        assert summary.max_steps_in_one_day == summary.avg_steps_per_day == 0

    def test_not_completed(self, ledger):
        run = _run(datetime(2024, 3, 1, tzinfo=timezone.utc), None)
        with pytest.raises(ValueError):
            summarize_completion(run, ledger)
