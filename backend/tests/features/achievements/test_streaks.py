"""
Tests for streak calculation.
"""

import pytest

from trailwalk.features.achievements import current_streak, longest_streak, summarize_streaks
from trailwalk.shared.constants import DayStatus

A, F, U = DayStatus.ACHIEVED, DayStatus.FAILED, DayStatus.FUTURE


class TestStreaks:
    """Tests for current_streak / longest_streak."""

    def test_reset_by_failed_day(self):
        days = [A, F, A]
        assert current_streak(days) == 1
        assert longest_streak(days) == 1

    def test_all_achieved(self):
        days = [A, A, A]
        assert current_streak(days) == 3
        assert longest_streak(days) == 3

    def test_open_today_excluded(self):
        """An unfinished today neither breaks nor extends the streak."""
        assert current_streak([A, A, U]) == 2

    def test_failed_yesterday(self):
        assert current_streak([A, A, F, U]) == 0

    def test_longest_in_middle(self):
        days = [A, A, A, A, F, A, A]
        assert longest_streak(days) == 4
        assert current_streak(days) == 2

    def test_empty(self):
        assert current_streak([]) == 0
        assert longest_streak([]) == 0

    def test_accepts_string_statuses(self):
        assert current_streak(["achieved", "achieved"]) == 2

    def test_summary(self):
        summary = summarize_streaks([A, F, A, A, U])
        assert (summary.current, summary.longest) == (2, 2)

    @pytest.mark.parametrize("days", [[A, F, A, A], [F, F], [A, U, U]])
    def test_current_never_exceeds_longest(self, days):
        assert current_streak(days) <= longest_streak(days)
