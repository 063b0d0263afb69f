"""
Streak calculation over classified days.

Input is the ascending classification sequence (DayClassification
objects or bare DayStatus values).
"""

from dataclasses import dataclass
from typing import Iterable

from trailwalk.shared.constants import DayStatus


@dataclass(frozen=True)
class StreakSummary:
    current: int
    longest: int


def _statuses(days: Iterable) -> list[DayStatus]:
    return [DayStatus(getattr(d, "status", d)) for d in days]


def current_streak(days: Iterable) -> int:
    """
    Consecutive achieved days ending at the most recent resolved day.

    Trailing future days (including an open today) are ignored; a failed
    day ends the count.
    """
    statuses = _statuses(days)
    while statuses and statuses[-1] == DayStatus.FUTURE:
        statuses.pop()

    count = 0
    for status in reversed(statuses):
        if status != DayStatus.ACHIEVED:
            break
        count += 1
    return count


def longest_streak(days: Iterable) -> int:
    """Longest run of consecutive achieved days."""
    best = run = 0
    for status in _statuses(days):
        if status == DayStatus.ACHIEVED:
            run += 1
            best = max(best, run)
        else:
            run = 0
    return best


def summarize_streaks(days: Iterable) -> StreakSummary:
    statuses = _statuses(days)
    return StreakSummary(current=current_streak(statuses), longest=longest_streak(statuses))
