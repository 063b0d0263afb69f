"""
Calendar / daily goal classifier.

Status rules:
- day after today              -> future
- today, goal met              -> achieved
- today, goal not met yet      -> future (the day is still open)
- past day, goal met / not met -> achieved / failed

Days without a ledger entry count as zero steps.
"""

import calendar
from dataclasses import dataclass
from datetime import date, datetime

from trailwalk.features.ledger.ledger import ActivityLedger
from trailwalk.shared.constants import DayStatus
from trailwalk.shared.dates import iter_days, month_bounds, parse_day, previous_month
from trailwalk.shared.errors import InvalidMeasurementError


@dataclass(frozen=True)
class DayClassification:
    day: date
    status: DayStatus
    steps: int
    distance_m: float


@dataclass(frozen=True)
class MonthCalendar:
    """
    One month of classified days.

    leading_blanks is the number of empty cells before day 1 in a
    Sunday-first grid.
    """

    year: int
    month: int
    days: list[DayClassification]
    leading_blanks: int

    @property
    def achieved_count(self) -> int:
        return sum(1 for d in self.days if d.status == DayStatus.ACHIEVED)

    @property
    def failed_count(self) -> int:
        return sum(1 for d in self.days if d.status == DayStatus.FAILED)


def _check_goal(goal: int) -> None:
    if isinstance(goal, bool) or not isinstance(goal, int) or goal <= 0:
        raise InvalidMeasurementError(f"Daily goal must be a positive integer, got {goal!r}")


def _today(now: datetime | date) -> date:
    return now.date() if isinstance(now, datetime) else now


def classify_day(day: date | str, steps: int, goal: int, today: date) -> DayStatus:
    """Classify one day against the daily goal."""
    _check_goal(goal)
    day = parse_day(day)
    if day > today:
        return DayStatus.FUTURE
    if steps >= goal:
        return DayStatus.ACHIEVED
    if day == today:
        return DayStatus.FUTURE
    return DayStatus.FAILED


def classify_range(
    ledger: ActivityLedger,
    start: date | str,
    end: date | str,
    goal: int,
    now: datetime | date,
) -> list[DayClassification]:
    """
    Classify every day from start to end inclusive, ascending.

    Unlike ActivityLedger.range, gaps are filled with zero-step days.
    """
    _check_goal(goal)
    today = _today(now)
    result = []
    for day in iter_days(parse_day(start), parse_day(end)):
        entry = ledger.get(day)
        steps = entry.steps if entry else 0
        result.append(
            DayClassification(
                day=day,
                status=classify_day(day, steps, goal, today),
                steps=steps,
                distance_m=entry.distance_m if entry else 0.0,
            )
        )
    return result


def viewing_window(now: datetime | date) -> list[tuple[int, int]]:
    """
    (year, month) pairs shown in the calendar.

    Previous and current month; only the current month in January.
    """
    today = _today(now)
    current = (today.year, today.month)
    if today.month == 1:
        return [current]
    return [previous_month(*current), current]


def classify_month(ledger: ActivityLedger, year: int, month: int, goal: int, now: datetime | date) -> MonthCalendar:
    first, last = month_bounds(year, month)
    # calendar.weekday: Monday=0; shift so Sunday=0
    leading = (calendar.weekday(year, month, 1) + 1) % 7
    return MonthCalendar(
        year=year,
        month=month,
        days=classify_range(ledger, first, last, goal, now),
        leading_blanks=leading,
    )


def classify_window(ledger: ActivityLedger, goal: int, now: datetime | date) -> list[MonthCalendar]:
    """Classified months for the viewing window."""
    return [classify_month(ledger, y, m, goal, now) for y, m in viewing_window(now)]


def classify_history(
    ledger: ActivityLedger,
    goal: int,
    now: datetime | date,
    start: date | str | None = None,
) -> list[DayClassification]:
    """
    Classify from the first ledger day (or `start`) through today.

    Returns an empty list for an empty ledger with no explicit start.
    """
    today = _today(now)
    first = parse_day(start) if start is not None else ledger.first_day
    if first is None:
        _check_goal(goal)
        return []
    return classify_range(ledger, first, today, goal, now)
