"""
Activity ledger.

One user's sparse mapping of calendar day -> step/distance measurement.
A write for an existing day replaces it; absent days mean zero steps.
"""

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable

from trailwalk.shared.dates import parse_day
from trailwalk.shared.errors import InvalidDateError, InvalidMeasurementError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActivityEntry:
    """One calendar day's measurement."""
    day: date
    steps: int
    distance_m: float

    def to_dict(self) -> dict:
        return {
            "date": self.day.isoformat(),
            "steps": self.steps,
            "distance_m": self.distance_m,
        }


def validate_measurement(steps, distance_m) -> tuple[int, float]:
    """
    Check steps/distance before they reach the ledger.

    Raises:
        InvalidMeasurementError: steps not a non-negative integer, or
            distance negative/non-finite
    """
    if isinstance(steps, bool) or not isinstance(steps, int) or steps < 0:
        raise InvalidMeasurementError(f"Steps must be a non-negative integer, got {steps!r}")
    if (
        isinstance(distance_m, bool)
        or not isinstance(distance_m, (int, float))
        or not math.isfinite(distance_m)
        or distance_m < 0
    ):
        raise InvalidMeasurementError(f"Distance must be a non-negative number, got {distance_m!r}")
    return steps, float(distance_m)


class ActivityLedger:
    """
    Per-user activity ledger.

    Insertion order is irrelevant; every read that returns several
    entries returns them in ascending date order.
    """

    def __init__(self, entries: Iterable[ActivityEntry] = ()):
        self._entries: dict[date, ActivityEntry] = {}
        for entry in entries:
            self._entries[entry.day] = entry

    @classmethod
    def from_entries(cls, entries: Iterable[ActivityEntry]) -> "ActivityLedger":
        return cls(entries)

    def copy(self) -> "ActivityLedger":
        return ActivityLedger(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, day) -> bool:
        return parse_day(day) in self._entries

    @property
    def first_day(self) -> date | None:
        """Earliest day with an entry."""
        return min(self._entries) if self._entries else None

    def upsert(
        self,
        day: date | datetime | str,
        steps: int,
        distance_m: float,
        today: date | None = None,
    ) -> ActivityEntry:
        """
        Insert or replace the entry for a day.

        Args:
            day: Calendar day (date or "YYYY-MM-DD")
            steps: Step count for the whole day
            distance_m: Distance for the whole day in meters
            today: If given, nonzero steps dated after it are rejected

        Returns:
            The stored entry

        Raises:
            InvalidDateError: malformed date, or future-dated activity
            InvalidMeasurementError: negative/invalid steps or distance
        """
        parsed = parse_day(day)
        steps, distance_m = validate_measurement(steps, distance_m)
        if today is not None and parsed > today and steps > 0:
            raise InvalidDateError(f"Cannot log activity for future day {parsed.isoformat()}")

        entry = ActivityEntry(day=parsed, steps=steps, distance_m=distance_m)
        replaced = self._entries.get(parsed)
        self._entries[parsed] = entry
        if replaced is not None:
            logger.debug(f"Replaced ledger entry {parsed}: {replaced.steps} -> {steps} steps")
        return entry

    def get(self, day: date | datetime | str) -> ActivityEntry | None:
        """Entry for a day, or None (meaning zero steps)."""
        return self._entries.get(parse_day(day))

    def steps_on(self, day: date | datetime | str) -> int:
        entry = self.get(day)
        return entry.steps if entry else 0

    def entries(self) -> list[ActivityEntry]:
        """All entries, ascending by date."""
        return [self._entries[d] for d in sorted(self._entries)]

    def range(self, start: date | str, end: date | str) -> list[ActivityEntry]:
        """
        Entries between start and end (inclusive), ascending.

        Gaps are not filled: days without an entry are simply absent.
        """
        start_day, end_day = parse_day(start), parse_day(end)
        if start_day > end_day:
            return []
        return [
            self._entries[d]
            for d in sorted(self._entries)
            if start_day <= d <= end_day
        ]

    def cumulative_distance_since(self, day: date | str) -> float:
        """
        Sum of distance for entries dated on/after `day`.

        Summed in ascending date order so results are reproducible.
        """
        since = parse_day(day)
        total = 0.0
        for d in sorted(self._entries):
            if d >= since:
                total += self._entries[d].distance_m
        return total

    def total_steps(self) -> int:
        return sum(e.steps for e in self.entries())

    def total_distance_m(self) -> float:
        total = 0.0
        for entry in self.entries():
            total += entry.distance_m
        return total
