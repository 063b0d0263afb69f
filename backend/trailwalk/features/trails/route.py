"""
Trail route model.

A trail is an ordered list of landmarks positioned by distance from the
start. The last landmark sits exactly at the trail's total distance.
"""

import math
from bisect import bisect_right
from dataclasses import dataclass, field
from enum import Enum

from trailwalk.shared.errors import InvalidMeasurementError


class Difficulty(str, Enum):
    EASY = "Easy"
    MODERATE = "Moderate"
    HARD = "Hard"
    EXTREME = "Extreme"


@dataclass(frozen=True)
class Landmark:
    """A named point along a trail, unlocked at `distance_m`."""

    id: str
    name: str
    distance_m: float
    description: str = ""
    image: str | None = None


@dataclass(frozen=True)
class Trail:
    """
    Immutable route definition.

    Raises ValueError on construction if landmarks are empty, not strictly
    ascending, or the final landmark does not sit at total_distance_m.
    """

    id: str
    name: str
    total_distance_m: float
    landmarks: tuple[Landmark, ...]
    description: str = ""
    difficulty: Difficulty = Difficulty.EASY
    premium: bool = False
    _positions: tuple[float, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "landmarks", tuple(self.landmarks))
        if not self.landmarks:
            raise ValueError(f"Trail {self.id} has no landmarks")
        if not math.isfinite(self.total_distance_m) or self.total_distance_m <= 0:
            raise ValueError(f"Trail {self.id} total distance must be positive")

        previous = None
        for landmark in self.landmarks:
            if landmark.distance_m < 0:
                raise ValueError(f"Landmark {landmark.id} has negative distance")
            if previous is not None and landmark.distance_m <= previous:
                raise ValueError(
                    f"Trail {self.id} landmarks must be strictly ascending "
                    f"({landmark.id} at {landmark.distance_m} m)"
                )
            previous = landmark.distance_m

        if self.landmarks[-1].distance_m != self.total_distance_m:
            raise ValueError(
                f"Trail {self.id} final landmark is at {self.landmarks[-1].distance_m} m, "
                f"expected {self.total_distance_m} m"
            )
        object.__setattr__(self, "_positions", tuple(lm.distance_m for lm in self.landmarks))

    def next_landmark(self, cumulative_m: float) -> Landmark | None:
        """
        First landmark strictly beyond the given distance.

        Returns None once the walker is at or past the final landmark.
        """
        _check_distance(cumulative_m)
        index = bisect_right(self._positions, cumulative_m)
        if index >= len(self.landmarks):
            return None
        return self.landmarks[index]

    def progress_fraction(self, cumulative_m: float) -> float:
        """Fraction of the trail walked, capped at 1.0."""
        _check_distance(cumulative_m)
        return min(cumulative_m / self.total_distance_m, 1.0)

    def distance_remaining_to(self, landmark: Landmark, cumulative_m: float) -> float:
        _check_distance(cumulative_m)
        return max(landmark.distance_m - cumulative_m, 0.0)

    def landmarks_between(self, previous_m: float, new_m: float) -> list[Landmark]:
        """Landmarks with previous_m < distance <= new_m, ascending."""
        if new_m <= previous_m:
            return []
        lo = bisect_right(self._positions, previous_m)
        hi = bisect_right(self._positions, new_m)
        return list(self.landmarks[lo:hi])

    def reached_landmarks(self, cumulative_m: float) -> list[Landmark]:
        _check_distance(cumulative_m)
        return list(self.landmarks[:bisect_right(self._positions, cumulative_m)])

    def get_landmark(self, landmark_id: str) -> Landmark | None:
        return next((lm for lm in self.landmarks if lm.id == landmark_id), None)


def _check_distance(value: float) -> None:
    if (
        isinstance(value, bool)
        or not isinstance(value, (int, float))
        or not math.isfinite(value)
        or value < 0
    ):
        raise InvalidMeasurementError(f"Distance must be a non-negative number, got {value!r}")
