"""
Tests for the trail route model.
"""

import pytest

from trailwalk.features.trails import Landmark, Trail
from trailwalk.shared.errors import InvalidMeasurementError


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def trail():
    """12 km trail with landmarks at 1, 5 and 12 km."""
    return Trail(
        id="test-trail",
        name="Test Trail",
        total_distance_m=12000,
        landmarks=(
            Landmark("a", "Bridge", 1000),
            Landmark("b", "Lake", 5000),
            Landmark("c", "Summit", 12000),
        ),
    )


# =============================================================================
# Test construction invariants
# =============================================================================

class TestTrailValidation:
    """Reference data is validated when a Trail is built."""

    def test_final_landmark_must_match_total(self):
        with pytest.raises(ValueError):
            Trail("t", "T", 5000, (Landmark("a", "A", 1000), Landmark("b", "B", 4000)))

    def test_landmarks_must_be_strictly_ascending(self):
        with pytest.raises(ValueError):
            Trail("t", "T", 5000, (Landmark("a", "A", 2000), Landmark("b", "B", 2000), Landmark("c", "C", 5000)))

    def test_needs_landmarks(self):
        with pytest.raises(ValueError):
            Trail("t", "T", 5000, ())

    def test_start_landmark_at_zero_allowed(self):
        trail = Trail("t", "T", 5000, (Landmark("s", "Start", 0), Landmark("f", "Finish", 5000)))
        assert len(trail.landmarks) == 2


# =============================================================================
# Test position queries
# =============================================================================

class TestNextLandmark:
    """Tests for Trail.next_landmark."""

    def test_before_first(self, trail):
        assert trail.next_landmark(0).id == "a"

    def test_exactly_on_landmark_moves_to_next(self, trail):
        """A landmark is reached at its distance, so the next one is beyond it."""
        assert trail.next_landmark(1000).id == "b"

    def test_between(self, trail):
        assert trail.next_landmark(6000).id == "c"

    def test_at_or_past_finish(self, trail):
        assert trail.next_landmark(12000) is None
        assert trail.next_landmark(20000) is None


class TestProgress:
    """Tests for progress fraction and remaining distance."""

    def test_fraction(self, trail):
        assert trail.progress_fraction(6000) == pytest.approx(0.5)

    def test_fraction_capped(self, trail):
        assert trail.progress_fraction(50000) == 1.0

    def test_negative_distance(self, trail):
        with pytest.raises(InvalidMeasurementError):
            trail.progress_fraction(-1)

    def test_distance_remaining(self, trail):
        lake = trail.get_landmark("b")
        assert trail.distance_remaining_to(lake, 3500) == pytest.approx(1500)
        assert trail.distance_remaining_to(lake, 9000) == 0.0

    def test_landmarks_between(self, trail):
        ids = [lm.id for lm in trail.landmarks_between(900, 6000)]
        assert ids == ["a", "b"]

    def test_landmarks_between_excludes_previous(self, trail):
        assert [lm.id for lm in trail.landmarks_between(1000, 5000)] == ["b"]

    def test_reached_landmarks(self, trail):
        assert [lm.id for lm in trail.reached_landmarks(5000)] == ["a", "b"]

    def test_get_landmark_unknown(self, trail):
        assert trail.get_landmark("nope") is None
