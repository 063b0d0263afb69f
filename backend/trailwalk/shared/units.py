"""
Unit conversion.

Distances are stored in meters. Conversions return full precision;
rounding for display belongs to formatters.py.
"""

import math

from .constants import CM_PER_METER, METERS_PER_KM, METERS_PER_MILE, DistanceUnit
from .errors import InvalidMeasurementError, InvalidStrideError


def steps_to_distance(steps: int, stride_length_cm: float) -> float:
    """
    Convert a step count to meters.

    Args:
        steps: Number of steps (non-negative)
        stride_length_cm: Stride length in centimeters (> 0)

    Returns:
        Distance in meters (steps * stride / 100)
    """
    if not _is_number(stride_length_cm) or not math.isfinite(stride_length_cm) or stride_length_cm <= 0:
        raise InvalidStrideError(f"Stride length must be positive, got {stride_length_cm!r}")
    if not _is_number(steps) or not math.isfinite(steps) or steps < 0:
        raise InvalidMeasurementError(f"Steps must be non-negative, got {steps!r}")
    return steps * stride_length_cm / CM_PER_METER


def distance_to_display(meters: float, unit: DistanceUnit | str) -> float:
    """Convert meters to km or miles."""
    return meters / _meters_per_unit(unit)


def display_to_distance(value: float, unit: DistanceUnit | str) -> float:
    """Convert a km/mile value back to meters."""
    return value * _meters_per_unit(unit)


def _meters_per_unit(unit: DistanceUnit | str) -> float:
    unit = DistanceUnit(unit)
    if unit == DistanceUnit.MI:
        return METERS_PER_MILE
    return METERS_PER_KM


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
