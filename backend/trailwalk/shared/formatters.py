"""
Formatting utilities for display.

Used by the API summaries and the CLI. The engine itself never rounds.
"""

from .constants import DistanceUnit
from .units import distance_to_display


def format_distance(meters: float, unit: DistanceUnit | str = DistanceUnit.KM, decimals: int = 1) -> str:
    """
    Format distance in the preferred unit.

    Args:
        meters: Distance in meters
        unit: km or mi
        decimals: Digits after the decimal point

    Returns:
        Formatted string (e.g., '12.5 km' or '7.8 mi')
    """
    unit = DistanceUnit(unit)
    value = distance_to_display(meters, unit)
    return f"{value:.{decimals}f} {unit.value}"


def format_steps(steps: int) -> str:
    """Format a step count with thousands separators ('12,345 steps')."""
    label = "step" if steps == 1 else "steps"
    return f"{steps:,} {label}"


def format_percent(fraction: float) -> str:
    """Format a 0..1 fraction as a whole percentage ('42%')."""
    return f"{fraction * 100:.0f}%"
