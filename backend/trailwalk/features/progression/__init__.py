"""
Trail progression feature.

Usage:
    from trailwalk.features.progression import TrailProgressionCalculator, TrailRun
"""

from .schemas import (
    TrailRun,
    LandmarkArrival,
    TrailCompleted,
    ProgressSnapshot,
    ProgressUpdate,
    CompletedTrailSummary,
)
from .calculator import TrailProgressionCalculator
from .summary import summarize_completion

__all__ = [
    "TrailRun",
    "LandmarkArrival",
    "TrailCompleted",
    "ProgressSnapshot",
    "ProgressUpdate",
    "CompletedTrailSummary",
    "TrailProgressionCalculator",
    "summarize_completion",
]
