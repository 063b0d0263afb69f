"""
Calendar feature.

Daily goal classification and the month calendar view.
"""

from .classifier import (
    DayClassification,
    MonthCalendar,
    classify_day,
    classify_range,
    classify_month,
    classify_window,
    classify_history,
    viewing_window,
)

__all__ = [
    "DayClassification",
    "MonthCalendar",
    "classify_day",
    "classify_range",
    "classify_month",
    "classify_window",
    "classify_history",
    "viewing_window",
]
