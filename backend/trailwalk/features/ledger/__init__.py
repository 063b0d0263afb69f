"""
Activity ledger feature.

Per-user, per-day step and distance history.
"""

from .ledger import ActivityEntry, ActivityLedger, validate_measurement

__all__ = [
    "ActivityEntry",
    "ActivityLedger",
    "validate_measurement",
]
