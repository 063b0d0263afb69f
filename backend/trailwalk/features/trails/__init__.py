"""
Trails feature.

Route model, YAML catalog and entitlement gate.
"""

from .route import Difficulty, Landmark, Trail
from .catalog import TrailCatalog
from .entitlement import EntitlementGate, TierEntitlement, AllowAll, ensure_entitled

__all__ = [
    "Difficulty",
    "Landmark",
    "Trail",
    "TrailCatalog",
    "EntitlementGate",
    "TierEntitlement",
    "AllowAll",
    "ensure_entitled",
]
