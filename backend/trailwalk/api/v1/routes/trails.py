"""
Trails API Routes

Trail catalog with per-caller lock state.
"""

from fastapi import APIRouter, Depends, HTTPException

from trailwalk.api.deps import get_catalog, get_entitlement, get_preferences
from trailwalk.api.v1.schemas import LandmarkSchema, TrailSchema
from trailwalk.features.trails.catalog import TrailCatalog
from trailwalk.features.trails.entitlement import TierEntitlement
from trailwalk.features.trails.route import Trail
from trailwalk.features.tracker.preferences import Preferences
from trailwalk.shared.formatters import format_distance

router = APIRouter()


def _to_schema(trail: Trail, entitlement: TierEntitlement, prefs: Preferences) -> TrailSchema:
    return TrailSchema(
        id=trail.id,
        name=trail.name,
        description=trail.description,
        difficulty=trail.difficulty.value,
        total_distance_m=trail.total_distance_m,
        total_distance=format_distance(trail.total_distance_m, prefs.distance_unit),
        premium=trail.premium,
        locked=not entitlement.is_entitled(trail.id),
        landmarks=[LandmarkSchema.model_validate(lm) for lm in trail.landmarks],
    )


@router.get("", response_model=list[TrailSchema])
async def list_trails(
    catalog: TrailCatalog = Depends(get_catalog),
    entitlement: TierEntitlement = Depends(get_entitlement),
    prefs: Preferences = Depends(get_preferences),
):
    """Get trail catalog."""
    return [_to_schema(t, entitlement, prefs) for t in catalog.trails]


@router.get("/{trail_id}", response_model=TrailSchema)
async def get_trail(
    trail_id: str,
    catalog: TrailCatalog = Depends(get_catalog),
    entitlement: TierEntitlement = Depends(get_entitlement),
    prefs: Preferences = Depends(get_preferences),
):
    """Get single trail details."""
    trail = catalog.get_trail(trail_id)
    if not trail:
        raise HTTPException(status_code=404, detail=f"Trail not found: {trail_id}")
    return _to_schema(trail, entitlement, prefs)
