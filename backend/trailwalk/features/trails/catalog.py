"""Trail catalog loader: reads trails.yaml and provides access to trail data."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from trailwalk.shared.errors import UnknownTrailError
from .route import Difficulty, Landmark, Trail

logger = logging.getLogger(__name__)


class TrailCatalog:
    """Loads and provides access to the trail catalog from YAML."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._trails: list[Trail] | None = None

    def load(self) -> list[Trail]:
        """Load catalog from the YAML file."""
        if not self.path.exists():
            logger.warning(f"Trail catalog not found: {self.path}")
            self._trails = []
            return []

        with open(self.path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        trails = []
        for t in data.get("trails", []):
            landmarks = tuple(
                Landmark(
                    id=lm["id"],
                    name=lm["name"],
                    distance_m=float(lm["distance_m"]),
                    description=lm.get("description", ""),
                    image=lm.get("image"),
                )
                for lm in t.get("landmarks", [])
            )
            trails.append(
                Trail(
                    id=t["id"],
                    name=t["name"],
                    total_distance_m=float(t["total_distance_m"]),
                    landmarks=landmarks,
                    description=t.get("description", ""),
                    difficulty=Difficulty(t.get("difficulty", Difficulty.EASY.value)),
                    premium=bool(t.get("premium", False)),
                )
            )

        ids = [t.id for t in trails]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Duplicate trail ids in {self.path}")

        logger.info(f"Loaded {len(trails)} trails from {self.path.name}")
        self._trails = trails
        return trails

    @classmethod
    def from_trails(cls, trails: list[Trail]) -> TrailCatalog:
        """Catalog backed by in-memory trails (no file)."""
        catalog = cls(Path("<memory>"))
        catalog._trails = list(trails)
        return catalog

    @property
    def trails(self) -> list[Trail]:
        if self._trails is None:
            self.load()
        return self._trails or []

    def get_trail(self, trail_id: str) -> Trail | None:
        return next((t for t in self.trails if t.id == trail_id), None)

    def require_trail(self, trail_id: str) -> Trail:
        """Get trail or raise UnknownTrailError."""
        trail = self.get_trail(trail_id)
        if trail is None:
            raise UnknownTrailError(trail_id)
        return trail

    def free_trail_ids(self) -> list[str]:
        """Ids of trails not flagged premium."""
        return [t.id for t in self.trails if not t.premium]
