"""
Application Configuration

Uses Pydantic Settings for type-safe configuration.
"""

from pathlib import Path
from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field, field_validator, ConfigDict

from trailwalk.shared.constants import (
    DEFAULT_DAILY_GOAL_STEPS,
    DEFAULT_STRIDE_LENGTH_CM,
    GOAL_HISTORY_DAYS,
    DistanceUnit,
)

# Packaged reference data: trailwalk/content/
CONTENT_DIR = Path(__file__).parent / "content"


class Settings(BaseSettings):
    """Application settings with validation."""

    # === Core ===
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Logging level")

    # === Database ===
    database_url: str = Field(
        default="sqlite:///./trailwalk.db",
        description="Database connection URL"
    )

    # === CORS ===
    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://localhost:3000"],
        description="Allowed CORS origins"
    )

    # === Calendar ===
    timezone: str = Field(
        default="UTC",
        description="IANA timezone that defines calendar-day boundaries"
    )

    # === Preference defaults ===
    default_daily_goal: int = Field(default=DEFAULT_DAILY_GOAL_STEPS, gt=0)
    default_stride_length_cm: float = Field(default=DEFAULT_STRIDE_LENGTH_CM, gt=0)
    default_distance_unit: DistanceUnit = Field(default=DistanceUnit.KM)

    # === Trails ===
    free_trail_ids: List[str] = Field(
        default_factory=list,
        description="Trails open to the free tier (empty = every non-premium trail)"
    )
    trails_file: Optional[Path] = Field(
        default=None,
        description="Override path to trails.yaml"
    )

    # === Dashboard ===
    goal_history_days: int = Field(default=GOAL_HISTORY_DAYS, gt=0)

    @field_validator('database_url')
    @classmethod
    def fix_postgres_url(cls, v: str) -> str:
        """Fix Render/Railway postgres:// URL to postgresql://"""
        if v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql://", 1)
        return v

    @field_validator('cors_origins', 'free_trail_ids', mode='before')
    @classmethod
    def parse_comma_separated(cls, v):
        """Parse lists from comma-separated strings."""
        if isinstance(v, str):
            return [item.strip() for item in v.split(',') if item.strip()]
        return v

    @property
    def trails_path(self) -> Path:
        return self.trails_file or CONTENT_DIR / "trails.yaml"

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
