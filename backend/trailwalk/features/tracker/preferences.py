"""
User preferences consumed by the engine.

Profile editing is external; callers pass preferences explicitly on
every call.
"""

from pydantic import BaseModel, ConfigDict, Field, PositiveFloat, PositiveInt

from trailwalk.shared.constants import (
    DEFAULT_DAILY_GOAL_STEPS,
    DEFAULT_STRIDE_LENGTH_CM,
    DistanceUnit,
)


class Preferences(BaseModel):
    """Daily goal, stride and display unit."""

    model_config = ConfigDict(frozen=True)

    daily_goal: PositiveInt = Field(default=DEFAULT_DAILY_GOAL_STEPS, description="Steps per day")
    stride_length_cm: PositiveFloat = Field(default=DEFAULT_STRIDE_LENGTH_CM)
    distance_unit: DistanceUnit = DistanceUnit.KM

    @classmethod
    def from_settings(cls, settings) -> "Preferences":
        return cls(
            daily_goal=settings.default_daily_goal,
            stride_length_cm=settings.default_stride_length_cm,
            distance_unit=settings.default_distance_unit,
        )
