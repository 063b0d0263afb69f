"""
Trail run repository.

Data access layer for TrailRunRecord model.
"""

from datetime import datetime, timezone
from sqlalchemy.ext.asyncio import AsyncSession

from trailwalk.shared.repository import BaseRepository
from .models import TrailRunRecord
from .schemas import TrailRun


def _utc(value: datetime | None) -> datetime | None:
    # stored as UTC wall time; SQLite drops the offset
    return value.astimezone(timezone.utc) if value is not None else None


def _aware(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def to_trail_run(record: TrailRunRecord) -> TrailRun:
    return TrailRun(
        user_id=record.user_id,
        trail_id=record.trail_id,
        started_at=_aware(record.started_at),
        goal_days=record.goal_days,
        cumulative_distance_m=record.cumulative_distance_m,
        completed_at=_aware(record.completed_at),
    )


class TrailRunRepository(BaseRepository[TrailRunRecord]):
    """Repository for trail run operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, TrailRunRecord)

    async def get_for_trail(self, user_id: str, trail_id: str) -> TrailRun | None:
        """
        Get the user's run on a trail.

        Args:
            user_id: User's ID
            trail_id: Trail ID

        Returns:
            TrailRun if found, None otherwise
        """
        record = await self.get_by(user_id=user_id, trail_id=trail_id)
        return to_trail_run(record) if record else None

    async def list_for_user(self, user_id: str) -> list[TrailRun]:
        records = await self.get_all(order_by="started_at", user_id=user_id)
        return [to_trail_run(r) for r in records]

    async def save(self, run: TrailRun) -> TrailRunRecord:
        """Insert or update the row for (run.user_id, run.trail_id)."""
        fields = dict(
            started_at=_utc(run.started_at),
            goal_days=run.goal_days,
            cumulative_distance_m=run.cumulative_distance_m,
            completed_at=_utc(run.completed_at),
        )
        record = await self.get_by(user_id=run.user_id, trail_id=run.trail_id)
        if record:
            return await self.update(record, **fields)
        return await self.create(user_id=run.user_id, trail_id=run.trail_id, **fields)

    async def delete_for_trail(self, user_id: str, trail_id: str) -> bool:
        """Delete the user's run on a trail. Returns False if there was none."""
        record = await self.get_by(user_id=user_id, trail_id=trail_id)
        if record is None:
            return False
        await self.delete(record)
        return True
