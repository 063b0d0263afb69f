"""
Activity ledger repository.

Data access layer for ActivityEntryRecord model.
"""

from datetime import date
from sqlalchemy.ext.asyncio import AsyncSession

from trailwalk.shared.repository import BaseRepository
from .ledger import ActivityEntry, ActivityLedger
from .models import ActivityEntryRecord


class ActivityEntryRepository(BaseRepository[ActivityEntryRecord]):
    """Repository for ledger entries."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, ActivityEntryRecord)

    async def load_ledger(self, user_id: str) -> ActivityLedger:
        """
        Load the user's full ledger.

        Args:
            user_id: User's ID

        Returns:
            ActivityLedger (empty if the user never logged activity)
        """
        records = await self.get_all(order_by="day", user_id=user_id)
        return ActivityLedger.from_entries(
            ActivityEntry(day=r.day, steps=r.steps, distance_m=r.distance_m)
            for r in records
        )

    async def upsert(self, user_id: str, day: date, steps: int, distance_m: float) -> ActivityEntryRecord:
        """Insert or replace the row for (user_id, day)."""
        record = await self.get_by(user_id=user_id, day=day)
        if record:
            return await self.update(record, steps=steps, distance_m=distance_m)
        return await self.create(user_id=user_id, day=day, steps=steps, distance_m=distance_m)
