"""
Earned badge repository.

Data access layer for EarnedBadgeRecord model.
"""

from datetime import timezone
from sqlalchemy.ext.asyncio import AsyncSession

from trailwalk.shared.repository import BaseRepository
from .evaluator import EarnedBadge
from .models import EarnedBadgeRecord


class EarnedBadgeRepository(BaseRepository[EarnedBadgeRecord]):
    """Repository for earned badges."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, EarnedBadgeRecord)

    async def list_for_user(self, user_id: str) -> list[EarnedBadge]:
        records = await self.get_all(order_by="unlocked_at", user_id=user_id)
        result = []
        for r in records:
            unlocked_at = r.unlocked_at
            if unlocked_at.tzinfo is None:
                unlocked_at = unlocked_at.replace(tzinfo=timezone.utc)
            result.append(EarnedBadge(badge_id=r.badge_id, period=r.period, unlocked_at=unlocked_at))
        return result

    async def add(self, user_id: str, badge: EarnedBadge) -> EarnedBadgeRecord:
        """
        Record an unlock.

        Existing (user, badge, period) rows are kept as they are.
        """
        record = await self.get_by(user_id=user_id, badge_id=badge.badge_id, period=badge.period)
        if record:
            return record
        return await self.create(
            user_id=user_id,
            badge_id=badge.badge_id,
            period=badge.period,
            unlocked_at=badge.unlocked_at.astimezone(timezone.utc),
        )
