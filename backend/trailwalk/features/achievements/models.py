"""
Earned badge models.

Models:
- EarnedBadgeRecord: one badge earned in one period
"""

from datetime import datetime
from sqlalchemy import Column, String, DateTime, Integer, UniqueConstraint

from trailwalk.db.base import Base


class EarnedBadgeRecord(Base):
    """
    Persisted badge unlock.

    period is "YYYY-MM" for monthly badges, "YYYY" for yearly badges and
    "lifetime" otherwise.
    """

    __tablename__ = "earned_badges"
    __table_args__ = (
        UniqueConstraint("user_id", "badge_id", "period", name="uq_earned_badges_user_badge_period"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), nullable=False, index=True)
    badge_id = Column(String(64), nullable=False)
    period = Column(String(16), nullable=False)
    unlocked_at = Column(DateTime(timezone=True), nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<EarnedBadgeRecord {self.user_id} {self.badge_id} ({self.period})>"
