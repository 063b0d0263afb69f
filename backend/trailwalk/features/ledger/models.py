"""
Activity ledger models.

Models:
- ActivityEntryRecord: one (user, day) step/distance row
"""

from datetime import datetime
from sqlalchemy import Column, String, Date, DateTime, Integer, Float, UniqueConstraint

from trailwalk.db.base import Base


class ActivityEntryRecord(Base):
    """
    Persisted ledger entry.

    A later write for the same (user_id, day) updates the row in place.
    """

    __tablename__ = "activity_entries"
    __table_args__ = (
        UniqueConstraint("user_id", "day", name="uq_activity_entries_user_day"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), nullable=False, index=True)
    day = Column(Date, nullable=False)

    steps = Column(Integer, nullable=False, default=0)
    distance_m = Column(Float, nullable=False, default=0.0)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<ActivityEntryRecord {self.user_id} {self.day}: {self.steps} steps>"
