"""
Trail run models.

Models:
- TrailRunRecord: one (user, trail) run and its cumulative distance
"""

from datetime import datetime
from sqlalchemy import Column, String, DateTime, Integer, Float, UniqueConstraint

from trailwalk.db.base import Base


class TrailRunRecord(Base):
    """
    Persisted trail run.

    One row per (user_id, trail_id); restarting a trail reuses the row.
    """

    __tablename__ = "trail_runs"
    __table_args__ = (
        UniqueConstraint("user_id", "trail_id", name="uq_trail_runs_user_trail"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), nullable=False, index=True)
    trail_id = Column(String(64), nullable=False)

    started_at = Column(DateTime(timezone=True), nullable=False)
    goal_days = Column(Integer, nullable=False)
    cumulative_distance_m = Column(Float, nullable=False, default=0.0)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<TrailRunRecord {self.user_id} {self.trail_id}: {self.cumulative_distance_m:.0f} m>"
