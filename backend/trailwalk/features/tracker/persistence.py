"""
Persistence adapters for the tracker.

The engine only talks to TrackerPersistence. InMemoryPersistence backs
tests and the CLI; SqlPersistence stores everything through the feature
repositories on one AsyncSession.
"""

import logging
from collections import defaultdict
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from trailwalk.features.achievements.evaluator import EarnedBadge
from trailwalk.features.achievements.repository import EarnedBadgeRepository
from trailwalk.features.ledger.ledger import ActivityEntry, ActivityLedger
from trailwalk.features.ledger.repository import ActivityEntryRepository
from trailwalk.features.progression.repository import TrailRunRepository
from trailwalk.features.progression.schemas import TrailRun

logger = logging.getLogger(__name__)


class TrackerPersistence(Protocol):
    async def load_ledger(self, user_id: str) -> ActivityLedger: ...

    async def save_ledger_entry(self, user_id: str, entry: ActivityEntry) -> None: ...

    async def load_trail_run(self, user_id: str, trail_id: str) -> TrailRun | None: ...

    async def load_trail_runs(self, user_id: str) -> list[TrailRun]: ...

    async def save_trail_run(self, run: TrailRun) -> None: ...

    async def delete_trail_run(self, user_id: str, trail_id: str) -> None: ...

    async def load_earned_badges(self, user_id: str) -> list[EarnedBadge]: ...

    async def save_earned_badge(self, user_id: str, badge: EarnedBadge) -> None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class InMemoryPersistence:
    """Dict-backed persistence. Ledgers are copied on load."""

    def __init__(self):
        self.ledgers: dict[str, ActivityLedger] = defaultdict(ActivityLedger)
        self.runs: dict[str, dict[str, TrailRun]] = defaultdict(dict)
        self.badges: dict[str, dict[tuple[str, str], EarnedBadge]] = defaultdict(dict)

    async def load_ledger(self, user_id: str) -> ActivityLedger:
        return self.ledgers[user_id].copy()

    async def save_ledger_entry(self, user_id: str, entry: ActivityEntry) -> None:
        self.ledgers[user_id].upsert(entry.day, entry.steps, entry.distance_m)

    async def load_trail_run(self, user_id: str, trail_id: str) -> TrailRun | None:
        return self.runs[user_id].get(trail_id)

    async def load_trail_runs(self, user_id: str) -> list[TrailRun]:
        return sorted(self.runs[user_id].values(), key=lambda r: r.started_at)

    async def save_trail_run(self, run: TrailRun) -> None:
        self.runs[run.user_id][run.trail_id] = run

    async def delete_trail_run(self, user_id: str, trail_id: str) -> None:
        self.runs[user_id].pop(trail_id, None)

    async def load_earned_badges(self, user_id: str) -> list[EarnedBadge]:
        return list(self.badges[user_id].values())

    async def save_earned_badge(self, user_id: str, badge: EarnedBadge) -> None:
        self.badges[user_id].setdefault(badge.key, badge)

    async def commit(self) -> None:
        pass

    async def rollback(self) -> None:
        pass


class SqlPersistence:
    """
    SQLAlchemy-backed persistence.

    Usage:
        async with AsyncSessionLocal() as session:
            service = TrackerService(SqlPersistence(session), catalog, entitlement, clock)
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.entries = ActivityEntryRepository(db)
        self.runs = TrailRunRepository(db)
        self.badges = EarnedBadgeRepository(db)

    async def load_ledger(self, user_id: str) -> ActivityLedger:
        return await self.entries.load_ledger(user_id)

    async def save_ledger_entry(self, user_id: str, entry: ActivityEntry) -> None:
        await self.entries.upsert(user_id, entry.day, entry.steps, entry.distance_m)

    async def load_trail_run(self, user_id: str, trail_id: str) -> TrailRun | None:
        return await self.runs.get_for_trail(user_id, trail_id)

    async def load_trail_runs(self, user_id: str) -> list[TrailRun]:
        return await self.runs.list_for_user(user_id)

    async def save_trail_run(self, run: TrailRun) -> None:
        await self.runs.save(run)

    async def delete_trail_run(self, user_id: str, trail_id: str) -> None:
        await self.runs.delete_for_trail(user_id, trail_id)

    async def load_earned_badges(self, user_id: str) -> list[EarnedBadge]:
        return await self.badges.list_for_user(user_id)

    async def save_earned_badge(self, user_id: str, badge: EarnedBadge) -> None:
        await self.badges.add(user_id, badge)

    async def commit(self) -> None:
        await self.db.commit()

    async def rollback(self) -> None:
        logger.debug("Rolling back tracker session")
        await self.db.rollback()
