"""
Tracker service.

Orchestrates one user's ledger, trail runs, calendar, streaks and badges.
Every call runs under the user's lock and either applies fully or raises
before anything is persisted.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time

from trailwalk.features.achievements.badges import BADGES, BADGES_BY_ID, Badge, BadgeScope
from trailwalk.features.achievements.evaluator import (
    BadgeEvaluator,
    BadgeProgress,
    EarnedBadge,
    build_aggregates,
)
from trailwalk.features.achievements.streaks import StreakSummary, summarize_streaks
from trailwalk.features.calendar.classifier import (
    DayClassification,
    MonthCalendar,
    classify_day,
    classify_history,
    classify_range,
    classify_window,
)
from trailwalk.features.dashboard.stats import DashboardStats, build_dashboard
from trailwalk.features.ledger.ledger import ActivityEntry, ActivityLedger
from trailwalk.features.progression.calculator import TrailProgressionCalculator
from trailwalk.features.progression.schemas import (
    CompletedTrailSummary,
    ProgressSnapshot,
    ProgressUpdate,
    TrailRun,
)
from trailwalk.features.progression.summary import summarize_completion
from trailwalk.features.trails.catalog import TrailCatalog
from trailwalk.features.trails.entitlement import EntitlementGate
from trailwalk.shared.clock import Clock
from trailwalk.shared.constants import DayStatus, GOAL_HISTORY_DAYS, MAX_DAY_RANGE_DAYS
from trailwalk.shared.dates import parse_day
from trailwalk.shared.errors import InvalidDateError, RunAlreadyCompletedError, RunNotFoundError
from trailwalk.shared.units import steps_to_distance
from .locks import UserLockRegistry, user_locks
from .persistence import TrackerPersistence
from .preferences import Preferences

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UnlockedBadge:
    badge: Badge
    earned: EarnedBadge


@dataclass(frozen=True)
class ActivityUpdate:
    """Everything that changed because of one ledger write."""

    entry: ActivityEntry
    day_status: DayStatus
    progress: list[ProgressUpdate] = field(default_factory=list)
    completed_trails: list[CompletedTrailSummary] = field(default_factory=list)
    paused_trail_ids: list[str] = field(default_factory=list)
    unlocked_badges: list[UnlockedBadge] = field(default_factory=list)
    streaks: StreakSummary = field(default_factory=lambda: StreakSummary(0, 0))


@dataclass(frozen=True)
class BadgeOverview:
    earned: list[UnlockedBadge]
    next: list[BadgeProgress]


class TrackerService:
    """
    Per-user tracker operations.

    Usage:
        service = TrackerService(InMemoryPersistence(), catalog, entitlement, SystemClock())
        update = await service.record_activity("user-1", "2024-03-05", 12000, prefs)
    """

    def __init__(
        self,
        persistence: TrackerPersistence,
        catalog: TrailCatalog,
        entitlement: EntitlementGate,
        clock: Clock,
        locks: UserLockRegistry | None = None,
        goal_history_days: int = GOAL_HISTORY_DAYS,
    ):
        self.persistence = persistence
        self.catalog = catalog
        self.entitlement = entitlement
        self.clock = clock
        self.locks = locks if locks is not None else user_locks
        self.goal_history_days = goal_history_days
        self.calculator = TrailProgressionCalculator(catalog, entitlement)
        self.evaluator = BadgeEvaluator()
        self.period_evaluator = BadgeEvaluator([b for b in BADGES if b.scope != BadgeScope.LIFETIME])

    # =========================================================================
    # Activity
    # =========================================================================

    async def record_activity(
        self,
        user_id: str,
        day: date | str,
        steps: int,
        prefs: Preferences,
        distance_m: float | None = None,
    ) -> ActivityUpdate:
        """
        Write one day's activity and re-derive everything downstream.

        Args:
            user_id: User's ID
            day: Calendar day (backfills allowed)
            steps: Total steps for that day
            prefs: Goal and stride
            distance_m: Measured distance; derived from stride when omitted

        Returns:
            ActivityUpdate with progress events, completions and badge unlocks

        Raises:
            InvalidDateError, InvalidMeasurementError, InvalidStrideError,
            NonMonotonicDistanceError: the write would move a run backwards
        """
        async with self.locks.lock_for(user_id):
            now = self.clock.now()
            today = now.date()

            if distance_m is None:
                distance_m = steps_to_distance(steps, prefs.stride_length_cm)

            ledger = await self.persistence.load_ledger(user_id)
            entry = ledger.upsert(day, steps, distance_m, today=today)

            runs = await self.persistence.load_trail_runs(user_id)
            progress, paused = self._advance_runs(runs, ledger, now)

            updated_runs = {u.run.trail_id: u.run for u in progress}
            all_runs = [updated_runs.get(r.trail_id, r) for r in runs]

            history = classify_history(ledger, prefs.daily_goal, now)
            earned = await self.persistence.load_earned_badges(user_id)
            unlocked = self._unlock_badges(ledger, history, all_runs, earned, now, entry.day)

            completed = [
                summarize_completion(u.run, ledger)
                for u in progress if u.completion is not None
            ]

            try:
                await self.persistence.save_ledger_entry(user_id, entry)
                for update in progress:
                    await self.persistence.save_trail_run(update.run)
                for badge in unlocked:
                    await self.persistence.save_earned_badge(user_id, badge)
                await self.persistence.commit()
            except Exception:
                await self.persistence.rollback()
                raise

            logger.info(
                f"User {user_id} logged {entry.steps} steps for {entry.day} "
                f"({len(progress)} runs advanced, {len(unlocked)} badges)"
            )

            return ActivityUpdate(
                entry=entry,
                day_status=classify_day(entry.day, entry.steps, prefs.daily_goal, today),
                progress=progress,
                completed_trails=completed,
                paused_trail_ids=paused,
                unlocked_badges=[UnlockedBadge(BADGES_BY_ID[b.badge_id], b) for b in unlocked],
                streaks=summarize_streaks(history),
            )

    def _advance_runs(
        self,
        runs: list[TrailRun],
        ledger: ActivityLedger,
        now: datetime,
    ) -> tuple[list[ProgressUpdate], list[str]]:
        progress, paused = [], []
        for run in runs:
            if run.is_completed:
                continue
            if not self.entitlement.is_entitled(run.trail_id):
                logger.warning(f"Run on {run.trail_id} for {run.user_id} paused: trail no longer entitled")
                paused.append(run.trail_id)
                continue
            cumulative = ledger.cumulative_distance_since(run.start_day(now.tzinfo))
            logger.debug(f"Recomputed {run.trail_id}: {run.cumulative_distance_m:.1f} -> {cumulative:.1f} m")
            progress.append(self.calculator.advance(run, cumulative, now))
        return progress, paused

    def _unlock_badges(
        self,
        ledger: ActivityLedger,
        history: list[DayClassification],
        runs: list[TrailRun],
        earned: list[EarnedBadge],
        now: datetime,
        day: date,
    ) -> list[EarnedBadge]:
        """
        Badges newly unlocked by a write to `day`.

        A backfill into an earlier month is also evaluated against that
        month, so its monthly and yearly badges are awarded for it.
        """
        completed = sum(1 for r in runs if r.is_completed)
        total = len(self.catalog.trails)
        unlocked: list[EarnedBadge] = []

        if day < now.date() and (day.year, day.month) != (now.year, now.month):
            period_at = datetime.combine(day, time.min, tzinfo=now.tzinfo)
            past = build_aggregates(ledger, history, completed, total, now=period_at, earned=earned)
            unlocked += self.period_evaluator.evaluate(past, earned, now, period_at=period_at)

        earned = [*earned, *unlocked]
        current = build_aggregates(ledger, history, completed, total, now=now, earned=earned)
        unlocked += self.evaluator.evaluate(current, earned, now)
        return unlocked

    async def get_activity(self, user_id: str, start: date | str, end: date | str) -> list[ActivityEntry]:
        async with self.locks.lock_for(user_id):
            ledger = await self.persistence.load_ledger(user_id)
            return ledger.range(start, end)

    # =========================================================================
    # Trails
    # =========================================================================

    async def start_trail(self, user_id: str, trail_id: str, goal_days: int) -> ProgressUpdate:
        """
        Start a trail, or return the existing run on it.

        The start day counts in full: activity already logged today is
        credited immediately.
        """
        async with self.locks.lock_for(user_id):
            existing = await self.persistence.load_trail_run(user_id, trail_id)
            if existing is not None:
                return ProgressUpdate(run=existing, snapshot=self.calculator.snapshot(existing))

            now = self.clock.now()
            run = self.calculator.start_run(user_id, trail_id, goal_days, now)
            ledger = await self.persistence.load_ledger(user_id)
            update = self.calculator.advance(
                run, ledger.cumulative_distance_since(run.start_day(now.tzinfo)), now
            )
            await self._save_run(update.run)
            return update

    async def extend_trail(self, user_id: str, trail_id: str, additional_days: int) -> ProgressSnapshot:
        async with self.locks.lock_for(user_id):
            run = await self._require_run(user_id, trail_id)
            extended = self.calculator.extend_run(run, additional_days)
            await self._save_run(extended)
            logger.info(f"User {user_id} extended {trail_id} to {extended.goal_days} days")
            return self.calculator.snapshot(extended)

    async def cancel_trail(self, user_id: str, trail_id: str) -> None:
        """
        Abandon an active run. Ledger, badges and completed runs are kept.

        Raises:
            RunNotFoundError: no run on the trail
            RunAlreadyCompletedError: the run is finished
        """
        async with self.locks.lock_for(user_id):
            run = await self._require_run(user_id, trail_id)
            if run.is_completed:
                raise RunAlreadyCompletedError(user_id, trail_id)
            try:
                await self.persistence.delete_trail_run(user_id, trail_id)
                await self.persistence.commit()
            except Exception:
                await self.persistence.rollback()
                raise
            logger.info(f"User {user_id} cancelled {trail_id} at {run.cumulative_distance_m:.1f} m")

    async def get_progress(self, user_id: str, trail_id: str) -> ProgressSnapshot:
        async with self.locks.lock_for(user_id):
            run = await self._require_run(user_id, trail_id)
            return self.calculator.snapshot(run)

    async def get_runs(self, user_id: str) -> list[TrailRun]:
        async with self.locks.lock_for(user_id):
            return await self.persistence.load_trail_runs(user_id)

    async def get_completed_trails(self, user_id: str) -> list[CompletedTrailSummary]:
        async with self.locks.lock_for(user_id):
            ledger = await self.persistence.load_ledger(user_id)
            runs = await self.persistence.load_trail_runs(user_id)
            completed = sorted((r for r in runs if r.is_completed), key=lambda r: r.completed_at)
            return [summarize_completion(r, ledger) for r in completed]

    async def _require_run(self, user_id: str, trail_id: str) -> TrailRun:
        run = await self.persistence.load_trail_run(user_id, trail_id)
        if run is None:
            raise RunNotFoundError(user_id, trail_id)
        return run

    async def _save_run(self, run: TrailRun) -> None:
        try:
            await self.persistence.save_trail_run(run)
            await self.persistence.commit()
        except Exception:
            await self.persistence.rollback()
            raise

    # =========================================================================
    # Calendar, streaks, badges, dashboard
    # =========================================================================

    async def get_calendar(self, user_id: str, prefs: Preferences) -> list[MonthCalendar]:
        async with self.locks.lock_for(user_id):
            ledger = await self.persistence.load_ledger(user_id)
            return classify_window(ledger, prefs.daily_goal, self.clock.now())

    async def get_day_statuses(
        self, user_id: str, start: date | str, end: date | str, prefs: Preferences
    ) -> list[DayClassification]:
        """
        Goal status for every day from start to end.

        Raises:
            InvalidDateError: span longer than MAX_DAY_RANGE_DAYS
        """
        start_day, end_day = parse_day(start), parse_day(end)
        if (end_day - start_day).days + 1 > MAX_DAY_RANGE_DAYS:
            raise InvalidDateError(
                f"Day range {start_day}..{end_day} exceeds {MAX_DAY_RANGE_DAYS} days"
            )
        async with self.locks.lock_for(user_id):
            ledger = await self.persistence.load_ledger(user_id)
            return classify_range(ledger, start_day, end_day, prefs.daily_goal, self.clock.now())

    async def get_streaks(self, user_id: str, prefs: Preferences) -> StreakSummary:
        async with self.locks.lock_for(user_id):
            ledger = await self.persistence.load_ledger(user_id)
            return summarize_streaks(classify_history(ledger, prefs.daily_goal, self.clock.now()))

    async def get_badges(self, user_id: str, prefs: Preferences, limit: int = 3) -> BadgeOverview:
        async with self.locks.lock_for(user_id):
            now = self.clock.now()
            ledger = await self.persistence.load_ledger(user_id)
            runs = await self.persistence.load_trail_runs(user_id)
            earned = await self.persistence.load_earned_badges(user_id)
            aggregates = build_aggregates(
                ledger,
                classify_history(ledger, prefs.daily_goal, now),
                trails_completed=sum(1 for r in runs if r.is_completed),
                total_trails=len(self.catalog.trails),
                now=now,
                earned=earned,
            )
            return BadgeOverview(
                earned=[
                    UnlockedBadge(BADGES_BY_ID[e.badge_id], e)
                    for e in sorted(earned, key=lambda e: e.unlocked_at)
                    if e.badge_id in BADGES_BY_ID
                ],
                next=self.evaluator.next_badges(aggregates, earned, now, limit=limit),
            )

    async def get_dashboard(self, user_id: str, prefs: Preferences) -> DashboardStats:
        async with self.locks.lock_for(user_id):
            ledger = await self.persistence.load_ledger(user_id)
            runs = await self.persistence.load_trail_runs(user_id)
            return build_dashboard(
                ledger,
                runs,
                self.catalog,
                prefs.daily_goal,
                self.clock.now().date(),
                goal_history_days=self.goal_history_days,
            )
