"""
Trail completion summary.

Duration is counted in whole days (minimum 1), rounding partial days up.
"""

import math
from datetime import datetime

from trailwalk.features.ledger.ledger import ActivityLedger
from .schemas import CompletedTrailSummary, TrailRun

SECONDS_PER_DAY = 86400


def summarize_completion(
    run: TrailRun,
    ledger: ActivityLedger,
    completed_at: datetime | None = None,
) -> CompletedTrailSummary:
    """
    Build completion stats for a run.

    Args:
        run: The run (normally completed)
        ledger: User's ledger
        completed_at: Override end instant (defaults to run.completed_at)

    Returns:
        CompletedTrailSummary

    Raises:
        ValueError: run has no completion instant and none was given
    """
    end = completed_at or run.completed_at
    if end is None:
        raise ValueError(f"Trail run {run.trail_id} is not completed")

    start = run.started_at
    tz = end.tzinfo
    entries = ledger.range(run.start_day(tz), end.date())

    total_steps = sum(e.steps for e in entries)
    total_distance = 0.0
    for e in entries:
        total_distance += e.distance_m

    elapsed = (end - start).total_seconds() / SECONDS_PER_DAY
    total_days = max(1, math.ceil(elapsed))
    # half-up, matching how averages are shown elsewhere
    avg_steps = int(math.floor(total_steps / total_days + 0.5))

    max_steps = max((e.steps for e in entries), default=0)
    if max_steps <= 0:
        max_steps = avg_steps

    return CompletedTrailSummary(
        trail_id=run.trail_id,
        started_at=start,
        completed_at=end,
        total_steps=total_steps,
        total_distance_m=total_distance,
        total_days=total_days,
        avg_steps_per_day=avg_steps,
        max_steps_in_one_day=max_steps,
    )
