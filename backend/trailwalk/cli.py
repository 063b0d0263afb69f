"""
Command line interface.

Works on a CSV ledger (columns: date,steps[,distance_m]) entirely in memory.

Usage:
    trailwalk trails --premium
    trailwalk progress steps.csv --trail 10k-classic --start 2024-03-01
    trailwalk calendar steps.csv --goal 8000 --today 2024-03-20
"""

import csv
import logging
import sys
from datetime import date, datetime, time, timedelta, timezone
from pathlib import Path

import click

from trailwalk.config import settings
from trailwalk.features.achievements.streaks import summarize_streaks
from trailwalk.features.calendar.classifier import classify_history, classify_window
from trailwalk.features.ledger.ledger import ActivityLedger
from trailwalk.features.progression.calculator import TrailProgressionCalculator
from trailwalk.features.progression.summary import summarize_completion
from trailwalk.features.trails.catalog import TrailCatalog
from trailwalk.features.trails.entitlement import TierEntitlement
from trailwalk.shared.constants import DayStatus, DistanceUnit
from trailwalk.shared.dates import iter_days, parse_day
from trailwalk.shared.errors import TrailEngineError
from trailwalk.shared.formatters import format_distance, format_percent, format_steps
from trailwalk.shared.units import steps_to_distance

logger = logging.getLogger(__name__)

STATUS_MARKS = {
    DayStatus.ACHIEVED: "✓",
    DayStatus.FAILED: "✗",
    DayStatus.FUTURE: "·",
}


def load_csv_ledger(path: Path, stride_length_cm: float) -> ActivityLedger:
    """
    Read a ledger CSV.

    Rows without distance_m get it from the stride length.
    """
    ledger = ActivityLedger()
    with open(path, newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        for line_no, row in enumerate(reader, start=2):
            try:
                steps = int(row["steps"])
                raw_distance = (row.get("distance_m") or "").strip()
                distance = float(raw_distance) if raw_distance else steps_to_distance(steps, stride_length_cm)
                ledger.upsert(row["date"].strip(), steps, distance)
            except (KeyError, ValueError) as e:
                raise click.ClickException(f"{path.name}:{line_no}: {e}") from e
    logger.debug(f"Loaded {len(ledger)} days from {path}")
    return ledger


def _catalog() -> TrailCatalog:
    return TrailCatalog(settings.trails_path)


def _today(value: str | None) -> date:
    return parse_day(value) if value else datetime.now(timezone.utc).date()


def _end_of(day: date) -> datetime:
    return datetime.combine(day, time(23, 59, 59), tzinfo=timezone.utc)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Debug logging")
def cli(verbose):
    """Trailwalk: walk famous trails with your daily steps."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, settings.log_level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stderr)],
    )


@cli.command()
@click.option("--premium", is_flag=True, help="Show trails as a premium subscriber")
@click.option("--unit", default=settings.default_distance_unit.value, type=click.Choice([u.value for u in DistanceUnit]))
def trails(premium, unit):
    """List the trail catalog."""
    catalog = _catalog()
    gate = TierEntitlement(settings.free_trail_ids or catalog.free_trail_ids(), premium=premium)
    for trail in catalog.trails:
        lock = "" if gate.is_entitled(trail.id) else "  [premium]"
        click.echo(
            f"{trail.id:<22} {trail.name:<40} "
            f"{format_distance(trail.total_distance_m, unit):>10}  "
            f"{len(trail.landmarks)} landmarks{lock}"
        )


@cli.command()
@click.argument("ledger_csv", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--trail", "trail_id", required=True, help="Trail ID")
@click.option("--start", required=True, help="Start date (YYYY-MM-DD)")
@click.option("--goal-days", default=30, type=click.IntRange(min=1), help="Days to finish the trail")
@click.option("--stride", default=settings.default_stride_length_cm, type=float, help="Stride length in cm")
@click.option("--unit", default=settings.default_distance_unit.value, type=click.Choice([u.value for u in DistanceUnit]))
@click.option("--today", default=None, help="Replay up to this date (default: today)")
@click.option("--premium", is_flag=True)
def progress(ledger_csv, trail_id, start, goal_days, stride, unit, today, premium):
    """
    Replay a ledger along a trail.

    Prints every landmark arrival with its date, then the current position.
    """
    catalog = _catalog()
    gate = TierEntitlement(settings.free_trail_ids or catalog.free_trail_ids(), premium=premium)
    calculator = TrailProgressionCalculator(catalog, gate)

    try:
        ledger = load_csv_ledger(ledger_csv, stride)
        start_day = parse_day(start)
        end_day = _today(today)
        run = calculator.start_run(
            "cli", trail_id, goal_days, datetime.combine(start_day, time.min, tzinfo=timezone.utc)
        )
        trail = catalog.require_trail(trail_id)

        walked = 0.0
        for day in iter_days(start_day, end_day):
            entry = ledger.get(day)
            if entry is None or entry.distance_m == 0:
                continue
            walked += entry.distance_m
            update = calculator.advance(run, walked, _end_of(day))
            run = update.run
            for arrival in update.arrivals:
                click.echo(f"{day}  reached {arrival.landmark.name} ({format_distance(arrival.landmark.distance_m, unit)})")
            for percent in update.milestones:
                click.echo(f"{day}  {percent}% of {trail.name}")
            if update.completion:
                click.echo(f"{day}  completed {trail.name}!")
        snapshot = calculator.snapshot(run)
    except TrailEngineError as e:
        raise click.ClickException(str(e)) from e

    click.echo()
    click.echo(f"{trail.name}: {format_distance(snapshot.cumulative_distance_m, unit)} "
               f"of {format_distance(snapshot.total_distance_m, unit)} "
               f"({format_percent(snapshot.progress_fraction)})")
    if snapshot.next_landmark:
        click.echo(f"Next: {snapshot.next_landmark.name} in "
                   f"{format_distance(snapshot.distance_remaining_m, unit)}")
    if run.is_completed:
        summary = summarize_completion(run, ledger)
        click.echo(f"Finished in {summary.total_days} days, "
                   f"avg {format_steps(summary.avg_steps_per_day)}/day, "
                   f"best day {format_steps(summary.max_steps_in_one_day)}")
    else:
        deadline = start_day + timedelta(days=goal_days - 1)
        click.echo(f"Goal: finish by {deadline} ({format_distance(snapshot.daily_target_m, unit)}/day)")


@cli.command()
@click.argument("ledger_csv", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--goal", default=settings.default_daily_goal, type=click.IntRange(min=1), help="Daily step goal")
@click.option("--stride", default=settings.default_stride_length_cm, type=float, help="Stride length in cm")
@click.option("--today", default=None, help="Treat this date as today (default: today)")
def calendar(ledger_csv, goal, stride, today):
    """Show goal calendar and streaks."""
    try:
        ledger = load_csv_ledger(ledger_csv, stride)
        now = _today(today)
        months = classify_window(ledger, goal, now)
        streaks = summarize_streaks(classify_history(ledger, goal, now))
    except TrailEngineError as e:
        raise click.ClickException(str(e)) from e

    for month in months:
        click.echo(f"{month.year}-{month.month:02d}   "
                   f"{month.achieved_count} achieved, {month.failed_count} missed")
        click.echo(" Su Mo Tu We Th Fr Sa")
        cells = ["   "] * month.leading_blanks + [
            f"{d.day.day:>2}{STATUS_MARKS[d.status]}" for d in month.days
        ]
        for i in range(0, len(cells), 7):
            click.echo("".join(cells[i:i + 7]))
        click.echo()

    click.echo(f"Current streak: {streaks.current} days, longest: {streaks.longest} days")


if __name__ == "__main__":
    cli()
