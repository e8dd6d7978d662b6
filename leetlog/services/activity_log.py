"""
Activity log engine.

Pure functions over an ActivityLog (date key -> entries). Nothing here touches
storage: callers load a log, call into this module, and persist the returned
log themselves. Input logs are never mutated.
"""
import math
from datetime import timedelta
from typing import Callable, Optional, Set, Tuple, Union

from leetlog.exceptions import DuplicateEntry, InvalidInput, ProblemNotFound
from leetlog.models.enums import DifficultyLevel
from leetlog.models.log import ActivityLog, LogEntry
from leetlog.models.problem import Problem
from leetlog.models.stats import (
    ChartPoint,
    DayStats,
    DifficultyBreakdown,
    ProfileSummary,
    WindowStats,
)
from leetlog.services.catalog_service import normalize_problem_id
from leetlog.utils.dates import parse_date_key, window_keys

CatalogLookup = Callable[[str], Optional[Problem]]


def require_date(value: str) -> None:
    """Raises InvalidInput unless `value` is a canonical YYYY-MM-DD key."""
    try:
        parse_date_key(value)
    except (TypeError, ValueError):
        raise InvalidInput(f"'{value}' is not a valid date (expected YYYY-MM-DD).")


def _require_window(window_days: int) -> None:
    if not isinstance(window_days, int) or window_days < 1:
        raise InvalidInput(f"Window must be a positive number of days, got {window_days!r}.")


def parse_time_taken(value: Union[str, int, float]) -> float:
    """Minutes spent on a problem; a finite, non-negative number."""
    if isinstance(value, bool):
        raise InvalidInput(f"Time taken must be a number of minutes, got {value!r}.")
    try:
        minutes = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        raise InvalidInput(f"Time taken must be a number of minutes, got {value!r}.")
    if not math.isfinite(minutes) or minutes < 0:
        raise InvalidInput(f"Time taken must be a non-negative number of minutes, got {value!r}.")
    return minutes


def _entries_time(entries) -> float:
    return sum(entry.time_taken for entry in entries)


def append_entry(
    log: ActivityLog,
    date: str,
    problem_id: Union[str, int],
    time_taken: Union[str, int, float],
    looked_up: bool,
    catalog_lookup: CatalogLookup,
) -> Tuple[ActivityLog, LogEntry]:
    """
    Logs `problem_id` as solved on `date`.

    Returns a new log with the entry appended at the end of the day's bucket,
    plus the entry itself. Raises InvalidInput, DuplicateEntry (checked before
    the catalog is consulted) or ProblemNotFound; the input log is untouched
    in every case.
    """
    require_date(date)
    minutes = parse_time_taken(time_taken)
    pid = normalize_problem_id(problem_id)
    if not pid:
        raise InvalidInput("Problem id must not be empty.")

    bucket = log.get(date, [])
    if any(entry.problem_id == pid for entry in bucket):
        raise DuplicateEntry(f"You already logged problem #{pid} on {date}.")

    problem = catalog_lookup(pid)
    if problem is None:
        raise ProblemNotFound(f"Problem ID {pid} not found.")

    entry = LogEntry(
        problem_id=pid,
        title=problem.title,
        slug=problem.slug,
        time_taken=minutes,
        looked_up=bool(looked_up),
    )
    updated = dict(log)
    updated[date] = [*bucket, entry]
    return updated, entry


def compute_streak(log: ActivityLog, reference_date: str) -> int:
    """Consecutive non-empty days, counted backward from `reference_date`."""
    require_date(reference_date)
    day = parse_date_key(reference_date)
    streak = 0
    while log.get(day.isoformat()):
        streak += 1
        day -= timedelta(days=1)
    return streak


def compute_window_stats(log: ActivityLog, reference_date: str, window_days: int) -> WindowStats:
    require_date(reference_date)
    _require_window(window_days)
    total_problems = 0
    total_time = 0.0
    for key in window_keys(reference_date, window_days):
        entries = log.get(key, [])
        total_problems += len(entries)
        total_time += _entries_time(entries)
    return WindowStats(window_days=window_days, total_problems=total_problems, total_time=total_time)


def compute_day_stats(log: ActivityLog, date: str) -> Optional[DayStats]:
    """Stats for one date, or None when nothing was ever logged that day."""
    require_date(date)
    if date not in log:
        return None
    entries = log[date]
    return DayStats(date=date, problems_solved=len(entries), total_time=_entries_time(entries))


def compute_difficulty_breakdown(log: ActivityLog, catalog_lookup: CatalogLookup) -> DifficultyBreakdown:
    """
    Counts every logged entry by catalog difficulty. Entries whose problem has
    since left the catalog are skipped.
    """
    counts = {level.label: 0 for level in DifficultyLevel}
    for entries in log.values():
        for entry in entries:
            problem = catalog_lookup(entry.problem_id)
            if problem is not None:
                counts[problem.difficulty_label] += 1
    return counts


def compute_chart_series(log: ActivityLog, reference_date: str, window_days: int) -> list[ChartPoint]:
    """One zero-filled point per day of the window, oldest first."""
    require_date(reference_date)
    _require_window(window_days)
    points = []
    for key in window_keys(reference_date, window_days):
        entries = log.get(key, [])
        points.append(ChartPoint(date=key, problem_count=len(entries), time_minutes=_entries_time(entries)))
    return points


def compute_profile_summary(log: ActivityLog, today: str) -> ProfileSummary:
    # ISO date keys are fixed width, so string order is chronological
    first_logged = min(log) if log else None
    total_problems = sum(len(entries) for entries in log.values())
    total_time = sum(_entries_time(entries) for entries in log.values())
    average = total_time / total_problems if total_problems else 0.0
    return ProfileSummary(
        first_logged_date=first_logged,
        total_problems=total_problems,
        average_time=average,
        current_streak=compute_streak(log, today),
    )


def solved_problem_ids(log: ActivityLog) -> Set[str]:
    return {entry.problem_id for entries in log.values() for entry in entries}
