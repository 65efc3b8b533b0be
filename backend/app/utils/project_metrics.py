"""
Derived project values computed at response time (never stored).
"""

import math
from datetime import date, datetime, time, timezone
from typing import Optional

from app.models.project import ProjectStatus


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def duration_days(start_date: date, end_date: date) -> int:
    """Whole days between start and end, rounded up."""
    seconds = (end_date - start_date).total_seconds()
    return math.ceil(seconds / 86400)


def progress_percentage(
    status: ProjectStatus,
    start_date: date,
    end_date: date,
    now: Optional[datetime] = None,
) -> int:
    """
    Completion estimate from the calendar.

    Completed is 100 and pending is 0 regardless of dates; in-progress is the
    elapsed share of the planned window, clamped to [0, 100].
    """
    if status == ProjectStatus.COMPLETED:
        return 100
    if status == ProjectStatus.PENDING:
        return 0

    now = now or datetime.now(timezone.utc)
    start = datetime.combine(start_date, time.min, tzinfo=timezone.utc)
    end = datetime.combine(end_date, time.min, tzinfo=timezone.utc)

    total = (end - start).total_seconds()
    elapsed = (now - start).total_seconds()
    if total <= 0 or elapsed < 0:
        return 0
    if elapsed > total:
        return 100
    return round_half_up(elapsed / total * 100)
