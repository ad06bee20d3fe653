"""Time source and time-of-day bucketing."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from joidu.focus.models import TimeOfDay


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """Local wall-clock time, timezone-aware."""

    def now(self) -> datetime:
        return datetime.now().astimezone()


def time_of_day(hour: int) -> TimeOfDay:
    """
    Bucket an hour (0-23) into a time of day.

    Hours 0-5 get their own night bucket rather than falling through to
    evening.
    """
    if not 0 <= hour <= 23:
        raise ValueError(f"hour must be 0-23, got {hour}")
    if hour < 6:
        return TimeOfDay.NIGHT
    if hour < 12:
        return TimeOfDay.MORNING
    if hour < 18:
        return TimeOfDay.AFTERNOON
    return TimeOfDay.EVENING


def minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes from start to end, rounded down, never negative."""
    seconds = (end - start).total_seconds()
    return max(0, int(seconds // 60))
