from __future__ import annotations

import math
from datetime import date, datetime, time
from typing import Callable
from zoneinfo import ZoneInfo

from ..core.constants import DEFAULT_TIMEZONE

Clock = Callable[[], datetime]


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_iso_datetime(value: str, tz_name: str = DEFAULT_TIMEZONE) -> datetime:
    """Parse an ISO-8601 timestamp into a naive datetime in the reference zone.

    Offset-aware values (including a trailing "Z") are converted; naive values
    are taken as already local.
    """
    parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(ZoneInfo(tz_name)).replace(tzinfo=None)
    return parsed


def parse_hhmm(value: str) -> time:
    return datetime.strptime(value.strip(), "%H:%M").time()


def now_local(tz_name: str = DEFAULT_TIMEZONE) -> datetime:
    """Current wall-clock time in the reference time zone (naive).

    Note: Wrapped so tests can inject a fixed clock instead.
    """
    return datetime.now(ZoneInfo(tz_name)).replace(tzinfo=None)


def make_clock(tz_name: str) -> Clock:
    return lambda: now_local(tz_name)


def is_weekend(day: date) -> bool:
    return day.weekday() >= 5


def minutes_between(later: datetime, earlier: datetime) -> float:
    return (later - earlier).total_seconds() / 60


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 going up (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def round2(value: float) -> float:
    return math.floor(value * 100 + 0.5) / 100
