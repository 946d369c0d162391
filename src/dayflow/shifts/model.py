from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from ..common.datetime_utils import parse_hhmm
from ..core.constants import DEFAULT_EXPECTED_WORK_HOURS, DEFAULT_SHIFT_END, DEFAULT_SHIFT_START


@dataclass(frozen=True)
class ShiftPolicy:
    """Domain entity: the working-day policy in force when an employee checks in.

    Values are copied onto the attendance record at check-in, so a later change
    of policy never rewrites lateness already computed for past days.
    """

    start_time: str = DEFAULT_SHIFT_START
    end_time: str = DEFAULT_SHIFT_END
    expected_work_hours: float = DEFAULT_EXPECTED_WORK_HOURS

    def __post_init__(self):
        # Fail fast on malformed "HH:MM" values from settings.
        parse_hhmm(self.start_time)
        parse_hhmm(self.end_time)


def shift_boundary(day: date, hhmm: str) -> datetime:
    """Combine a snapshotted "HH:MM" value with a calendar day."""
    return datetime.combine(day, parse_hhmm(hhmm))
