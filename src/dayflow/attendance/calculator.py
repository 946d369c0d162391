"""Work-time arithmetic shared by check-in, check-out and regularization approval.

Minutes are rounded half-up to whole minutes; hours are rounded half-up to two
decimals.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from ..common.datetime_utils import minutes_between, round2, round_half_up
from ..common.validators import require_ordered
from ..core.constants import HALF_DAY_THRESHOLD_HOURS
from ..core.enums import AttendanceStatus
from ..shifts.model import shift_boundary


@dataclass(frozen=True)
class CheckOutMetrics:
    work_hours: float
    overtime_hours: float
    early_departure_minutes: int
    status: AttendanceStatus


def late_arrival_minutes(check_in: datetime, work_date: date, shift_start_time: str) -> int:
    shift_start = shift_boundary(work_date, shift_start_time)
    if check_in <= shift_start:
        return 0
    return round_half_up(minutes_between(check_in, shift_start))


def early_departure_minutes(check_out: datetime, work_date: date, shift_end_time: str) -> int:
    shift_end = shift_boundary(work_date, shift_end_time)
    if check_out >= shift_end:
        return 0
    return round_half_up(minutes_between(shift_end, check_out))


def worked_hours(check_in: datetime, check_out: datetime, break_minutes: int) -> float:
    require_ordered(check_in, check_out)
    return round2((minutes_between(check_out, check_in) - break_minutes) / 60)


def overtime_hours(work_hours: float, expected_work_hours: float) -> float:
    if work_hours > expected_work_hours:
        return round2(work_hours - expected_work_hours)
    return 0.0


def status_for_hours(work_hours: float) -> AttendanceStatus:
    if work_hours < HALF_DAY_THRESHOLD_HOURS:
        return AttendanceStatus.HALF_DAY
    return AttendanceStatus.PRESENT


def checkout_metrics(
    *,
    check_in: datetime,
    check_out: datetime,
    break_minutes: int,
    work_date: date,
    shift_end_time: str,
    expected_work_hours: float,
) -> CheckOutMetrics:
    hours = worked_hours(check_in, check_out, break_minutes)
    return CheckOutMetrics(
        work_hours=hours,
        overtime_hours=overtime_hours(hours, expected_work_hours),
        early_departure_minutes=early_departure_minutes(check_out, work_date, shift_end_time),
        status=status_for_hours(hours),
    )
