from __future__ import annotations

from datetime import date, datetime

import pytest

from dayflow.attendance.model import AttendanceRecord, GeoPoint
from dayflow.attendance.service import AttendanceService
from dayflow.core.enums import AttendanceStatus, DayState
from dayflow.core.exceptions import (
    AlreadyCheckedInError,
    AlreadyCheckedOutError,
    BreakAlreadyActiveError,
    CheckInRequiredError,
    NoActiveBreakError,
    NoCheckInFoundError,
    WeekendNotAllowedError,
)
from dayflow.shifts.model import ShiftPolicy

MONDAY = date(2026, 2, 2)
SATURDAY = date(2026, 2, 7)


def at(hour: int, minute: int = 0, second: int = 0, day: date = MONDAY) -> datetime:
    return datetime(day.year, day.month, day.day, hour, minute, second)


# ----- check-in -----


def test_on_time_checkin_snapshots_shift_policy(service, attendance_repo):
    result = service.check_in("E1", now=at(9, 0))

    rec = result.record
    assert result.message == "On time"
    assert rec.record_id is not None
    assert rec.status == AttendanceStatus.PRESENT
    assert rec.check_in == at(9, 0)
    assert rec.late_arrival_minutes == 0
    assert (rec.shift_start_time, rec.shift_end_time, rec.expected_work_hours) == ("09:00", "18:00", 9.0)
    assert attendance_repo.get_for_employee_and_date("E1", MONDAY) == rec


def test_late_checkin_reports_minutes(service):
    result = service.check_in("E1", now=at(9, 15))

    assert result.record.late_arrival_minutes == 15
    assert result.message == "You are 15 minutes late"


def test_late_minutes_round_half_up(service):
    assert service.check_in("E1", now=at(9, 0, 29)).record.late_arrival_minutes == 0
    assert service.check_in("E2", now=at(9, 0, 30)).record.late_arrival_minutes == 1


def test_checkin_uses_injected_clock(service, clock):
    clock.set(at(9, 20))

    result = service.check_in("E1")

    assert result.record.check_in == at(9, 20)
    assert result.record.work_date == MONDAY


def test_weekend_checkin_rejected_and_nothing_stored(service, attendance_repo):
    with pytest.raises(WeekendNotAllowedError):
        service.check_in("E1", now=at(9, 0, day=SATURDAY))

    assert attendance_repo.all() == []


def test_second_checkin_same_day_rejected(service):
    service.check_in("E1", now=at(9, 0))

    with pytest.raises(AlreadyCheckedInError):
        service.check_in("E1", now=at(10, 0))


def test_checkin_race_loser_sees_already_checked_in(stale_read_repo_factory, clock):
    winner = AttendanceRecord(employee_id="E1", work_date=MONDAY, status=AttendanceStatus.PRESENT, check_in=at(8, 59))
    repo = stale_read_repo_factory(winner)
    svc = AttendanceService(repo, clock=clock)

    with pytest.raises(AlreadyCheckedInError):
        svc.check_in("E1", now=at(9, 0))

    stored = repo.all()
    assert len(stored) == 1
    assert stored[0].check_in == at(8, 59)


def test_checkin_on_swept_record_loses_to_concurrent_checkin(stale_read_repo_factory, clock):
    # Row was ABSENT when read, but another check-in landed before our write.
    winner = AttendanceRecord(employee_id="E1", work_date=MONDAY, status=AttendanceStatus.PRESENT, check_in=at(9, 0))
    repo = stale_read_repo_factory(winner, stale_fields={"status": AttendanceStatus.ABSENT, "check_in": None})
    svc = AttendanceService(repo, clock=clock)

    with pytest.raises(AlreadyCheckedInError):
        svc.check_in("E1", now=at(9, 30))

    stored = repo.get_for_employee_and_date("E1", MONDAY)
    assert stored.check_in == at(9, 0)
    assert stored.late_arrival_minutes is None


def test_checkin_merges_location(service):
    loc = GeoPoint(latitude=12.97, longitude=77.59, address="HQ")

    rec = service.check_in("E1", now=at(9, 0), location=loc).record

    assert rec.location.check_in == loc
    assert rec.location.check_out is None


def test_checkin_fills_existing_record_without_checkin(service, attendance_repo):
    # e.g. a pending regularization for today created before the employee arrived
    service.request_regularization("E1", work_date=MONDAY, reason="forgot badge")

    rec = service.check_in("E1", now=at(9, 5)).record

    assert len(attendance_repo.all()) == 1
    assert rec.is_regularized is True
    assert rec.status == AttendanceStatus.PRESENT
    assert rec.late_arrival_minutes == 5


# ----- check-out -----


def test_full_day_with_early_departure(service):
    service.check_in("E1", now=at(9, 0))

    result = service.check_out("E1", now=at(17, 0))

    rec = result.record
    assert rec.work_hours == 8.0
    assert rec.overtime_hours == 0
    assert rec.early_departure_minutes == 60
    assert rec.status == AttendanceStatus.PRESENT
    assert result.message == "You left 60 minutes early"


def test_half_day_boundary(service):
    service.check_in("E1", now=at(9, 0))
    service.check_in("E2", now=at(9, 0))

    short = service.check_out("E1", now=at(12, 59)).record
    enough = service.check_out("E2", now=at(13, 0)).record

    assert short.work_hours == 3.98
    assert short.status == AttendanceStatus.HALF_DAY
    assert enough.work_hours == 4.0
    assert enough.status == AttendanceStatus.PRESENT


def test_overtime_message(service):
    service.check_in("E1", now=at(9, 0))

    result = service.check_out("E1", now=at(19, 0))

    assert result.record.work_hours == 10.0
    assert result.record.overtime_hours == 1.0
    assert result.record.early_departure_minutes == 0
    assert result.message == "Checked out successfully. Overtime: 1.00 hours"


def test_exact_shift_end_gives_generic_message(service):
    service.check_in("E1", now=at(9, 0))

    result = service.check_out("E1", now=at(18, 0))

    assert result.record.work_hours == 9.0
    assert result.record.overtime_hours == 0
    assert result.message == "Checked out successfully. Worked 9.00 hours"


def test_checkout_location_kept_alongside_checkin_location(service):
    service.check_in("E1", now=at(9, 0), location=GeoPoint(1.0, 2.0))

    rec = service.check_out("E1", now=at(18, 0), location=GeoPoint(3.0, 4.0)).record

    assert rec.location.check_in == GeoPoint(1.0, 2.0)
    assert rec.location.check_out == GeoPoint(3.0, 4.0)


def test_checkout_without_record(service):
    with pytest.raises(NoCheckInFoundError):
        service.check_out("E1", now=at(17, 0))


def test_checkout_twice(service):
    service.check_in("E1", now=at(9, 0))
    service.check_out("E1", now=at(17, 0))

    with pytest.raises(AlreadyCheckedOutError):
        service.check_out("E1", now=at(18, 0))


def test_checkout_on_record_without_checkin(service):
    service.request_regularization("E1", work_date=MONDAY, reason="sick in the morning")

    with pytest.raises(CheckInRequiredError):
        service.check_out("E1", now=at(17, 0))


def test_checkout_uses_snapshotted_shift_not_current_policy(attendance_repo, clock):
    late_shift = AttendanceService(
        attendance_repo,
        clock=clock,
        shift_policy=ShiftPolicy(start_time="10:00", end_time="19:00", expected_work_hours=8.0),
    )
    late_shift.check_in("E1", now=at(10, 5))

    # policy changed back to defaults before check-out
    default_shift = AttendanceService(attendance_repo, clock=clock)
    rec = default_shift.check_out("E1", now=at(19, 0)).record

    assert rec.shift_start_time == "10:00"
    assert rec.late_arrival_minutes == 5
    assert rec.early_departure_minutes == 0
    assert rec.work_hours == 8.92
    assert rec.overtime_hours == 0.92


# ----- breaks -----


def test_closed_breaks_are_excluded_from_work_hours(service):
    service.check_in("E1", now=at(9, 0))
    service.start_break("E1", now=at(12, 0))
    ended = service.end_break("E1", now=at(12, 30))

    rec = service.check_out("E1", now=at(18, 0)).record

    assert ended.message == "Break ended after 30 minutes"
    assert rec.breaks[0].duration_minutes == 30
    assert rec.work_hours == 8.5
    assert rec.early_departure_minutes == 0
    assert rec.overtime_hours == 0


def test_multiple_breaks_sum(service):
    service.check_in("E1", now=at(9, 0))
    service.start_break("E1", now=at(11, 0))
    service.end_break("E1", now=at(11, 15))
    service.start_break("E1", now=at(13, 0))
    service.end_break("E1", now=at(13, 45))

    rec = service.check_out("E1", now=at(18, 0)).record

    assert [b.duration_minutes for b in rec.breaks] == [15, 45]
    assert rec.work_hours == 8.0


def test_open_break_not_counted_at_checkout(service):
    service.check_in("E1", now=at(9, 0))
    service.start_break("E1", now=at(12, 0))

    rec = service.check_out("E1", now=at(17, 0)).record

    assert rec.work_hours == 8.0
    assert rec.breaks[0].end_time is None


def test_break_duration_rounds_half_up(service):
    service.check_in("E1", now=at(9, 0))
    service.start_break("E1", now=at(12, 0, 0))

    result = service.end_break("E1", now=at(12, 10, 30))

    assert result.record.breaks[0].duration_minutes == 11
    assert result.message == "Break ended after 11 minutes"


def test_start_break_requires_checkin(service):
    with pytest.raises(CheckInRequiredError):
        service.start_break("E1", now=at(12, 0))


def test_second_open_break_rejected(service):
    service.check_in("E1", now=at(9, 0))
    service.start_break("E1", now=at(12, 0))

    with pytest.raises(BreakAlreadyActiveError):
        service.start_break("E1", now=at(12, 5))


def test_break_after_checkout_rejected_without_side_effects(service, attendance_repo):
    service.check_in("E1", now=at(9, 0))
    service.check_out("E1", now=at(17, 0))
    before = attendance_repo.get_for_employee_and_date("E1", MONDAY)

    with pytest.raises(AlreadyCheckedOutError):
        service.start_break("E1", now=at(17, 30))

    assert attendance_repo.get_for_employee_and_date("E1", MONDAY) == before


def test_end_break_without_open_break(service):
    with pytest.raises(NoActiveBreakError):
        service.end_break("E1", now=at(12, 0))

    service.check_in("E1", now=at(9, 0))
    with pytest.raises(NoActiveBreakError):
        service.end_break("E1", now=at(12, 0))


# ----- today -----


def test_day_state_follows_lifecycle(service):
    assert service.get_today("E1", now=at(8, 0)) is None

    service.check_in("E1", now=at(9, 0))
    assert service.get_today("E1", now=at(9, 1)).day_state == DayState.CHECKED_IN

    service.start_break("E1", now=at(12, 0))
    assert service.get_today("E1", now=at(12, 1)).day_state == DayState.ON_BREAK

    service.end_break("E1", now=at(12, 30))
    service.check_out("E1", now=at(18, 0))
    assert service.get_today("E1", now=at(18, 1)).day_state == DayState.CHECKED_OUT
