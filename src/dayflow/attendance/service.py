from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Optional, Union

from ..common.datetime_utils import Clock, is_weekend, minutes_between, now_local, round_half_up
from ..common.validators import require_non_empty, require_ordered, require_present
from ..core.enums import AttendanceStatus, RequestStatus
from ..core.exceptions import (
    AlreadyCheckedInError,
    AlreadyCheckedOutError,
    BreakAlreadyActiveError,
    CheckInRequiredError,
    DuplicateRecordError,
    InvalidRegularizationActionError,
    NoActiveBreakError,
    NoCheckInFoundError,
    NotARegularizationRequestError,
    RecordNotFoundError,
    WeekendNotAllowedError,
)
from ..shifts.model import ShiftPolicy
from .calculator import checkout_metrics, late_arrival_minutes
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, Break, GeoPoint
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttendanceResult:
    record: AttendanceRecord
    message: str


class AttendanceService:
    """Daily lifecycle: check-in, breaks, check-out and regularization.

    Every operation is one read-modify-write of a single record. All
    preconditions are checked before anything is written, and records are
    immutable, so a failed check leaves the store untouched.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        shift_policy: ShiftPolicy | None = None,
        clock: Clock | None = None,
        strategy_factory: AttendanceStrategyFactory | None = None,
    ):
        self._attendance = attendance
        self._policy = shift_policy or ShiftPolicy()
        self._clock = clock or now_local
        self._factory = strategy_factory or AttendanceStrategyFactory()

    def _persist(self, record: AttendanceRecord) -> AttendanceRecord:
        if record.record_id is None:
            return self._attendance.create(record)
        return self._attendance.save(record)

    def _new_record(self, employee_id: str, work_date: date) -> AttendanceRecord:
        return AttendanceRecord(
            employee_id=employee_id,
            work_date=work_date,
            shift_start_time=self._policy.start_time,
            shift_end_time=self._policy.end_time,
            expected_work_hours=self._policy.expected_work_hours,
        )

    # ----- Check-in / check-out -----

    def check_in(
        self,
        employee_id: str,
        *,
        now: datetime | None = None,
        location: GeoPoint | None = None,
    ) -> AttendanceResult:
        now = now or self._clock()
        today = now.date()

        if is_weekend(today):
            raise WeekendNotAllowedError()

        existing = self._attendance.get_for_employee_and_date(employee_id, today)
        if existing and existing.check_in is not None:
            raise AlreadyCheckedInError()

        base = existing or self._new_record(employee_id, today)
        record = replace(
            base,
            status=AttendanceStatus.PRESENT,
            check_in=now,
            late_arrival_minutes=late_arrival_minutes(now, today, self._policy.start_time),
            shift_start_time=self._policy.start_time,
            shift_end_time=self._policy.end_time,
            expected_work_hours=self._policy.expected_work_hours,
            location=replace(base.location, check_in=location) if location else base.location,
        )

        if record.record_id is None:
            try:
                record = self._attendance.create(record)
            except DuplicateRecordError as e:
                # Lost the race against a concurrent check-in for the same day.
                raise AlreadyCheckedInError() from e
        elif not self._attendance.save_if_not_checked_in(record):
            # Someone checked in on this (swept or pending) record since we read it.
            raise AlreadyCheckedInError()

        message = self._factory.for_checkin(record).describe(record)
        logger.info("Check-in employee=%s date=%s late=%s", employee_id, today, record.late_arrival_minutes)
        return AttendanceResult(record=record, message=message)

    def check_out(
        self,
        employee_id: str,
        *,
        now: datetime | None = None,
        location: GeoPoint | None = None,
    ) -> AttendanceResult:
        now = now or self._clock()
        today = now.date()

        record = self._attendance.get_for_employee_and_date(employee_id, today)
        if not record:
            raise NoCheckInFoundError()
        if record.check_out is not None:
            raise AlreadyCheckedOutError()
        if record.check_in is None:
            raise CheckInRequiredError()

        metrics = checkout_metrics(
            check_in=record.check_in,
            check_out=now,
            break_minutes=record.closed_break_minutes(),
            work_date=record.work_date,
            shift_end_time=record.shift_end_time,
            expected_work_hours=record.expected_work_hours,
        )
        record = self._attendance.save(
            replace(
                record,
                check_out=now,
                work_hours=metrics.work_hours,
                overtime_hours=metrics.overtime_hours,
                early_departure_minutes=metrics.early_departure_minutes,
                status=metrics.status,
                location=replace(record.location, check_out=location) if location else record.location,
            )
        )

        message = self._factory.for_checkout(record).describe(record)
        logger.info(
            "Check-out employee=%s date=%s hours=%s status=%s",
            employee_id,
            today,
            record.work_hours,
            record.status.value,
        )
        return AttendanceResult(record=record, message=message)

    # ----- Breaks -----

    def start_break(self, employee_id: str, *, now: datetime | None = None) -> AttendanceResult:
        now = now or self._clock()

        record = self._attendance.get_for_employee_and_date(employee_id, now.date())
        if not record or record.check_in is None:
            raise CheckInRequiredError()
        if record.check_out is not None:
            raise AlreadyCheckedOutError()
        if record.open_break() is not None:
            raise BreakAlreadyActiveError()

        record = self._attendance.save(replace(record, breaks=record.breaks + (Break(start_time=now),)))
        logger.info("Break started employee=%s", employee_id)
        return AttendanceResult(record=record, message="Break started")

    def end_break(self, employee_id: str, *, now: datetime | None = None) -> AttendanceResult:
        now = now or self._clock()

        record = self._attendance.get_for_employee_and_date(employee_id, now.date())
        active = record.open_break() if record else None
        if active is None:
            raise NoActiveBreakError()
        require_ordered(active.start_time, now)

        duration = round_half_up(minutes_between(now, active.start_time))
        closed = replace(active, end_time=now, duration_minutes=duration)
        breaks = tuple(closed if b is active else b for b in record.breaks)

        record = self._attendance.save(replace(record, breaks=breaks))
        logger.info("Break ended employee=%s minutes=%s", employee_id, duration)
        return AttendanceResult(record=record, message=f"Break ended after {duration} minutes")

    # ----- Regularization -----

    def request_regularization(
        self,
        employee_id: str,
        *,
        work_date: date | None,
        reason: str | None,
        check_in: datetime | None = None,
        check_out: datetime | None = None,
    ) -> AttendanceResult:
        require_present(work_date, "date")
        reason = require_non_empty(reason, "reason")

        existing = self._attendance.get_for_employee_and_date(employee_id, work_date)
        base = existing or self._new_record(employee_id, work_date)

        new_check_in = check_in or base.check_in
        new_check_out = check_out or base.check_out
        require_ordered(new_check_in, new_check_out)

        # Derived metrics are recomputed on approval, not here.
        record = self._persist(
            replace(
                base,
                check_in=new_check_in,
                check_out=new_check_out,
                is_regularized=True,
                regularization_reason=reason,
                regularization_status=RequestStatus.PENDING,
            )
        )

        logger.info("Regularization requested employee=%s date=%s", employee_id, work_date)
        return AttendanceResult(record=record, message="Regularization request submitted")

    def process_regularization(
        self,
        record_id: int,
        *,
        action: Union[RequestStatus, str],
        approver_id: str,
        notes: str | None = None,
        now: datetime | None = None,
    ) -> AttendanceResult:
        decision = self._parse_action(action)
        now = now or self._clock()

        record = self._attendance.get_by_id(int(record_id))
        if not record:
            raise RecordNotFoundError()
        if not record.is_regularized:
            raise NotARegularizationRequestError()

        if decision == RequestStatus.REJECTED:
            updated = replace(record, status=AttendanceStatus.ABSENT)
        else:
            updated = self._approved(record)

        updated = replace(
            updated,
            regularization_status=decision,
            approved_by=approver_id,
            approved_at=now,
            notes=notes if notes is not None else record.notes,
        )
        updated = self._attendance.save(updated)

        logger.info(
            "Regularization %s record=%s by=%s status=%s",
            decision.value,
            record_id,
            approver_id,
            updated.status.value,
        )
        return AttendanceResult(record=updated, message=f"Regularization {decision.value.lower()}")

    @staticmethod
    def _parse_action(action: Union[RequestStatus, str]) -> RequestStatus:
        try:
            decision = RequestStatus(str(getattr(action, "value", action)).upper())
        except ValueError:
            raise InvalidRegularizationActionError() from None
        if decision not in {RequestStatus.APPROVED, RequestStatus.REJECTED}:
            raise InvalidRegularizationActionError()
        return decision

    def _approved(self, record: AttendanceRecord) -> AttendanceRecord:
        if record.check_in is not None and record.check_out is not None:
            metrics = checkout_metrics(
                check_in=record.check_in,
                check_out=record.check_out,
                break_minutes=record.closed_break_minutes(),
                work_date=record.work_date,
                shift_end_time=record.shift_end_time,
                expected_work_hours=record.expected_work_hours,
            )
            return replace(
                record,
                status=metrics.status,
                work_hours=metrics.work_hours,
                overtime_hours=metrics.overtime_hours,
                early_departure_minutes=metrics.early_departure_minutes,
                late_arrival_minutes=late_arrival_minutes(record.check_in, record.work_date, record.shift_start_time),
            )

        if record.check_in is not None:
            return replace(record, status=AttendanceStatus.HALF_DAY)

        # No check-in time on the request.
        logger.warning("Approving regularization record=%s without check-in time; marking PRESENT", record.record_id)
        return replace(record, status=AttendanceStatus.PRESENT)

    # ----- Admin / read -----

    def update_record(
        self,
        record_id: int,
        *,
        status: AttendanceStatus | None = None,
        check_in: datetime | None = None,
        check_out: datetime | None = None,
        notes: str | None = None,
    ) -> AttendanceResult:
        """Admin/HR override. Stores the given values as-is; no recomputation."""

        record = self._attendance.get_by_id(int(record_id))
        if not record:
            raise RecordNotFoundError()

        new_check_in = check_in or record.check_in
        new_check_out = check_out or record.check_out
        require_ordered(new_check_in, new_check_out)

        record = self._attendance.save(
            replace(
                record,
                status=status or record.status,
                check_in=new_check_in,
                check_out=new_check_out,
                notes=notes if notes is not None else record.notes,
            )
        )
        logger.info("Attendance record=%s updated by admin", record_id)
        return AttendanceResult(record=record, message="Attendance updated")

    def get_today(self, employee_id: str, *, now: datetime | None = None) -> Optional[AttendanceRecord]:
        now = now or self._clock()
        return self._attendance.get_for_employee_and_date(employee_id, now.date())
