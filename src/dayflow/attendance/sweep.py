from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common.datetime_utils import Clock, is_weekend, now_local
from ..core.constants import AUTO_ABSENT_NOTE, LEAVE_NOTE_TEMPLATE
from ..core.enums import AttendanceStatus
from ..core.exceptions import DuplicateRecordError
from ..employees.repository import EmployeeDirectory
from ..leaves.model import ApprovedLeave
from ..leaves.repository import LeaveRepository
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SweepResult:
    work_date: date
    marked: int = 0
    absent: int = 0
    on_leave: int = 0
    skipped: bool = False
    reason: Optional[str] = None

    def to_dict(self) -> dict:
        out = {
            "date": self.work_date.isoformat(),
            "marked": self.marked,
            "absent": self.absent,
            "onLeave": self.on_leave,
        }
        if self.skipped:
            out.update({"skipped": True, "reason": self.reason})
        return out


class AbsenteeSweepService:
    """Batch job: give every employee without a record for the day an ABSENT or LEAVE record.

    Employees who already have a record (checked in, regularized, or marked by an
    earlier sweep) are never touched, so running the sweep twice is harmless.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeDirectory,
        leaves: LeaveRepository,
        *,
        clock: Clock | None = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._leaves = leaves
        self._clock = clock or now_local

    def mark_absentees(self, target_date: date | None = None) -> SweepResult:
        work_date = target_date or self._clock().date()

        if is_weekend(work_date):
            logger.info("Absentee sweep skipped for %s (weekend)", work_date)
            return SweepResult(work_date=work_date, skipped=True, reason="weekend")

        roster = self._employees.list_active_employee_ids()
        recorded = {r.employee_id for r in self._attendance.list_for_date(work_date)}

        leave_by_employee: dict[str, ApprovedLeave] = {}
        for leave in self._leaves.find_approved_covering(work_date):
            leave_by_employee.setdefault(leave.employee_id, leave)

        absent = 0
        on_leave = 0

        for employee_id in roster:
            if employee_id in recorded or employee_id in leave_by_employee:
                continue
            record = AttendanceRecord(
                employee_id=employee_id,
                work_date=work_date,
                status=AttendanceStatus.ABSENT,
                notes=AUTO_ABSENT_NOTE,
            )
            if self._insert(record):
                absent += 1

        for employee_id, leave in leave_by_employee.items():
            if employee_id in recorded:
                continue
            record = AttendanceRecord(
                employee_id=employee_id,
                work_date=work_date,
                status=AttendanceStatus.LEAVE,
                notes=LEAVE_NOTE_TEMPLATE.format(leave_type=leave.leave_type.value),
            )
            if self._insert(record):
                on_leave += 1

        result = SweepResult(work_date=work_date, marked=absent + on_leave, absent=absent, on_leave=on_leave)
        logger.info(
            "Absentee sweep %s: marked=%s absent=%s on_leave=%s",
            work_date,
            result.marked,
            result.absent,
            result.on_leave,
        )
        return result

    def _insert(self, record: AttendanceRecord) -> bool:
        try:
            self._attendance.create(record)
        except DuplicateRecordError:
            # A concurrent check-in or sweep got there first; not fatal.
            logger.warning(
                "Absentee sweep: record already exists for employee=%s date=%s",
                record.employee_id,
                record.work_date,
            )
            return False
        return True
