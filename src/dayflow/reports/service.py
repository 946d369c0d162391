from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import Clock, now_local, round2
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceStats:
    employee_id: str
    start_date: date
    end_date: date
    total_days: int
    present: int
    absent: int
    half_day: int
    leave: int
    pending: int
    holiday: int
    weekend: int
    working_days: int
    total_work_hours: float
    total_overtime_hours: float
    average_work_hours: float
    late_arrivals: int
    early_departures: int
    attendance_rate: float

    def to_dict(self) -> dict:
        return {
            "employeeId": self.employee_id,
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "totalDays": self.total_days,
            "presentDays": self.present,
            "absentDays": self.absent,
            "halfDays": self.half_day,
            "leaveDays": self.leave,
            "pendingDays": self.pending,
            "holidayDays": self.holiday,
            "weekendDays": self.weekend,
            "workingDays": self.working_days,
            "totalWorkHours": self.total_work_hours,
            "totalOvertimeHours": self.total_overtime_hours,
            "averageWorkHours": self.average_work_hours,
            "lateArrivals": self.late_arrivals,
            "earlyDepartures": self.early_departures,
            "attendanceRate": self.attendance_rate,
        }


def current_month(today: date) -> tuple[date, date]:
    last_day = calendar.monthrange(today.year, today.month)[1]
    return today.replace(day=1), today.replace(day=last_day)


class AttendanceStatsService:
    def __init__(self, attendance: AttendanceRepository, *, clock: Optional[Clock] = None):
        self._attendance = attendance
        self._clock = clock or now_local

    def get_stats(
        self,
        employee_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> AttendanceStats:
        month_start, month_end = current_month(self._clock().date())
        start = start_date or month_start
        end = end_date or month_end

        records = self._attendance.list_for_employee(employee_id, start, end)

        counts = {s: 0 for s in AttendanceStatus}
        total_hours = 0.0
        total_overtime = 0.0
        late = 0
        early = 0

        for r in records:
            counts[r.status] += 1
            total_hours += r.work_hours or 0.0
            total_overtime += r.overtime_hours or 0.0
            if (r.late_arrival_minutes or 0) > 0:
                late += 1
            if (r.early_departure_minutes or 0) > 0:
                early += 1

        total_days = len(records)
        present = counts[AttendanceStatus.PRESENT]
        half_day = counts[AttendanceStatus.HALF_DAY]
        leave = counts[AttendanceStatus.LEAVE]
        working_days = total_days - leave

        if working_days > 0:
            average = round2(total_hours / working_days)
            rate = round2((present + half_day * 0.5) / working_days * 100)
        else:
            average = 0.0
            rate = 0.0

        return AttendanceStats(
            employee_id=employee_id,
            start_date=start,
            end_date=end,
            total_days=total_days,
            present=present,
            absent=counts[AttendanceStatus.ABSENT],
            half_day=half_day,
            leave=leave,
            pending=counts[AttendanceStatus.PENDING],
            holiday=counts[AttendanceStatus.HOLIDAY],
            weekend=counts[AttendanceStatus.WEEKEND],
            working_days=working_days,
            total_work_hours=round2(total_hours),
            total_overtime_hours=round2(total_overtime),
            average_work_hours=average,
            late_arrivals=late,
            early_departures=early,
            attendance_rate=rate,
        )
