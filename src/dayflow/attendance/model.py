from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional

from ..core.constants import DEFAULT_EXPECTED_WORK_HOURS, DEFAULT_SHIFT_END, DEFAULT_SHIFT_START
from ..core.enums import AttendanceStatus, DayState, RequestStatus


@dataclass(frozen=True)
class Break:
    start_time: datetime
    end_time: Optional[datetime] = None
    # Frozen when the break ends; never recomputed afterwards.
    duration_minutes: Optional[int] = None

    @property
    def is_open(self) -> bool:
        return self.end_time is None

    def to_dict(self) -> dict:
        return {
            "startTime": _iso(self.start_time),
            "endTime": _iso(self.end_time),
            "duration": self.duration_minutes,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Break":
        return cls(
            start_time=_parse_dt(data["startTime"]),
            end_time=_parse_dt(data.get("endTime")),
            duration_minutes=data.get("duration"),
        )


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float
    address: Optional[str] = None

    def to_dict(self) -> dict:
        out: dict[str, Any] = {"latitude": self.latitude, "longitude": self.longitude}
        if self.address:
            out["address"] = self.address
        return out

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> Optional["GeoPoint"]:
        if not data:
            return None
        return cls(
            latitude=float(data["latitude"]),
            longitude=float(data["longitude"]),
            address=data.get("address"),
        )


@dataclass(frozen=True)
class AttendanceLocation:
    check_in: Optional[GeoPoint] = None
    check_out: Optional[GeoPoint] = None

    def to_dict(self) -> dict:
        out = {}
        if self.check_in:
            out["checkIn"] = self.check_in.to_dict()
        if self.check_out:
            out["checkOut"] = self.check_out.to_dict()
        return out

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "AttendanceLocation":
        data = data or {}
        return cls(
            check_in=GeoPoint.from_dict(data.get("checkIn")),
            check_out=GeoPoint.from_dict(data.get("checkOut")),
        )


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one calendar day.

    ``(employee_id, work_date)`` is the natural key. ``work_date`` is a plain
    ``date`` so no time-of-day component can leak into lookups. Records are
    immutable; transitions build a new record with ``dataclasses.replace``.
    """

    employee_id: str
    work_date: date
    status: AttendanceStatus = AttendanceStatus.PENDING
    record_id: Optional[int] = None

    check_in: Optional[datetime] = None
    check_out: Optional[datetime] = None
    breaks: tuple[Break, ...] = ()

    work_hours: Optional[float] = None
    overtime_hours: Optional[float] = None
    late_arrival_minutes: Optional[int] = None
    early_departure_minutes: Optional[int] = None

    shift_start_time: str = DEFAULT_SHIFT_START
    shift_end_time: str = DEFAULT_SHIFT_END
    expected_work_hours: float = DEFAULT_EXPECTED_WORK_HOURS

    is_regularized: bool = False
    regularization_reason: Optional[str] = None
    regularization_status: Optional[RequestStatus] = None
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None

    notes: Optional[str] = None
    location: AttendanceLocation = field(default_factory=AttendanceLocation)

    def open_break(self) -> Optional[Break]:
        for b in self.breaks:
            if b.is_open:
                return b
        return None

    def closed_break_minutes(self) -> int:
        return sum(b.duration_minutes or 0 for b in self.breaks if not b.is_open)

    @property
    def day_state(self) -> DayState:
        if self.check_in is None:
            return DayState.NOT_STARTED
        if self.check_out is not None:
            return DayState.CHECKED_OUT
        if self.open_break() is not None:
            return DayState.ON_BREAK
        return DayState.CHECKED_IN

    def to_dict(self) -> dict:
        return {
            "id": self.record_id,
            "employeeId": self.employee_id,
            "date": self.work_date.isoformat(),
            "status": self.status.value,
            "checkIn": _iso(self.check_in),
            "checkOut": _iso(self.check_out),
            "breaks": [b.to_dict() for b in self.breaks],
            "workHours": self.work_hours,
            "overtimeHours": self.overtime_hours,
            "lateArrival": self.late_arrival_minutes,
            "earlyDeparture": self.early_departure_minutes,
            "shiftStartTime": self.shift_start_time,
            "shiftEndTime": self.shift_end_time,
            "expectedWorkHours": self.expected_work_hours,
            "isRegularized": self.is_regularized,
            "regularizationReason": self.regularization_reason,
            "regularizationStatus": self.regularization_status.value if self.regularization_status else None,
            "approvedBy": self.approved_by,
            "approvedAt": _iso(self.approved_at),
            "notes": self.notes,
            "location": self.location.to_dict(),
        }


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _parse_dt(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None
