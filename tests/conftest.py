from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime, timedelta
from typing import Optional

import pytest

from dayflow.attendance.model import AttendanceRecord
from dayflow.attendance.service import AttendanceService
from dayflow.attendance.sweep import AbsenteeSweepService
from dayflow.core.exceptions import DuplicateRecordError, RecordNotFoundError
from dayflow.leaves.model import ApprovedLeave
from dayflow.reports.service import AttendanceStatsService


class InMemoryAttendance:
    """Dict-backed store that enforces the (employee_id, work_date) unique key like the real table."""

    def __init__(self):
        self._by_id: dict[int, AttendanceRecord] = {}
        self._id_by_key: dict[tuple[str, date], int] = {}
        self._next_id = 0

    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        return self._by_id.get(record_id)

    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        rid = self._id_by_key.get((employee_id, work_date))
        return self._by_id.get(rid) if rid is not None else None

    def create(self, record: AttendanceRecord) -> AttendanceRecord:
        key = (record.employee_id, record.work_date)
        if key in self._id_by_key:
            raise DuplicateRecordError()
        self._next_id += 1
        stored = replace(record, record_id=self._next_id)
        self._by_id[self._next_id] = stored
        self._id_by_key[key] = self._next_id
        return stored

    def save(self, record: AttendanceRecord) -> AttendanceRecord:
        if record.record_id not in self._by_id:
            raise RecordNotFoundError()
        self._by_id[record.record_id] = record
        return record

    def save_if_not_checked_in(self, record: AttendanceRecord) -> bool:
        stored = self._by_id.get(record.record_id)
        if stored is None or stored.check_in is not None:
            return False
        self._by_id[record.record_id] = record
        return True

    def list_for_date(self, work_date: date):
        return [r for r in self._by_id.values() if r.work_date == work_date]

    def list_for_employee(self, employee_id: str, start_date: date, end_date: date):
        items = [
            r for r in self._by_id.values() if r.employee_id == employee_id and start_date <= r.work_date <= end_date
        ]
        items.sort(key=lambda r: r.work_date)
        return items

    def all(self) -> list[AttendanceRecord]:
        return list(self._by_id.values())


class StaleReadAttendance(InMemoryAttendance):
    """Simulates losing a check-in race: the first lookup returns a view older than the stored row.

    By default the stale view is "no row yet". With ``stale_fields`` it is the stored
    row with those fields rolled back (e.g. ``check_in=None``).
    """

    def __init__(self, winner: AttendanceRecord, *, stale_fields: Optional[dict] = None):
        super().__init__()
        stored = self.create(winner)
        self._stale = replace(stored, **stale_fields) if stale_fields is not None else None
        self._stale_reads = 1

    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        if self._stale_reads:
            self._stale_reads -= 1
            return self._stale
        return super().get_for_employee_and_date(employee_id, work_date)


@dataclass
class InMemoryEmployees:
    employee_ids: list[str] = field(default_factory=list)

    def list_active_employee_ids(self) -> list[str]:
        return list(self.employee_ids)


@dataclass
class InMemoryLeaves:
    leaves: list[ApprovedLeave] = field(default_factory=list)

    def find_approved_covering(self, work_date: date) -> list[ApprovedLeave]:
        return [lv for lv in self.leaves if lv.covers(work_date)]


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def set(self, now: datetime) -> None:
        self.now = now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


# 2026-02-02 is a Monday.
MONDAY = date(2026, 2, 2)
SATURDAY = date(2026, 2, 7)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 2, 9, 0, 0)


@pytest.fixture
def clock(fixed_now) -> FakeClock:
    return FakeClock(fixed_now)


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def employees() -> InMemoryEmployees:
    return InMemoryEmployees(["E1", "E2", "E3"])


@pytest.fixture
def leaves() -> InMemoryLeaves:
    return InMemoryLeaves()


@pytest.fixture
def service(attendance_repo, clock) -> AttendanceService:
    return AttendanceService(attendance_repo, clock=clock)


@pytest.fixture
def sweep(attendance_repo, employees, leaves, clock) -> AbsenteeSweepService:
    return AbsenteeSweepService(attendance_repo, employees, leaves, clock=clock)


@pytest.fixture
def stats(attendance_repo, clock) -> AttendanceStatsService:
    return AttendanceStatsService(attendance_repo, clock=clock)


@pytest.fixture
def stale_read_repo_factory():
    return StaleReadAttendance
