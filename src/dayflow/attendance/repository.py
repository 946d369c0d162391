from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Store for attendance records, one per (employee_id, work_date).

    Implementations must enforce uniqueness of the pair themselves (a unique
    index, not a lookup before insert) and raise ``DuplicateRecordError`` from
    ``create`` when it is violated.
    """

    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create(self, record: AttendanceRecord) -> AttendanceRecord:
        """Insert a new record and return it with ``record_id`` assigned."""

        raise NotImplementedError

    def save(self, record: AttendanceRecord) -> AttendanceRecord:
        """Full replace of a previously loaded record."""

        raise NotImplementedError

    def save_if_not_checked_in(self, record: AttendanceRecord) -> bool:
        """Full replace that only applies while the stored row has no check-in.

        Returns False when another writer checked in first (or the row is gone).
        """

        raise NotImplementedError

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: str, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
