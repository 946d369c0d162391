from __future__ import annotations

from ..model import AttendanceRecord
from .base import AttendanceStrategy


class LateStrategy(AttendanceStrategy):
    """Late check-in."""

    def describe(self, record: AttendanceRecord) -> str:
        return f"You are {record.late_arrival_minutes} minutes late"
