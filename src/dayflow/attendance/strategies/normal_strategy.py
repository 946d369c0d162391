from __future__ import annotations

from ..model import AttendanceRecord
from .base import AttendanceStrategy


class OnTimeStrategy(AttendanceStrategy):
    """Check-in at or before shift start."""

    def describe(self, record: AttendanceRecord) -> str:
        return "On time"


class NormalStrategy(AttendanceStrategy):
    """Check-out with neither early departure nor overtime."""

    def describe(self, record: AttendanceRecord) -> str:
        return f"Checked out successfully. Worked {record.work_hours:.2f} hours"
