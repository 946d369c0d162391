from __future__ import annotations

from ..model import AttendanceRecord
from .base import AttendanceStrategy


class OvertimeStrategy(AttendanceStrategy):
    """Check-out after working more than the expected hours."""

    def describe(self, record: AttendanceRecord) -> str:
        return f"Checked out successfully. Overtime: {record.overtime_hours:.2f} hours"
