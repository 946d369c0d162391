from __future__ import annotations

from ..model import AttendanceRecord
from .base import AttendanceStrategy


class EarlyDepartureStrategy(AttendanceStrategy):
    """Check-out before the snapshotted shift end."""

    def describe(self, record: AttendanceRecord) -> str:
        return f"You left {record.early_departure_minutes} minutes early"
