from __future__ import annotations

from dataclasses import dataclass

from .model import AttendanceRecord
from .strategies.base import AttendanceStrategy
from .strategies.early_strategy import EarlyDepartureStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy, OnTimeStrategy
from .strategies.overtime_strategy import OvertimeStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_checkin(self, record: AttendanceRecord) -> AttendanceStrategy:
        if (record.late_arrival_minutes or 0) > 0:
            return LateStrategy()
        return OnTimeStrategy()

    def for_checkout(self, record: AttendanceRecord) -> AttendanceStrategy:
        # Early departure wins over overtime if both ever apply.
        if (record.early_departure_minutes or 0) > 0:
            return EarlyDepartureStrategy()
        if (record.overtime_hours or 0) > 0:
            return OvertimeStrategy()
        return NormalStrategy()
