from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..core.enums import LeaveType


@dataclass(frozen=True)
class ApprovedLeave:
    """Read-model of an approved leave request, as the sweep needs it."""

    employee_id: str
    leave_type: LeaveType
    start_date: date
    end_date: date

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date
