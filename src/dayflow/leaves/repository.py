from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import ApprovedLeave


class LeaveRepository(Protocol):
    def find_approved_covering(self, work_date: date) -> Sequence[ApprovedLeave]:
        """Approved leaves whose [start_date, end_date] contains ``work_date``."""

        raise NotImplementedError
