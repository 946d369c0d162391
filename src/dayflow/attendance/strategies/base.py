from __future__ import annotations

from abc import ABC, abstractmethod

from ..model import AttendanceRecord


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how a transition is reported to the employee."""

    @abstractmethod
    def describe(self, record: AttendanceRecord) -> str:
        raise NotImplementedError
