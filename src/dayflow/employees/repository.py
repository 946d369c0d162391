from __future__ import annotations

from typing import Protocol, Sequence


class EmployeeDirectory(Protocol):
    """Read-only view of the employee roster owned by the HR module.

    Note (DIP): the absentee sweep depends on this interface, not on a concrete DB.
    """

    def list_active_employee_ids(self) -> Sequence[str]:
        raise NotImplementedError
