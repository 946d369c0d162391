from __future__ import annotations

from datetime import date
from typing import Sequence

from ..core.enums import LeaveType, RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import ApprovedLeave
from .repository import LeaveRepository


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_approved_covering(self, work_date: date) -> Sequence[ApprovedLeave]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, leave_type, start_date, end_date
                FROM leave_requests
                WHERE status=%s AND start_date <= %s AND end_date >= %s
                ORDER BY employee_id, start_date
                """,
                (RequestStatus.APPROVED.value, work_date, work_date),
            )
            return [
                ApprovedLeave(
                    employee_id=str(r["employee_id"]),
                    leave_type=LeaveType(r["leave_type"]),
                    start_date=r["start_date"],
                    end_date=r["end_date"],
                )
                for r in fetchall(cur)
            ]
