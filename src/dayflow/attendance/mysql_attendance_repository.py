from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..core.enums import AttendanceStatus, RequestStatus
from ..core.exceptions import DuplicateRecordError, RecordNotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchall, fetchone, is_duplicate_key, load_json
from .model import AttendanceLocation, AttendanceRecord, Break
from .repository import AttendanceRepository

_COLUMNS = """
    attendance_id, employee_id, work_date, status, check_in_time, check_out_time, breaks,
    work_hours, overtime_hours, late_arrival_minutes, early_departure_minutes,
    shift_start_time, shift_end_time, expected_work_hours,
    is_regularized, regularization_reason, regularization_status, approved_by, approved_at,
    note, location
"""


def _opt_float(value) -> Optional[float]:
    return float(value) if value is not None else None


def _opt_int(value) -> Optional[int]:
    return int(value) if value is not None else None


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=int(r["attendance_id"]),
        employee_id=str(r["employee_id"]),
        work_date=r["work_date"],
        status=AttendanceStatus(r["status"]),
        check_in=r.get("check_in_time"),
        check_out=r.get("check_out_time"),
        breaks=tuple(Break.from_dict(b) for b in load_json(r.get("breaks"), [])),
        work_hours=_opt_float(r.get("work_hours")),
        overtime_hours=_opt_float(r.get("overtime_hours")),
        late_arrival_minutes=_opt_int(r.get("late_arrival_minutes")),
        early_departure_minutes=_opt_int(r.get("early_departure_minutes")),
        shift_start_time=r["shift_start_time"],
        shift_end_time=r["shift_end_time"],
        expected_work_hours=float(r["expected_work_hours"]),
        is_regularized=bool(r.get("is_regularized")),
        regularization_reason=r.get("regularization_reason"),
        regularization_status=(
            RequestStatus(r["regularization_status"]) if r.get("regularization_status") else None
        ),
        approved_by=r.get("approved_by"),
        approved_at=r.get("approved_at"),
        notes=r.get("note"),
        location=AttendanceLocation.from_dict(load_json(r.get("location"), {})),
    )


_UPDATE_SET = """
    status=%s, check_in_time=%s, check_out_time=%s, breaks=%s,
    work_hours=%s, overtime_hours=%s, late_arrival_minutes=%s, early_departure_minutes=%s,
    shift_start_time=%s, shift_end_time=%s, expected_work_hours=%s,
    is_regularized=%s, regularization_reason=%s, regularization_status=%s,
    approved_by=%s, approved_at=%s,
    note=%s, location=%s
"""


def _record_params(rec: AttendanceRecord) -> tuple:
    return (
        rec.status.value,
        rec.check_in,
        rec.check_out,
        dump_json([b.to_dict() for b in rec.breaks]),
        rec.work_hours,
        rec.overtime_hours,
        rec.late_arrival_minutes,
        rec.early_departure_minutes,
        rec.shift_start_time,
        rec.shift_end_time,
        rec.expected_work_hours,
        1 if rec.is_regularized else 0,
        rec.regularization_reason,
        rec.regularization_status.value if rec.regularization_status else None,
        rec.approved_by,
        rec.approved_at,
        rec.notes,
        dump_json(rec.location.to_dict()),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE attendance_id=%s", (int(record_id),))
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE employee_id=%s AND work_date=%s",
                (employee_id, work_date),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def create(self, record: AttendanceRecord) -> AttendanceRecord:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(
                        employee_id, work_date,
                        status, check_in_time, check_out_time, breaks,
                        work_hours, overtime_hours, late_arrival_minutes, early_departure_minutes,
                        shift_start_time, shift_end_time, expected_work_hours,
                        is_regularized, regularization_reason, regularization_status, approved_by, approved_at,
                        note, location
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (record.employee_id, record.work_date) + _record_params(record),
                )
                record_id = int(cur.lastrowid)
        except IntegrityError as e:
            if is_duplicate_key(e):
                raise DuplicateRecordError() from e
            raise

        return replace(record, record_id=record_id)

    def save(self, record: AttendanceRecord) -> AttendanceRecord:
        if record.record_id is None:
            raise ValueError("save() needs a record loaded from the store")

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                UPDATE attendance_records
                SET {_UPDATE_SET}
                WHERE attendance_id=%s
                """,
                _record_params(record) + (int(record.record_id),),
            )
            # rowcount is 0 for a no-op UPDATE too, so confirm the row exists.
            if cur.rowcount == 0:
                cur.execute("SELECT 1 AS found FROM attendance_records WHERE attendance_id=%s", (int(record.record_id),))
                if not fetchone(cur):
                    raise RecordNotFoundError()
        return record

    def save_if_not_checked_in(self, record: AttendanceRecord) -> bool:
        if record.record_id is None:
            raise ValueError("save_if_not_checked_in() needs a record loaded from the store")

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                UPDATE attendance_records
                SET {_UPDATE_SET}
                WHERE attendance_id=%s AND check_in_time IS NULL
                """,
                _record_params(record) + (int(record.record_id),),
            )
            return cur.rowcount == 1

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE work_date=%s ORDER BY employee_id",
                (work_date,),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_for_employee(self, employee_id: str, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE employee_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date ASC
                """,
                (employee_id, start_date, end_date),
            )
            return [_row_to_record(r) for r in fetchall(cur)]
