from __future__ import annotations

import logging
from datetime import date, datetime
from functools import wraps
from typing import Any, Optional

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import parse_iso_date, parse_iso_datetime
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import AuthorizationError, DomainError, ValidationError
from ..container import Container
from .model import GeoPoint

logger = logging.getLogger(__name__)

_ADMIN_ROLES = {Role.ADMIN.value, Role.HR.value}


def register(app: Flask, container: Container) -> None:
    tz_name = app.config.get("ATTENDANCE_TIMEZONE", "Asia/Kolkata")

    def _ok(data: Any, message: str = "", status: int = 200):
        return jsonify({"success": True, "message": message, "data": data}), status

    def _error(code: str, message: str, status: int):
        return jsonify({"success": False, "error": {"code": code, "message": message}}), status

    def json_errors(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except DomainError as e:
                return _error(e.code, str(e), e.http_status)
            except Exception:
                logger.exception("Unhandled error in %s", request.path)
                return _error("INTERNAL_ERROR", "Internal server error", 500)

        return wrapper

    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return _error("UNAUTHORIZED", "Authentication required", 401)
            return view(*args, **kwargs)

        return wrapper

    def admin_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return _error("UNAUTHORIZED", "Authentication required", 401)
            if session.get("role") not in _ADMIN_ROLES:
                err = AuthorizationError()
                return _error(err.code, str(err), err.http_status)
            return view(*args, **kwargs)

        return wrapper

    def _current_employee() -> str:
        return str(session["user_id"])

    def _body() -> dict:
        body = request.get_json(silent=True)
        if body is None:
            return {}
        if not isinstance(body, dict):
            raise ValidationError("Request body must be a JSON object")
        return body

    def _location(body: dict) -> Optional[GeoPoint]:
        try:
            return GeoPoint.from_dict(body.get("location"))
        except (KeyError, TypeError, ValueError):
            raise ValidationError("Invalid location") from None

    def _datetime(value: Optional[str], field: str) -> Optional[datetime]:
        if not value:
            return None
        try:
            return parse_iso_datetime(str(value), tz_name)
        except ValueError:
            raise ValidationError(f"Invalid {field}") from None

    def _date(value: Optional[str], field: str) -> Optional[date]:
        if not value:
            return None
        try:
            return parse_iso_date(str(value))
        except ValueError:
            raise ValidationError(f"Invalid {field}, expected YYYY-MM-DD") from None

    # ----- Employee self-service -----

    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="attendance_check_in")
    @login_required
    @json_errors
    def check_in():
        result = container.attendance_service.check_in(_current_employee(), location=_location(_body()))
        return _ok(result.record.to_dict(), result.message, 201)

    @app.route("/api/attendance/check-out", methods=["POST"], endpoint="attendance_check_out")
    @login_required
    @json_errors
    def check_out():
        result = container.attendance_service.check_out(_current_employee(), location=_location(_body()))
        return _ok(result.record.to_dict(), result.message)

    @app.route("/api/attendance/break/start", methods=["POST"], endpoint="attendance_break_start")
    @login_required
    @json_errors
    def break_start():
        result = container.attendance_service.start_break(_current_employee())
        return _ok(result.record.to_dict(), result.message)

    @app.route("/api/attendance/break/end", methods=["POST"], endpoint="attendance_break_end")
    @login_required
    @json_errors
    def break_end():
        result = container.attendance_service.end_break(_current_employee())
        return _ok(result.record.to_dict(), result.message)

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @login_required
    @json_errors
    def today():
        record = container.attendance_service.get_today(_current_employee())
        state = record.day_state.value if record else "NOT_STARTED"
        return _ok({"record": record.to_dict() if record else None, "state": state})

    @app.route("/api/attendance/regularize", methods=["POST"], endpoint="attendance_regularize")
    @login_required
    @json_errors
    def regularize():
        body = _body()
        result = container.attendance_service.request_regularization(
            _current_employee(),
            work_date=_date(body.get("date"), "date"),
            reason=body.get("reason"),
            check_in=_datetime(body.get("checkIn"), "checkIn"),
            check_out=_datetime(body.get("checkOut"), "checkOut"),
        )
        return _ok(result.record.to_dict(), result.message, 201)

    @app.route("/api/attendance/stats", methods=["GET"], endpoint="attendance_stats")
    @login_required
    @json_errors
    def stats():
        employee_id = request.args.get("employeeId") or _current_employee()
        # Only HR/Admin may look at someone else's numbers.
        if employee_id != _current_employee() and session.get("role") not in _ADMIN_ROLES:
            raise AuthorizationError()

        result = container.stats_service.get_stats(
            employee_id,
            start_date=_date(request.args.get("startDate"), "startDate"),
            end_date=_date(request.args.get("endDate"), "endDate"),
        )
        return _ok(result.to_dict())

    # ----- HR / Admin -----

    @app.route("/api/attendance/<int:record_id>/regularize", methods=["PUT"], endpoint="attendance_process_regularization")
    @admin_required
    @json_errors
    def process_regularization(record_id: int):
        body = _body()
        result = container.attendance_service.process_regularization(
            record_id,
            action=str(body.get("action") or ""),
            approver_id=_current_employee(),
            notes=body.get("notes"),
        )
        return _ok(result.record.to_dict(), result.message)

    @app.route("/api/attendance/<int:record_id>", methods=["PUT"], endpoint="attendance_update")
    @admin_required
    @json_errors
    def update(record_id: int):
        body = _body()
        status = None
        if body.get("status"):
            try:
                status = AttendanceStatus(str(body["status"]).upper())
            except ValueError:
                raise ValidationError("Invalid status") from None

        result = container.attendance_service.update_record(
            record_id,
            status=status,
            check_in=_datetime(body.get("checkIn"), "checkIn"),
            check_out=_datetime(body.get("checkOut"), "checkOut"),
            notes=body.get("notes"),
        )
        return _ok(result.record.to_dict(), result.message)

    @app.route("/api/attendance/mark-absentees", methods=["POST"], endpoint="attendance_mark_absentees")
    @admin_required
    @json_errors
    def mark_absentees():
        target = _date(_body().get("date") or request.args.get("date"), "date")
        result = container.sweep_service.mark_absentees(target)
        if result.skipped:
            message = f"Skipped ({result.reason})"
        else:
            message = f"Marked {result.absent} absent and {result.on_leave} on leave"
        return _ok(result.to_dict(), message)
