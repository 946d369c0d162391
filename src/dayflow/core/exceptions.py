from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations.

    Each subclass carries a stable ``code`` and the HTTP status the controller
    answers with, so callers can present the failure verbatim.
    """

    code = "DOMAIN_ERROR"
    http_status = 400
    default_message = "Business rule violated"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    code = "VALIDATION_ERROR"
    default_message = "Invalid input"


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    code = "FORBIDDEN"
    http_status = 403
    default_message = "You do not have permission to perform this action"


class WeekendNotAllowedError(DomainError):
    code = "WEEKEND_NOT_ALLOWED"
    default_message = "Check-in is not allowed on weekends"


class AlreadyCheckedInError(DomainError):
    code = "ALREADY_CHECKED_IN"
    http_status = 409
    default_message = "Already checked in today"


class AlreadyCheckedOutError(DomainError):
    code = "ALREADY_CHECKED_OUT"
    http_status = 409
    default_message = "Already checked out today"


class NoCheckInFoundError(DomainError):
    code = "NO_CHECK_IN_FOUND"
    default_message = "No check-in found for today"


class CheckInRequiredError(DomainError):
    code = "CHECK_IN_REQUIRED"
    default_message = "You must check in first"


class BreakAlreadyActiveError(DomainError):
    code = "BREAK_ALREADY_ACTIVE"
    http_status = 409
    default_message = "A break is already in progress"


class NoActiveBreakError(DomainError):
    code = "NO_ACTIVE_BREAK"
    default_message = "No active break found"


class MissingFieldError(ValidationError):
    code = "MISSING_FIELD"
    default_message = "A required field is missing"


class InvalidTimeRangeError(ValidationError):
    """Check-out earlier than check-in. Never clamped to zero."""

    code = "INVALID_TIME_RANGE"
    default_message = "Check-out time cannot be earlier than check-in time"


class RecordNotFoundError(DomainError):
    code = "RECORD_NOT_FOUND"
    http_status = 404
    default_message = "Attendance record not found"


class NotARegularizationRequestError(DomainError):
    code = "NOT_A_REGULARIZATION_REQUEST"
    default_message = "This record is not a regularization request"


class InvalidRegularizationActionError(ValidationError):
    code = "INVALID_REGULARIZATION_ACTION"
    default_message = "Action must be APPROVED or REJECTED"


class DuplicateRecordError(DomainError):
    """The store already holds a record for this (employee, date) pair."""

    code = "DUPLICATE_RECORD"
    http_status = 409
    default_message = "Attendance record already exists for this day"
