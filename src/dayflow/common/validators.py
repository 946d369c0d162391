from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from ..core.exceptions import InvalidTimeRangeError, MissingFieldError, ValidationError


def require_present(value: Any, field_name: str) -> Any:
    if value is None:
        raise MissingFieldError(f"{field_name} is required")
    return value


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")
    if not value or not value.strip():
        raise MissingFieldError(f"{field_name} is required")
    return value.strip()


def require_ordered(check_in: Optional[datetime], check_out: Optional[datetime]) -> None:
    if check_in is not None and check_out is not None and check_out < check_in:
        raise InvalidTimeRangeError()
