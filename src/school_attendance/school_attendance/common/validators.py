from __future__ import annotations

from typing import Any, Optional

from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError


def require_present(value: Any, field_name: str) -> Any:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{field_name} not inputted!")
    return value


def require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a positive integer")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a positive integer")
    if number <= 0 or (isinstance(value, float) and value != number):
        raise ValidationError(f"{field_name} must be a positive integer")
    return number


def optional_int(value: Optional[str]) -> Optional[int]:
    """Query-string helper: empty -> None, digits -> int, otherwise ValidationError."""
    if value is None or str(value).strip() == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid number: {value!r}")


def parse_status(value: Any) -> AttendanceStatus:
    """Exact, case-sensitive match against the status enum."""
    require_present(value, "Attendance status")
    try:
        return AttendanceStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in AttendanceStatus)
        raise ValidationError(f"Invalid attendance status {value!r} (allowed: {allowed})")


def require_id(value: Any, field_name: str) -> int:
    """Required numeric identifier (class id, student id, ...)."""
    require_present(value, field_name)
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValidationError(f"{field_name} is not valid")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} is not valid")
