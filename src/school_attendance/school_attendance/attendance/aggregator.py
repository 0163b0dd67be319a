from __future__ import annotations

from typing import Iterable

from ..core.constants import PERCENTAGE_DECIMALS
from ..core.enums import AttendanceStatus
from .model import DenseAttendanceEntry, PresenceStatistic


def aggregate(entries: Iterable[DenseAttendanceEntry]) -> PresenceStatistic:
    """Presence over valid days; HOLIDAY entries are left out of the denominator."""
    present = 0
    valid = 0
    for e in entries:
        if e.status == AttendanceStatus.HOLIDAY:
            continue
        valid += 1
        if e.status == AttendanceStatus.PRESENT:
            present += 1

    percentage = round(present / valid * 100, PERCENTAGE_DECIMALS) if valid else 0.0
    return PresenceStatistic(present_count=present, valid_day_count=valid, percentage_present=percentage)


def aggregate_by_student(entries: Iterable[DenseAttendanceEntry]) -> dict[int, PresenceStatistic]:
    grouped: dict[int, list[DenseAttendanceEntry]] = {}
    for e in entries:
        grouped.setdefault(e.student.student_id, []).append(e)
    return {student_id: aggregate(items) for student_id, items in grouped.items()}
