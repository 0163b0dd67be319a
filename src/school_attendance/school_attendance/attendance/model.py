from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..classes.model import Student
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one persisted attendance mark.

    Unique per (class_id, student_id, attendance_date).
    """

    attendance_id: int
    class_id: int
    student_id: int
    attendance_date: date
    status: AttendanceStatus
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class DenseAttendanceEntry:
    """One cell of the reconciled (student x date) grid."""

    student: Student
    attendance_date: date
    status: AttendanceStatus
    recorded: bool = False


@dataclass(frozen=True)
class PresenceStatistic:
    present_count: int
    valid_day_count: int
    percentage_present: float


@dataclass(frozen=True)
class NewAttendance:
    """Staged insert produced by the batch upsert diff."""

    class_id: int
    student_id: int
    attendance_date: date
    status: AttendanceStatus


@dataclass(frozen=True)
class StatusUpdate:
    """Staged update of an existing record's status."""

    attendance_id: int
    student_id: int
    status: AttendanceStatus
