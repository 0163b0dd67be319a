from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for access control."""

    ADMIN = "ADMIN"
    TEACHER = "TEACHER"
    PARENT = "PARENT"


class AttendanceStatus(str, Enum):
    """Attendance status as stored in the database and sent on the wire."""

    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    HOLIDAY = "HOLIDAY"


class ReconcileOrder(str, Enum):
    """Iteration order of the dense (student x date) grid."""

    DATE_MAJOR = "DATE_MAJOR"
    STUDENT_MAJOR = "STUDENT_MAJOR"
