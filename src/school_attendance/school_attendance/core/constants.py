"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from .enums import AttendanceStatus, Role

SCHOOL_DAYS_PER_WEEK = 6
DAYS_PER_WEEK = 7
DEFAULT_ATTENDANCE_STATUS = AttendanceStatus.ABSENT
PERCENTAGE_DECIMALS = 2

ATTENDANCE_ROLES = frozenset({Role.ADMIN, Role.TEACHER})
