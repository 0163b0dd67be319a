from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, NewAttendance, StatusUpdate


class AttendanceRepository(Protocol):
    def list_for_class(
        self,
        class_id: int,
        *,
        start_date: date,
        end_date: date,
        student_id: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        """Records of a class with ``start_date <= date <= end_date``."""

        raise NotImplementedError

    def get_for_student_and_date(
        self, *, class_id: int, student_id: int, attendance_date: date
    ) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create_record(
        self,
        *,
        class_id: int,
        student_id: int,
        attendance_date: date,
        status: AttendanceStatus,
    ) -> int:
        raise NotImplementedError

    def update_status(self, *, attendance_id: int, status: AttendanceStatus) -> bool:
        raise NotImplementedError

    def save_changes(
        self,
        *,
        updates: Sequence[StatusUpdate],
        creates: Sequence[NewAttendance],
    ) -> None:
        """Apply all updates, then all creates, in one transaction."""

        raise NotImplementedError
