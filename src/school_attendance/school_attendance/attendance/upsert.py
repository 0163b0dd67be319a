from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, NewAttendance, StatusUpdate


@dataclass(frozen=True)
class DesiredAttendance:
    student_id: int
    status: AttendanceStatus


@dataclass(frozen=True)
class ChangePlan:
    updates: tuple[StatusUpdate, ...]
    creates: tuple[NewAttendance, ...]

    @property
    def is_empty(self) -> bool:
        return not self.updates and not self.creates


def collapse_duplicates(entries: Iterable[DesiredAttendance]) -> list[DesiredAttendance]:
    """Keep one entry per student: first position, last status."""
    latest: dict[int, DesiredAttendance] = {}
    for e in entries:
        latest[e.student_id] = e
    return list(latest.values())


def plan_changes(
    *,
    class_id: int,
    attendance_date: date,
    existing: Sequence[AttendanceRecord],
    desired: Sequence[DesiredAttendance],
) -> ChangePlan:
    """Diff desired statuses against stored records for one (class, date).

    Missing record -> create; different status -> update; same status -> nothing.
    """
    by_student = {r.student_id: r for r in existing if r.attendance_date == attendance_date}

    updates: list[StatusUpdate] = []
    creates: list[NewAttendance] = []
    for want in desired:
        current = by_student.get(want.student_id)
        if current is None:
            creates.append(
                NewAttendance(
                    class_id=class_id,
                    student_id=want.student_id,
                    attendance_date=attendance_date,
                    status=want.status,
                )
            )
        elif current.status != want.status:
            updates.append(StatusUpdate(attendance_id=current.attendance_id, student_id=want.student_id, status=want.status))

    return ChangePlan(updates=tuple(updates), creates=tuple(creates))
