"""Sparse-to-dense reconciliation of attendance records.

Every (expected student, expected date) pair yields exactly one entry, no
matter how many persisted records exist for the window.
"""
from __future__ import annotations

from datetime import date
from typing import Iterable, Mapping, Sequence

from ..classes.model import Student
from ..core.constants import DEFAULT_ATTENDANCE_STATUS
from ..core.enums import ReconcileOrder
from .model import AttendanceRecord, DenseAttendanceEntry

RecordKey = tuple[int, date]


def index_records(records: Iterable[AttendanceRecord]) -> dict[RecordKey, AttendanceRecord]:
    return {(r.student_id, r.attendance_date): r for r in records}


def sort_by_student_name(students: Iterable[Student]) -> list[Student]:
    return sorted(students, key=lambda s: (s.name, s.student_id))


def _pairs(students: Sequence[Student], dates: Sequence[date], order: ReconcileOrder):
    if order == ReconcileOrder.STUDENT_MAJOR:
        for s in students:
            for d in dates:
                yield s, d
    else:
        for d in dates:
            for s in students:
                yield s, d


def _dedupe(items, key):
    seen = set()
    out = []
    for item in items:
        k = key(item)
        if k not in seen:
            seen.add(k)
            out.append(item)
    return out


def reconcile(
    students: Sequence[Student],
    dates: Sequence[date],
    records: Iterable[AttendanceRecord] | Mapping[RecordKey, AttendanceRecord],
    *,
    order: ReconcileOrder = ReconcileOrder.STUDENT_MAJOR,
) -> list[DenseAttendanceEntry]:
    lookup = records if isinstance(records, Mapping) else index_records(records)
    students = _dedupe(students, key=lambda s: s.student_id)
    dates = _dedupe(dates, key=lambda d: d)

    entries: list[DenseAttendanceEntry] = []
    for student, day in _pairs(students, dates, order):
        found = lookup.get((student.student_id, day))
        if found:
            entries.append(DenseAttendanceEntry(student=student, attendance_date=day, status=found.status, recorded=True))
        else:
            entries.append(DenseAttendanceEntry(student=student, attendance_date=day, status=DEFAULT_ATTENDANCE_STATUS))
    return entries
