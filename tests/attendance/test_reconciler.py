from datetime import date

from src.school_attendance.school_attendance.attendance.model import AttendanceRecord
from src.school_attendance.school_attendance.attendance.reconciler import (
    index_records,
    reconcile,
    sort_by_student_name,
)
from src.school_attendance.school_attendance.classes.model import Student
from src.school_attendance.school_attendance.core.enums import AttendanceStatus, ReconcileOrder

S1 = Student(student_id=1, nisn="01", name="Citra")
S2 = Student(student_id=2, nisn="02", name="Ahmad")
S3 = Student(student_id=3, nisn="03", name="Bella")

D1 = date(2024, 2, 5)
D2 = date(2024, 2, 6)
D3 = date(2024, 2, 7)


def _record(attendance_id, student_id, day, status, class_id=1):
    return AttendanceRecord(
        attendance_id=attendance_id,
        class_id=class_id,
        student_id=student_id,
        attendance_date=day,
        status=status,
    )


def test_no_records_fills_every_student_with_absent():
    entries = reconcile([S1, S2, S3], [D1], [])

    assert len(entries) == 3
    assert all(e.status == AttendanceStatus.ABSENT for e in entries)
    assert not any(e.recorded for e in entries)


def test_grid_is_dense_and_has_no_duplicates():
    records = [
        _record(1, 1, D1, AttendanceStatus.PRESENT),
        _record(2, 2, D2, AttendanceStatus.HOLIDAY),
        # outside the expected window, must be ignored
        _record(3, 1, date(2024, 3, 1), AttendanceStatus.PRESENT),
        _record(4, 99, D1, AttendanceStatus.PRESENT),
    ]

    entries = reconcile([S1, S2, S3], [D1, D2, D3], records)

    assert len(entries) == 9
    assert len({(e.student.student_id, e.attendance_date) for e in entries}) == 9


def test_stored_status_is_kept_verbatim():
    lookup = index_records(
        [
            _record(1, 1, D1, AttendanceStatus.PRESENT),
            _record(2, 2, D1, AttendanceStatus.HOLIDAY),
        ]
    )

    entries = {e.student.student_id: e for e in reconcile([S1, S2, S3], [D1], lookup)}

    assert entries[1].status == AttendanceStatus.PRESENT and entries[1].recorded
    assert entries[2].status == AttendanceStatus.HOLIDAY and entries[2].recorded
    assert entries[3].status == AttendanceStatus.ABSENT and not entries[3].recorded


def test_student_major_and_date_major_orders():
    student_major = reconcile([S1, S2], [D1, D2], [], order=ReconcileOrder.STUDENT_MAJOR)
    date_major = reconcile([S1, S2], [D1, D2], [], order=ReconcileOrder.DATE_MAJOR)

    assert [(e.student.student_id, e.attendance_date) for e in student_major] == [(1, D1), (1, D2), (2, D1), (2, D2)]
    assert [(e.student.student_id, e.attendance_date) for e in date_major] == [(1, D1), (2, D1), (1, D2), (2, D2)]


def test_duplicate_expected_students_yield_one_row():
    entries = reconcile([S1, S1], [D1, D1], [])

    assert len(entries) == 1


def test_sort_by_student_name_breaks_ties_by_id():
    twin = Student(student_id=0, nisn="00", name="Bella")

    ordered = sort_by_student_name([S1, S3, S2, twin])

    assert [s.student_id for s in ordered] == [2, 0, 3, 1]
