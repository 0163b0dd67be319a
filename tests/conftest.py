from __future__ import annotations

from datetime import date

import pytest

from src.school_attendance.school_attendance.attendance.model import AttendanceRecord
from src.school_attendance.school_attendance.attendance.service import AttendanceService
from src.school_attendance.school_attendance.classes.model import ClassContext, Student, TeacherRef
from src.school_attendance.school_attendance.classes.roster import RosterResolver
from src.school_attendance.school_attendance.core.enums import AttendanceStatus


class FakeClassRepo:
    def __init__(self, classes):
        self._classes = {c.class_id: c for c in classes}

    def get_by_id(self, class_id: int):
        return self._classes.get(class_id)


class FakeStudentRepo:
    def __init__(self, students):
        self._students = {s.student_id: s for s in students}

    def get_by_id(self, student_id: int):
        return self._students.get(student_id)


class FakeAttendanceRepo:
    """Keeps records keyed by (class_id, student_id, date) and counts writes."""

    def __init__(self):
        self.records: dict[tuple[int, int, date], AttendanceRecord] = {}
        self.writes = 0
        self.save_calls = 0
        self.list_calls: list[dict] = []
        self._next_id = 1

    def add(self, class_id: int, student_id: int, day: date, status: AttendanceStatus) -> AttendanceRecord:
        record = AttendanceRecord(
            attendance_id=self._next_id,
            class_id=class_id,
            student_id=student_id,
            attendance_date=day,
            status=status,
        )
        self._next_id += 1
        self.records[(class_id, student_id, day)] = record
        return record

    def status_of(self, class_id: int, student_id: int, day: date):
        record = self.records.get((class_id, student_id, day))
        return record.status if record else None

    def list_for_class(self, class_id, *, start_date, end_date, student_id=None):
        self.list_calls.append(
            {"class_id": class_id, "start_date": start_date, "end_date": end_date, "student_id": student_id}
        )
        rows = [
            r
            for r in self.records.values()
            if r.class_id == class_id
            and start_date <= r.attendance_date <= end_date
            and (student_id is None or r.student_id == student_id)
        ]
        return sorted(rows, key=lambda r: (r.attendance_date, r.student_id))

    def get_for_student_and_date(self, *, class_id, student_id, attendance_date):
        return self.records.get((class_id, student_id, attendance_date))

    def create_record(self, *, class_id, student_id, attendance_date, status):
        self.writes += 1
        return self.add(class_id, student_id, attendance_date, status).attendance_id

    def update_status(self, *, attendance_id, status):
        for key, r in self.records.items():
            if r.attendance_id == attendance_id:
                self.writes += 1
                self.records[key] = AttendanceRecord(
                    attendance_id=r.attendance_id,
                    class_id=r.class_id,
                    student_id=r.student_id,
                    attendance_date=r.attendance_date,
                    status=status,
                )
                return True
        return False

    def save_changes(self, *, updates, creates):
        self.save_calls += 1
        for u in updates:
            self.update_status(attendance_id=u.attendance_id, status=u.status)
        for c in creates:
            self.create_record(
                class_id=c.class_id, student_id=c.student_id, attendance_date=c.attendance_date, status=c.status
            )


CITRA = Student(student_id=1, nisn="0081234501", name="Citra", gender="FEMALE")
AHMAD = Student(student_id=2, nisn="0081234502", name="Ahmad", gender="MALE")
BELLA = Student(student_id=3, nisn="0081234503", name="Bella", gender="FEMALE")
OUTSIDER = Student(student_id=9, nisn="0081234509", name="Zaki", gender="MALE")

CLASS_7A = ClassContext(
    class_id=1,
    name="7A",
    teacher=TeacherRef(teacher_id=5, nip="198703122010011002", name="Budi Santoso"),
    students=(CITRA, AHMAD, BELLA),
)
EMPTY_CLASS = ClassContext(class_id=2, name="7B", teacher=None, students=())


@pytest.fixture
def attendance_repo():
    return FakeAttendanceRepo()


@pytest.fixture
def class_repo():
    return FakeClassRepo([CLASS_7A, EMPTY_CLASS])


@pytest.fixture
def student_repo():
    return FakeStudentRepo([CITRA, AHMAD, BELLA, OUTSIDER])


@pytest.fixture
def roster(class_repo, student_repo):
    return RosterResolver(class_repo, student_repo)


@pytest.fixture
def service(attendance_repo, roster):
    return AttendanceService(attendance_repo, roster)


@pytest.fixture
def class_7a():
    return CLASS_7A


@pytest.fixture
def outsider():
    return OUTSIDER
