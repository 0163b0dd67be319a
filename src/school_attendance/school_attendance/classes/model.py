from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class Student:
    """Domain entity: a student (no DB access code here)."""

    student_id: int
    nisn: str
    name: str
    gender: Optional[str] = None


@dataclass(frozen=True)
class TeacherRef:
    """The homeroom teacher shown on attendance reports."""

    teacher_id: int
    nip: Optional[str]
    name: Optional[str]


@dataclass(frozen=True)
class ClassContext:
    """A class together with its roster, in the store's natural order."""

    class_id: int
    name: str
    teacher: Optional[TeacherRef]
    students: tuple[Student, ...] = field(default_factory=tuple)

    def get_student(self, student_id: int) -> Optional[Student]:
        for s in self.students:
            if s.student_id == student_id:
                return s
        return None
