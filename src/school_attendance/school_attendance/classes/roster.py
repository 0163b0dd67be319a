from __future__ import annotations

import logging
from typing import Any

from ..common.validators import require_id
from ..core.exceptions import NotFoundError, ValidationError
from .model import ClassContext, Student
from .repository import ClassRepository, StudentRepository

logger = logging.getLogger(__name__)


class RosterResolver:
    """Resolves the authoritative set of students enrolled in a class."""

    def __init__(self, classes: ClassRepository, students: StudentRepository):
        self._classes = classes
        self._students = students

    def resolve_class_roster(self, class_id: Any) -> ClassContext:
        ctx = self._classes.get_by_id(require_id(class_id, "Class Id"))
        if not ctx:
            raise NotFoundError("Class not found")
        return ctx

    def resolve_student(self, student_id: Any) -> Student:
        student = self._students.get_by_id(require_id(student_id, "Student Id"))
        if not student:
            raise NotFoundError("Student not found")
        return student

    @staticmethod
    def ensure_member(roster: ClassContext, student_id: Any) -> Student:
        student = roster.get_student(require_id(student_id, "Student Id"))
        if not student:
            logger.debug("student %s is not on the roster of class %s", student_id, roster.class_id)
            raise ValidationError("Student not found in the class")
        return student
