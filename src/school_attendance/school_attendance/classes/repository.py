from __future__ import annotations

from typing import Optional, Protocol

from .model import ClassContext, Student


class ClassRepository(Protocol):
    """Read-only class lookups; a class comes back with its full roster."""

    def get_by_id(self, class_id: int) -> Optional[ClassContext]:
        raise NotImplementedError


class StudentRepository(Protocol):
    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError
