from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import ClassContext, Student, TeacherRef
from .repository import ClassRepository


class MySQLClassRepository(ClassRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, class_id: int) -> Optional[ClassContext]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT c.class_id, c.name,
                       t.teacher_id, t.nip, u.name AS teacher_name
                FROM classes c
                LEFT JOIN teachers t ON t.teacher_id = c.teacher_id
                LEFT JOIN users u ON u.user_id = t.user_id
                WHERE c.class_id=%s
                """,
                (class_id,),
            )
            row = fetchone(cur)
            if not row:
                return None

            cur.execute(
                """
                SELECT s.student_id, s.nisn, s.name, s.gender
                FROM student_classes sc
                JOIN students s ON s.student_id = sc.student_id
                WHERE sc.class_id=%s
                ORDER BY sc.student_class_id ASC
                """,
                (class_id,),
            )
            students = tuple(
                Student(
                    student_id=int(r["student_id"]),
                    nisn=str(r["nisn"]),
                    name=r["name"],
                    gender=r.get("gender"),
                )
                for r in fetchall(cur)
            )

            teacher = None
            if row.get("teacher_id") is not None:
                teacher = TeacherRef(
                    teacher_id=int(row["teacher_id"]),
                    nip=row.get("nip"),
                    name=row.get("teacher_name"),
                )

            return ClassContext(
                class_id=int(row["class_id"]),
                name=row["name"],
                teacher=teacher,
                students=students,
            )
