from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_date
from .model import AttendanceRecord, NewAttendance, StatusUpdate
from .repository import AttendanceRepository

_SELECT = """
    SELECT attendance_id, class_id, student_id, attendance_date, status, created_at
    FROM attendances
"""


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        class_id=int(r["class_id"]),
        student_id=int(r["student_id"]),
        attendance_date=normalize_mysql_date(r["attendance_date"]),
        status=AttendanceStatus(r["status"]),
        created_at=r.get("created_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_class(
        self,
        class_id: int,
        *,
        start_date: date,
        end_date: date,
        student_id: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["class_id=%s", "attendance_date BETWEEN %s AND %s"]
        params: list[object] = [int(class_id), start_date, end_date]

        if student_id is not None:
            clauses.append("student_id=%s")
            params.append(int(student_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                {_SELECT}
                WHERE {where}
                ORDER BY attendance_date ASC, student_id ASC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_for_student_and_date(
        self, *, class_id: int, student_id: int, attendance_date: date
    ) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                {_SELECT}
                WHERE class_id=%s AND student_id=%s AND attendance_date=%s
                """,
                (int(class_id), int(student_id), attendance_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def create_record(
        self,
        *,
        class_id: int,
        student_id: int,
        attendance_date: date,
        status: AttendanceStatus,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendances(class_id, student_id, attendance_date, status)
                VALUES(%s,%s,%s,%s)
                """,
                (int(class_id), int(student_id), attendance_date, status.value),
            )
            return int(cur.lastrowid)

    def update_status(self, *, attendance_id: int, status: AttendanceStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendances SET status=%s WHERE attendance_id=%s",
                (status.value, int(attendance_id)),
            )
            return cur.rowcount > 0

    def save_changes(
        self,
        *,
        updates: Sequence[StatusUpdate],
        creates: Sequence[NewAttendance],
    ) -> None:
        if not updates and not creates:
            return

        with db_cursor(self._conn_factory) as (_, cur):
            if updates:
                cur.executemany(
                    "UPDATE attendances SET status=%s WHERE attendance_id=%s",
                    [(u.status.value, int(u.attendance_id)) for u in updates],
                )
            if creates:
                cur.executemany(
                    """
                    INSERT INTO attendances(class_id, student_id, attendance_date, status)
                    VALUES(%s,%s,%s,%s)
                    """,
                    [(int(c.class_id), int(c.student_id), c.attendance_date, c.status.value) for c in creates],
                )
