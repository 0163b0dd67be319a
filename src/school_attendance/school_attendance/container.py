from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .classes.mysql_class_repository import MySQLClassRepository
from .classes.mysql_student_repository import MySQLStudentRepository
from .classes.repository import ClassRepository, StudentRepository
from .classes.roster import RosterResolver
from .database.connection import DBConfig, DatabaseConnection
from .reports.renderer import ReportLabTableRenderer, TableRenderer
from .reports.service import AttendanceReportService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    classes_repo: ClassRepository
    students_repo: StudentRepository
    attendance_repo: AttendanceRepository

    roster: RosterResolver
    auth_service: AuthService
    attendance_service: AttendanceService
    report_service: AttendanceReportService


def wire_container(
    *,
    users_repo: UserRepository,
    classes_repo: ClassRepository,
    students_repo: StudentRepository,
    attendance_repo: AttendanceRepository,
    renderer: TableRenderer,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    roster = RosterResolver(classes_repo, students_repo)
    attendance_service = AttendanceService(attendance_repo, roster)

    return Container(
        conn=conn,
        users_repo=users_repo,
        classes_repo=classes_repo,
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        roster=roster,
        auth_service=AuthService(users_repo),
        attendance_service=attendance_service,
        report_service=AttendanceReportService(attendance_service, renderer),
    )


def build_container(*, db_config: dict, school_name: Optional[str] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_settings(db_config))

    return wire_container(
        conn=conn,
        users_repo=MySQLUserRepository(conn),
        classes_repo=MySQLClassRepository(conn),
        students_repo=MySQLStudentRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        renderer=ReportLabTableRenderer(school_name=school_name),
    )
