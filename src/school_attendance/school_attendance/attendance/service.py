from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any, Optional, Sequence

from ..calendar.model import CalendarWeek
from ..calendar.weeks import get_all_weeks_in_month, get_week_dates
from ..classes.model import ClassContext, Student
from ..classes.roster import RosterResolver
from ..common.datetime_utils import parse_date, to_iso
from ..common.permissions import check_allowed_role
from ..common.validators import parse_status, require_present
from ..core.constants import ATTENDANCE_ROLES
from ..core.enums import ReconcileOrder, Role
from ..core.exceptions import ValidationError
from ..reports import assembler
from ..reports.model import DailyView, StudentMonthlyView, StudentWeekRow, StudentWeeklyView, WeeklyView
from .aggregator import aggregate, aggregate_by_student
from .model import DenseAttendanceEntry
from .reconciler import index_records, reconcile, sort_by_student_name
from .repository import AttendanceRepository
from .upsert import DesiredAttendance, collapse_duplicates, plan_changes

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use cases: attendance reports (daily/weekly/monthly) and attendance writes.

    Every view runs the same pipeline: resolve roster -> fetch the window ->
    reconcile into a dense grid -> aggregate. Only the shaping step differs.
    """

    def __init__(self, attendance: AttendanceRepository, roster: RosterResolver):
        self._attendance = attendance
        self._roster = roster

    # ---- pipeline --------------------------------------------------------

    def _dense_window(
        self,
        ctx: ClassContext,
        students: Sequence[Student],
        dates: Sequence[date],
        *,
        order: ReconcileOrder,
        student_id: Optional[int] = None,
    ) -> list[DenseAttendanceEntry]:
        records = self._attendance.list_for_class(
            ctx.class_id,
            start_date=min(dates),
            end_date=max(dates),
            student_id=student_id,
        )
        return reconcile(students, dates, index_records(records), order=order)

    @staticmethod
    def _parse_required_date(value: Any) -> date:
        require_present(value, "date")
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        return parse_date(value)

    def _student_in_class(self, ctx: ClassContext, student_id: Any) -> Student:
        self._roster.resolve_student(student_id)
        return self._roster.ensure_member(ctx, student_id)

    def _student_week(self, ctx: ClassContext, student: Student, dates: Sequence[date], week: Optional[CalendarWeek]):
        entries = self._dense_window(
            ctx, [student], dates, order=ReconcileOrder.STUDENT_MAJOR, student_id=student.student_id
        )
        return StudentWeeklyView(
            context=ctx,
            student=student,
            dates=tuple(dates),
            entries=tuple(entries),
            statistic=aggregate(entries),
            week=week,
        )

    # ---- views -----------------------------------------------------------

    def get_daily_view(self, *, current_role: Optional[Role], class_id: Any, attendance_date: Any) -> DailyView:
        check_allowed_role(ATTENDANCE_ROLES, current_role)
        ctx = self._roster.resolve_class_roster(class_id)
        day = self._parse_required_date(attendance_date)

        students = sort_by_student_name(ctx.students)
        entries = self._dense_window(ctx, students, [day], order=ReconcileOrder.STUDENT_MAJOR)
        return DailyView(context=ctx, attendance_date=day, entries=tuple(entries), statistic=aggregate(entries))

    def get_daily_attendance(self, *, current_role: Optional[Role], class_id: Any, attendance_date: Any) -> dict:
        view = self.get_daily_view(current_role=current_role, class_id=class_id, attendance_date=attendance_date)
        return assembler.daily_payload(view)

    def get_attendance_details(
        self,
        *,
        current_role: Optional[Role],
        class_id: Any,
        student_id: Any,
        attendance_date: Any,
    ) -> dict:
        """Single-day roster, sorted by student name, numbered from 1."""
        check_allowed_role(ATTENDANCE_ROLES, current_role)
        ctx = self._roster.resolve_class_roster(class_id)
        self._roster.resolve_student(student_id)
        day = self._parse_required_date(attendance_date)

        students = sort_by_student_name(ctx.students)
        entries = self._dense_window(ctx, students, [day], order=ReconcileOrder.STUDENT_MAJOR)
        view = DailyView(context=ctx, attendance_date=day, entries=tuple(entries), statistic=aggregate(entries))
        return assembler.details_payload(view)

    def get_weekly_view(self, *, current_role: Optional[Role], class_id: Any, year: Any, month: Any, week: Any) -> WeeklyView:
        check_allowed_role(ATTENDANCE_ROLES, current_role)
        ctx = self._roster.resolve_class_roster(class_id)
        dates = get_week_dates(year, month, week)

        students = list(ctx.students)
        if not students:
            return WeeklyView(context=ctx, dates=tuple(dates), rows=())

        entries = self._dense_window(ctx, students, dates, order=ReconcileOrder.STUDENT_MAJOR)
        stats = aggregate_by_student(entries)

        by_student: dict[int, list[DenseAttendanceEntry]] = {}
        for e in entries:
            by_student.setdefault(e.student.student_id, []).append(e)

        rows = tuple(
            StudentWeekRow(student=s, entries=tuple(by_student[s.student_id]), statistic=stats[s.student_id])
            for s in students
            if s.student_id in by_student
        )
        return WeeklyView(context=ctx, dates=tuple(dates), rows=rows)

    def get_weekly_attendance(self, *, current_role: Optional[Role], class_id: Any, year: Any, month: Any, week: Any) -> dict:
        view = self.get_weekly_view(current_role=current_role, class_id=class_id, year=year, month=month, week=week)
        return assembler.weekly_payload(view)

    def get_student_weekly_view(
        self,
        *,
        current_role: Optional[Role],
        class_id: Any,
        student_id: Any,
        year: Any,
        month: Any,
        week: Any,
    ) -> StudentWeeklyView:
        check_allowed_role(ATTENDANCE_ROLES, current_role)
        ctx = self._roster.resolve_class_roster(class_id)
        student = self._student_in_class(ctx, student_id)
        dates = get_week_dates(year, month, week)

        calendar_week = next((w for w in get_all_weeks_in_month(year, month) if w.dates[0] == dates[0]), None)
        return self._student_week(ctx, student, dates, calendar_week)

    def get_student_weekly_attendance(self, **kwargs) -> dict:
        return assembler.student_weekly_payload(self.get_student_weekly_view(**kwargs))

    def get_student_monthly_view(
        self,
        *,
        current_role: Optional[Role],
        class_id: Any,
        student_id: Any,
        year: Any,
        month: Any,
    ) -> StudentMonthlyView:
        check_allowed_role(ATTENDANCE_ROLES, current_role)
        ctx = self._roster.resolve_class_roster(class_id)
        student = self._student_in_class(ctx, student_id)
        weeks = list(get_all_weeks_in_month(year, month))

        blocks = [self._student_week(ctx, student, wk.dates, wk) for wk in weeks]
        blocks.sort(key=lambda b: b.week.number)
        return StudentMonthlyView(
            context=ctx,
            student=student,
            year=int(year),
            month=int(month),
            weeks=tuple(blocks),
        )

    def get_student_monthly_attendance(self, **kwargs) -> list[dict]:
        return assembler.student_monthly_payload(self.get_student_monthly_view(**kwargs))

    def list_weeks(self, *, current_role: Optional[Role], year: Any, month: Any) -> list[dict]:
        check_allowed_role(ATTENDANCE_ROLES, current_role)
        return assembler.weeks_payload(get_all_weeks_in_month(year, month))

    # ---- writes ----------------------------------------------------------

    def create_or_update(
        self,
        *,
        current_role: Optional[Role],
        class_id: Any,
        student_id: Any,
        attendance_date: Any,
        status: Any,
    ) -> dict:
        check_allowed_role(ATTENDANCE_ROLES, current_role)
        day = self._parse_required_date(attendance_date)
        new_status = parse_status(status)
        ctx = self._roster.resolve_class_roster(class_id)
        student = self._roster.resolve_student(student_id)

        existing = self._attendance.get_for_student_and_date(
            class_id=ctx.class_id, student_id=student.student_id, attendance_date=day
        )
        if existing is None:
            attendance_id = self._attendance.create_record(
                class_id=ctx.class_id,
                student_id=student.student_id,
                attendance_date=day,
                status=new_status,
            )
            logger.info("created attendance %s (class=%s student=%s date=%s)", attendance_id, ctx.class_id, student.student_id, day)
        elif existing.status != new_status:
            self._attendance.update_status(attendance_id=existing.attendance_id, status=new_status)
            logger.info("updated attendance %s -> %s", existing.attendance_id, new_status.value)

        return {
            "date": to_iso(day),
            "status": new_status.value,
            "student": assembler.student_payload(student),
        }

    def create_or_update_many(
        self,
        *,
        current_role: Optional[Role],
        class_id: Any,
        attendance_date: Any,
        student_attendances: Any,
    ) -> dict:
        """Upsert a whole class for one date.

        All input is validated (roster membership included) before anything
        is written; unchanged statuses produce no writes at all.
        """
        check_allowed_role(ATTENDANCE_ROLES, current_role)
        day = self._parse_required_date(attendance_date)
        ctx = self._roster.resolve_class_roster(class_id)

        if not isinstance(student_attendances, (list, tuple)) or not student_attendances:
            raise ValidationError("Student attendances not inputted!")

        desired: list[DesiredAttendance] = []
        for item in student_attendances:
            if not isinstance(item, Mapping):
                raise ValidationError("Each student attendance must be an object with studentId and status")
            student = self._roster.ensure_member(ctx, item.get("studentId"))
            desired.append(DesiredAttendance(student_id=student.student_id, status=parse_status(item.get("status"))))
        desired = collapse_duplicates(desired)

        existing = self._attendance.list_for_class(ctx.class_id, start_date=day, end_date=day)
        plan = plan_changes(class_id=ctx.class_id, attendance_date=day, existing=existing, desired=desired)
        if not plan.is_empty:
            self._attendance.save_changes(updates=plan.updates, creates=plan.creates)

        logger.info(
            "attendance batch class=%s date=%s: %d updated, %d created, %d unchanged",
            ctx.class_id,
            day,
            len(plan.updates),
            len(plan.creates),
            len(desired) - len(plan.updates) - len(plan.creates),
        )

        return {
            "date": to_iso(day),
            "classId": ctx.class_id,
            "studentAttendances": [{"studentId": d.student_id, "status": d.status.value} for d in desired],
        }
