from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from ..attendance.service import AttendanceService
from ..core.enums import Role
from . import assembler
from .model import ReportTable
from .renderer import TableRenderer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderedReport:
    filename: str
    content: bytes
    content_type: str


class AttendanceReportService:
    """Feeds the attendance views into a tabular report sink (PDF by default)."""

    def __init__(self, attendance: AttendanceService, renderer: TableRenderer):
        self._attendance = attendance
        self._renderer = renderer

    def _render(self, table: ReportTable) -> RenderedReport:
        content = self._renderer.render_table(table.columns, table.rows, title=table.title)
        logger.debug("rendered %s (%d rows, %d bytes)", table.filename, len(table.rows), len(content))
        return RenderedReport(filename=table.filename, content=content, content_type=self._renderer.content_type)

    def daily_report(self, *, current_role: Optional[Role], class_id: Any, attendance_date: Any) -> RenderedReport:
        view = self._attendance.get_daily_view(current_role=current_role, class_id=class_id, attendance_date=attendance_date)
        return self._render(assembler.daily_table(view))

    def weekly_report(self, *, current_role: Optional[Role], class_id: Any, year: Any, month: Any, week: Any) -> RenderedReport:
        view = self._attendance.get_weekly_view(
            current_role=current_role, class_id=class_id, year=year, month=month, week=week
        )
        return self._render(assembler.weekly_table(view))

    def student_weekly_report(
        self,
        *,
        current_role: Optional[Role],
        class_id: Any,
        student_id: Any,
        year: Any,
        month: Any,
        week: Any,
    ) -> RenderedReport:
        view = self._attendance.get_student_weekly_view(
            current_role=current_role,
            class_id=class_id,
            student_id=student_id,
            year=year,
            month=month,
            week=week,
        )
        return self._render(assembler.student_weekly_table(view))

    def student_monthly_report(
        self,
        *,
        current_role: Optional[Role],
        class_id: Any,
        student_id: Any,
        year: Any,
        month: Any,
    ) -> RenderedReport:
        view = self._attendance.get_student_monthly_view(
            current_role=current_role,
            class_id=class_id,
            student_id=student_id,
            year=year,
            month=month,
        )
        return self._render(assembler.student_monthly_table(view))
