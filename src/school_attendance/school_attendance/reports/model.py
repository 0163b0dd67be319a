from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.model import DenseAttendanceEntry, PresenceStatistic
from ..calendar.model import CalendarWeek
from ..classes.model import ClassContext, Student


@dataclass(frozen=True)
class DailyView:
    context: ClassContext
    attendance_date: date
    entries: tuple[DenseAttendanceEntry, ...]
    statistic: PresenceStatistic


@dataclass(frozen=True)
class StudentWeekRow:
    student: Student
    entries: tuple[DenseAttendanceEntry, ...]
    statistic: PresenceStatistic


@dataclass(frozen=True)
class WeeklyView:
    context: ClassContext
    dates: tuple[date, ...]
    rows: tuple[StudentWeekRow, ...]


@dataclass(frozen=True)
class StudentWeeklyView:
    context: ClassContext
    student: Student
    dates: tuple[date, ...]
    entries: tuple[DenseAttendanceEntry, ...]
    statistic: PresenceStatistic
    week: Optional[CalendarWeek] = None


@dataclass(frozen=True)
class StudentMonthlyView:
    context: ClassContext
    student: Student
    year: int
    month: int
    weeks: tuple[StudentWeeklyView, ...]


@dataclass(frozen=True)
class ReportTable:
    """Structured rows for the tabular report sink (no layout concerns)."""

    title: str
    columns: list[str]
    rows: list[list[str]]
    filename: str
