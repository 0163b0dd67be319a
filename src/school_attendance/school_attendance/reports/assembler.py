"""Shapes reconciled attendance into API payloads and report tables.

JSON keys are the public wire contract. Table labels use the report locale
(Indonesian) that the school prints in.
"""
from __future__ import annotations

from datetime import date
from typing import Any, Iterable

from ..attendance.aggregator import aggregate
from ..attendance.model import DenseAttendanceEntry, PresenceStatistic
from ..calendar.model import CalendarWeek
from ..classes.model import ClassContext, Student
from ..common.datetime_utils import format_date, to_iso
from ..core.enums import AttendanceStatus
from .model import DailyView, ReportTable, StudentMonthlyView, StudentWeeklyView, WeeklyView

STATUS_LABELS = {
    AttendanceStatus.PRESENT: "Hadir",
    AttendanceStatus.ABSENT: "Tidak Hadir",
    AttendanceStatus.HOLIDAY: "Libur",
}

DAY_NAMES = ["Senin", "Selasa", "Rabu", "Kamis", "Jumat", "Sabtu", "Minggu"]

MONTH_NAMES = [
    "Januari",
    "Februari",
    "Maret",
    "April",
    "Mei",
    "Juni",
    "Juli",
    "Agustus",
    "September",
    "Oktober",
    "November",
    "Desember",
]

COL_NO = "No"
COL_NISN = "NISN"
COL_NAME = "Nama Siswa"
COL_STATUS = "Status"
COL_WEEK = "Minggu Ke"
COL_RANGE = "Rentang Tanggal"
COL_PERCENTAGE = "Persentase Kehadiran"


# ---- JSON payloads -------------------------------------------------------


def teacher_payload(ctx: ClassContext) -> dict[str, Any]:
    return {
        "id": ctx.teacher.teacher_id if ctx.teacher else None,
        "name": ctx.teacher.name if ctx.teacher else None,
    }


def student_payload(student: Student) -> dict[str, Any]:
    return {"id": student.student_id, "nisn": student.nisn, "name": student.name}


def _day_cells(entries: Iterable[DenseAttendanceEntry]) -> list[dict[str, Any]]:
    return [{"date": to_iso(e.attendance_date), "status": e.status.value} for e in entries]


def daily_payload(view: DailyView) -> dict[str, Any]:
    return {
        "date": to_iso(view.attendance_date),
        "teacher": teacher_payload(view.context),
        "class": view.context.name,
        "percentagePresent": view.statistic.percentage_present,
        "attendance": [
            {"status": e.status.value, "date": to_iso(e.attendance_date), "student": student_payload(e.student)}
            for e in view.entries
        ],
    }


def details_payload(view: DailyView) -> dict[str, Any]:
    """Single-day roster with each student's 1-based position (``no_student``)."""
    return {
        "date": to_iso(view.attendance_date),
        "teacher": teacher_payload(view.context),
        "class": view.context.name,
        "student_attendance": [
            {
                "no_student": i,
                "status": e.status.value,
                "date": to_iso(e.attendance_date),
                "student": student_payload(e.student),
            }
            for i, e in enumerate(view.entries, start=1)
        ],
    }


def weekly_payload(view: WeeklyView) -> dict[str, Any]:
    return {
        "teacher": teacher_payload(view.context),
        "class": view.context.name,
        "students": [
            {
                **student_payload(row.student),
                "attendance": _day_cells(row.entries),
                "percentagePresent": row.statistic.percentage_present,
            }
            for row in view.rows
        ],
    }


def student_weekly_payload(view: StudentWeeklyView) -> dict[str, Any]:
    return {
        "teacher": teacher_payload(view.context),
        "class": view.context.name,
        "student": student_payload(view.student),
        "attendance": _day_cells(view.entries),
        "percentagePresent": view.statistic.percentage_present,
    }


def student_monthly_payload(view: StudentMonthlyView) -> list[dict[str, Any]]:
    blocks = []
    for wk in view.weeks:
        block = {
            "numOfTheWeek": wk.week.number if wk.week else None,
            "range": wk.week.range if wk.week else None,
        }
        block.update(student_weekly_payload(wk))
        blocks.append(block)
    return blocks


def weeks_payload(weeks: Iterable[CalendarWeek]) -> list[dict[str, Any]]:
    return [
        {
            "numOfTheWeek": w.number,
            "range": w.range,
            "startDate": to_iso(w.start),
            "endDate": to_iso(w.end),
            "dates": [to_iso(d) for d in w.dates],
        }
        for w in weeks
    ]


# ---- report tables -------------------------------------------------------


def format_percentage(stat: PresenceStatistic) -> str:
    return f"{stat.percentage_present:.2f}%"


def day_label(day: date, *, with_date: bool = True) -> str:
    name = DAY_NAMES[day.weekday()]
    return f"{name}, {format_date(day)}" if with_date else name


def long_date(day: date) -> str:
    return f"{DAY_NAMES[day.weekday()]}, {day.day} {MONTH_NAMES[day.month - 1]} {day.year}"


def _status_cells(entries: Iterable[DenseAttendanceEntry]) -> list[str]:
    return [STATUS_LABELS[e.status] for e in entries]


def _slug(value: str) -> str:
    return "".join(ch if ch.isalnum() else "_" for ch in value).strip("_").lower() or "kelas"


def daily_table(view: DailyView) -> ReportTable:
    rows = []
    for i, e in enumerate(view.entries, start=1):
        rows.append(
            [str(i), e.student.nisn, e.student.name, STATUS_LABELS[e.status], format_percentage(aggregate([e]))]
        )

    return ReportTable(
        title=f"Laporan Kehadiran Harian Kelas {view.context.name} - {long_date(view.attendance_date)}",
        columns=[COL_NO, COL_NISN, COL_NAME, COL_STATUS, COL_PERCENTAGE],
        rows=rows,
        filename=f"kehadiran_harian_{_slug(view.context.name)}_{view.attendance_date:%Y%m%d}.pdf",
    )


def weekly_table(view: WeeklyView) -> ReportTable:
    rows = []
    for i, row in enumerate(view.rows, start=1):
        rows.append(
            [str(i), row.student.nisn, row.student.name, *_status_cells(row.entries), format_percentage(row.statistic)]
        )

    start, end = view.dates[0], view.dates[-1]
    return ReportTable(
        title=f"Laporan Kehadiran Mingguan Kelas {view.context.name} ({format_date(start)} - {format_date(end)})",
        columns=[COL_NO, COL_NISN, COL_NAME, *(day_label(d) for d in view.dates), COL_PERCENTAGE],
        rows=rows,
        filename=f"kehadiran_mingguan_{_slug(view.context.name)}_{start:%Y%m%d}.pdf",
    )


def student_weekly_table(view: StudentWeeklyView) -> ReportTable:
    start, end = view.dates[0], view.dates[-1]
    return ReportTable(
        title=(
            f"Laporan Kehadiran Mingguan {view.student.name} - Kelas {view.context.name} "
            f"({format_date(start)} - {format_date(end)})"
        ),
        columns=[COL_NISN, COL_NAME, *(day_label(d) for d in view.dates), COL_PERCENTAGE],
        rows=[[view.student.nisn, view.student.name, *_status_cells(view.entries), format_percentage(view.statistic)]],
        filename=f"kehadiran_mingguan_{view.student.nisn}_{start:%Y%m%d}.pdf",
    )


def student_monthly_table(view: StudentMonthlyView) -> ReportTable:
    rows = []
    for wk in view.weeks:
        number = str(wk.week.number) if wk.week else ""
        date_range = wk.week.range if wk.week else f"{format_date(wk.dates[0])} - {format_date(wk.dates[-1])}"
        rows.append([number, date_range, *_status_cells(wk.entries), format_percentage(wk.statistic)])

    return ReportTable(
        title=(
            f"Laporan Kehadiran Bulanan {view.student.name} - Kelas {view.context.name} "
            f"({MONTH_NAMES[view.month - 1]} {view.year})"
        ),
        columns=[COL_WEEK, COL_RANGE, *DAY_NAMES[:6], COL_PERCENTAGE],
        rows=rows,
        filename=f"kehadiran_bulanan_{view.student.nisn}_{view.year}{view.month:02d}.pdf",
    )
