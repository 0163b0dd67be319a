"""Month -> week -> weekday decomposition.

Weeks are Monday..Saturday blocks. Week 1 starts at the first Monday on or
after the 1st of the month, and a month only owns the weeks whose Monday falls
inside it (a trailing week may spill into the next month).
"""
from __future__ import annotations

from datetime import date, timedelta
from typing import Iterator

from ..common.datetime_utils import format_date
from ..common.validators import require_positive_int
from ..core.constants import DAYS_PER_WEEK, SCHOOL_DAYS_PER_WEEK
from ..core.exceptions import ValidationError
from .model import CalendarWeek

MONDAY = 0


def _validate_year_month(year, month) -> tuple[int, int]:
    year = require_positive_int(year, "Year")
    month = require_positive_int(month, "Month")
    if month > 12:
        raise ValidationError("Month must be between 1 and 12")
    return year, month


def _next_monday(day: date) -> date:
    return day + timedelta(days=(MONDAY - day.weekday()) % DAYS_PER_WEEK)


def _school_days(monday: date) -> tuple[date, ...]:
    return tuple(monday + timedelta(days=i) for i in range(SCHOOL_DAYS_PER_WEEK))


def first_monday(year: int, month: int) -> date:
    year, month = _validate_year_month(year, month)
    return _next_monday(date(year, month, 1))


def get_week_dates(year: int, month: int, week: int) -> list[date]:
    """Return the 6 dates (Mon..Sat) of ``week`` (1-based) in ``year``/``month``."""
    year, month = _validate_year_month(year, month)
    week = require_positive_int(week, "Week")

    monday = first_monday(year, month) + timedelta(days=(week - 1) * DAYS_PER_WEEK)
    if monday.month != month:
        raise ValidationError(f"Week {week} does not exist in {month:02d}-{year}")
    return list(_school_days(monday))


def get_all_weeks_in_month(year: int, month: int) -> Iterator[CalendarWeek]:
    """Return the month's weeks in order, numbered from 1.

    The sequence is lazy; each call starts over from the first Monday.
    """
    year, month = _validate_year_month(year, month)
    return _iter_weeks(year, month)


def _iter_weeks(year: int, month: int) -> Iterator[CalendarWeek]:
    monday = first_monday(year, month)
    number = 1

    while monday.month == month:
        days = _school_days(monday)
        yield CalendarWeek(
            number=number,
            dates=days,
            range=f"{format_date(days[0])} - {format_date(days[-1])}",
        )
        number += 1
        monday = _next_monday(monday + timedelta(days=DAYS_PER_WEEK))
