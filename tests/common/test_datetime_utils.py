from datetime import date, datetime, timedelta, timezone

import pytest

from src.school_attendance.school_attendance.common.datetime_utils import format_date, parse_date, to_iso
from src.school_attendance.school_attendance.core.exceptions import InvalidDateError, ValidationError


def test_parse_then_format_round_trip():
    assert format_date(parse_date("2024-03-05")) == "05-03-2024"


def test_to_iso_drops_time_component():
    assert to_iso(datetime(2024, 3, 5, 23, 59)) == "2024-03-05"
    assert to_iso(date(2024, 3, 5)) == "2024-03-05"


def test_aware_datetime_is_formatted_in_utc():
    jakarta = timezone(timedelta(hours=7))
    assert format_date(datetime(2024, 3, 5, 3, 0, tzinfo=jakarta)) == "04-03-2024"


@pytest.mark.parametrize("value", ["", "2024-03", "2024/03/05", "abcd-ef-gh", "2024-02-30", "2024-0\u00b2-01", None])
def test_invalid_dates_raise(value):
    with pytest.raises(InvalidDateError):
        parse_date(value)


def test_invalid_date_is_a_validation_error():
    with pytest.raises(ValidationError):
        parse_date("2024-13-01")
