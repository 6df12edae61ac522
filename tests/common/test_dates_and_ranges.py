from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from class_register.common.datetime_utils import parse_iso_date, start_of_month, to_day
from class_register.common.http import parse_band, resolve_range
from class_register.core.enums import AttendanceBand, QuickRange
from class_register.core.exceptions import ValidationError


def test_to_day_drops_time_of_day():
    assert to_day(datetime(2025, 3, 14, 23, 59, 59)) == date(2025, 3, 14)
    assert to_day(date(2025, 3, 14)) == date(2025, 3, 14)


def test_to_day_converts_aware_timestamps_to_local_time():
    aware = datetime(2025, 3, 14, 12, 0, tzinfo=timezone.utc)
    assert to_day(aware) == aware.astimezone().date()


def test_to_day_rejects_other_types():
    with pytest.raises(ValidationError):
        to_day("2025-03-14")


def test_parse_iso_date():
    assert parse_iso_date("2025-03-14") == date(2025, 3, 14)
    with pytest.raises(ValidationError):
        parse_iso_date("14/03/2025")


def test_start_of_month():
    assert start_of_month(datetime(2025, 3, 14, 10)) == date(2025, 3, 1)


@pytest.mark.parametrize(
    "quick, expected",
    [
        (QuickRange.LAST_7_DAYS, (date(2025, 3, 7), date(2025, 3, 14))),
        (QuickRange.LAST_30_DAYS, (date(2025, 2, 12), date(2025, 3, 14))),
        (QuickRange.THIS_MONTH, (date(2025, 3, 1), date(2025, 3, 14))),
        (QuickRange.LAST_MONTH, (date(2025, 2, 1), date(2025, 2, 28))),
    ],
)
def test_quick_ranges(quick, expected):
    assert quick.date_range(date(2025, 3, 14)) == expected


def test_last_month_in_january_wraps_year():
    assert QuickRange.LAST_MONTH.date_range(date(2025, 1, 20)) == (date(2024, 12, 1), date(2024, 12, 31))


def test_resolve_range_defaults_to_month_to_date():
    today = date(2025, 3, 14)
    assert resolve_range({}, today) == (date(2025, 3, 1), today)
    assert resolve_range({"start": "2025-01-01", "end": "2025-01-31"}, today) == (
        date(2025, 1, 1),
        date(2025, 1, 31),
    )
    assert resolve_range({"range": "last_7_days"}, today) == (today - timedelta(days=7), today)


def test_resolve_range_rejects_unknown_preset():
    with pytest.raises(ValidationError):
        resolve_range({"range": "fortnight"}, date(2025, 3, 14))


def test_parse_band():
    assert parse_band(None) is None
    assert parse_band("all") is None
    assert parse_band("good") is AttendanceBand.GOOD
    with pytest.raises(ValidationError):
        parse_band("great")
