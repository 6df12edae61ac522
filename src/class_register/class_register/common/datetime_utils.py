from __future__ import annotations

from datetime import date, datetime
from typing import Union

from ..core.exceptions import ValidationError

DayLike = Union[date, datetime]


def to_day(value: DayLike) -> date:
    """Normalize a date or timestamp to its local calendar day.

    Every attendance read and write goes through here, so two timestamps on
    the same day always address the same record.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date()
    if isinstance(value, date):
        return value
    raise ValidationError(f"Expected a date, got {type(value).__name__}")


def start_of_month(value: DayLike) -> date:
    return to_day(value).replace(day=1)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date: {value!r}") from None


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def today_local() -> date:
    return now_local().date()
