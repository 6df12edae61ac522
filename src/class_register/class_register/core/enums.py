from __future__ import annotations

from datetime import date, timedelta
from enum import Enum
from typing import Optional

from .constants import EXCELLENT_THRESHOLD, GOOD_THRESHOLD


class AttendanceFilter(str, Enum):
    """Which attendance rows a count should include."""

    ALL = "all"
    PRESENT = "present"
    ABSENT = "absent"


class AttendanceBand(str, Enum):
    """Classification of an attendance percentage."""

    EXCELLENT = "excellent"
    GOOD = "good"
    LOW = "low"

    @classmethod
    def of(cls, percentage: float) -> "AttendanceBand":
        if percentage >= EXCELLENT_THRESHOLD:
            return cls.EXCELLENT
        if percentage >= GOOD_THRESHOLD:
            return cls.GOOD
        return cls.LOW


class QuickRange(str, Enum):
    """Preset reporting periods offered next to the custom date range."""

    LAST_7_DAYS = "last_7_days"
    LAST_30_DAYS = "last_30_days"
    THIS_MONTH = "this_month"
    LAST_MONTH = "last_month"

    @property
    def label(self) -> str:
        return {
            QuickRange.LAST_7_DAYS: "Last 7 Days",
            QuickRange.LAST_30_DAYS: "Last 30 Days",
            QuickRange.THIS_MONTH: "This Month",
            QuickRange.LAST_MONTH: "Last Month",
        }[self]

    def date_range(self, today: Optional[date] = None) -> tuple[date, date]:
        today = today or date.today()

        if self is QuickRange.LAST_7_DAYS:
            return today - timedelta(days=7), today
        if self is QuickRange.LAST_30_DAYS:
            return today - timedelta(days=30), today
        if self is QuickRange.THIS_MONTH:
            return today.replace(day=1), today

        last_of_previous = today.replace(day=1) - timedelta(days=1)
        return last_of_previous.replace(day=1), last_of_previous
