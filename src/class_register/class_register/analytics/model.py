from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class DayScore:
    date: date
    percentage: float


@dataclass(frozen=True)
class ClassAnalytics:
    """Class-level statistics over a date range."""

    class_id: int
    start: date
    end: date
    total_students: int
    tracked_students: int
    total_days: int
    average_attendance: float
    best_day: Optional[DayScore]
    worst_day: Optional[DayScore]
    students_below_75: int
    students_above_90: int

    @property
    def students_between(self) -> int:
        return self.tracked_students - self.students_below_75 - self.students_above_90

    @property
    def has_day_insights(self) -> bool:
        return self.best_day is not None and self.worst_day is not None
