from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import AttendanceBand


@dataclass(frozen=True)
class ClassWithStatus:
    """Class list row: roster size and today's attendance."""

    class_id: int
    class_name: str
    total_students: int
    today_present: int
    today_absent: int
    attendance_taken: bool

    @property
    def percentage(self) -> float:
        if self.total_students == 0:
            return 0.0
        return self.today_present / self.total_students * 100


@dataclass(frozen=True)
class StudentAttendanceSummary:
    student_id: int
    student_name: str
    roll_identifier: Optional[str]
    total_days: int
    present_days: int
    absent_days: int
    percentage: float

    @property
    def tracked(self) -> bool:
        return self.total_days > 0

    @property
    def band(self) -> Optional[AttendanceBand]:
        """None for a student with no attendance in the period."""
        if not self.tracked:
            return None
        return AttendanceBand.of(self.percentage)


@dataclass(frozen=True)
class SummaryStatistics:
    total_students: int
    tracked_students: int
    average_attendance: float
    students_above_90: int
    students_below_75: int

    @property
    def students_between(self) -> int:
        return self.tracked_students - self.students_above_90 - self.students_below_75
