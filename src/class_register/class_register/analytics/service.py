from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..classes.model import SchoolClass
from ..common.datetime_utils import DayLike, to_day
from ..core.enums import AttendanceFilter
from ..students.model import Student
from ..students.repository import StudentRepository
from ..summary.assembly import summarize
from ..summary.model import ClassWithStatus, StudentAttendanceSummary
from .model import ClassAnalytics, DayScore


def percentage_of(part: int, whole: int) -> float:
    return part / whole * 100 if whole > 0 else 0.0


class AggregationService:
    """Statistics derived from attendance queries.

    No storage logic lives here; everything goes through the repositories.
    Percentages are returned unrounded.
    """

    def __init__(self, attendance: AttendanceRepository, students: StudentRepository):
        self._attendance = attendance
        self._students = students

    def student_summary(self, student: Student, start: DayLike, end: DayLike) -> StudentAttendanceSummary:
        start, end = to_day(start), to_day(end)
        total_days = self._attendance.count_in_range(student.student_id, start, end, AttendanceFilter.ALL)
        present_days = self._attendance.count_in_range(student.student_id, start, end, AttendanceFilter.PRESENT)
        return StudentAttendanceSummary(
            student_id=student.student_id,
            student_name=student.name,
            roll_identifier=student.roll_identifier,
            total_days=total_days,
            present_days=present_days,
            absent_days=total_days - present_days,
            percentage=percentage_of(present_days, total_days),
        )

    def class_summaries(self, class_id: int, start: DayLike, end: DayLike) -> list[StudentAttendanceSummary]:
        return [self.student_summary(st, start, end) for st in self._students.list_for_class(class_id)]

    def student_lifetime_counts(self, student_id: int) -> tuple[int, int]:
        """(present, absent) over every record of the student."""
        return (
            self._attendance.count_for_student(student_id, AttendanceFilter.PRESENT),
            self._attendance.count_for_student(student_id, AttendanceFilter.ABSENT),
        )

    def class_today_status(self, school_class: SchoolClass, today: DayLike) -> ClassWithStatus:
        today = to_day(today)
        class_id = school_class.class_id
        total_students = self._students.count_for_class(class_id)
        if total_students == 0:
            return ClassWithStatus(
                class_id=class_id,
                class_name=school_class.name,
                total_students=0,
                today_present=0,
                today_absent=0,
                attendance_taken=False,
            )

        return ClassWithStatus(
            class_id=class_id,
            class_name=school_class.name,
            total_students=total_students,
            today_present=self._attendance.count_for_class_on_date(class_id, today, AttendanceFilter.PRESENT),
            today_absent=self._attendance.count_for_class_on_date(class_id, today, AttendanceFilter.ABSENT),
            attendance_taken=self._attendance.count_for_class_on_date(class_id, today, AttendanceFilter.ALL) > 0,
        )

    def class_analytics(self, class_id: int, start: DayLike, end: DayLike) -> ClassAnalytics:
        start, end = to_day(start), to_day(end)
        summaries = self.class_summaries(class_id, start, end)
        total_students = len(summaries)
        if total_students == 0:
            return ClassAnalytics(
                class_id=class_id,
                start=start,
                end=end,
                total_students=0,
                tracked_students=0,
                total_days=0,
                average_attendance=0.0,
                best_day=None,
                worst_day=None,
                students_below_75=0,
                students_above_90=0,
            )

        stats = summarize(summaries)
        dates = self._attendance.distinct_dates_for_class(class_id, start, end)
        best, worst = self._best_and_worst_days(class_id, dates, total_students)

        return ClassAnalytics(
            class_id=class_id,
            start=start,
            end=end,
            total_students=total_students,
            tracked_students=stats.tracked_students,
            total_days=len(dates),
            average_attendance=stats.average_attendance,
            best_day=best,
            worst_day=worst,
            students_below_75=stats.students_below_75,
            students_above_90=stats.students_above_90,
        )

    def _best_and_worst_days(
        self, class_id: int, dates: Sequence[date], total_students: int
    ) -> tuple[Optional[DayScore], Optional[DayScore]]:
        best: Optional[DayScore] = None
        worst: Optional[DayScore] = None

        # Strict comparisons over ascending dates: ties keep the earliest day.
        for day in sorted(dates):
            present = self._attendance.count_for_class_on_date(class_id, day, AttendanceFilter.PRESENT)
            score = DayScore(date=day, percentage=percentage_of(present, total_students))
            if best is None or score.percentage > best.percentage:
                best = score
            if worst is None or score.percentage < worst.percentage:
                worst = score

        return best, worst
