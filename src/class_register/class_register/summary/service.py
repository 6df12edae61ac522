from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..analytics.model import ClassAnalytics
from ..analytics.service import AggregationService
from ..classes.repository import ClassRepository
from ..common.datetime_utils import DayLike, now_local, to_day
from ..core.enums import AttendanceBand
from ..core.exceptions import NotFound
from .assembly import classes_with_status, filter_by_band, summarize
from .csv_export import class_analytics_csv, export_filename, student_summary_csv
from .model import ClassWithStatus, StudentAttendanceSummary, SummaryStatistics


@dataclass(frozen=True)
class StudentSummaryReport:
    class_id: int
    class_name: str
    start: date
    end: date
    band: Optional[AttendanceBand]
    summaries: list[StudentAttendanceSummary]
    statistics: SummaryStatistics


@dataclass(frozen=True)
class CsvExport:
    filename: str
    content: str


class SummaryService:
    """Assembles aggregation outputs into the views the UI renders."""

    def __init__(self, classes: ClassRepository, aggregation: AggregationService):
        self._classes = classes
        self._aggregation = aggregation

    def class_overview(self, today: DayLike) -> list[ClassWithStatus]:
        today = to_day(today)
        return classes_with_status(
            self._classes.list_all(),
            lambda c: self._aggregation.class_today_status(c, today),
        )

    def student_report(
        self,
        class_id: int,
        start: DayLike,
        end: DayLike,
        *,
        band: Optional[AttendanceBand] = None,
    ) -> StudentSummaryReport:
        school_class = self._require_class(class_id)
        start, end = to_day(start), to_day(end)
        summaries = self._aggregation.class_summaries(class_id, start, end)
        visible = filter_by_band(summaries, band)
        return StudentSummaryReport(
            class_id=class_id,
            class_name=school_class.name,
            start=start,
            end=end,
            band=band,
            summaries=visible,
            statistics=summarize(visible),
        )

    def class_analytics(self, class_id: int, start: DayLike, end: DayLike) -> ClassAnalytics:
        self._require_class(class_id)
        return self._aggregation.class_analytics(class_id, start, end)

    def export_student_report(
        self,
        class_id: int,
        start: DayLike,
        end: DayLike,
        *,
        band: Optional[AttendanceBand] = None,
        now: Optional[datetime] = None,
    ) -> CsvExport:
        now = now or now_local()
        report = self.student_report(class_id, start, end, band=band)
        content = student_summary_csv(
            class_name=report.class_name,
            summaries=report.summaries,
            start=report.start,
            end=report.end,
            generated=now.date(),
        )
        return CsvExport(filename=export_filename("Attendance", report.class_name, now), content=content)

    def export_class_analytics(
        self,
        class_id: int,
        start: DayLike,
        end: DayLike,
        *,
        now: Optional[datetime] = None,
    ) -> CsvExport:
        now = now or now_local()
        school_class = self._require_class(class_id)
        analytics = self._aggregation.class_analytics(class_id, start, end)
        content = class_analytics_csv(class_name=school_class.name, analytics=analytics, generated=now.date())
        return CsvExport(filename=export_filename("Analytics", school_class.name, now), content=content)

    def _require_class(self, class_id: int):
        found = self._classes.get_by_id(class_id)
        if not found:
            raise NotFound(f"Class {class_id} not found")
        return found
