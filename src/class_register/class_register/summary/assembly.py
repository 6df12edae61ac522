"""Pure transformations from aggregation results to display-ready values."""

from __future__ import annotations

from typing import Callable, Iterable, Optional, Sequence

from ..classes.model import SchoolClass
from ..core.enums import AttendanceBand
from .model import ClassWithStatus, StudentAttendanceSummary, SummaryStatistics


def classes_with_status(
    classes: Iterable[SchoolClass],
    status_of: Callable[[SchoolClass], ClassWithStatus],
) -> list[ClassWithStatus]:
    return [status_of(c) for c in classes]


def filter_by_band(
    summaries: Sequence[StudentAttendanceSummary],
    band: Optional[AttendanceBand],
) -> list[StudentAttendanceSummary]:
    if band is None:
        return list(summaries)
    band = AttendanceBand(band)
    return [s for s in summaries if s.band is band]


def summarize(summaries: Sequence[StudentAttendanceSummary]) -> SummaryStatistics:
    """Roll up per-student summaries.

    Students with no tracked days are counted in `total_students` only; they
    are left out of the average and of the band counts.
    """
    tracked = [s for s in summaries if s.tracked]
    average = sum(s.percentage for s in tracked) / len(tracked) if tracked else 0.0
    return SummaryStatistics(
        total_students=len(summaries),
        tracked_students=len(tracked),
        average_attendance=average,
        students_above_90=sum(1 for s in tracked if s.band is AttendanceBand.EXCELLENT),
        students_below_75=sum(1 for s in tracked if s.band is AttendanceBand.LOW),
    )
