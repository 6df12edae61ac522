"""CSV projections of attendance summaries and class analytics.

Quoting is left to the stdlib csv writer (QUOTE_MINIMAL): fields containing
a comma, a quote or a line break are wrapped in double quotes and inner
quotes are doubled.
"""

from __future__ import annotations

import csv
import io
from datetime import date, datetime
from typing import Optional, Sequence

from ..analytics.model import ClassAnalytics
from ..core.constants import CSV_DATE_FORMAT, CSV_TIMESTAMP_FORMAT, MISSING_ROLL
from .assembly import summarize
from .model import StudentAttendanceSummary

STUDENT_HEADER = ["Student Name", "Roll Number", "Present Days", "Absent Days", "Total Days", "Attendance %"]


def _fmt_day(value: date) -> str:
    return value.strftime(CSV_DATE_FORMAT)


def _fmt_pct(value: float) -> str:
    return f"{value:.2f}"


def _writer(out: io.StringIO):
    return csv.writer(out, lineterminator="\n")


def _write_preamble(writer, *, title: str, class_name: str, start: date, end: date, generated: date) -> None:
    writer.writerow([title])
    writer.writerow(["Class:", class_name])
    writer.writerow(["Period:", f"{_fmt_day(start)} to {_fmt_day(end)}"])
    writer.writerow(["Generated:", _fmt_day(generated)])
    writer.writerow([])


def student_summary_csv(
    *,
    class_name: str,
    summaries: Sequence[StudentAttendanceSummary],
    start: date,
    end: date,
    generated: Optional[date] = None,
) -> str:
    out = io.StringIO()
    writer = _writer(out)
    _write_preamble(
        writer,
        title="Attendance Report",
        class_name=class_name,
        start=start,
        end=end,
        generated=generated or date.today(),
    )

    writer.writerow(STUDENT_HEADER)
    for s in summaries:
        writer.writerow(
            [
                s.student_name,
                s.roll_identifier or MISSING_ROLL,
                s.present_days,
                s.absent_days,
                s.total_days,
                _fmt_pct(s.percentage),
            ]
        )

    stats = summarize(summaries)
    writer.writerow([])
    writer.writerow(["Summary Statistics"])
    writer.writerow(["Total Students", stats.total_students])
    writer.writerow(["Average Attendance", f"{_fmt_pct(stats.average_attendance)}%"])
    writer.writerow(["Students Above 90%", stats.students_above_90])
    writer.writerow(["Students Below 75%", stats.students_below_75])
    return out.getvalue()


def class_analytics_csv(
    *,
    class_name: str,
    analytics: ClassAnalytics,
    generated: Optional[date] = None,
) -> str:
    out = io.StringIO()
    writer = _writer(out)
    _write_preamble(
        writer,
        title="Class Analytics Report",
        class_name=class_name,
        start=analytics.start,
        end=analytics.end,
        generated=generated or date.today(),
    )

    writer.writerow(["Metric", "Value"])
    writer.writerow(["Total Students", analytics.total_students])
    writer.writerow(["Days Tracked", analytics.total_days])
    writer.writerow(["Average Attendance", f"{_fmt_pct(analytics.average_attendance)}%"])
    writer.writerow([])

    if analytics.best_day is not None and analytics.worst_day is not None:
        writer.writerow(["Performance Insights"])
        writer.writerow(["Best Day", _fmt_day(analytics.best_day.date), f"{_fmt_pct(analytics.best_day.percentage)}%"])
        writer.writerow(
            ["Worst Day", _fmt_day(analytics.worst_day.date), f"{_fmt_pct(analytics.worst_day.percentage)}%"]
        )
        writer.writerow([])

    writer.writerow(["Student Distribution"])
    writer.writerow(["Students Above 90%", analytics.students_above_90])
    writer.writerow(["Students Below 75%", analytics.students_below_75])
    return out.getvalue()


def export_filename(prefix: str, class_name: str, now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    return f"{prefix}_{class_name.replace(' ', '_')}_{now.strftime(CSV_TIMESTAMP_FORMAT)}.csv"
