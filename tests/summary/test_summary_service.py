from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from class_register.core.enums import AttendanceBand
from class_register.core.exceptions import NotFound


def test_class_overview_lists_every_class_with_today_status(container, school_class, roster, today):
    container.class_service.create_class("Art Club")
    container.attendance_service.mark_all(school_class.class_id, today, True)

    overview = container.summary_service.class_overview(today)

    assert [c.class_name for c in overview] == ["Art Club", "Grade 5 - A"]
    assert overview[0].attendance_taken is False
    assert overview[1].attendance_taken is True
    assert overview[1].percentage == pytest.approx(100.0)


def test_student_report_band_filter_recomputes_statistics(container, school_class, roster, today):
    days = [today - timedelta(days=i) for i in range(4)]
    for d in days:
        container.attendance_service.save_class_attendance(
            school_class.class_id, d, {roster[0].student_id: True, roster[1].student_id: d == today}
        )

    report = container.summary_service.student_report(school_class.class_id, days[-1], today, band=AttendanceBand.LOW)

    assert [s.student_name for s in report.summaries] == ["Bela", "Chirag"]
    assert report.statistics.total_students == 2
    assert report.statistics.students_below_75 == 2


def test_export_student_report_filename_and_content(container, school_class, roster, fixed_now):
    export = container.summary_service.export_student_report(
        school_class.class_id, date(2025, 3, 1), fixed_now.date(), now=fixed_now
    )

    assert export.filename == "Attendance_Grade_5_-_A_20250314_093000.csv"
    assert "Generated:,14-Mar-2025" in export.content.splitlines()
    assert "Total Students,3" in export.content.splitlines()


def test_reports_for_missing_class_are_not_found(container, today):
    with pytest.raises(NotFound):
        container.summary_service.student_report(404, today, today)
    with pytest.raises(NotFound):
        container.summary_service.export_class_analytics(404, today, today, now=datetime(2025, 1, 1))
