from __future__ import annotations

import io

from flask import Flask, jsonify, request, send_file

from ..common.datetime_utils import now_local
from ..common.http import api_errors, iso, parse_band, resolve_range
from ..container import Container
from ..summary.model import StudentAttendanceSummary
from ..summary.service import CsvExport
from .model import ClassAnalytics, DayScore


def _summary_to_ui(s: StudentAttendanceSummary) -> dict:
    return {
        "student_id": s.student_id,
        "name": s.student_name,
        "roll_identifier": s.roll_identifier,
        "total_days": s.total_days,
        "present_days": s.present_days,
        "absent_days": s.absent_days,
        "percentage": round(s.percentage, 2),
        "band": s.band.value if s.band else None,
    }


def _day_to_ui(d: DayScore | None):
    if d is None:
        return None
    return {"date": iso(d.date), "percentage": round(d.percentage, 1)}


def _analytics_to_ui(a: ClassAnalytics) -> dict:
    return {
        "start": iso(a.start),
        "end": iso(a.end),
        "total_students": a.total_students,
        "tracked_students": a.tracked_students,
        "total_days": a.total_days,
        "average_attendance": round(a.average_attendance, 1),
        "best_day": _day_to_ui(a.best_day),
        "worst_day": _day_to_ui(a.worst_day),
        "students_above_90": a.students_above_90,
        "students_between": a.students_between,
        "students_below_75": a.students_below_75,
    }


def register(app: Flask, container: Container) -> None:
    def _csv_response(export: CsvExport):
        # send_file adds an RFC 5987 filename* for non-ASCII class names
        return send_file(
            io.BytesIO(export.content.encode("utf-8-sig")),
            mimetype="text/csv",
            as_attachment=True,
            download_name=export.filename,
        )

    @app.route("/api/classes/<int:class_id>/summary", methods=["GET"], endpoint="class_summary")
    @api_errors
    def class_summary(class_id: int):
        start, end = resolve_range(request.args, now_local().date())
        report = container.summary_service.student_report(
            class_id, start, end, band=parse_band(request.args.get("band"))
        )
        stats = report.statistics
        return jsonify(
            {
                "success": True,
                "class_name": report.class_name,
                "start": iso(report.start),
                "end": iso(report.end),
                "band": report.band.value if report.band else "all",
                "students": [_summary_to_ui(s) for s in report.summaries],
                "statistics": {
                    "total_students": stats.total_students,
                    "tracked_students": stats.tracked_students,
                    "average_attendance": round(stats.average_attendance, 1),
                    "students_above_90": stats.students_above_90,
                    "students_between": stats.students_between,
                    "students_below_75": stats.students_below_75,
                },
            }
        )

    @app.route("/api/classes/<int:class_id>/summary.csv", methods=["GET"], endpoint="class_summary_csv")
    @api_errors
    def class_summary_csv(class_id: int):
        start, end = resolve_range(request.args, now_local().date())
        export = container.summary_service.export_student_report(
            class_id, start, end, band=parse_band(request.args.get("band"))
        )
        return _csv_response(export)

    @app.route("/api/classes/<int:class_id>/analytics", methods=["GET"], endpoint="class_analytics")
    @api_errors
    def class_analytics(class_id: int):
        start, end = resolve_range(request.args, now_local().date())
        analytics = container.summary_service.class_analytics(class_id, start, end)
        return jsonify({"success": True, "analytics": _analytics_to_ui(analytics)})

    @app.route("/api/classes/<int:class_id>/analytics.csv", methods=["GET"], endpoint="class_analytics_csv")
    @api_errors
    def class_analytics_csv(class_id: int):
        start, end = resolve_range(request.args, now_local().date())
        return _csv_response(container.summary_service.export_class_analytics(class_id, start, end))
