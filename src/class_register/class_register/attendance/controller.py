from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import today_local
from ..common.http import api_errors, parse_day
from ..container import Container
from ..core.exceptions import ValidationError
from .model import AttendanceRecord, AttendanceSheet, SaveResult


def _sheet_to_ui(sheet: AttendanceSheet) -> dict:
    return {
        "class_id": sheet.class_id,
        "class_name": sheet.class_name,
        "date": sheet.date.isoformat(),
        "attendance_exists": sheet.attendance_exists,
        "present_count": sheet.present_count,
        "absent_count": sheet.absent_count,
        "total_count": sheet.total_count,
        "percentage": round(sheet.percentage),
        "students": [
            {
                "student_id": r.student.student_id,
                "name": r.student.name,
                "roll_identifier": r.student.roll_identifier,
                "is_present": r.is_present,
                "recorded": r.recorded,
            }
            for r in sheet.rows
        ],
    }


def _record_to_ui(r: AttendanceRecord) -> dict:
    return {
        "attendance_id": r.attendance_id,
        "student_id": r.student_id,
        "date": r.date.isoformat(),
        "is_present": r.is_present,
    }


def _result_to_ui(r: SaveResult) -> dict:
    return {
        "class_id": r.class_id,
        "date": r.date.isoformat(),
        "saved_count": r.saved_count,
        "present_count": r.present_count,
        "updated_existing": r.updated_existing,
        "show_interstitial": r.interstitial_shown,
    }


def _parse_flag(value, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ValidationError(f"{field_name} must be true/false")
    return value


def _parse_marks(raw) -> dict[int, bool]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValidationError("marks must be an object of student_id -> bool")
    marks: dict[int, bool] = {}
    for key, value in raw.items():
        try:
            student_id = int(key)
        except (TypeError, ValueError):
            raise ValidationError(f"Invalid student id: {key!r}") from None
        if not isinstance(value, bool):
            raise ValidationError(f"Mark for student {student_id} must be true/false")
        marks[student_id] = value
    return marks


def register(app: Flask, container: Container) -> None:
    @app.route("/api/classes/<int:class_id>/attendance", methods=["GET"], endpoint="attendance_sheet")
    @api_errors
    def attendance_sheet(class_id: int):
        day = parse_day(request.args.get("date"), today_local())
        sheet = container.attendance_service.load_sheet(class_id, day)
        return jsonify({"success": True, "sheet": _sheet_to_ui(sheet)})

    @app.route("/api/classes/<int:class_id>/attendance", methods=["POST"], endpoint="save_attendance")
    @api_errors
    def save_attendance(class_id: int):
        data = request.get_json(silent=True) or {}
        day = parse_day(data.get("date"), today_local())

        if "all" in data:
            result = container.attendance_service.mark_all(class_id, day, _parse_flag(data["all"], "all"))
        else:
            result = container.attendance_service.save_class_attendance(
                class_id,
                day,
                _parse_marks(data.get("marks")),
                default=_parse_flag(data.get("default", False), "default"),
            )
        return jsonify({"success": True, "result": _result_to_ui(result)})

    @app.route("/api/students/<int:student_id>/attendance", methods=["PUT"], endpoint="record_attendance")
    @api_errors
    def record_attendance(student_id: int):
        data = request.get_json(silent=True) or {}
        if not isinstance(data.get("is_present"), bool):
            raise ValidationError("is_present must be true/false")
        day = parse_day(data.get("date"), today_local())
        record = container.attendance_service.record_attendance(student_id, day, data["is_present"])
        return jsonify({"success": True, "record": _record_to_ui(record)})

    @app.route("/api/students/<int:student_id>/attendance", methods=["GET"], endpoint="get_attendance")
    @api_errors
    def get_attendance(student_id: int):
        day = parse_day(request.args.get("date"), today_local())
        record = container.attendance_service.get_attendance(student_id, day)
        return jsonify({"success": True, "record": _record_to_ui(record) if record else None})
