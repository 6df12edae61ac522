from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import today_local
from ..common.http import api_errors, parse_day
from ..container import Container
from ..summary.model import ClassWithStatus


def _to_ui(c: ClassWithStatus) -> dict:
    return {
        "class_id": c.class_id,
        "name": c.class_name,
        "total_students": c.total_students,
        "today_present": c.today_present,
        "today_absent": c.today_absent,
        "attendance_taken": c.attendance_taken,
        "percentage": round(c.percentage, 1),
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/classes", methods=["GET"], endpoint="list_classes")
    @api_errors
    def list_classes():
        today = parse_day(request.args.get("date"), today_local())
        overview = container.summary_service.class_overview(today)
        return jsonify({"success": True, "date": today.isoformat(), "classes": [_to_ui(c) for c in overview]})

    @app.route("/api/classes", methods=["POST"], endpoint="create_class")
    @api_errors
    def create_class():
        data = request.get_json(silent=True) or {}
        created = container.class_service.create_class(data.get("name", ""))
        return jsonify({"success": True, "class": {"class_id": created.class_id, "name": created.name}}), 201

    @app.route("/api/classes/<int:class_id>", methods=["DELETE"], endpoint="delete_class")
    @api_errors
    def delete_class(class_id: int):
        container.class_service.delete_class(class_id)
        return jsonify({"success": True})
