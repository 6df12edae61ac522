from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import api_errors
from ..container import Container
from .model import Student


def _to_ui(st: Student) -> dict:
    return {
        "student_id": st.student_id,
        "class_id": st.class_id,
        "name": st.name,
        "roll_identifier": st.roll_identifier,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/classes/<int:class_id>/students", methods=["GET"], endpoint="list_students")
    @api_errors
    def list_students(class_id: int):
        school_class = container.class_service.get_class(class_id)
        rows = []
        for st in container.student_service.list_students(class_id):
            present, absent = container.aggregation_service.student_lifetime_counts(st.student_id)
            rows.append({**_to_ui(st), "present_count": present, "absent_count": absent})
        return jsonify({"success": True, "class_name": school_class.name, "students": rows})

    @app.route("/api/classes/<int:class_id>/students", methods=["POST"], endpoint="create_student")
    @api_errors
    def create_student(class_id: int):
        data = request.get_json(silent=True) or {}
        created = container.student_service.create_student(
            class_id,
            data.get("name", ""),
            data.get("roll_identifier"),
        )
        return jsonify({"success": True, "student": _to_ui(created)}), 201

    @app.route("/api/students/<int:student_id>", methods=["DELETE"], endpoint="delete_student")
    @api_errors
    def delete_student(student_id: int):
        container.student_service.delete_student(student_id)
        return jsonify({"success": True})
