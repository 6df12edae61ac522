from __future__ import annotations

import csv
import io

import pytest

from class_register.main import create_app


@pytest.fixture
def app(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    monkeypatch.delenv("DATABASE_URL", raising=False)
    app = create_app()
    yield app
    app.extensions["class_register"].close()


@pytest.fixture
def client(app):
    return app.test_client()


def _new_class(client, name="Grade 5 - A") -> int:
    res = client.post("/api/classes", json={"name": name})
    assert res.status_code == 201
    return res.get_json()["class"]["class_id"]


def _new_student(client, class_id, name, roll=None) -> int:
    res = client.post(f"/api/classes/{class_id}/students", json={"name": name, "roll_identifier": roll})
    assert res.status_code == 201
    return res.get_json()["student"]["student_id"]


def test_health(client):
    assert client.get("/health").get_json() == {"status": "ok"}


def test_take_attendance_flow(client):
    cid = _new_class(client)
    a = _new_student(client, cid, "Aarav", "01")
    b = _new_student(client, cid, "Doe, Jane")

    res = client.post(f"/api/classes/{cid}/attendance", json={"date": "2025-03-14", "marks": {str(a): True}})
    result = res.get_json()["result"]
    assert res.status_code == 200
    assert result["saved_count"] == 2
    assert result["present_count"] == 1
    assert result["show_interstitial"] is False

    sheet = client.get(f"/api/classes/{cid}/attendance?date=2025-03-14").get_json()["sheet"]
    assert sheet["attendance_exists"] is True
    assert {s["student_id"]: s["is_present"] for s in sheet["students"]} == {a: True, b: False}

    classes = client.get("/api/classes?date=2025-03-14").get_json()["classes"]
    assert classes[0]["attendance_taken"] is True
    assert classes[0]["percentage"] == 50.0

    students = client.get(f"/api/classes/{cid}/students").get_json()["students"]
    assert [(s["name"], s["present_count"], s["absent_count"]) for s in students] == [
        ("Aarav", 1, 0),
        ("Doe, Jane", 0, 1),
    ]


def test_single_mark_round_trip(client):
    cid = _new_class(client)
    sid = _new_student(client, cid, "Aarav")

    client.put(f"/api/students/{sid}/attendance", json={"date": "2025-03-14", "is_present": True})
    client.put(f"/api/students/{sid}/attendance", json={"date": "2025-03-14", "is_present": False})

    record = client.get(f"/api/students/{sid}/attendance?date=2025-03-14").get_json()["record"]
    assert record["is_present"] is False
    assert client.get(f"/api/students/{sid}/attendance?date=2025-03-15").get_json()["record"] is None


def test_summary_and_csv_export(client):
    cid = _new_class(client)
    _new_student(client, cid, "Doe, Jane", "R-1")
    client.post(f"/api/classes/{cid}/attendance", json={"date": "2025-03-03", "all": True})

    summary = client.get(f"/api/classes/{cid}/summary?start=2025-03-01&end=2025-03-31").get_json()
    assert summary["students"][0]["percentage"] == 100.0
    assert summary["students"][0]["band"] == "excellent"
    assert summary["statistics"]["students_above_90"] == 1

    res = client.get(f"/api/classes/{cid}/summary.csv?start=2025-03-01&end=2025-03-31")
    assert res.mimetype == "text/csv"
    assert "attachment; filename=Attendance_Grade_5_-_A_" in res.headers["Content-Disposition"]
    rows = list(csv.reader(io.StringIO(res.data.decode("utf-8-sig"))))
    assert rows[0] == ["Attendance Report"]
    assert rows[6][0] == "Doe, Jane"


def test_analytics(client):
    cid = _new_class(client)
    _new_student(client, cid, "Aarav")
    _new_student(client, cid, "Bela")
    client.post(f"/api/classes/{cid}/attendance", json={"date": "2025-03-03", "all": True})
    client.post(f"/api/classes/{cid}/attendance", json={"date": "2025-03-04", "all": False})

    analytics = client.get(f"/api/classes/{cid}/analytics?start=2025-03-01&end=2025-03-31").get_json()["analytics"]

    assert analytics["total_days"] == 2
    assert analytics["best_day"] == {"date": "2025-03-03", "percentage": 100.0}
    assert analytics["worst_day"] == {"date": "2025-03-04", "percentage": 0.0}
    assert analytics["average_attendance"] == 50.0


@pytest.mark.parametrize(
    "method, url, body, status",
    [
        ("post", "/api/classes", {"name": ""}, 400),
        ("delete", "/api/classes/999", None, 404),
        ("get", "/api/classes/999/attendance", None, 404),
        ("get", "/api/classes/999/summary", None, 404),
        ("put", "/api/students/999/attendance", {"is_present": True}, 404),
        ("put", "/api/students/999/attendance", {"is_present": "yes"}, 400),
        ("get", "/api/classes?date=yesterday", None, 400),
    ],
)
def test_error_mapping(client, method, url, body, status):
    res = getattr(client, method)(url, json=body) if body is not None else getattr(client, method)(url)

    assert res.status_code == status
    assert res.get_json()["success"] is False


def test_marks_for_students_of_another_class_are_rejected(client):
    cid = _new_class(client, "A")
    other = _new_class(client, "B")
    outsider = _new_student(client, other, "Zed")

    res = client.post(f"/api/classes/{cid}/attendance", json={"date": "2025-03-14", "marks": {str(outsider): True}})

    assert res.status_code == 400


def test_ads_disabled_in_testing(client):
    assert client.get("/api/ads/status").get_json()["enabled"] is False
    assert client.post("/api/ads/consent", json={"granted": True}).status_code == 409


@pytest.mark.parametrize("body", [{"all": "false"}, {"all": 0}, {"marks": {}, "default": "yes"}])
def test_batch_flags_must_be_booleans(client, body):
    cid = _new_class(client)
    sid = _new_student(client, cid, "Aarav")

    res = client.post(f"/api/classes/{cid}/attendance", json={"date": "2025-03-14", **body})

    assert res.status_code == 400
    assert client.get(f"/api/students/{sid}/attendance?date=2025-03-14").get_json()["record"] is None


def test_mark_all_absent_with_boolean_flag(client):
    cid = _new_class(client)
    _new_student(client, cid, "Aarav")

    res = client.post(f"/api/classes/{cid}/attendance", json={"date": "2025-03-14", "all": False})

    assert res.get_json()["result"]["present_count"] == 0


@pytest.mark.parametrize("export", ["summary.csv", "analytics.csv"])
def test_csv_download_for_non_ascii_class_name(client, export):
    cid = _new_class(client, "Lớp 5A")
    _new_student(client, cid, "Nguyễn Văn An")
    client.post(f"/api/classes/{cid}/attendance", json={"date": "2025-03-03", "all": True})

    res = client.get(f"/api/classes/{cid}/{export}?start=2025-03-01&end=2025-03-31")

    assert res.status_code == 200
    # every header must be sendable by a WSGI server
    for _name, value in res.headers.to_wsgi_list():
        value.encode("latin-1")
    disposition = res.headers["Content-Disposition"]
    assert disposition.startswith("attachment;")
    assert "filename*=UTF-8''" in disposition
    assert "Lớp 5A" in res.data.decode("utf-8-sig")
