from __future__ import annotations

import pytest
from werkzeug.security import generate_password_hash

from src.student_portal.student_portal.core.enums import CollectionKey, Role
from src.student_portal.student_portal.main import create_app
from src.student_portal.student_portal.storage.defaults import DEFAULT_USERS, seed_defaults
from src.student_portal.student_portal.users.model import User


@pytest.fixture
def app():
    app = create_app("config.testing")
    container = app.extensions["student_portal"]
    container.users_repo.save_all(
        User(user_id, generate_password_hash(password, method="pbkdf2:sha256:1"), Role(role), name)
        for user_id, password, role, name in DEFAULT_USERS
    )
    container.store.set(CollectionKey.ATTENDANCE, [])
    seed_defaults(container.store)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


def login(client, user_id, password, role):
    return client.post("/api/login", json={"userId": user_id, "password": password, "role": role})


def test_login_returns_dashboard_redirect(client):
    resp = login(client, "teacher001", "teacher123", "teacher")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["success"] is True
    assert body["user"]["userId"] == "teacher001"
    assert body["redirectUrl"] == "/api/dashboard/teacher"

    me = client.get("/api/me").get_json()
    assert me["role"] == "teacher"


def test_bad_login_is_unauthorized(client):
    resp = login(client, "teacher001", "nope", "teacher")

    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


def test_endpoints_require_login(client):
    assert client.get("/api/me").status_code == 401
    assert client.get("/api/students").status_code == 401


def test_role_restrictions(client):
    login(client, "student001", "student123", "student")

    assert client.get("/api/students").status_code == 403
    assert client.get("/api/dashboard/admin").status_code == 403
    # students only see their own records
    assert client.get("/api/results/student/student002").status_code == 403
    assert client.get("/api/results/student/student001").status_code == 200


def test_logout_ends_session(client):
    login(client, "admin001", "admin123", "admin")

    assert client.post("/api/logout").status_code == 200
    assert client.get("/api/me").status_code == 401


def test_mark_attendance_and_summary(client):
    login(client, "teacher001", "teacher123", "teacher")

    resp = client.post(
        "/api/attendance/bulk",
        json={
            "courseId": "CS101",
            "date": "2026-02-02",
            "entries": [
                {"studentId": "student001", "status": "present"},
                {"studentId": "student002", "status": "absent"},
            ],
        },
    )
    assert resp.status_code == 200
    assert resp.get_json()["message"] == "Attendance marked for 2 students"

    resp = client.post(
        "/api/attendance", json={"courseId": "CS101", "studentId": "student002", "date": "2026-02-02", "status": "present"}
    )
    assert resp.status_code == 200
    assert resp.get_json()["result"]["markedBy"] == "teacher001"

    records = client.get("/api/attendance/course/CS101?date=2026-02-02").get_json()
    assert len(records) == 2

    summary = client.get("/api/attendance/course/CS101/summary").get_json()
    assert summary["courseName"] == "Introduction to Programming"
    assert summary["totalClasses"] == 1
    assert summary["totalStudents"] == 4


def test_bad_date_is_a_bad_request(client):
    login(client, "teacher001", "teacher123", "teacher")

    resp = client.post("/api/attendance", json={"courseId": "CS101", "studentId": "student001", "date": "02/02/2026"})

    assert resp.status_code == 400


def test_save_and_read_result(client):
    login(client, "teacher001", "teacher123", "teacher")

    resp = client.put(
        "/api/results/CS101/student003",
        json={"quiz1": 20, "quiz2": 20, "midterm": 48, "final": 80, "assignment": 30},
    )
    assert resp.status_code == 200
    assert resp.get_json()["result"]["grade"] == "A+"

    body = client.get("/api/results/CS101/student003").get_json()
    assert body["totalMarks"] == 198
    assert body["percentage"] == 90
    assert body["rank"] == {"rank": 2, "totalStudents": 4}

    course = client.get("/api/results/course/CS101").get_json()
    assert course["statistics"]["totalStudents"] == 4
    assert {r["studentName"] for r in course["results"]} >= {"James Brown"}


def test_out_of_range_marks_are_a_bad_request(client):
    login(client, "teacher001", "teacher123", "teacher")

    resp = client.put("/api/results/CS101/student001", json={"quiz1": 25})

    assert resp.status_code == 400


def test_result_not_found(client):
    login(client, "admin001", "admin123", "admin")

    assert client.get("/api/results/CS101/student004").status_code == 404


def test_admin_manages_students(client):
    login(client, "admin001", "admin123", "admin")

    resp = client.post(
        "/api/students",
        json={"name": "Ava Green", "email": "ava@university.edu", "department": "CS", "semester": 1, "password": "secret1"},
    )
    assert resp.status_code == 201
    student_id = resp.get_json()["student"]["id"]
    assert student_id == "student006"

    assert client.get(f"/api/students/{student_id}").status_code == 200
    assert client.delete(f"/api/students/{student_id}").status_code == 200
    assert client.get(f"/api/students/{student_id}").status_code == 404
    assert client.delete(f"/api/students/{student_id}").status_code == 400


def test_dashboards(client):
    login(client, "student001", "student123", "student")
    student = client.get("/api/dashboard/student").get_json()
    assert student["student"]["id"] == "student001"
    assert len(student["courses"]) == 3

    login(client, "teacher002", "teacher123", "teacher")
    teacher = client.get("/api/dashboard/teacher").get_json()
    assert [c["course"]["id"] for c in teacher["courses"]] == ["CS201"]

    login(client, "admin001", "admin123", "admin")
    admin = client.get("/api/dashboard/admin").get_json()
    assert admin["totalStudents"] == 5
    assert admin["totalCourses"] == 3


def test_bulk_attendance_with_a_blank_student_is_rejected_whole(client):
    login(client, "teacher001", "teacher123", "teacher")

    resp = client.post(
        "/api/attendance/bulk",
        json={
            "courseId": "CS101",
            "date": "2026-02-02",
            "entries": [{"studentId": "student001", "status": "present"}, {"studentId": "", "status": "present"}],
        },
    )

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False
    assert client.get("/api/attendance/course/CS101?date=2026-02-02").get_json() == []


def test_change_password_then_login_with_new_one(client):
    login(client, "student001", "student123", "student")

    resp = client.post("/api/password", json={"currentPassword": "student123", "newPassword": "fresh-pass"})

    assert resp.status_code == 200
    assert resp.get_json()["message"] == "Password updated successfully"
    client.post("/api/logout")
    assert login(client, "student001", "student123", "student").status_code == 401
    assert login(client, "student001", "fresh-pass", "student").status_code == 200


def test_change_password_with_wrong_current_password(client):
    login(client, "student001", "student123", "student")

    resp = client.post("/api/password", json={"currentPassword": "nope", "newPassword": "fresh-pass"})

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Current password is incorrect"


def test_change_password_requires_login(client):
    resp = client.post("/api/password", json={"currentPassword": "student123", "newPassword": "fresh-pass"})

    assert resp.status_code == 401
