from __future__ import annotations

from datetime import date

import pytest
from werkzeug.security import generate_password_hash

from src.school_attendance.school_attendance.container import wire_container
from src.school_attendance.school_attendance.core.enums import AttendanceStatus, Role
from src.school_attendance.school_attendance.main import create_app
from src.school_attendance.school_attendance.reports.renderer import ReportLabTableRenderer
from src.school_attendance.school_attendance.users.model import User


class InMemoryUsers:
    def __init__(self):
        self._users = [
            User(1, "Budi Santoso", "guru@sekolah.test", generate_password_hash("guru123"), Role.TEACHER),
            User(2, "Siti Aminah", "orangtua@sekolah.test", generate_password_hash("orangtua123"), Role.PARENT),
        ]

    def get_by_id(self, user_id):
        return next((u for u in self._users if u.user_id == user_id), None)

    def get_by_email(self, email):
        return next((u for u in self._users if u.email == email), None)


@pytest.fixture
def app(monkeypatch, class_repo, student_repo, attendance_repo):
    monkeypatch.setenv("APP_ENV", "testing")
    container = wire_container(
        users_repo=InMemoryUsers(),
        classes_repo=class_repo,
        students_repo=student_repo,
        attendance_repo=attendance_repo,
        renderer=ReportLabTableRenderer(school_name="Sekolah Uji"),
    )
    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


def _login_as(client, role: Role, user_id: int = 1):
    with client.session_transaction() as sess:
        sess["user_id"] = user_id
        sess["role"] = role.value


def test_login_sets_session_role(client):
    res = client.post("/api/auth/login", json={"email": "guru@sekolah.test", "password": "guru123"})

    assert res.status_code == 200
    assert res.get_json()["data"]["role"] == "TEACHER"
    me = client.get("/api/auth/me").get_json()
    assert me["data"]["email"] == "guru@sekolah.test"


def test_login_with_wrong_password(client):
    res = client.post("/api/auth/login", json={"email": "guru@sekolah.test", "password": "nope"})

    assert res.status_code == 401
    assert res.get_json() == {"success": False, "message": "Wrong email or password"}


def test_logout_clears_session(client):
    _login_as(client, Role.TEACHER)

    assert client.delete("/api/auth/logout").status_code == 200
    assert client.get("/api/auth/me").status_code == 401


def test_attendance_requires_login(client):
    res = client.get("/api/attendance/class/1/daily?date=2024-02-05")

    assert res.status_code == 401


def test_daily_attendance(client, attendance_repo):
    attendance_repo.add(1, 1, date(2024, 2, 5), AttendanceStatus.PRESENT)
    _login_as(client, Role.TEACHER)

    res = client.get("/api/attendance/class/1/daily?date=2024-02-05")

    body = res.get_json()
    assert res.status_code == 200
    assert body["success"] is True
    assert body["data"]["percentagePresent"] == 33.33
    assert [a["student"]["name"] for a in body["data"]["attendance"]] == ["Ahmad", "Bella", "Citra"]


def test_parent_is_forbidden(client):
    _login_as(client, Role.PARENT, user_id=2)

    res = client.get("/api/attendance/class/1/daily?date=2024-02-05")

    assert res.status_code == 403
    assert res.get_json()["message"] == "Unauthorized, Forbidden Access!"


def test_error_statuses(client):
    _login_as(client, Role.ADMIN)

    assert client.get("/api/attendance/class/404/daily?date=2024-02-05").status_code == 404
    assert client.get("/api/attendance/class/1/daily?date=2024-13-45").status_code == 400
    assert client.get("/api/attendance/class/1/daily").status_code == 400
    assert client.get("/api/attendance/class/1/weekly?year=2024&month=2&week=9").status_code == 400
    assert client.get("/api/attendance/class/1/weekly?year=2024&month=x&week=1").status_code == 400
    assert client.get("/api/nothing-here").status_code == 404


def test_weekly_and_monthly_views(client):
    _login_as(client, Role.TEACHER)

    weekly = client.get("/api/attendance/class/1/weekly?year=2024&month=2&week=1").get_json()["data"]
    student = client.get("/api/attendance/class/1/weekly/student/2?year=2024&month=2&week=1").get_json()["data"]
    monthly = client.get("/api/attendance/class/1/monthly/student/2?year=2024&month=2").get_json()["data"]
    weeks = client.get("/api/attendance/weeks?year=2024&month=2").get_json()["data"]

    assert len(weekly["students"]) == 3
    assert len(student["attendance"]) == 6
    assert [b["numOfTheWeek"] for b in monthly] == [1, 2, 3, 4]
    assert len(weeks) == 4


def test_details_view(client):
    _login_as(client, Role.TEACHER)

    res = client.get("/api/attendance/class/1/student/3/details?date=2024-02-05")

    assert res.status_code == 200
    assert [r["no_student"] for r in res.get_json()["data"]["student_attendance"]] == [1, 2, 3]


def test_batch_update_is_idempotent(client, attendance_repo):
    _login_as(client, Role.TEACHER)
    payload = {
        "date": "2024-02-05",
        "studentAttendances": [
            {"studentId": 1, "status": "PRESENT"},
            {"studentId": 2, "status": "ABSENT"},
        ],
    }

    first = client.put("/api/attendance/class/1/update-attendance", json=payload)
    second = client.put("/api/attendance/class/1/update-attendance", json=payload)

    assert first.status_code == second.status_code == 201
    assert first.get_json()["data"] == second.get_json()["data"]
    assert attendance_repo.writes == 2


def test_batch_update_rejects_non_member(client, attendance_repo):
    _login_as(client, Role.TEACHER)

    res = client.put(
        "/api/attendance/class/1/update-attendance",
        json={"date": "2024-02-05", "studentAttendances": [{"studentId": 9, "status": "PRESENT"}]},
    )

    assert res.status_code == 400
    assert res.get_json()["message"] == "Student not found in the class"
    assert attendance_repo.writes == 0


def test_batch_update_requires_date(client):
    _login_as(client, Role.TEACHER)

    res = client.put(
        "/api/attendance/class/1/update-attendance",
        json={"date": "undefined", "studentAttendances": [{"studentId": 1, "status": "PRESENT"}]},
    )

    assert res.status_code == 400


def test_single_update(client, attendance_repo):
    _login_as(client, Role.ADMIN)

    res = client.put("/api/attendance/class/1/student/3", json={"date": "2024-02-05", "status": "HOLIDAY"})

    assert res.status_code == 200
    assert res.get_json()["data"]["student"]["name"] == "Bella"
    assert attendance_repo.status_of(1, 3, date(2024, 2, 5)) == AttendanceStatus.HOLIDAY


@pytest.mark.parametrize(
    "url",
    [
        "/api/attendance/class/1/daily/pdf?date=2024-02-05",
        "/api/attendance/class/1/weekly/pdf?year=2024&month=2&week=1",
        "/api/attendance/class/1/weekly/student/1/pdf?year=2024&month=2&week=1",
        "/api/attendance/class/1/monthly/student/1/pdf?year=2024&month=2",
    ],
)
def test_pdf_exports(client, url):
    _login_as(client, Role.TEACHER)

    res = client.get(url)

    assert res.status_code == 200
    assert res.mimetype == "application/pdf"
    assert "attachment" in res.headers["Content-Disposition"]
    assert res.data.startswith(b"%PDF")
