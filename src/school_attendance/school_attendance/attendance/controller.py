from __future__ import annotations

from io import BytesIO

from flask import Flask, request, send_file, session

from ..common.permissions import to_role
from ..common.responses import ok
from ..common.validators import optional_int
from ..container import Container
from ..reports.service import RenderedReport
from ..users.controller import login_required

PREFIX = "/api/attendance"


def register(app: Flask, container: Container) -> None:
    attendance = container.attendance_service
    reports = container.report_service

    def _role():
        return to_role(session.get("role"))

    def _week_args() -> dict:
        return {
            "year": optional_int(request.args.get("year")),
            "month": optional_int(request.args.get("month")),
            "week": optional_int(request.args.get("week")),
        }

    def _json_body() -> dict:
        body = request.get_json(silent=True)
        return body if isinstance(body, dict) else {}

    def _body_value(body: dict, key: str):
        value = body.get(key)
        if value in (None, "", "undefined"):
            return None
        return value

    def _send_report(report: RenderedReport):
        return send_file(
            BytesIO(report.content),
            mimetype=report.content_type,
            as_attachment=True,
            download_name=report.filename,
        )

    # ===== JSON VIEWS =====

    @app.route(f"{PREFIX}/weeks", methods=["GET"], endpoint="attendance_weeks")
    @login_required
    def weeks_in_month():
        result = attendance.list_weeks(
            current_role=_role(),
            year=optional_int(request.args.get("year")),
            month=optional_int(request.args.get("month")),
        )
        return ok("Success Get Weeks In Month", result)

    @app.route(f"{PREFIX}/class/<int:class_id>/daily", methods=["GET"], endpoint="attendance_daily")
    @login_required
    def daily(class_id: int):
        result = attendance.get_daily_attendance(
            current_role=_role(),
            class_id=class_id,
            attendance_date=request.args.get("date"),
        )
        return ok("Success Get Daily Attendance", result)

    @app.route(
        f"{PREFIX}/class/<int:class_id>/student/<int:student_id>/details",
        methods=["GET"],
        endpoint="attendance_details",
    )
    @login_required
    def details(class_id: int, student_id: int):
        result = attendance.get_attendance_details(
            current_role=_role(),
            class_id=class_id,
            student_id=student_id,
            attendance_date=request.args.get("date"),
        )
        return ok("Success Get Attendance Details", result)

    @app.route(f"{PREFIX}/class/<int:class_id>/weekly", methods=["GET"], endpoint="attendance_weekly")
    @login_required
    def weekly(class_id: int):
        result = attendance.get_weekly_attendance(current_role=_role(), class_id=class_id, **_week_args())
        return ok("Success Get Weekly Attendance", result)

    @app.route(
        f"{PREFIX}/class/<int:class_id>/weekly/student/<int:student_id>",
        methods=["GET"],
        endpoint="attendance_student_weekly",
    )
    @login_required
    def student_weekly(class_id: int, student_id: int):
        result = attendance.get_student_weekly_attendance(
            current_role=_role(), class_id=class_id, student_id=student_id, **_week_args()
        )
        return ok("Success Get Student Weekly Attendance", result)

    @app.route(
        f"{PREFIX}/class/<int:class_id>/monthly/student/<int:student_id>",
        methods=["GET"],
        endpoint="attendance_student_monthly",
    )
    @login_required
    def student_monthly(class_id: int, student_id: int):
        result = attendance.get_student_monthly_attendance(
            current_role=_role(),
            class_id=class_id,
            student_id=student_id,
            year=optional_int(request.args.get("year")),
            month=optional_int(request.args.get("month")),
        )
        return ok("Success Get Student Monthly Attendance", result)

    # ===== WRITES =====

    @app.route(
        f"{PREFIX}/class/<int:class_id>/update-attendance",
        methods=["PUT"],
        endpoint="attendance_update_many",
    )
    @login_required
    def update_many(class_id: int):
        body = _json_body()
        result = attendance.create_or_update_many(
            current_role=_role(),
            class_id=class_id,
            attendance_date=_body_value(body, "date"),
            student_attendances=_body_value(body, "studentAttendances") or [],
        )
        return ok("Success Create Attendance", result, 201)

    @app.route(
        f"{PREFIX}/class/<int:class_id>/student/<int:student_id>",
        methods=["PUT"],
        endpoint="attendance_update_one",
    )
    @login_required
    def update_one(class_id: int, student_id: int):
        body = _json_body()
        result = attendance.create_or_update(
            current_role=_role(),
            class_id=class_id,
            student_id=student_id,
            attendance_date=_body_value(body, "date"),
            status=_body_value(body, "status"),
        )
        return ok("Success Create Or Update Attendance", result)

    # ===== PDF EXPORT =====

    @app.route(f"{PREFIX}/class/<int:class_id>/daily/pdf", methods=["GET"], endpoint="attendance_daily_pdf")
    @login_required
    def daily_pdf(class_id: int):
        report = reports.daily_report(current_role=_role(), class_id=class_id, attendance_date=request.args.get("date"))
        return _send_report(report)

    @app.route(f"{PREFIX}/class/<int:class_id>/weekly/pdf", methods=["GET"], endpoint="attendance_weekly_pdf")
    @login_required
    def weekly_pdf(class_id: int):
        report = reports.weekly_report(current_role=_role(), class_id=class_id, **_week_args())
        return _send_report(report)

    @app.route(
        f"{PREFIX}/class/<int:class_id>/weekly/student/<int:student_id>/pdf",
        methods=["GET"],
        endpoint="attendance_student_weekly_pdf",
    )
    @login_required
    def student_weekly_pdf(class_id: int, student_id: int):
        report = reports.student_weekly_report(
            current_role=_role(), class_id=class_id, student_id=student_id, **_week_args()
        )
        return _send_report(report)

    @app.route(
        f"{PREFIX}/class/<int:class_id>/monthly/student/<int:student_id>/pdf",
        methods=["GET"],
        endpoint="attendance_student_monthly_pdf",
    )
    @login_required
    def student_monthly_pdf(class_id: int, student_id: int):
        report = reports.student_monthly_report(
            current_role=_role(),
            class_id=class_id,
            student_id=student_id,
            year=optional_int(request.args.get("year")),
            month=optional_int(request.args.get("month")),
        )
        return _send_report(report)
