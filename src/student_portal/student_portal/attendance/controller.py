from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.web import date_arg, json_body, login_required, roles_required
from ..container import Container
from ..core.constants import DEFAULT_AT_RISK_THRESHOLD, DEFAULT_RECENT_ACTIVITY_LIMIT
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..students.controller import ensure_can_view_student
from .model import AttendanceEntry


def _int_arg(name: str, default: int) -> int:
    try:
        return int(request.args.get(name, default))
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be an integer") from None


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance", methods=["POST"], endpoint="mark_attendance")
    @roles_required(Role.TEACHER, Role.ADMIN)
    def mark_attendance():
        data = json_body()
        result = container.attendance_service.mark_attendance(
            str(data.get("courseId", "")),
            str(data.get("studentId", "")),
            date_arg(data.get("date")),
            str(data.get("status", "")),
            marked_by=session["user_id"],
        )
        return jsonify(result.to_dict()), 200 if result.success else 500

    @app.route("/api/attendance/bulk", methods=["POST"], endpoint="mark_bulk_attendance")
    @roles_required(Role.TEACHER, Role.ADMIN)
    def mark_bulk_attendance():
        data = json_body()
        entries = [
            AttendanceEntry(student_id=str(e.get("studentId", "")), status=str(e.get("status", "")))
            for e in data.get("entries") or []
            if isinstance(e, dict)
        ]
        result = container.attendance_service.mark_bulk_attendance(
            str(data.get("courseId", "")),
            date_arg(data.get("date")),
            entries,
            marked_by=session["user_id"],
        )
        return jsonify(result.to_dict()), 200 if result.success else 500

    @app.route("/api/attendance/course/<course_id>", methods=["GET"], endpoint="course_attendance")
    @roles_required(Role.TEACHER, Role.ADMIN)
    def course_attendance(course_id: str):
        if request.args.get("date"):
            records = container.attendance_service.get_attendance_by_date(course_id, date_arg(request.args.get("date")))
        else:
            records = container.attendance_service.get_course_attendance(course_id)
        return jsonify([r.to_dict() for r in records])

    @app.route("/api/attendance/course/<course_id>/summary", methods=["GET"], endpoint="course_attendance_summary")
    @roles_required(Role.TEACHER, Role.ADMIN)
    def course_attendance_summary(course_id: str):
        return jsonify(container.attendance_service.get_course_attendance_summary(course_id).to_dict())

    @app.route("/api/attendance/student/<student_id>", methods=["GET"], endpoint="student_attendance")
    @login_required
    def student_attendance(student_id: str):
        ensure_can_view_student(student_id)
        course_id = request.args.get("courseId")
        svc = container.attendance_service
        if course_id:
            records = svc.get_student_course_attendance(student_id, course_id)
            stats = svc.calculate_attendance_percentage(student_id, course_id)
        else:
            records = svc.get_student_attendance(student_id)
            stats = svc.get_overall_attendance(student_id)
        return jsonify({"records": [r.to_dict() for r in records], "stats": stats.to_dict()})

    @app.route("/api/attendance/at-risk", methods=["GET"], endpoint="students_at_risk")
    @roles_required(Role.ADMIN, Role.TEACHER)
    def students_at_risk():
        threshold = _int_arg("threshold", DEFAULT_AT_RISK_THRESHOLD)
        return jsonify([s.to_dict() for s in container.attendance_service.get_students_at_risk(threshold)])

    @app.route("/api/attendance/recent", methods=["GET"], endpoint="recent_attendance")
    @roles_required(Role.ADMIN, Role.TEACHER)
    def recent_attendance():
        limit = _int_arg("limit", DEFAULT_RECENT_ACTIVITY_LIMIT)
        return jsonify([r.to_dict() for r in container.attendance_service.get_recent_activity(limit)])
