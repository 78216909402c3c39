from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.web import roles_required
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    @app.route("/api/dashboard/admin", endpoint="admin_dashboard")
    @roles_required(Role.ADMIN)
    def admin_dashboard():
        return jsonify(container.dashboard_service.admin_overview().to_dict())

    @app.route("/api/dashboard/teacher", endpoint="teacher_dashboard")
    @roles_required(Role.TEACHER)
    def teacher_dashboard():
        courses = container.dashboard_service.teacher_overview(session["user_id"])
        return jsonify({"courses": [c.to_dict() for c in courses]})

    @app.route("/api/dashboard/student", endpoint="student_dashboard")
    @roles_required(Role.STUDENT)
    def student_dashboard():
        return jsonify(container.dashboard_service.student_overview(session["user_id"]).to_dict())
