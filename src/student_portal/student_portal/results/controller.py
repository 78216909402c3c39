from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import json_body, login_required, roles_required
from ..container import Container
from ..core.enums import Role
from ..students.controller import ensure_can_view_student


def register(app: Flask, container: Container) -> None:
    @app.route("/api/results/<course_id>/<student_id>", methods=["PUT"], endpoint="save_result")
    @roles_required(Role.TEACHER, Role.ADMIN)
    def save_result(course_id: str, student_id: str):
        result = container.results_service.save_result(course_id, student_id, json_body())
        return jsonify(result.to_dict()), 200 if result.success else 500

    @app.route("/api/results/<course_id>/<student_id>", methods=["DELETE"], endpoint="delete_result")
    @roles_required(Role.TEACHER, Role.ADMIN)
    def delete_result(course_id: str, student_id: str):
        result = container.results_service.delete_result(course_id, student_id)
        return jsonify(result.to_dict()), 200 if result.success else 500

    @app.route("/api/results/<course_id>/<student_id>", methods=["GET"], endpoint="get_result")
    @login_required
    def get_result(course_id: str, student_id: str):
        ensure_can_view_student(student_id)
        svc = container.results_service
        record = svc.get_student_course_result(student_id, course_id)
        if record is None:
            return jsonify({"success": False, "message": "Result not found"}), 404
        return jsonify(
            {
                **record.to_dict(),
                "percentage": svc.get_percentage(record.total_marks),
                "rank": svc.get_student_rank(student_id, course_id).to_dict(),
            }
        )

    @app.route("/api/results/course/<course_id>", methods=["GET"], endpoint="course_results")
    @roles_required(Role.TEACHER, Role.ADMIN)
    def course_results(course_id: str):
        svc = container.results_service
        return jsonify(
            {
                "results": [r.to_dict() for r in svc.get_course_results_detailed(course_id)],
                "statistics": svc.get_course_statistics(course_id).to_dict(),
            }
        )

    @app.route("/api/results/student/<student_id>", methods=["GET"], endpoint="student_results")
    @login_required
    def student_results(student_id: str):
        ensure_can_view_student(student_id)
        svc = container.results_service
        return jsonify(
            {
                "results": [r.to_dict() for r in svc.get_student_results(student_id)],
                "gpa": svc.get_student_gpa(student_id).to_dict(),
            }
        )
