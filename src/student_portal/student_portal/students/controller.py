from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.web import current_role, json_body, login_required, roles_required
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError


def ensure_can_view_student(student_id: str) -> None:
    """Students may only look at their own records."""
    if current_role() == Role.STUDENT and session.get("user_id") != student_id:
        raise AuthorizationError("You can only view your own records")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/students", methods=["GET"], endpoint="list_students")
    @roles_required(Role.ADMIN, Role.TEACHER)
    def list_students():
        students = container.student_service.list_students(request.args.get("search", ""))
        return jsonify([s.to_dict() for s in students])

    @app.route("/api/students", methods=["POST"], endpoint="add_student")
    @roles_required(Role.ADMIN)
    def add_student():
        data = json_body()
        try:
            semester = int(data.get("semester", 0))
        except (TypeError, ValueError):
            raise ValidationError("Semester must be an integer") from None

        student = container.student_service.add_student(
            name=str(data.get("name", "")),
            email=str(data.get("email", "")),
            department=str(data.get("department", "")),
            semester=semester,
            password=str(data.get("password", "")),
        )
        return jsonify({"success": True, "message": f"Student {student.name} added successfully!", "student": student.to_dict()}), 201

    @app.route("/api/students/<student_id>", methods=["GET"], endpoint="get_student")
    @login_required
    def get_student(student_id: str):
        ensure_can_view_student(student_id)
        student = container.student_service.get_student(student_id)
        if not student:
            return jsonify({"success": False, "message": "Student not found"}), 404
        courses = container.student_service.get_student_courses(student_id)
        return jsonify({**student.to_dict(), "courses": [c.to_dict() for c in courses]})

    @app.route("/api/students/<student_id>", methods=["DELETE"], endpoint="delete_student")
    @roles_required(Role.ADMIN)
    def delete_student(student_id: str):
        container.student_service.delete_student(student_id)
        return jsonify({"success": True, "message": "Student deleted successfully"})

    @app.route("/api/courses", methods=["GET"], endpoint="list_courses")
    @login_required
    def list_courses():
        return jsonify([c.to_dict() for c in container.course_service.list_courses()])

    @app.route("/api/courses/<course_id>/students", methods=["GET"], endpoint="course_students")
    @roles_required(Role.ADMIN, Role.TEACHER)
    def course_students(course_id: str):
        return jsonify([s.to_dict() for s in container.student_service.get_enrolled_students(course_id)])
