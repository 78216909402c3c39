from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from werkzeug.security import generate_password_hash

from ..common.datetime_utils import today
from ..common.validators import require_int_in_range, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role, StudentStatus
from ..core.exceptions import ValidationError
from ..courses.model import Course
from ..courses.repository import CourseRepository
from ..users.model import User
from ..users.repository import UserRepository
from .model import Student
from .repository import StudentRepository

logger = logging.getLogger(__name__)

STUDENT_ID_PREFIX = "student"


class StudentService:
    """Use case: manage the student directory (admin)."""

    def __init__(self, students: StudentRepository, users: UserRepository, courses: CourseRepository):
        self._students = students
        self._users = users
        self._courses = courses

    def list_students(self, search: str = "") -> list[Student]:
        students = list(self._students.list_all())
        term = (search or "").strip().lower()
        if not term:
            return students
        return [
            s
            for s in students
            if term in s.id.lower()
            or term in s.name.lower()
            or term in s.email.lower()
            or term in s.department.lower()
        ]

    def get_student(self, student_id: str) -> Optional[Student]:
        return self._students.get_by_id(student_id)

    def get_enrolled_students(self, course_id: str) -> Sequence[Student]:
        return self._students.list_enrolled(course_id)

    def get_student_courses(self, student_id: str) -> list[Course]:
        student = self._students.get_by_id(student_id)
        if not student:
            return []
        return [c for c in self._courses.list_all() if student.is_enrolled_in(c.id)]

    def _next_student_id(self, existing: Sequence[Student]) -> str:
        taken = {s.id for s in existing}
        n = len(existing) + 1
        while f"{STUDENT_ID_PREFIX}{n:03d}" in taken:
            n += 1
        return f"{STUDENT_ID_PREFIX}{n:03d}"

    def add_student(
        self,
        *,
        name: str,
        email: str,
        department: str,
        semester: int,
        password: str,
        enrolled_on: Optional[date] = None,
    ) -> Student:
        name = require_non_empty(name, "Name")
        email = require_non_empty(email, "Email")
        department = require_non_empty(department, "Department")
        require_int_in_range(semester, "Semester", minimum=1)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        student = Student(
            id=self._next_student_id(self._students.list_all()),
            name=name,
            email=email,
            department=department,
            semester=semester,
            enrolled_courses=frozenset(),
            status=StudentStatus.ENROLLED,
            enrollment_date=enrolled_on or today(),
        )

        if not self._students.add(student):
            raise ValidationError("Failed to save student")
        if not self._users.add(User(id=student.id, password=generate_password_hash(password), role=Role.STUDENT, name=name)):
            logger.error("Student %s saved without a login account", student.id)
            raise ValidationError("Failed to create login account")

        logger.info("Student %s (%s) added", student.id, student.name)
        return student

    def delete_student(self, student_id: str) -> None:
        if not self._students.get_by_id(student_id):
            raise ValidationError("Student not found")
        if not self._students.delete_by_id(student_id):
            raise ValidationError("Failed to delete student")
        if not self._users.delete_by_id(student_id):
            logger.error("Login account of deleted student %s could not be removed", student_id)
        logger.info("Student %s deleted", student_id)
