from __future__ import annotations

from typing import Optional, Sequence

from ..users.repository import TeacherRepository
from .model import Course
from .repository import CourseRepository


class CourseService:
    def __init__(self, courses: CourseRepository, teachers: TeacherRepository):
        self._courses = courses
        self._teachers = teachers

    def list_courses(self) -> Sequence[Course]:
        return self._courses.list_all()

    def get_course(self, course_id: str) -> Optional[Course]:
        return self._courses.get_by_id(course_id)

    def get_teacher_courses(self, teacher_id: str) -> list[Course]:
        """Courses taught by a teacher.

        The teacher profile's course list wins; courses naming the teacher
        via ``teacher_id`` fill in when the profile is missing.
        """

        teacher = self._teachers.get_by_id(teacher_id)
        if teacher is None:
            return list(self._courses.list_for_teacher(teacher_id))
        assigned = set(teacher.courses)
        return [c for c in self._courses.list_all() if c.id in assigned]
