from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from src.student_portal.student_portal.container import build_container
from src.student_portal.student_portal.core.enums import StudentStatus
from src.student_portal.student_portal.courses.model import Course
from src.student_portal.student_portal.storage.memory_store import InMemoryRecordStore
from src.student_portal.student_portal.students.model import Student


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 2, 8, 30, tzinfo=timezone.utc)


@pytest.fixture
def store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def container(store):
    return build_container(store=store)


def _make_student(student_id: str, name: str, courses=("CS101",), **kwargs) -> Student:
    return Student(
        id=student_id,
        name=name,
        email=f"{student_id}@university.edu",
        department=kwargs.pop("department", "Computer Science"),
        semester=kwargs.pop("semester", 3),
        enrolled_courses=frozenset(courses),
        status=kwargs.pop("status", StudentStatus.ENROLLED),
        enrollment_date=kwargs.pop("enrollment_date", date(2023, 9, 1)),
    )


def _make_course(course_id: str, name: str, credits: int = 3, teacher_id: str = "teacher001") -> Course:
    return Course(id=course_id, name=name, credits=credits, teacher_id=teacher_id, total_classes=30)


@pytest.fixture
def make_student():
    return _make_student


@pytest.fixture
def make_course():
    return _make_course
