"""Demo data written on first run (and on ``reset``)."""
from __future__ import annotations

import logging
import random
from datetime import date, timedelta
from typing import Callable, Optional

from werkzeug.security import generate_password_hash

from ..common.datetime_utils import format_timestamp, now_utc
from ..core.enums import CollectionKey
from ..results.grading.standard_scheme import StandardGradingScheme
from ..results.model import Marks
from .store import RecordStore

logger = logging.getLogger(__name__)

DEFAULT_USERS = [
    ("admin001", "admin123", "admin", "System Admin"),
    ("teacher001", "teacher123", "teacher", "Dr. Sarah Johnson"),
    ("teacher002", "teacher123", "teacher", "Prof. Michael Chen"),
    ("teacher003", "teacher123", "teacher", "Dr. Emily Davis"),
    ("student001", "student123", "student", "John Smith"),
    ("student002", "student123", "student", "Emma Wilson"),
    ("student003", "student123", "student", "James Brown"),
    ("student004", "student123", "student", "Olivia Martinez"),
    ("student005", "student123", "student", "William Taylor"),
]

DEFAULT_STUDENTS = [
    {
        "id": "student001",
        "name": "John Smith",
        "email": "john.smith@university.edu",
        "department": "Computer Science",
        "semester": 5,
        "enrolledCourses": ["CS101", "CS201", "CS301"],
        "status": "Enrolled",
        "enrollmentDate": "2022-09-01",
    },
    {
        "id": "student002",
        "name": "Emma Wilson",
        "email": "emma.wilson@university.edu",
        "department": "Computer Science",
        "semester": 5,
        "enrolledCourses": ["CS101", "CS201", "CS301"],
        "status": "Enrolled",
        "enrollmentDate": "2022-09-01",
    },
    {
        "id": "student003",
        "name": "James Brown",
        "email": "james.brown@university.edu",
        "department": "Computer Science",
        "semester": 3,
        "enrolledCourses": ["CS101", "CS201"],
        "status": "On_Probation",
        "enrollmentDate": "2023-09-01",
    },
    {
        "id": "student004",
        "name": "Olivia Martinez",
        "email": "olivia.martinez@university.edu",
        "department": "Information Technology",
        "semester": 7,
        "enrolledCourses": ["CS201", "CS301"],
        "status": "Enrolled",
        "enrollmentDate": "2021-09-01",
    },
    {
        "id": "student005",
        "name": "William Taylor",
        "email": "william.taylor@university.edu",
        "department": "Computer Science",
        "semester": 5,
        "enrolledCourses": ["CS101", "CS201", "CS301"],
        "status": "Enrolled",
        "enrollmentDate": "2022-09-01",
    },
]

DEFAULT_TEACHERS = [
    {
        "id": "teacher001",
        "name": "Dr. Sarah Johnson",
        "email": "sarah.johnson@university.edu",
        "department": "Computer Science",
        "courses": ["CS101"],
        "qualification": "Ph.D. in Computer Science",
    },
    {
        "id": "teacher002",
        "name": "Prof. Michael Chen",
        "email": "michael.chen@university.edu",
        "department": "Computer Science",
        "courses": ["CS201"],
        "qualification": "Ph.D. in Software Engineering",
    },
    {
        "id": "teacher003",
        "name": "Dr. Emily Davis",
        "email": "emily.davis@university.edu",
        "department": "Computer Science",
        "courses": ["CS301"],
        "qualification": "Ph.D. in Data Science",
    },
]

DEFAULT_COURSES = [
    {
        "id": "CS101",
        "name": "Introduction to Programming",
        "code": "CS101",
        "credits": 3,
        "teacherId": "teacher001",
        "teacherName": "Dr. Sarah Johnson",
        "department": "Computer Science",
        "semester": "Fall 2024",
        "totalClasses": 30,
    },
    {
        "id": "CS201",
        "name": "Data Structures & Algorithms",
        "code": "CS201",
        "credits": 4,
        "teacherId": "teacher002",
        "teacherName": "Prof. Michael Chen",
        "department": "Computer Science",
        "semester": "Fall 2024",
        "totalClasses": 35,
    },
    {
        "id": "CS301",
        "name": "Database Management Systems",
        "code": "CS301",
        "credits": 3,
        "teacherId": "teacher003",
        "teacherName": "Dr. Emily Davis",
        "department": "Computer Science",
        "semester": "Fall 2024",
        "totalClasses": 28,
    },
]

# (courseId, studentId, quiz1, quiz2, midterm, final, assignment)
DEFAULT_MARKS = [
    ("CS101", "student001", 18, 17, 42, 85, 28),
    ("CS101", "student002", 20, 19, 45, 90, 30),
    ("CS101", "student003", 12, 14, 30, 55, 20),
    ("CS101", "student005", 16, 18, 40, 78, 25),
    ("CS201", "student001", 17, 16, 38, 80, 27),
    ("CS201", "student002", 19, 20, 44, 88, 29),
    ("CS201", "student003", 10, 12, 28, 50, 18),
    ("CS201", "student004", 15, 17, 36, 75, 24),
    ("CS201", "student005", 18, 17, 41, 82, 26),
    ("CS301", "student001", 19, 18, 43, 87, 28),
    ("CS301", "student002", 20, 20, 48, 95, 30),
    ("CS301", "student004", 16, 15, 35, 72, 23),
    ("CS301", "student005", 17, 19, 40, 80, 25),
]

PRESENT_RATE = 0.8
ATTENDANCE_DAYS = 30


def default_users() -> list[dict]:
    hashes: dict[str, str] = {}
    users = []
    for user_id, password, role, name in DEFAULT_USERS:
        if password not in hashes:
            hashes[password] = generate_password_hash(password)
        users.append({"id": user_id, "password": hashes[password], "role": role, "name": name})
    return users


def default_attendance(*, today: Optional[date] = None, rng: Optional[random.Random] = None) -> list[dict]:
    """Random weekday marks for the past month, roughly 80% present."""

    today = today or date.today()
    rng = rng or random.Random()
    marked_at = format_timestamp(now_utc())

    records = []
    for offset in range(ATTENDANCE_DAYS, -1, -1):
        day = today - timedelta(days=offset)
        if day.weekday() >= 5:
            continue
        for course in DEFAULT_COURSES:
            for student in DEFAULT_STUDENTS:
                records.append(
                    {
                        "id": f"{course['id']}_{student['id']}_{day.isoformat()}",
                        "courseId": course["id"],
                        "studentId": student["id"],
                        "date": day.isoformat(),
                        "status": "present" if rng.random() < PRESENT_RATE else "absent",
                        "markedBy": "teacher001",
                        "markedAt": marked_at,
                    }
                )
    return records


def default_results() -> list[dict]:
    scheme = StandardGradingScheme()
    results = []
    for i, (course_id, student_id, *components) in enumerate(DEFAULT_MARKS, start=1):
        marks = Marks(*components)
        results.append(
            {
                "id": f"r{i}",
                "courseId": course_id,
                "studentId": student_id,
                **marks.to_dict(),
                "totalMarks": marks.total,
                "grade": scheme.grade_for(marks.total).value,
                "updatedAt": None,
            }
        )
    return results


DEFAULT_FACTORIES: dict[CollectionKey, Callable[[], list[dict]]] = {
    CollectionKey.USERS: default_users,
    CollectionKey.STUDENTS: lambda: [dict(s) for s in DEFAULT_STUDENTS],
    CollectionKey.TEACHERS: lambda: [dict(t) for t in DEFAULT_TEACHERS],
    CollectionKey.COURSES: lambda: [dict(c) for c in DEFAULT_COURSES],
    CollectionKey.ATTENDANCE: default_attendance,
    CollectionKey.RESULTS: default_results,
}


def seed_defaults(store: RecordStore) -> list[CollectionKey]:
    """Write demo data for every collection that is absent; returns the keys seeded."""

    seeded = []
    for key, factory in DEFAULT_FACTORIES.items():
        if store.get(key) is None:
            if store.set(key, factory()):
                seeded.append(key)
            else:
                logger.error("Could not seed collection %r", key.value)
    if seeded:
        logger.info("Storage initialized (%s)", ", ".join(k.value for k in seeded))
    return seeded
