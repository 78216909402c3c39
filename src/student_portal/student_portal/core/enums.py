from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for access control and dashboard routing."""

    ADMIN = "admin"
    TEACHER = "teacher"
    STUDENT = "student"


class StudentStatus(str, Enum):
    ENROLLED = "Enrolled"
    ON_PROBATION = "On_Probation"
    GRADUATED = "Graduated"
    SUSPENDED = "Suspended"


class AttendanceStatus(str, Enum):
    """Attendance statuses counted by the aggregator.

    Records may carry other status strings; those count towards the total only.
    """

    PRESENT = "present"
    ABSENT = "absent"


class Grade(str, Enum):
    A_PLUS = "A+"
    A = "A"
    A_MINUS = "A-"
    B_PLUS = "B+"
    B = "B"
    B_MINUS = "B-"
    C_PLUS = "C+"
    C = "C"
    C_MINUS = "C-"
    D = "D"
    F = "F"


class CollectionKey(str, Enum):
    """Keys of the collections held by a record store."""

    USERS = "users"
    STUDENTS = "students"
    TEACHERS = "teachers"
    COURSES = "courses"
    ATTENDANCE = "attendance"
    RESULTS = "results"
    CURRENT_USER = "currentUser"
