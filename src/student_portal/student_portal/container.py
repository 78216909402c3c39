from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.service import AttendanceService
from .attendance.store_attendance_repository import StoreAttendanceRepository
from .core.constants import DEFAULT_AT_RISK_THRESHOLD
from .courses.service import CourseService
from .courses.store_course_repository import StoreCourseRepository
from .dashboard.service import DashboardService
from .results.service import ResultsService
from .results.store_result_repository import StoreResultRepository
from .storage.connection import DatabaseConnection, DBConfig
from .storage.defaults import seed_defaults
from .storage.file_store import JsonFileRecordStore
from .storage.memory_store import InMemoryRecordStore
from .storage.mysql_store import MySQLRecordStore
from .storage.store import RecordStore
from .students.service import StudentService
from .students.store_student_repository import StoreStudentRepository
from .users.service import AuthService
from .users.store_user_repository import StoreSessionRepository, StoreTeacherRepository, StoreUserRepository


@dataclass(frozen=True)
class Container:
    store: RecordStore

    users_repo: StoreUserRepository
    teachers_repo: StoreTeacherRepository
    sessions_repo: StoreSessionRepository
    students_repo: StoreStudentRepository
    courses_repo: StoreCourseRepository
    attendance_repo: StoreAttendanceRepository
    results_repo: StoreResultRepository

    auth_service: AuthService
    student_service: StudentService
    course_service: CourseService
    attendance_service: AttendanceService
    results_service: ResultsService
    dashboard_service: DashboardService


def build_store(*, backend: str = "memory", data_dir: Optional[str] = None, db_config: Optional[dict] = None) -> RecordStore:
    backend = (backend or "memory").lower()
    if backend == "memory":
        return InMemoryRecordStore(seeder=seed_defaults)
    if backend == "file":
        if not data_dir:
            raise ValueError("DATA_DIR is required for the file store")
        return JsonFileRecordStore(data_dir, seeder=seed_defaults)
    if backend == "mysql":
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config or {}))
        return MySQLRecordStore(conn, seeder=seed_defaults)
    raise ValueError(f"Unknown store backend: {backend!r}")


def build_container(*, store: RecordStore, at_risk_threshold: int = DEFAULT_AT_RISK_THRESHOLD) -> Container:
    users_repo = StoreUserRepository(store)
    teachers_repo = StoreTeacherRepository(store)
    sessions_repo = StoreSessionRepository(store)
    students_repo = StoreStudentRepository(store)
    courses_repo = StoreCourseRepository(store)
    attendance_repo = StoreAttendanceRepository(store)
    results_repo = StoreResultRepository(store)

    auth_service = AuthService(users_repo, sessions_repo)
    student_service = StudentService(students_repo, users_repo, courses_repo)
    course_service = CourseService(courses_repo, teachers_repo)
    attendance_service = AttendanceService(attendance_repo, students_repo, courses_repo, sessions_repo)
    results_service = ResultsService(results_repo, students_repo, courses_repo)
    dashboard_service = DashboardService(
        attendance_service,
        results_service,
        course_service,
        students_repo,
        teachers_repo,
        at_risk_threshold=at_risk_threshold,
    )

    return Container(
        store=store,
        users_repo=users_repo,
        teachers_repo=teachers_repo,
        sessions_repo=sessions_repo,
        students_repo=students_repo,
        courses_repo=courses_repo,
        attendance_repo=attendance_repo,
        results_repo=results_repo,
        auth_service=auth_service,
        student_service=student_service,
        course_service=course_service,
        attendance_service=attendance_service,
        results_service=results_service,
        dashboard_service=dashboard_service,
    )
