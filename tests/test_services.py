from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

import pytest
from werkzeug.security import check_password_hash, generate_password_hash

from src.student_portal.student_portal.core.enums import CollectionKey, Role, StudentStatus
from src.student_portal.student_portal.core.exceptions import AuthenticationError, ValidationError
from src.student_portal.student_portal.courses.service import CourseService
from src.student_portal.student_portal.users.model import SessionUser, Teacher, User
from src.student_portal.student_portal.users.service import AuthService

FAST_HASH = "pbkdf2:sha256:1"


@dataclass
class InMemoryUsers:
    users_by_id: dict[str, User]

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self.users_by_id.get(user_id)

    def update(self, user: User) -> bool:
        if user.id not in self.users_by_id:
            return False
        self.users_by_id[user.id] = user
        return True


@dataclass
class InMemorySessions:
    current: Optional[SessionUser] = None
    writable: bool = True

    def get_current(self) -> Optional[SessionUser]:
        return self.current

    def set_current(self, user: SessionUser) -> bool:
        if self.writable:
            self.current = user
        return self.writable

    def clear_current(self) -> bool:
        self.current = None
        return True


@dataclass
class InMemoryCourses:
    courses: list = field(default_factory=list)

    def list_all(self):
        return list(self.courses)

    def get_by_id(self, course_id):
        return next((c for c in self.courses if c.id == course_id), None)

    def list_for_teacher(self, teacher_id):
        return [c for c in self.courses if c.teacher_id == teacher_id]


@dataclass
class InMemoryTeachers:
    teachers: dict[str, Teacher] = field(default_factory=dict)

    def list_all(self):
        return list(self.teachers.values())

    def get_by_id(self, teacher_id):
        return self.teachers.get(teacher_id)


@pytest.fixture
def auth():
    users = InMemoryUsers(
        {
            "admin001": User("admin001", generate_password_hash("admin123", method=FAST_HASH), Role.ADMIN, "System Admin"),
            "student001": User("student001", generate_password_hash("student123", method=FAST_HASH), Role.STUDENT, "John Smith"),
        }
    )
    return AuthService(users, InMemorySessions())


def test_login_success_persists_session(auth, fixed_now):
    session = auth.login("admin001", "admin123", "admin", now=fixed_now)

    assert session.user_id == "admin001"
    assert session.name == "System Admin"
    assert session.role == Role.ADMIN
    assert session.login_time == fixed_now
    assert auth.get_current_user() == session
    assert auth.is_logged_in()
    assert auth.has_role(Role.ADMIN)
    assert not auth.has_role(Role.STUDENT)


@pytest.mark.parametrize(
    "user_id, password, role",
    [
        ("admin001", "wrong", "admin"),
        ("admin001", "admin123", "student"),
        ("nobody", "admin123", "admin"),
        ("admin001", "admin123", "janitor"),
    ],
)
def test_login_rejects_bad_credentials(auth, user_id, password, role):
    with pytest.raises(AuthenticationError) as exc:
        auth.login(user_id, password, role)

    assert str(exc.value) == "Invalid credentials. Please check your ID, password, and role."
    assert not auth.is_logged_in()


def test_login_requires_all_fields(auth):
    with pytest.raises(AuthenticationError, match="Please fill in all fields"):
        auth.login("admin001", "", "admin")


def test_login_survives_unpersisted_session(fixed_now):
    users = InMemoryUsers({"student001": User("student001", generate_password_hash("x" * 6, method=FAST_HASH), Role.STUDENT, "J")})
    sessions = InMemorySessions(writable=False)

    session = AuthService(users, sessions).login("student001", "xxxxxx", Role.STUDENT, now=fixed_now)

    assert session.user_id == "student001"
    assert sessions.current is None


def test_logout_clears_session(auth):
    auth.login("student001", "student123", "student")

    auth.logout()

    assert auth.get_current_user() is None
    assert not auth.is_logged_in()


def test_logout_for_another_user_keeps_session(auth):
    auth.login("student001", "student123", "student")

    auth.logout("admin001")
    assert auth.get_current_user().user_id == "student001"

    auth.logout("student001")
    assert auth.get_current_user() is None


def test_update_password_needs_a_session(auth):
    result = auth.update_password("student123", "newpass1")

    assert not result.success
    assert result.message == "Not logged in"


def test_update_password_for_unknown_user(auth):
    result = auth.update_password("whatever", "newpass1", user_id="student999")

    assert not result.success
    assert result.message == "User not found"


def test_update_password_rejects_wrong_current_password(auth):
    auth.login("student001", "student123", "student")

    result = auth.update_password("wrong", "newpass1")

    assert not result.success
    assert result.message == "Current password is incorrect"
    assert auth.login("student001", "student123", "student")


def test_update_password_rehashes_and_allows_new_login(auth):
    auth.login("student001", "student123", "student")

    result = auth.update_password("student123", "newpass1")

    assert result.success
    assert result.message == "Password updated successfully"
    auth.logout()
    assert auth.login("student001", "newpass1", "student").user_id == "student001"
    with pytest.raises(AuthenticationError):
        auth.login("student001", "student123", "student")


def test_update_password_rejects_short_new_password(auth):
    with pytest.raises(ValidationError):
        auth.update_password("admin123", "abc", user_id="admin001")

    assert auth.login("admin001", "admin123", "admin")


@pytest.mark.parametrize(
    "role, path",
    [
        (Role.ADMIN, "/api/dashboard/admin"),
        ("teacher", "/api/dashboard/teacher"),
        ("student", "/api/dashboard/student"),
        ("janitor", "/"),
        (None, "/"),
    ],
)
def test_redirect_for(role, path):
    assert AuthService.redirect_for(role) == path


def test_session_round_trips_through_store(container, fixed_now):
    container.users_repo.save_all(
        [User("teacher001", generate_password_hash("teacher123", method=FAST_HASH), Role.TEACHER, "Dr. Sarah Johnson")]
    )

    container.auth_service.login("teacher001", "teacher123", "teacher", now=fixed_now)

    assert container.store.get(CollectionKey.CURRENT_USER) == {
        "userId": "teacher001",
        "name": "Dr. Sarah Johnson",
        "role": "teacher",
        "loginTime": "2026-02-02T08:30:00+00:00",
    }
    assert container.sessions_repo.get_current().login_time == fixed_now


@pytest.fixture
def directory(container, make_student, make_course):
    container.students_repo.save_all(
        [
            make_student("student001", "John Smith", courses=("CS101", "CS201")),
            make_student("student002", "Emma Wilson", courses=("CS201",), department="Information Technology"),
        ]
    )
    container.courses_repo.save_all([make_course("CS101", "Introduction to Programming"), make_course("CS201", "Data Structures")])
    return container.student_service


def test_list_students_searches_case_insensitively(directory):
    assert [s.id for s in directory.list_students()] == ["student001", "student002"]
    assert [s.id for s in directory.list_students("EMMA")] == ["student002"]
    assert [s.id for s in directory.list_students("information")] == ["student002"]
    assert [s.id for s in directory.list_students("student001@")] == ["student001"]
    assert directory.list_students("nobody") == []


def test_student_courses_and_enrollment(directory):
    assert [c.id for c in directory.get_student_courses("student001")] == ["CS101", "CS201"]
    assert directory.get_student_courses("ghost") == []
    assert [s.id for s in directory.get_enrolled_students("CS201")] == ["student001", "student002"]


def test_add_student_creates_login_account(directory, container):
    student = directory.add_student(
        name="Olivia Martinez",
        email="olivia.martinez@university.edu",
        department="Information Technology",
        semester=7,
        password="secret1",
        enrolled_on=date(2026, 2, 2),
    )

    assert student.id == "student003"
    assert student.status == StudentStatus.ENROLLED
    assert student.enrolled_courses == frozenset()
    assert directory.get_student("student003") == student

    user = container.users_repo.get_by_id("student003")
    assert user.role == Role.STUDENT
    assert user.name == "Olivia Martinez"
    assert check_password_hash(user.password, "secret1")


def test_generated_id_skips_taken_ids(directory, make_student, container):
    container.students_repo.delete_by_id("student001")
    container.students_repo.add(make_student("student003", "James Brown"))

    student = directory.add_student(
        name="William Taylor", email="w@university.edu", department="CS", semester=5, password="secret1"
    )

    # two students remain, so the candidate is student003, which is taken
    assert student.id == "student004"


@pytest.mark.parametrize(
    "overrides",
    [
        {"name": " "},
        {"email": ""},
        {"semester": 0},
        {"password": "12345"},
    ],
)
def test_add_student_validates_input(directory, overrides):
    data = dict(name="New", email="new@university.edu", department="CS", semester=1, password="secret1")
    data.update(overrides)

    with pytest.raises(ValidationError):
        directory.add_student(**data)

    assert len(directory.list_students()) == 2


def test_delete_student_removes_login_account(directory, container):
    container.users_repo.add(User("student002", "hash", Role.STUDENT, "Emma Wilson"))

    directory.delete_student("student002")

    assert directory.get_student("student002") is None
    assert container.users_repo.get_by_id("student002") is None


def test_delete_unknown_student(directory):
    with pytest.raises(ValidationError, match="Student not found"):
        directory.delete_student("ghost")


def test_teacher_courses_prefer_profile_assignment(make_course):
    courses = InMemoryCourses(
        [
            make_course("CS101", "Intro", teacher_id="teacher001"),
            make_course("CS201", "Data Structures", teacher_id="teacher002"),
        ]
    )
    teachers = InMemoryTeachers({"teacher001": Teacher("teacher001", "Dr. Sarah Johnson", courses=("CS201",))})
    svc = CourseService(courses, teachers)

    assert [c.id for c in svc.get_teacher_courses("teacher001")] == ["CS201"]
    # no profile: fall back to the course's teacher id
    assert [c.id for c in svc.get_teacher_courses("teacher002")] == ["CS201"]
    assert svc.get_course("CS101").name == "Intro"
    assert len(svc.list_courses()) == 2
