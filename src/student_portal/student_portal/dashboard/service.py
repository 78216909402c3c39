from __future__ import annotations

from dataclasses import dataclass

from ..attendance.model import AtRiskStudent, AttendanceStats, CourseAttendanceSummary
from ..attendance.service import AttendanceService
from ..common.numbers import round_ratio
from ..core.constants import DEFAULT_AT_RISK_THRESHOLD, HEALTHY_ATTENDANCE, WARNING_ATTENDANCE
from ..core.exceptions import ValidationError
from ..courses.model import Course
from ..courses.service import CourseService
from ..results.model import CourseStatistics, GpaSummary, ResultRecord
from ..results.service import ResultsService
from ..students.model import Student
from ..students.repository import StudentRepository
from ..users.repository import TeacherRepository


@dataclass(frozen=True)
class AdminOverview:
    total_students: int
    total_teachers: int
    total_courses: int
    average_attendance: int
    attendance_trend: str
    at_risk: tuple[AtRiskStudent, ...]

    def to_dict(self) -> dict:
        return {
            "totalStudents": self.total_students,
            "totalTeachers": self.total_teachers,
            "totalCourses": self.total_courses,
            "averageAttendance": self.average_attendance,
            "attendanceTrend": self.attendance_trend,
            "atRisk": [s.to_dict() for s in self.at_risk],
        }


@dataclass(frozen=True)
class TeacherCourseOverview:
    course: Course
    attendance: CourseAttendanceSummary
    statistics: CourseStatistics

    def to_dict(self) -> dict:
        return {
            "course": self.course.to_dict(),
            "attendance": self.attendance.to_dict(),
            "statistics": self.statistics.to_dict(),
        }


@dataclass(frozen=True)
class StudentCourseRow:
    course: Course
    attendance: AttendanceStats
    result: ResultRecord | None

    def to_dict(self) -> dict:
        return {
            "course": self.course.to_dict(),
            "attendance": self.attendance.to_dict(),
            "result": self.result.to_dict() if self.result else None,
        }


@dataclass(frozen=True)
class StudentOverview:
    student: Student
    gpa: GpaSummary
    attendance: AttendanceStats
    courses: tuple[StudentCourseRow, ...]

    def to_dict(self) -> dict:
        return {
            "student": self.student.to_dict(),
            "gpa": self.gpa.to_dict(),
            "attendance": self.attendance.to_dict(),
            "courses": [c.to_dict() for c in self.courses],
        }


def attendance_trend(percentage: int) -> str:
    if percentage >= HEALTHY_ATTENDANCE:
        return "positive"
    if percentage >= WARNING_ATTENDANCE:
        return "neutral"
    return "negative"


class DashboardService:
    """Read models for the admin, teacher and student dashboards."""

    def __init__(
        self,
        attendance: AttendanceService,
        results: ResultsService,
        courses: CourseService,
        students: StudentRepository,
        teachers: TeacherRepository,
        *,
        at_risk_threshold: int = DEFAULT_AT_RISK_THRESHOLD,
    ):
        self._attendance = attendance
        self._results = results
        self._courses = courses
        self._students = students
        self._teachers = teachers
        self._at_risk_threshold = int(at_risk_threshold)

    def admin_overview(self) -> AdminOverview:
        students = self._students.list_all()

        # Students without any attendance history are left out of the average.
        tracked = [self._attendance.get_overall_attendance(s.id) for s in students]
        tracked = [stats.percentage for stats in tracked if stats.total > 0]
        average = round_ratio(sum(tracked), len(tracked))

        return AdminOverview(
            total_students=len(students),
            total_teachers=len(self._teachers.list_all()),
            total_courses=len(self._courses.list_courses()),
            average_attendance=average,
            attendance_trend=attendance_trend(average),
            at_risk=tuple(self._attendance.get_students_at_risk(self._at_risk_threshold)),
        )

    def teacher_overview(self, teacher_id: str) -> list[TeacherCourseOverview]:
        return [
            TeacherCourseOverview(
                course=course,
                attendance=self._attendance.get_course_attendance_summary(course.id),
                statistics=self._results.get_course_statistics(course.id),
            )
            for course in self._courses.get_teacher_courses(teacher_id)
        ]

    def student_overview(self, student_id: str) -> StudentOverview:
        student = self._students.get_by_id(student_id)
        if not student:
            raise ValidationError("Student not found")

        rows = tuple(
            StudentCourseRow(
                course=course,
                attendance=self._attendance.calculate_attendance_percentage(student.id, course.id),
                result=self._results.get_student_course_result(student.id, course.id),
            )
            for course in self._courses.list_courses()
            if student.is_enrolled_in(course.id)
        )
        return StudentOverview(
            student=student,
            gpa=self._results.get_student_gpa(student.id),
            attendance=self._attendance.get_overall_attendance(student.id),
            courses=rows,
        )
