from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Union

from ..common.datetime_utils import format_timestamp
from ..common.validators import require_non_empty
from ..core.enums import AttendanceStatus
from ..students.model import Student


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance mark.

    Identity is (course_id, student_id, attendance_date). ``status`` is kept
    as the raw string so unknown values survive a round trip; only
    ``present`` and ``absent`` are counted by name.
    """

    course_id: str
    student_id: str
    attendance_date: date
    status: Union[AttendanceStatus, str]
    marked_by: str
    marked_at: datetime

    def __post_init__(self):
        require_non_empty(self.course_id, "Course id")
        require_non_empty(self.student_id, "Student id")
        if isinstance(self.status, AttendanceStatus):
            object.__setattr__(self, "status", self.status.value)
        if self.marked_at.tzinfo is None:
            object.__setattr__(self, "marked_at", self.marked_at.replace(tzinfo=timezone.utc))

    @property
    def key(self) -> tuple[str, str, date]:
        return (self.course_id, self.student_id, self.attendance_date)

    @property
    def record_id(self) -> str:
        return f"{self.course_id}_{self.student_id}_{self.attendance_date.isoformat()}"

    @property
    def is_present(self) -> bool:
        return self.status == AttendanceStatus.PRESENT.value

    @property
    def is_absent(self) -> bool:
        return self.status == AttendanceStatus.ABSENT.value

    def to_dict(self) -> dict:
        return {
            "id": self.record_id,
            "courseId": self.course_id,
            "studentId": self.student_id,
            "date": self.attendance_date.isoformat(),
            "status": self.status,
            "markedBy": self.marked_by,
            "markedAt": format_timestamp(self.marked_at),
        }


@dataclass(frozen=True)
class AttendanceEntry:
    """One line of a bulk attendance submission."""

    student_id: str
    status: Union[AttendanceStatus, str]


@dataclass(frozen=True)
class AttendanceStats:
    total: int = 0
    present: int = 0
    absent: int = 0
    percentage: int = 0

    def to_dict(self) -> dict:
        return {"total": self.total, "present": self.present, "absent": self.absent, "percentage": self.percentage}


@dataclass(frozen=True)
class StudentAttendanceSummary:
    student_id: str
    student_name: str
    stats: AttendanceStats

    def to_dict(self) -> dict:
        return {"studentId": self.student_id, "studentName": self.student_name, **self.stats.to_dict()}


@dataclass(frozen=True)
class CourseAttendanceSummary:
    course_id: str
    course_name: str
    total_classes: int
    total_students: int
    average_attendance: int
    student_summaries: tuple[StudentAttendanceSummary, ...]

    def to_dict(self) -> dict:
        return {
            "courseId": self.course_id,
            "courseName": self.course_name,
            "totalClasses": self.total_classes,
            "totalStudents": self.total_students,
            "averageAttendance": self.average_attendance,
            "studentSummaries": [s.to_dict() for s in self.student_summaries],
        }


@dataclass(frozen=True)
class AtRiskStudent:
    student: Student
    attendance_percentage: int

    def to_dict(self) -> dict:
        return {**self.student.to_dict(), "attendancePercentage": self.attendance_percentage}
