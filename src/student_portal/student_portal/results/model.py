from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from ..common.datetime_utils import format_timestamp
from ..common.validators import require_int_in_range, require_non_empty
from ..core.constants import UNKNOWN_NAME
from ..core.enums import Grade
from ..core.exceptions import ValidationError
from ..students.model import Student

# Maximum marks per assessment component.
MAX_MARKS = {
    "quiz1": 20,
    "quiz2": 20,
    "midterm": 50,
    "final": 100,
    "assignment": 30,
}
MAX_TOTAL = sum(MAX_MARKS.values())


@dataclass(frozen=True)
class Marks:
    """Marks for the five assessment components, each within its maximum."""

    quiz1: int = 0
    quiz2: int = 0
    midterm: int = 0
    final: int = 0
    assignment: int = 0

    def __post_init__(self):
        for f in fields(self):
            require_int_in_range(getattr(self, f.name), f.name, minimum=0, maximum=MAX_MARKS[f.name])

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Marks":
        """Build from a loose mapping; missing or empty components count as 0."""
        return cls(**{name: data.get(name) or 0 for name in MAX_MARKS})

    @property
    def total(self) -> int:
        return self.quiz1 + self.quiz2 + self.midterm + self.final + self.assignment

    def to_dict(self) -> dict:
        return {name: getattr(self, name) for name in MAX_MARKS}


@dataclass(frozen=True)
class ResultRecord:
    """Domain entity: marks of one student in one course.

    Identity is (course_id, student_id); ``total_marks`` and ``grade`` are
    derived from ``marks`` by the results service.
    """

    course_id: str
    student_id: str
    marks: Marks
    total_marks: int
    grade: Grade
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        require_non_empty(self.course_id, "Course id")
        require_non_empty(self.student_id, "Student id")
        if self.total_marks != self.marks.total:
            raise ValidationError(f"total_marks {self.total_marks} does not match marks total {self.marks.total}")
        object.__setattr__(self, "grade", Grade(self.grade))
        if self.updated_at is not None and self.updated_at.tzinfo is None:
            object.__setattr__(self, "updated_at", self.updated_at.replace(tzinfo=timezone.utc))

    @property
    def key(self) -> tuple[str, str]:
        return (self.course_id, self.student_id)

    @property
    def record_id(self) -> str:
        return f"{self.course_id}_{self.student_id}"

    def to_dict(self) -> dict:
        return {
            "id": self.record_id,
            "courseId": self.course_id,
            "studentId": self.student_id,
            **self.marks.to_dict(),
            "totalMarks": self.total_marks,
            "grade": self.grade.value,
            "updatedAt": format_timestamp(self.updated_at) if self.updated_at else None,
        }


@dataclass(frozen=True)
class DetailedResult:
    result: ResultRecord
    student_name: str
    student_email: str

    @classmethod
    def join(cls, result: ResultRecord, student: Optional[Student]) -> "DetailedResult":
        if student is None:
            return cls(result=result, student_name=UNKNOWN_NAME, student_email="")
        return cls(result=result, student_name=student.name, student_email=student.email)

    def to_dict(self) -> dict:
        return {**self.result.to_dict(), "studentName": self.student_name, "studentEmail": self.student_email}


@dataclass(frozen=True)
class CourseStatistics:
    total_students: int = 0
    average_marks: int = 0
    highest_marks: int = 0
    lowest_marks: int = 0
    grade_distribution: Mapping[str, int] = field(default_factory=dict)
    pass_rate: int = 0

    def to_dict(self) -> dict:
        return {
            "totalStudents": self.total_students,
            "averageMarks": self.average_marks,
            "highestMarks": self.highest_marks,
            "lowestMarks": self.lowest_marks,
            "gradeDistribution": dict(self.grade_distribution),
            "passRate": self.pass_rate,
        }


@dataclass(frozen=True)
class GpaSummary:
    gpa: float = 0.0
    total_credits: int = 0

    @property
    def formatted(self) -> str:
        return f"{self.gpa:.2f}"

    def to_dict(self) -> dict:
        return {"gpa": self.formatted, "totalCredits": self.total_credits}


@dataclass(frozen=True)
class RankInfo:
    rank: Optional[int]
    total_students: int

    def to_dict(self) -> dict:
        return {"rank": self.rank, "totalStudents": self.total_students}
