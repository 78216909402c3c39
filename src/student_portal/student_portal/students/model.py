from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..common.validators import require_int_in_range, require_non_empty
from ..core.enums import StudentStatus


@dataclass(frozen=True)
class Student:
    """Domain entity: a student record.

    ``enrolled_courses`` is the only enrollment relation; courses keep no
    reverse index.
    """

    id: str
    name: str
    email: str
    department: str
    semester: int
    enrolled_courses: frozenset[str] = field(default_factory=frozenset)
    status: StudentStatus = StudentStatus.ENROLLED
    enrollment_date: Optional[date] = None

    def __post_init__(self):
        require_non_empty(self.id, "Student id")
        require_int_in_range(self.semester, "Semester", minimum=1)
        object.__setattr__(self, "enrolled_courses", frozenset(self.enrolled_courses))
        object.__setattr__(self, "status", StudentStatus(self.status))

    def is_enrolled_in(self, course_id: str) -> bool:
        return course_id in self.enrolled_courses

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "department": self.department,
            "semester": self.semester,
            "enrolledCourses": sorted(self.enrolled_courses),
            "status": self.status.value,
            "enrollmentDate": self.enrollment_date.isoformat() if self.enrollment_date else None,
        }
