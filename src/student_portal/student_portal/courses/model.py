from __future__ import annotations

from dataclasses import dataclass

from ..common.validators import require_int_in_range, require_non_empty
from ..core.constants import DEFAULT_COURSE_CREDITS


@dataclass(frozen=True)
class Course:
    id: str
    name: str
    code: str = ""
    credits: int = DEFAULT_COURSE_CREDITS
    teacher_id: str = ""
    teacher_name: str = ""
    department: str = ""
    semester: str = ""
    total_classes: int = 0

    def __post_init__(self):
        require_non_empty(self.id, "Course id")
        require_int_in_range(self.credits, "Credits", minimum=1)
        require_int_in_range(self.total_classes, "Total classes", minimum=0)
        if not self.code:
            object.__setattr__(self, "code", self.id)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "code": self.code,
            "credits": self.credits,
            "teacherId": self.teacher_id,
            "teacherName": self.teacher_name,
            "department": self.department,
            "semester": self.semester,
            "totalClasses": self.total_classes,
        }
