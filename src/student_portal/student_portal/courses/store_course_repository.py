from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import DEFAULT_COURSE_CREDITS
from ..core.enums import CollectionKey
from ..storage.repository import CollectionRepository
from .model import Course
from .repository import CourseRepository


class StoreCourseRepository(CollectionRepository[Course], CourseRepository):
    key = CollectionKey.COURSES

    def _from_row(self, row: dict) -> Course:
        return Course(
            id=str(row["id"]),
            name=str(row.get("name", "")),
            code=str(row.get("code") or row["id"]),
            # A missing or zero credit count falls back to the default.
            credits=int(row.get("credits") or DEFAULT_COURSE_CREDITS),
            teacher_id=str(row.get("teacherId") or ""),
            teacher_name=str(row.get("teacherName") or ""),
            department=str(row.get("department") or ""),
            semester=str(row.get("semester") or ""),
            total_classes=int(row.get("totalClasses") or 0),
        )

    def _to_row(self, item: Course) -> dict:
        return item.to_dict()

    def get_by_id(self, course_id: str) -> Optional[Course]:
        return next((c for c in self.list_all() if c.id == course_id), None)

    def list_for_teacher(self, teacher_id: str) -> Sequence[Course]:
        return [c for c in self.list_all() if c.teacher_id == teacher_id]
