from __future__ import annotations

from typing import Optional, Sequence

from ..common.datetime_utils import parse_iso_date
from ..core.enums import CollectionKey, StudentStatus
from ..storage.repository import CollectionRepository
from .model import Student
from .repository import StudentRepository


class StoreStudentRepository(CollectionRepository[Student], StudentRepository):
    key = CollectionKey.STUDENTS

    def _from_row(self, row: dict) -> Student:
        enrolled_on = row.get("enrollmentDate")
        return Student(
            id=str(row["id"]),
            name=str(row.get("name", "")),
            email=str(row.get("email", "")),
            department=str(row.get("department", "")),
            semester=int(row["semester"]),
            enrolled_courses=frozenset(str(c) for c in row.get("enrolledCourses") or []),
            status=StudentStatus(row.get("status", StudentStatus.ENROLLED.value)),
            enrollment_date=parse_iso_date(enrolled_on) if enrolled_on else None,
        )

    def _to_row(self, item: Student) -> dict:
        return item.to_dict()

    def get_by_id(self, student_id: str) -> Optional[Student]:
        return next((s for s in self.list_all() if s.id == student_id), None)

    def list_enrolled(self, course_id: str) -> Sequence[Student]:
        return [s for s in self.list_all() if s.is_enrolled_in(course_id)]

    def add(self, student: Student) -> bool:
        return self._rewrite(lambda students: students + [student])

    def delete_by_id(self, student_id: str) -> bool:
        return self._rewrite(
            lambda students: [s for s in students if s.id != student_id],
            replaces=lambda row: row.get("id") == student_id,
        )
