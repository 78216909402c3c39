from __future__ import annotations

from ..common.datetime_utils import parse_timestamp
from ..core.enums import CollectionKey, Grade
from ..storage.repository import CollectionRepository, replace_by_key
from .model import Marks, ResultRecord
from .repository import ResultRepository


class StoreResultRepository(CollectionRepository[ResultRecord], ResultRepository):
    key = CollectionKey.RESULTS

    def _from_row(self, row: dict) -> ResultRecord:
        marks = Marks.from_mapping(row)
        updated_at = row.get("updatedAt")
        return ResultRecord(
            course_id=str(row["courseId"]),
            student_id=str(row["studentId"]),
            marks=marks,
            total_marks=int(row.get("totalMarks", marks.total)),
            grade=Grade(row["grade"]),
            updated_at=parse_timestamp(updated_at) if updated_at else None,
        )

    def _to_row(self, item: ResultRecord) -> dict:
        return item.to_dict()

    def upsert(self, record: ResultRecord) -> bool:
        return self._rewrite(
            lambda results: replace_by_key(results, record),
            replaces=lambda row: _stored_key(row) == record.key,
        )

    def delete(self, *, course_id: str, student_id: str) -> bool:
        return self._rewrite(
            lambda results: [r for r in results if r.key != (course_id, student_id)],
            replaces=lambda row: _stored_key(row) == (course_id, student_id),
        )


def _stored_key(row: dict) -> tuple:
    return (row.get("courseId"), row.get("studentId"))
