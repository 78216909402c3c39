from __future__ import annotations

from typing import Protocol, Sequence

from .model import ResultRecord


class ResultRepository(Protocol):
    def list_all(self) -> Sequence[ResultRecord]:
        raise NotImplementedError

    def upsert(self, record: ResultRecord) -> bool:
        """Insert, or replace the record with the same (course, student)."""

        raise NotImplementedError

    def delete(self, *, course_id: str, student_id: str) -> bool:
        """Remove the matching record; writing back an unchanged collection when absent."""

        raise NotImplementedError
