from __future__ import annotations

from ..common.datetime_utils import parse_iso_date, parse_timestamp
from ..core.constants import SYSTEM_MARKER
from ..core.enums import CollectionKey
from ..storage.repository import CollectionRepository, replace_by_key
from .model import AttendanceRecord
from .repository import AttendanceRepository


class StoreAttendanceRepository(CollectionRepository[AttendanceRecord], AttendanceRepository):
    key = CollectionKey.ATTENDANCE

    def _from_row(self, row: dict) -> AttendanceRecord:
        return AttendanceRecord(
            course_id=str(row["courseId"]),
            student_id=str(row["studentId"]),
            attendance_date=parse_iso_date(row["date"]),
            status=str(row.get("status", "")),
            marked_by=str(row.get("markedBy") or SYSTEM_MARKER),
            marked_at=parse_timestamp(row["markedAt"]),
        )

    def _to_row(self, item: AttendanceRecord) -> dict:
        return item.to_dict()

    def upsert(self, record: AttendanceRecord) -> bool:
        stored_key = (record.course_id, record.student_id, record.attendance_date.isoformat())
        return self._rewrite(
            lambda records: replace_by_key(records, record),
            replaces=lambda row: (row.get("courseId"), row.get("studentId"), row.get("date")) == stored_key,
        )
