from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, datetime
from typing import Iterable, Optional, Sequence, Union

from ..common.datetime_utils import now_utc
from ..common.numbers import percent, round_ratio
from ..core.constants import (
    DEFAULT_AT_RISK_THRESHOLD,
    DEFAULT_RECENT_ACTIVITY_LIMIT,
    SYSTEM_MARKER,
    UNKNOWN_NAME,
)
from ..core.enums import AttendanceStatus
from ..core.results import OperationResult
from ..courses.repository import CourseRepository
from ..students.repository import StudentRepository
from ..users.repository import SessionRepository
from .model import (
    AtRiskStudent,
    AttendanceEntry,
    AttendanceRecord,
    AttendanceStats,
    CourseAttendanceSummary,
    StudentAttendanceSummary,
)
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def summarize(records: Iterable[AttendanceRecord]) -> AttendanceStats:
    """Count present/absent marks and derive the rounded percentage.

    Records with any other status count towards ``total`` only.
    """

    total = present = absent = 0
    for r in records:
        total += 1
        if r.is_present:
            present += 1
        elif r.is_absent:
            absent += 1

    if total == 0:
        return AttendanceStats()
    return AttendanceStats(total=total, present=present, absent=absent, percentage=percent(present, total))


class AttendanceService:
    """Use case: mark attendance and aggregate attendance statistics."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentRepository,
        courses: CourseRepository,
        sessions: SessionRepository | None = None,
    ):
        self._attendance = attendance
        self._students = students
        self._courses = courses
        self._sessions = sessions

    def _current_marker(self) -> str:
        if self._sessions:
            current = self._sessions.get_current()
            if current:
                return current.user_id
        return SYSTEM_MARKER

    def _build_record(
        self,
        course_id: str,
        student_id: str,
        on: date,
        status: Union[AttendanceStatus, str],
        *,
        marked_by: Optional[str],
        now: Optional[datetime],
    ) -> AttendanceRecord:
        return AttendanceRecord(
            course_id=course_id,
            student_id=student_id,
            attendance_date=on,
            status=status,
            marked_by=marked_by or self._current_marker(),
            marked_at=now or now_utc(),
        )

    def _save(self, record: AttendanceRecord) -> OperationResult:
        if not self._attendance.upsert(record):
            return OperationResult(success=False, message="Failed to save attendance")
        return OperationResult(success=True, message="Attendance marked successfully", payload=record)

    def mark_attendance(
        self,
        course_id: str,
        student_id: str,
        on: date,
        status: Union[AttendanceStatus, str],
        *,
        marked_by: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> OperationResult:
        return self._save(self._build_record(course_id, student_id, on, status, marked_by=marked_by, now=now))

    def mark_bulk_attendance(
        self,
        course_id: str,
        on: date,
        entries: Sequence[AttendanceEntry],
        *,
        marked_by: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> OperationResult:
        # Every entry is validated before the first write; a ValidationError leaves the store untouched.
        records = [
            self._build_record(course_id, e.student_id, on, e.status, marked_by=marked_by, now=now) for e in entries
        ]

        # Writes go one by one; a failed write leaves earlier ones in place.
        success_count = sum(1 for record in records if self._save(record).success)

        if success_count < len(entries):
            logger.warning(
                "Bulk attendance for %s on %s saved %d of %d entries", course_id, on, success_count, len(entries)
            )
            return OperationResult(
                success=False,
                message=f"Attendance marked for {success_count} of {len(entries)} students",
                payload=success_count,
            )
        return OperationResult(success=True, message=f"Attendance marked for {success_count} students", payload=success_count)

    def get_attendance_by_date(self, course_id: str, on: date) -> list[AttendanceRecord]:
        return [a for a in self._attendance.list_all() if a.course_id == course_id and a.attendance_date == on]

    def get_student_attendance(self, student_id: str) -> list[AttendanceRecord]:
        return [a for a in self._attendance.list_all() if a.student_id == student_id]

    def get_student_course_attendance(self, student_id: str, course_id: str) -> list[AttendanceRecord]:
        return [a for a in self._attendance.list_all() if a.student_id == student_id and a.course_id == course_id]

    def get_course_attendance(self, course_id: str) -> list[AttendanceRecord]:
        return [a for a in self._attendance.list_all() if a.course_id == course_id]

    def calculate_attendance_percentage(self, student_id: str, course_id: str) -> AttendanceStats:
        return summarize(self.get_student_course_attendance(student_id, course_id))

    def get_overall_attendance(self, student_id: str) -> AttendanceStats:
        return summarize(self.get_student_attendance(student_id))

    def get_course_attendance_summary(self, course_id: str) -> CourseAttendanceSummary:
        course = self._courses.get_by_id(course_id)
        enrolled = self._students.list_enrolled(course_id)
        course_records = self.get_course_attendance(course_id)

        by_student: dict[str, list[AttendanceRecord]] = defaultdict(list)
        for r in course_records:
            by_student[r.student_id].append(r)

        summaries = tuple(
            StudentAttendanceSummary(student_id=s.id, student_name=s.name, stats=summarize(by_student.get(s.id, ())))
            for s in enrolled
        )
        average = round_ratio(sum(s.stats.percentage for s in summaries), len(summaries))

        return CourseAttendanceSummary(
            course_id=course_id,
            course_name=course.name if course else UNKNOWN_NAME,
            total_classes=len({r.attendance_date for r in course_records}),
            total_students=len(enrolled),
            average_attendance=average,
            student_summaries=summaries,
        )

    def get_students_at_risk(self, threshold: int = DEFAULT_AT_RISK_THRESHOLD) -> list[AtRiskStudent]:
        by_student: dict[str, list[AttendanceRecord]] = defaultdict(list)
        for r in self._attendance.list_all():
            by_student[r.student_id].append(r)

        at_risk: list[AtRiskStudent] = []
        for student in self._students.list_all():
            stats = summarize(by_student.get(student.id, ()))
            # No history means no evidence of risk.
            if stats.total > 0 and stats.percentage < threshold:
                at_risk.append(AtRiskStudent(student=student, attendance_percentage=stats.percentage))

        at_risk.sort(key=lambda s: s.attendance_percentage)
        return at_risk

    def get_recent_activity(self, limit: int = DEFAULT_RECENT_ACTIVITY_LIMIT) -> list[AttendanceRecord]:
        records = sorted(self._attendance.list_all(), key=lambda r: r.marked_at, reverse=True)
        return records[: max(int(limit), 0)]
