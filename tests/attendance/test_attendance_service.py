from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Optional

import pytest

from src.student_portal.student_portal.attendance.model import AttendanceEntry, AttendanceRecord, AttendanceStats
from src.student_portal.student_portal.attendance.service import AttendanceService
from src.student_portal.student_portal.attendance.store_attendance_repository import StoreAttendanceRepository
from src.student_portal.student_portal.core.enums import AttendanceStatus, Role
from src.student_portal.student_portal.core.exceptions import ValidationError
from src.student_portal.student_portal.storage.memory_store import InMemoryRecordStore
from src.student_portal.student_portal.users.model import SessionUser


class InMemoryAttendance:
    def __init__(self, records=()):
        self._records: list[AttendanceRecord] = list(records)
        self.fail_writes = False

    def list_all(self):
        return list(self._records)

    def upsert(self, record: AttendanceRecord) -> bool:
        if self.fail_writes:
            return False
        for i, r in enumerate(self._records):
            if r.key == record.key:
                self._records[i] = record
                return True
        self._records.append(record)
        return True


class InMemoryStudents:
    def __init__(self, students):
        self._students = list(students)

    def list_all(self):
        return list(self._students)

    def get_by_id(self, student_id):
        return next((s for s in self._students if s.id == student_id), None)

    def list_enrolled(self, course_id):
        return [s for s in self._students if s.is_enrolled_in(course_id)]


class InMemoryCourses:
    def __init__(self, courses):
        self._courses = {c.id: c for c in courses}

    def list_all(self):
        return list(self._courses.values())

    def get_by_id(self, course_id):
        return self._courses.get(course_id)


class FakeSessions:
    def __init__(self, current: Optional[SessionUser] = None):
        self._current = current

    def get_current(self):
        return self._current


D1 = date(2026, 2, 2)
D2 = date(2026, 2, 3)
D3 = date(2026, 2, 4)


def _record(course_id, student_id, on, status, *, at=None):
    return AttendanceRecord(
        course_id=course_id,
        student_id=student_id,
        attendance_date=on,
        status=status,
        marked_by="teacher001",
        marked_at=at or datetime(2026, 2, 1, 9, 0, tzinfo=timezone.utc),
    )


def _service(make_student, make_course, records=(), sessions=None):
    students = InMemoryStudents(
        [
            make_student("student001", "John Smith", courses=("CS101", "CS201")),
            make_student("student002", "Emma Wilson", courses=("CS101",)),
            make_student("student003", "James Brown", courses=("CS201",)),
        ]
    )
    courses = InMemoryCourses([make_course("CS101", "Introduction to Programming"), make_course("CS201", "Data Structures")])
    repo = InMemoryAttendance(records)
    return AttendanceService(repo, students, courses, sessions), repo


def test_percentage_is_zero_without_records(make_student, make_course):
    svc, _ = _service(make_student, make_course)

    assert svc.calculate_attendance_percentage("student001", "CS101") == AttendanceStats(0, 0, 0, 0)
    assert svc.get_overall_attendance("student001") == AttendanceStats(0, 0, 0, 0)


def test_marking_twice_keeps_one_record_with_latest_timestamp(make_student, make_course, fixed_now):
    svc, repo = _service(make_student, make_course)

    svc.mark_attendance("CS101", "student001", D1, AttendanceStatus.PRESENT, now=fixed_now)
    later = fixed_now + timedelta(minutes=5)
    result = svc.mark_attendance("CS101", "student001", D1, AttendanceStatus.PRESENT, now=later)

    assert result.success
    records = svc.get_attendance_by_date("CS101", D1)
    assert len(records) == 1
    assert records[0].marked_at == later
    assert len(repo.list_all()) == 1


def test_remarking_replaces_status(make_student, make_course, fixed_now):
    svc, _ = _service(make_student, make_course)

    svc.mark_attendance("CS101", "student001", D1, "present", now=fixed_now)
    svc.mark_attendance("CS101", "student001", D1, "absent", now=fixed_now)

    stats = svc.calculate_attendance_percentage("student001", "CS101")
    assert stats == AttendanceStats(total=1, present=0, absent=1, percentage=0)


def test_percentage_rounds_half_up(make_student, make_course):
    # 1 of 8 present is 12.5%
    records = [_record("CS101", "student001", D1 + timedelta(days=i), "present" if i == 0 else "absent") for i in range(8)]
    svc, _ = _service(make_student, make_course, records)

    assert svc.calculate_attendance_percentage("student001", "CS101").percentage == 13


def test_unknown_status_counts_towards_total_only(make_student, make_course):
    records = [
        _record("CS101", "student001", D1, "present"),
        _record("CS101", "student001", D2, "late"),
    ]
    svc, _ = _service(make_student, make_course, records)

    stats = svc.calculate_attendance_percentage("student001", "CS101")
    assert stats == AttendanceStats(total=2, present=1, absent=0, percentage=50)


def test_overall_attendance_ignores_course_boundaries(make_student, make_course):
    records = [
        _record("CS101", "student001", D1, "present"),
        _record("CS201", "student001", D1, "absent"),
        _record("CS201", "student001", D2, "present"),
    ]
    svc, _ = _service(make_student, make_course, records)

    assert svc.get_overall_attendance("student001") == AttendanceStats(total=3, present=2, absent=1, percentage=67)


def test_course_summary_averages_enrolled_students(make_student, make_course):
    records = [
        _record("CS101", "student001", D1, "present"),
        _record("CS101", "student001", D2, "absent"),
        _record("CS101", "student002", D1, "present"),
        # not enrolled in CS101, still a class day
        _record("CS101", "student003", D3, "present"),
        _record("CS201", "student001", D3, "present"),
    ]
    svc, _ = _service(make_student, make_course, records)

    summary = svc.get_course_attendance_summary("CS101")

    assert summary.course_name == "Introduction to Programming"
    assert summary.total_classes == 3
    assert summary.total_students == 2
    assert summary.average_attendance == 75
    by_id = {s.student_id: s for s in summary.student_summaries}
    assert by_id["student001"].stats.percentage == 50
    assert by_id["student002"].stats.percentage == 100
    assert by_id["student002"].student_name == "Emma Wilson"


def test_course_summary_for_unknown_course(make_student, make_course):
    svc, _ = _service(make_student, make_course)

    summary = svc.get_course_attendance_summary("XX999")

    assert summary.course_name == "Unknown"
    assert summary.total_students == 0
    assert summary.average_attendance == 0
    assert summary.student_summaries == ()


def test_students_at_risk_skips_students_without_history(make_student, make_course):
    records = [
        _record("CS101", "student001", D1, "present"),
        _record("CS101", "student001", D2, "absent"),
        _record("CS101", "student002", D1, "absent"),
        _record("CS101", "student002", D2, "absent"),
    ]
    svc, _ = _service(make_student, make_course, records)

    at_risk = svc.get_students_at_risk(75)

    assert [s.student.id for s in at_risk] == ["student002", "student001"]
    assert [s.attendance_percentage for s in at_risk] == [0, 50]
    assert "student003" not in {s.student.id for s in at_risk}


def test_students_at_risk_respects_threshold(make_student, make_course):
    records = [_record("CS101", "student001", D1, "present"), _record("CS101", "student001", D2, "absent")]
    svc, _ = _service(make_student, make_course, records)

    assert svc.get_students_at_risk(50) == []
    assert len(svc.get_students_at_risk(51)) == 1


def test_recent_activity_newest_first(make_student, make_course):
    base = datetime(2026, 2, 1, 9, 0, tzinfo=timezone.utc)
    records = [
        _record("CS101", "student001", D1, "present", at=base),
        _record("CS101", "student002", D1, "present", at=base + timedelta(hours=2)),
        _record("CS201", "student003", D1, "absent", at=base + timedelta(hours=1)),
    ]
    svc, _ = _service(make_student, make_course, records)

    recent = svc.get_recent_activity(limit=2)

    assert [r.student_id for r in recent] == ["student002", "student003"]


def test_bulk_attendance_reports_processed_count(make_student, make_course, fixed_now):
    svc, _ = _service(make_student, make_course)

    result = svc.mark_bulk_attendance(
        "CS101",
        D1,
        [AttendanceEntry("student001", "present"), AttendanceEntry("student002", "absent")],
        now=fixed_now,
    )

    assert result.success
    assert result.message == "Attendance marked for 2 students"
    assert len(svc.get_attendance_by_date("CS101", D1)) == 2


def test_marked_by_defaults_to_session_user_then_system(make_student, make_course, fixed_now):
    session = SessionUser(user_id="teacher002", name="Prof. Michael Chen", role=Role.TEACHER, login_time=fixed_now)
    svc, _ = _service(make_student, make_course, sessions=FakeSessions(session))
    anonymous, _ = _service(make_student, make_course)

    assert svc.mark_attendance("CS101", "student001", D1, "present").payload.marked_by == "teacher002"
    assert anonymous.mark_attendance("CS101", "student001", D1, "present").payload.marked_by == "system"


def test_failed_write_is_reported_not_raised(make_student, make_course, fixed_now):
    svc, repo = _service(make_student, make_course)
    repo.fail_writes = True

    result = svc.mark_attendance("CS101", "student001", D1, "present", now=fixed_now)

    assert not result.success
    assert result.message == "Failed to save attendance"


def test_bulk_attendance_stops_counting_when_store_is_full(make_student, make_course, fixed_now):
    store = InMemoryRecordStore(quota_bytes=400)
    students = InMemoryStudents([make_student("student001", "John Smith")])
    svc = AttendanceService(StoreAttendanceRepository(store), students, InMemoryCourses([]))

    entries = [AttendanceEntry(f"student{i:03d}", "present") for i in range(1, 6)]
    result = svc.mark_bulk_attendance("CS101", D1, entries, now=fixed_now)

    assert not result.success
    assert 0 < result.payload < len(entries)
    assert len(svc.get_attendance_by_date("CS101", D1)) == result.payload


def test_bulk_attendance_with_a_blank_student_writes_nothing(make_student, make_course, fixed_now):
    svc, repo = _service(make_student, make_course)
    entries = [AttendanceEntry("student001", "present"), AttendanceEntry("", "present")]

    with pytest.raises(ValidationError):
        svc.mark_bulk_attendance("CS101", D1, entries, now=fixed_now)

    assert svc.get_attendance_by_date("CS101", D1) == []
    assert repo.list_all() == []
