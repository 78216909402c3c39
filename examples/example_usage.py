"""Example: use the service layer directly (no Flask).

Goal: controllers stay thin; the business rules live in the services.
"""

from src.student_portal.student_portal.container import build_container
from src.student_portal.student_portal.storage.defaults import seed_defaults
from src.student_portal.student_portal.storage.memory_store import InMemoryRecordStore


def main():
    store = InMemoryRecordStore(seeder=seed_defaults)
    seed_defaults(store)
    container = build_container(store=store)

    print(container.results_service.get_student_gpa("student001"))
    print(container.attendance_service.get_course_attendance_summary("CS101").average_attendance)
    for s in container.attendance_service.get_students_at_risk():
        print(s.student.name, s.attendance_percentage)


if __name__ == "__main__":
    main()
