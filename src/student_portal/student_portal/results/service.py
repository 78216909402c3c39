from __future__ import annotations

from collections import Counter
from datetime import datetime
from decimal import Decimal
from typing import Any, Mapping, Optional, Union

from ..common.datetime_utils import now_utc
from ..common.numbers import percent, round_decimal, round_ratio
from ..core.enums import Grade
from ..core.results import OperationResult
from ..courses.repository import CourseRepository
from ..students.repository import StudentRepository
from .grading.base import GradingScheme, Number
from .grading.standard_scheme import StandardGradingScheme
from .model import (
    MAX_MARKS,
    CourseStatistics,
    DetailedResult,
    GpaSummary,
    Marks,
    RankInfo,
    ResultRecord,
)
from .repository import ResultRepository

MarksInput = Union[Marks, Mapping[str, Any]]


class ResultsService:
    """Use case: record marks and derive grades, GPA, ranks and statistics.

    Component maxima are enforced by ``Marks`` itself; a mapping with
    out-of-range values raises ``ValidationError`` before anything is saved.
    """

    def __init__(
        self,
        results: ResultRepository,
        students: StudentRepository,
        courses: CourseRepository,
        *,
        grading: Optional[GradingScheme] = None,
    ):
        self._results = results
        self._students = students
        self._courses = courses
        self._grading = grading or StandardGradingScheme()

    @property
    def grading(self) -> GradingScheme:
        return self._grading

    def calculate_total(self, marks: MarksInput) -> int:
        if isinstance(marks, Marks):
            return marks.total
        return sum(marks.get(name) or 0 for name in MAX_MARKS)

    def calculate_grade(self, total_marks: Number) -> Grade:
        return self._grading.grade_for(total_marks)

    def get_percentage(self, total_marks: Number) -> int:
        pct = self._grading.percentage(total_marks)
        return round_ratio(pct.numerator, pct.denominator)

    def save_result(
        self,
        course_id: str,
        student_id: str,
        marks: MarksInput,
        *,
        now: Optional[datetime] = None,
    ) -> OperationResult:
        if not isinstance(marks, Marks):
            marks = Marks.from_mapping(marks)

        total = self.calculate_total(marks)
        record = ResultRecord(
            course_id=course_id,
            student_id=student_id,
            marks=marks,
            total_marks=total,
            grade=self.calculate_grade(total),
            updated_at=now or now_utc(),
        )

        if not self._results.upsert(record):
            return OperationResult(success=False, message="Failed to save results")
        return OperationResult(success=True, message="Results saved successfully", payload=record)

    def get_student_course_result(self, student_id: str, course_id: str) -> Optional[ResultRecord]:
        return next(
            (r for r in self._results.list_all() if r.student_id == student_id and r.course_id == course_id),
            None,
        )

    def get_student_results(self, student_id: str) -> list[ResultRecord]:
        return [r for r in self._results.list_all() if r.student_id == student_id]

    def get_course_results(self, course_id: str) -> list[ResultRecord]:
        return [r for r in self._results.list_all() if r.course_id == course_id]

    def get_course_results_detailed(self, course_id: str) -> list[DetailedResult]:
        students = {s.id: s for s in self._students.list_all()}
        return [DetailedResult.join(r, students.get(r.student_id)) for r in self.get_course_results(course_id)]

    def get_course_statistics(self, course_id: str) -> CourseStatistics:
        results = self.get_course_results(course_id)
        if not results:
            return CourseStatistics()

        marks = [r.total_marks for r in results]
        distribution = Counter(r.grade.value for r in results)
        passed = sum(1 for r in results if self._grading.is_pass(r.grade))

        return CourseStatistics(
            total_students=len(results),
            average_marks=round_ratio(sum(marks), len(marks)),
            highest_marks=max(marks),
            lowest_marks=min(marks),
            grade_distribution=dict(distribution),
            pass_rate=percent(passed, len(results)),
        )

    def get_student_gpa(self, student_id: str) -> GpaSummary:
        results = self.get_student_results(student_id)
        if not results:
            return GpaSummary()

        courses = {c.id: c for c in self._courses.list_all()}
        total_points = Decimal(0)
        total_credits = 0
        for r in results:
            course = courses.get(r.course_id)
            # Results for courses that no longer exist carry no credit weight.
            if course is None:
                continue
            total_points += self._grading.points_for(r.grade) * course.credits
            total_credits += course.credits

        if total_credits == 0:
            return GpaSummary()
        gpa = round_decimal(total_points / Decimal(total_credits))
        return GpaSummary(gpa=float(gpa), total_credits=total_credits)

    def get_student_rank(self, student_id: str, course_id: str) -> RankInfo:
        results = self.get_course_results(course_id)
        # Equal totals are ordered by student id so ranks do not depend on storage order.
        ordered = sorted(results, key=lambda r: (-r.total_marks, r.student_id))

        rank = next((i + 1 for i, r in enumerate(ordered) if r.student_id == student_id), None)
        return RankInfo(rank=rank, total_students=len(results))

    def delete_result(self, course_id: str, student_id: str) -> OperationResult:
        if not self._results.delete(course_id=course_id, student_id=student_id):
            return OperationResult(success=False, message="Failed to delete result")
        return OperationResult(success=True, message="Result deleted successfully")
