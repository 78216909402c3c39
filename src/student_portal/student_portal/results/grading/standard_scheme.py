from __future__ import annotations

from decimal import Decimal

from ...core.enums import Grade
from ..model import MAX_TOTAL
from .base import GradingScheme, Number

# Inclusive lower bounds (percent of the maximum), highest band first.
GRADE_BANDS: tuple[tuple[Grade, int], ...] = (
    (Grade.A_PLUS, 90),
    (Grade.A, 85),
    (Grade.A_MINUS, 80),
    (Grade.B_PLUS, 75),
    (Grade.B, 70),
    (Grade.B_MINUS, 65),
    (Grade.C_PLUS, 60),
    (Grade.C, 55),
    (Grade.C_MINUS, 50),
    (Grade.D, 45),
    (Grade.F, 0),
)

GRADE_POINTS: dict[Grade, Decimal] = {
    Grade.A_PLUS: Decimal("4.0"),
    Grade.A: Decimal("4.0"),
    Grade.A_MINUS: Decimal("3.7"),
    Grade.B_PLUS: Decimal("3.3"),
    Grade.B: Decimal("3.0"),
    Grade.B_MINUS: Decimal("2.7"),
    Grade.C_PLUS: Decimal("2.3"),
    Grade.C: Decimal("2.0"),
    Grade.C_MINUS: Decimal("1.7"),
    Grade.D: Decimal("1.0"),
    Grade.F: Decimal("0.0"),
}


class StandardGradingScheme(GradingScheme):
    """Standard rule: letter bands over a 220-mark maximum, 4.0 GPA scale."""

    max_total = MAX_TOTAL

    def grade_for(self, total_marks: Number) -> Grade:
        pct = self.percentage(total_marks)
        for grade, lower_bound in GRADE_BANDS:
            if pct >= lower_bound:
                return grade
        return Grade.F

    def points_for(self, grade: Grade) -> Decimal:
        return GRADE_POINTS.get(Grade(grade), Decimal("0.0"))
