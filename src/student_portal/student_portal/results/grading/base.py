from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from fractions import Fraction
from typing import Union

from ...core.enums import Grade

Number = Union[int, float]


class GradingScheme(ABC):
    """Grading interface (Strategy Pattern for letter grades and GPA points)."""

    max_total: int

    @abstractmethod
    def grade_for(self, total_marks: Number) -> Grade:
        raise NotImplementedError

    @abstractmethod
    def points_for(self, grade: Grade) -> Decimal:
        raise NotImplementedError

    def percentage(self, total_marks: Number) -> Fraction:
        """Exact percentage of the maximum total."""
        return Fraction(total_marks) * 100 / self.max_total

    def is_pass(self, grade: Grade) -> bool:
        return grade != Grade.F
