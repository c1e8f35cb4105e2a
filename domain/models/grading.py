"""
Grading domain model.

Student results keyed by a caller-defined string id with a score in the
closed interval [0, 100].
"""

from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal
from typing import ClassVar, FrozenSet, Tuple

from domain.models.schema import check_invariants
from shared.constants import FAILING_GRADE, GRADE_THRESHOLDS, SCORE_MAX, SCORE_MIN
from shared.types import FieldKind, FieldSpec


def grade_for_score(score: Decimal) -> str:
    """Map a score to its letter grade."""
    for threshold, letter in GRADE_THRESHOLDS:
        if score >= threshold:
            return letter
    return FAILING_GRADE


@dataclass(frozen=True)
class StudentRecord:
    """A student's final score. No field is mutable."""

    id: str
    full_name: str
    score: Decimal

    FIELD_SPECS: ClassVar[Tuple[FieldSpec, ...]] = (
        FieldSpec("id", FieldKind.TEXT),
        FieldSpec("full_name", FieldKind.TEXT),
        FieldSpec("score", FieldKind.DECIMAL, min_value=SCORE_MIN, max_value=SCORE_MAX),
    )
    KEY_FIELD: ClassVar[str] = "id"
    MUTABLE_FIELDS: ClassVar[FrozenSet[str]] = frozenset()

    def __post_init__(self):
        check_invariants(self)

    @property
    def key(self) -> str:
        return self.id

    @property
    def grade(self) -> str:
        return grade_for_score(self.score)
