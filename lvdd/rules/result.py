"""
Decision Engine Result.

Shared output record of the sinus rhythm and atrial fibrillation algorithms.
Both rule chains finish by calling ``pack_result``; no logic lives here.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple


class Tone(Enum):
    """
    Display severity of a result.

    Used only to colour the badge. It carries no medical meaning of its own:
        GREEN: Normal
        BLUE:  Grade 1
        AMBER: Indeterminate
        RED:   Elevated filling pressure
        GRAY:  No result
    """
    GREEN = "green"
    BLUE = "blue"
    AMBER = "amber"
    RED = "red"
    GRAY = "gray"


@dataclass(frozen=True)
class DerivedValues:
    """
    Ratios derived from the measurements, each rounded to 2 decimals.

    Attributes:
        ea: Mitral E/A ratio (always None in atrial fibrillation).
        e_avg: Average of septal and lateral e′, or whichever is present.
        ee_avg: E divided by average e′.
    """

    ea: Optional[float] = None
    e_avg: Optional[float] = None
    ee_avg: Optional[float] = None


@dataclass(frozen=True)
class DDResult:
    """
    Result of a diastolic function evaluation.

    Attributes:
        grade_label: Grade or LAP status, e.g. "Grade 2" or "Normal LAP".
        summary: One-line rationale for the grade.
        tone: Badge tone for display.
        derived: Derived ratios.
        rule_trace: Rule stages that fired, in evaluation order.
        missing: Labels of relevant measurements that were not provided.
    """

    grade_label: str
    summary: str
    tone: Tone
    derived: DerivedValues
    rule_trace: Tuple[str, ...] = ()
    missing: Tuple[str, ...] = ()

    def __repr__(self) -> str:
        return f"DDResult(grade={self.grade_label!r}, tone={self.tone.value})"


def pack_result(
    grade_label: str,
    summary: str,
    tone: Tone,
    ea: Optional[float],
    e_avg: Optional[float],
    ee_avg: Optional[float],
    rule_trace: Sequence[str],
    missing: Sequence[str]
) -> DDResult:
    """Assemble a DDResult from the pieces gathered by a rule chain."""
    return DDResult(
        grade_label=grade_label,
        summary=summary,
        tone=tone,
        derived=DerivedValues(ea=ea, e_avg=e_avg, ee_avg=ee_avg),
        rule_trace=tuple(rule_trace),
        missing=tuple(missing),
    )
