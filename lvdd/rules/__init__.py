"""
Rule Engine Module for LVDD.

This package implements the 2025 diastolic function algorithms as
deterministic decision tables.

Modules:
    - sinus: Sinus rhythm grading (Normal DF, Grade 1-3)
    - af: Atrial fibrillation LAP assessment (Normal / Elevated LAP)
    - result: Shared result record (DDResult, Tone)
    - engine: Entry point selecting the algorithm by rhythm mode

Every stage that fires is recorded in ``DDResult.rule_trace`` so that each
grade can be explained step by step.

Example:
    >>> from lvdd.data import MeasurementBundle
    >>> from lvdd.rules import compute_dd2025
    >>> result = compute_dd2025(MeasurementBundle(e=80, a=60, e_septal=7, e_lateral=10))
    >>> result.grade_label
    'Normal DF'
"""

from .result import DDResult, DerivedValues, Tone, pack_result
from .sinus import compute_sinus
from .af import compute_af, count_primary_criteria, count_secondary_criteria
from .engine import compute_dd2025

__all__ = [
    # Result
    "DDResult",
    "DerivedValues",
    "Tone",
    "pack_result",
    # Sinus rhythm
    "compute_sinus",
    # Atrial fibrillation
    "compute_af",
    "count_primary_criteria",
    "count_secondary_criteria",
    # Entry point
    "compute_dd2025",
]
