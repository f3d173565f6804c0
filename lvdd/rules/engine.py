"""
Decision engine entry point.

Selects the sinus rhythm or atrial fibrillation rule chain once, from the
bundle's rhythm mode, and returns its result. The two chains share nothing
but the numeric helpers and the result type.
"""

from __future__ import annotations

from lvdd.data.measurements import MeasurementBundle, RhythmMode
from lvdd.rules.af import compute_af
from lvdd.rules.result import DDResult
from lvdd.rules.sinus import compute_sinus


def compute_dd2025(bundle: MeasurementBundle) -> DDResult:
    """
    Classify diastolic function / LAP from a measurement bundle.

    Pure and deterministic: identical bundles give equal results.

    Args:
        bundle: Validated measurements plus the ``is_af`` flag.

    Returns:
        DDResult from the algorithm matching the rhythm mode.
    """
    if bundle.mode is RhythmMode.AF:
        return compute_af(bundle)
    return compute_sinus(bundle)
