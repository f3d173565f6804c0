"""
Sinus Rhythm Diastolic Function Grading (Algorithm 1).

Implements the 2025 algorithm for patients in sinus rhythm.

Top markers (each counted only when its inputs are present):
    - Reduced e′:      septal e′ ≤ 6, lateral e′ ≤ 7 or average e′ ≤ 6.5 cm/s
    - High E/e′:       E / average e′ ≥ 14
    - High TR / PASP:  TR Vmax ≥ 2.8 m/s or PASP ≥ 35 mmHg

Decision chain (first conclusive stage wins):
    1. No abnormal marker                        → Normal DF
    2. Reduced e′ only and E/A ≤ 0.8             → Grade 1
    3. No confirmatory variable available        → Indeterminate
    4. LAP not confirmed by PV S/D, LARS, LAVI or IVRT → Indeterminate
    5. LAP elevated: E/A missing                 → Increased LAP (grade unknown)
                     E/A ≥ 2                     → Grade 3
                     E/A < 2                     → Grade 2

References:
    - ASE 2025 Guideline for the Evaluation of LV Diastolic Function, Algorithm 1
"""

from __future__ import annotations

import logging
from typing import List, Optional

from lvdd.config import GRADES, SINUS
from lvdd.data.measurements import MeasurementBundle
from lvdd.rules.result import DDResult, Tone, pack_result
from lvdd.utils.numeric import avg2, safe_div

# Configure module logger
logger = logging.getLogger(__name__)


# Missing-input advisories
MISSING_E = "Mitral E (cm/s)"
MISSING_A = "Mitral A (cm/s) (needed for E/A)"
MISSING_E_PRIME = "Septal and/or lateral e′ (cm/s)"

# Trace lines
TRACE_REDUCED_E_ONLY = "Reduced e′ only branch"
TRACE_NO_CONFIRMATORY = "No confirmatory variables available"
TRACE_LAP_ELEVATED = "LAP elevated"
TRACE_LAP_NOT_ELEVATED = "LAP not elevated"

# Rationales
REASON_NORMAL = "All diastolic markers normal → Normal LAP"
REASON_GRADE_1 = "Reduced e′ only with E/A ≤ 0.8"
REASON_NO_CONFIRMATORY = (
    "Need ≥1 confirmatory variable (PV S/D, LARS, LAVI, or IVRT) to confirm LAP"
)
REASON_LAP_NOT_CONFIRMED = (
    "Abnormal markers present but LAP not confirmed by PV S/D, LARS, LAVI, or IVRT"
)
REASON_GRADE_UNKNOWN = "Elevated LAP but E/A missing → cannot assign Grade 2 vs 3"
REASON_GRADE_3 = "Elevated LAP with E/A ≥ 2"
REASON_GRADE_2 = "Elevated LAP with E/A < 2"


def _missing_inputs(x: MeasurementBundle) -> List[str]:
    missing: List[str] = []
    if x.e is None:
        missing.append(MISSING_E)
    if x.a is None:
        missing.append(MISSING_A)
    if x.e_septal is None and x.e_lateral is None:
        missing.append(MISSING_E_PRIME)
    return missing


def _is_reduced_e_prime(x: MeasurementBundle, e_avg: Optional[float]) -> bool:
    return (
        (x.e_septal is not None and x.e_septal <= SINUS.E_SEPTAL_REDUCED_MAX)
        or (x.e_lateral is not None and x.e_lateral <= SINUS.E_LATERAL_REDUCED_MAX)
        or (e_avg is not None and e_avg <= SINUS.E_AVG_REDUCED_MAX)
    )


def _is_high_tr(x: MeasurementBundle) -> bool:
    return (
        (x.tr_vmax is not None and x.tr_vmax >= SINUS.TR_VMAX_HIGH_MIN)
        or (x.pasp is not None and x.pasp >= SINUS.PASP_HIGH_MIN)
    )


def _has_confirmatory(x: MeasurementBundle) -> bool:
    return any(v is not None for v in (x.pv_sd, x.lars, x.lavi, x.ivrt))


def _is_lap_elevated(x: MeasurementBundle) -> bool:
    """
    Confirm elevated LAP from the secondary variables.

    Any one present variable beyond its cut-point suffices:
    PV S/D ≤ 0.67, LARS ≤ 18 %, LAVI > 34 mL/m² or IVRT ≤ 70 ms.
    """
    return (
        (x.pv_sd is not None and x.pv_sd <= SINUS.PV_SD_ELEVATED_MAX)
        or (x.lars is not None and x.lars <= SINUS.LARS_ELEVATED_MAX)
        or (x.lavi is not None and x.lavi > SINUS.LAVI_ELEVATED_MIN)
        or (x.ivrt is not None and x.ivrt <= SINUS.IVRT_ELEVATED_MAX)
    )


def compute_sinus(x: MeasurementBundle) -> DDResult:
    """
    Grade diastolic function for a patient in sinus rhythm.

    Never raises on incomplete data. Missing inputs lower the specificity
    of the grade and are listed in ``DDResult.missing``.

    Args:
        x: Measurement bundle. ``is_af`` is not consulted.

    Returns:
        DDResult with grade, rationale, tone, derived ratios and trace.

    Example:
        >>> bundle = MeasurementBundle(e=50, a=80, e_septal=5, e_lateral=6)
        >>> compute_sinus(bundle).grade_label
        'Grade 1'
    """
    trace: List[str] = []
    missing = _missing_inputs(x)

    ea = safe_div(x.e, x.a)
    e_avg = avg2(x.e_septal, x.e_lateral)
    ee_avg = safe_div(x.e, e_avg)

    def finish(grade: str, reason: str, tone: Tone) -> DDResult:
        logger.info(f"Sinus rhythm grade: {grade} ({reason})")
        return pack_result(grade, reason, tone, ea, e_avg, ee_avg, trace, missing)

    # Top 3 markers
    reduced_e = _is_reduced_e_prime(x, e_avg)
    high_ee = ee_avg is not None and ee_avg >= SINUS.EE_AVG_HIGH_MIN
    high_tr = _is_high_tr(x)

    n_abnormal = sum((reduced_e, high_ee, high_tr))
    trace.append(f"Top markers abnormal: {n_abnormal}/3")
    logger.debug(
        f"Top markers: reduced_e={reduced_e}, high_ee={high_ee} (E/e′={ee_avg}), "
        f"high_tr={high_tr}"
    )

    if n_abnormal == 0:
        return finish(GRADES.NORMAL_DF, REASON_NORMAL, Tone.GREEN)

    # Reduced e′ alone only settles the grade when E/A is low
    if reduced_e and not high_ee and not high_tr:
        trace.append(TRACE_REDUCED_E_ONLY)
        if ea is not None and ea <= SINUS.EA_GRADE1_MAX:
            return finish(GRADES.GRADE_1, REASON_GRADE_1, Tone.BLUE)

    if not _has_confirmatory(x):
        trace.append(TRACE_NO_CONFIRMATORY)
        return finish(GRADES.INDETERMINATE, REASON_NO_CONFIRMATORY, Tone.AMBER)

    lap_elevated = _is_lap_elevated(x)
    trace.append(TRACE_LAP_ELEVATED if lap_elevated else TRACE_LAP_NOT_ELEVATED)

    if not lap_elevated:
        return finish(GRADES.INDETERMINATE, REASON_LAP_NOT_CONFIRMED, Tone.AMBER)

    if ea is None:
        return finish(GRADES.INCREASED_LAP_UNKNOWN, REASON_GRADE_UNKNOWN, Tone.RED)

    if ea >= SINUS.EA_GRADE3_MIN:
        return finish(GRADES.GRADE_3, REASON_GRADE_3, Tone.RED)

    return finish(GRADES.GRADE_2, REASON_GRADE_2, Tone.RED)
