"""
Atrial Fibrillation LAP Assessment (Algorithm 2).

Implements the 2025 algorithm for estimating left atrial pressure in atrial
fibrillation. Unlike sinus rhythm there is no numbered grade: the outcome is
Normal LAP, Elevated LAP or Indeterminate. Mitral A is not used and E/A is
never reported.

Primary criteria (each counted only when its inputs are present):
    1. Mitral E ≥ 100 cm/s
    2. Septal E/e′ > 11
    3. TR Vmax > 2.8 m/s or PASP > 35 mmHg
    4. DT ≤ 160 ms

Decision:
    - 0-1 positive → Normal LAP
    - ≥3 positive  → Elevated LAP
    - exactly 2    → secondary criteria (LARS < 18 %, PV S/D < 1, BMI > 30):
        none available → Indeterminate
        ≥2 positive    → Elevated LAP
        0 positive     → Normal LAP
        1 positive     → Indeterminate

Note:
    TR Vmax and PASP use strict ">" here, while the sinus rhythm algorithm
    uses "≥" for the same measurements.

References:
    - ASE 2025 Guideline for the Evaluation of LV Diastolic Function, Algorithm 2
"""

from __future__ import annotations

import logging
from typing import List, Tuple

from lvdd.config import AF, GRADES
from lvdd.data.measurements import MeasurementBundle
from lvdd.rules.result import DDResult, Tone, pack_result
from lvdd.utils.numeric import avg2, safe_div

# Configure module logger
logger = logging.getLogger(__name__)


# Missing-input advisories
MISSING_E = "Mitral E (cm/s)"
MISSING_E_SEPTAL = "Septal e′ (cm/s) (for septal E/e′)"
MISSING_TR_OR_PASP = "TR Vmax (m/s) or PASP (mmHg)"
MISSING_DT = "DT (ms)"

# Rationales
REASON_NORMAL = "0–1 AF criteria positive"
REASON_ELEVATED = "≥3 AF criteria positive"
REASON_NO_SECONDARY = "2 AF criteria positive, but no secondary criteria available (LARS, PV S/D, BMI)"
REASON_SECONDARY_ELEVATED = "2 AF criteria + ≥2 secondary criteria positive"
REASON_SECONDARY_NORMAL = "2 AF criteria + no secondary criteria positive"
REASON_SECONDARY_SINGLE = "2 AF criteria + only 1 secondary criterion positive (or unreliable)"


def _missing_inputs(x: MeasurementBundle) -> List[str]:
    missing: List[str] = []
    if x.e is None:
        missing.append(MISSING_E)
    if x.e_septal is None:
        missing.append(MISSING_E_SEPTAL)
    if x.tr_vmax is None and x.pasp is None:
        missing.append(MISSING_TR_OR_PASP)
    if x.dt is None:
        missing.append(MISSING_DT)
    return missing


def count_primary_criteria(x: MeasurementBundle) -> int:
    """
    Count positive AF primary criteria.

    Septal E/e′ is computed from the raw values without rounding, so it is
    independent of the displayed average E/e′.

    Args:
        x: Measurement bundle.

    Returns:
        Number of positive criteria (0-4).
    """
    count = 0

    if x.e is not None and x.e >= AF.E_HIGH_MIN:
        count += 1

    if x.e is not None and x.e_septal is not None and x.e_septal != 0:
        if x.e / x.e_septal > AF.EE_SEPTAL_HIGH:
            count += 1

    if ((x.tr_vmax is not None and x.tr_vmax > AF.TR_VMAX_HIGH)
            or (x.pasp is not None and x.pasp > AF.PASP_HIGH)):
        count += 1

    if x.dt is not None and x.dt <= AF.DT_SHORT_MAX:
        count += 1

    return count


def count_secondary_criteria(x: MeasurementBundle) -> Tuple[int, int]:
    """
    Count positive and available AF secondary criteria.

    Args:
        x: Measurement bundle.

    Returns:
        Tuple of (positive, available).
    """
    positive = 0
    available = 0

    if x.lars is not None:
        available += 1
        if x.lars < AF.LARS_LOW:
            positive += 1
    if x.pv_sd is not None:
        available += 1
        if x.pv_sd < AF.PV_SD_LOW:
            positive += 1
    if x.bmi is not None:
        available += 1
        if x.bmi > AF.BMI_HIGH:
            positive += 1

    return positive, available


def compute_af(x: MeasurementBundle) -> DDResult:
    """
    Assess left atrial pressure for a patient in atrial fibrillation.

    Args:
        x: Measurement bundle. ``is_af`` is not consulted; ``a``,
            ``lavi`` and ``ivrt`` are ignored.

    Returns:
        DDResult with LAP status. ``derived.ea`` is always None.

    Example:
        >>> bundle = MeasurementBundle(is_af=True, e=110, e_septal=8, tr_vmax=3.0, dt=140)
        >>> compute_af(bundle).grade_label
        'Elevated LAP'
    """
    trace: List[str] = []
    missing = _missing_inputs(x)

    e_avg = avg2(x.e_septal, x.e_lateral)
    ee_avg = safe_div(x.e, e_avg)

    def finish(grade: str, reason: str, tone: Tone) -> DDResult:
        logger.info(f"AF LAP status: {grade} ({reason})")
        return pack_result(grade, reason, tone, None, e_avg, ee_avg, trace, missing)

    count = count_primary_criteria(x)
    trace.append(f"AF criteria positive: {count}/4")

    if count <= AF.NORMAL_MAX_COUNT:
        return finish(GRADES.NORMAL_LAP, REASON_NORMAL, Tone.GREEN)

    if count >= AF.ELEVATED_MIN_COUNT:
        return finish(GRADES.ELEVATED_LAP, REASON_ELEVATED, Tone.RED)

    # Exactly 2 positive
    positive, available = count_secondary_criteria(x)
    trace.append(f"Secondary criteria positive: {positive}/{available}")
    logger.debug(f"AF tie-break: {positive} of {available} secondary criteria positive")

    if available == 0:
        return finish(GRADES.INDETERMINATE, REASON_NO_SECONDARY, Tone.AMBER)

    if positive >= AF.SECONDARY_ELEVATED_MIN:
        return finish(GRADES.ELEVATED_LAP, REASON_SECONDARY_ELEVATED, Tone.RED)

    if positive == 0:
        return finish(GRADES.NORMAL_LAP, REASON_SECONDARY_NORMAL, Tone.GREEN)

    return finish(GRADES.INDETERMINATE, REASON_SECONDARY_SINGLE, Tone.AMBER)
