"""
Echocardiographic Measurement Bundle.

Defines the input record of the decision engine and the catalogue of fields
it understands.

This module provides:
    - RhythmMode: Which algorithm applies (sinus rhythm or atrial fibrillation)
    - MeasurementBundle: Frozen record of optional measurements
    - FieldSpec / FIELDS: Labels, units and hints for every measurement

Every measurement is Optional[float]. None means "not measured" and is never
the same as zero.

Example:
    >>> bundle = MeasurementBundle(e=80, a=60, e_septal=7, e_lateral=10, tr_vmax=2.6)
    >>> bundle.mode
    <RhythmMode.SINUS: 'sinus'>
    >>> bundle.is_present('pasp')
    False
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from enum import Enum
from numbers import Real
from typing import Optional, Tuple


class MeasurementError(ValueError):
    """Raised when a bundle field holds a non-finite or non-numeric value."""
    pass


class RhythmMode(Enum):
    """
    Cardiac rhythm during acquisition.

    The two modes select genuinely different decision tables:
        SINUS: Algorithm 1, graded Normal DF / Grade 1-3
        AF:    Algorithm 2, Normal / Elevated LAP only
    """
    SINUS = "sinus"
    AF = "af"

    @classmethod
    def from_flag(cls, is_af: bool) -> RhythmMode:
        """Map the atrial fibrillation checkbox to a mode."""
        return cls.AF if is_af else cls.SINUS


@dataclass(frozen=True)
class MeasurementBundle:
    """
    Optional echocardiographic measurements for one study.

    Attributes:
        is_af: True when the patient is in atrial fibrillation.
        e: Mitral E velocity (cm/s).
        a: Mitral A velocity (cm/s), sinus only.
        e_septal: Septal e′ (cm/s).
        e_lateral: Lateral e′ (cm/s).
        tr_vmax: Tricuspid regurgitation peak velocity (m/s).
        pasp: Pulmonary artery systolic pressure (mmHg).
        lavi: Left atrial volume index (mL/m²).
        lars: Left atrial reservoir strain (%).
        pv_sd: Pulmonary vein systolic/diastolic velocity ratio.
        ivrt: Isovolumic relaxation time (ms), sinus only.
        dt: Mitral deceleration time (ms), AF only.
        bmi: Body-mass index (kg/m²), AF only.
    """

    is_af: bool = False
    e: Optional[float] = None
    a: Optional[float] = None
    e_septal: Optional[float] = None
    e_lateral: Optional[float] = None
    tr_vmax: Optional[float] = None
    pasp: Optional[float] = None
    lavi: Optional[float] = None
    lars: Optional[float] = None
    pv_sd: Optional[float] = None
    ivrt: Optional[float] = None
    dt: Optional[float] = None
    bmi: Optional[float] = None

    def __post_init__(self) -> None:
        """Reject values that are neither None nor a finite number."""
        for name in MEASUREMENT_NAMES:
            value = getattr(self, name)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, Real):
                raise MeasurementError(f"{name} must be a number or None, got {value!r}")
            if not math.isfinite(value):
                raise MeasurementError(f"{name} must be finite, got {value!r}")

    @property
    def mode(self) -> RhythmMode:
        """Rhythm mode selected by ``is_af``."""
        return RhythmMode.from_flag(self.is_af)

    def is_present(self, name: str) -> bool:
        """Check whether a measurement was taken."""
        return getattr(self, name) is not None


MEASUREMENT_NAMES: Tuple[str, ...] = tuple(
    f.name for f in fields(MeasurementBundle) if f.name != 'is_af'
)


# =============================================================================
# Field Catalogue
# =============================================================================

BOTH_MODES: Tuple[RhythmMode, ...] = (RhythmMode.SINUS, RhythmMode.AF)
SINUS_ONLY: Tuple[RhythmMode, ...] = (RhythmMode.SINUS,)
AF_ONLY: Tuple[RhythmMode, ...] = (RhythmMode.AF,)


@dataclass(frozen=True)
class FieldSpec:
    """
    Display metadata for one measurement.

    Attributes:
        name: Attribute name on MeasurementBundle.
        label: Human-readable label without unit.
        unit: Unit string, empty for dimensionless ratios.
        hint_sinus: Cut-point hint shown in sinus rhythm.
        hint_af: Cut-point hint shown in atrial fibrillation.
        placeholder: Example value for the input box.
        modes: Modes in which the field is reported in the summary.
    """

    name: str
    label: str
    unit: str
    hint_sinus: str = ""
    hint_af: str = ""
    placeholder: str = ""
    modes: Tuple[RhythmMode, ...] = BOTH_MODES

    @property
    def input_label(self) -> str:
        """Label with unit in parentheses, as shown on the form."""
        return f"{self.label} ({self.unit})" if self.unit else self.label

    def hint(self, mode: RhythmMode) -> str:
        """Get the hint for the given mode."""
        return self.hint_af if mode is RhythmMode.AF else self.hint_sinus

    def applies_to(self, mode: RhythmMode) -> bool:
        """Whether the field is used in the given mode."""
        return mode in self.modes


FIELDS: Tuple[FieldSpec, ...] = (
    FieldSpec("e", "Mitral E", "cm/s",
              hint_af="AF: ≥100 counts positive", placeholder="e.g., 80"),
    FieldSpec("a", "Mitral A", "cm/s",
              hint_sinus="Needed for E/A (sinus rhythm)", hint_af="Needed for E/A (sinus rhythm)",
              placeholder="e.g., 60", modes=SINUS_ONLY),
    FieldSpec("e_septal", "Septal e′", "cm/s",
              hint_sinus="Abnormal if ≤ 6", hint_af="AF: used for septal E/e′ > 11",
              placeholder="e.g., 7"),
    FieldSpec("e_lateral", "Lateral e′", "cm/s",
              hint_sinus="Abnormal if ≤ 7 (sinus rhythm)", hint_af="Abnormal if ≤ 7 (sinus rhythm)",
              placeholder="e.g., 10", modes=SINUS_ONLY),
    FieldSpec("tr_vmax", "TR Vmax", "m/s",
              hint_sinus="Abnormal if ≥ 2.8 (sinus) / >2.8 (AF)",
              hint_af="Abnormal if ≥ 2.8 (sinus) / >2.8 (AF)",
              placeholder="e.g., 2.6"),
    FieldSpec("pasp", "PASP", "mmHg",
              hint_sinus="Abnormal if ≥ 35 (sinus) / >35 (AF)",
              hint_af="Abnormal if ≥ 35 (sinus) / >35 (AF)",
              placeholder="e.g., 40"),
    FieldSpec("lavi", "LAVI", "mL/m²",
              hint_sinus="Confirmatory: elevated if > 34", hint_af="Confirmatory: elevated if > 34",
              placeholder="e.g., 30"),
    FieldSpec("lars", "LARS", "%",
              hint_sinus="Confirmatory: positive if ≤ 18", hint_af="Secondary: positive if < 18",
              placeholder="e.g., 22"),
    FieldSpec("pv_sd", "Pulm vein S/D", "",
              hint_sinus="Confirmatory: positive if ≤ 0.67", hint_af="Secondary: positive if < 1",
              placeholder="e.g., 0.9"),
    FieldSpec("ivrt", "IVRT", "ms",
              hint_sinus="Confirmatory: positive if ≤ 70 (sinus rhythm)",
              hint_af="Confirmatory: positive if ≤ 70 (sinus rhythm)",
              placeholder="e.g., 65", modes=SINUS_ONLY),
    FieldSpec("dt", "DT", "ms",
              hint_af="AF primary: positive if ≤ 160", placeholder="e.g., 150", modes=AF_ONLY),
    FieldSpec("bmi", "BMI", "kg/m²",
              hint_af="AF secondary: positive if > 30", placeholder="e.g., 28", modes=AF_ONLY),
)


def get_field(name: str) -> FieldSpec:
    """
    Look up a field by attribute name.

    Raises:
        KeyError: If no field has that name.
    """
    for spec in FIELDS:
        if spec.name == name:
            return spec
    raise KeyError(name)
