"""
Centralized configuration for LVDD.

This module contains all cut-points and labels used throughout the application.
Centralizing configuration keeps the published thresholds in one place and
ensures the rule chains and the UI agree on them.

Usage:
    from lvdd.config import SINUS, AF, GRADES

    reduced_septal = e_septal <= SINUS.E_SEPTAL_REDUCED_MAX
    label = GRADES.NORMAL_DF
"""

from dataclasses import dataclass
from typing import Dict, Final


# =============================================================================
# Sinus Rhythm Thresholds (Algorithm 1)
# =============================================================================

@dataclass(frozen=True)
class SinusThresholds:
    """Cut-points for the sinus rhythm algorithm."""

    # Top markers
    E_SEPTAL_REDUCED_MAX: float = 6.0    # cm/s, reduced if ≤
    E_LATERAL_REDUCED_MAX: float = 7.0   # cm/s, reduced if ≤
    E_AVG_REDUCED_MAX: float = 6.5       # cm/s, reduced if ≤
    EE_AVG_HIGH_MIN: float = 14.0        # E/avg e′, high if ≥
    TR_VMAX_HIGH_MIN: float = 2.8        # m/s, high if ≥
    PASP_HIGH_MIN: float = 35.0          # mmHg, high if ≥

    # Grade 1 shortcut
    EA_GRADE1_MAX: float = 0.8           # E/A ≤ 0.8

    # LAP confirmation
    PV_SD_ELEVATED_MAX: float = 0.67     # ≤
    LARS_ELEVATED_MAX: float = 18.0      # %, ≤
    LAVI_ELEVATED_MIN: float = 34.0      # mL/m², strictly >
    IVRT_ELEVATED_MAX: float = 70.0      # ms, ≤

    # Grade 2 vs 3
    EA_GRADE3_MIN: float = 2.0           # E/A ≥ 2 → Grade 3


SINUS: Final[SinusThresholds] = SinusThresholds()


# =============================================================================
# Atrial Fibrillation Thresholds (Algorithm 2)
# =============================================================================

@dataclass(frozen=True)
class AFThresholds:
    """Cut-points for the atrial fibrillation algorithm."""

    # Primary criteria
    E_HIGH_MIN: float = 100.0            # cm/s, positive if ≥
    EE_SEPTAL_HIGH: float = 11.0         # septal E/e′, positive if >
    TR_VMAX_HIGH: float = 2.8            # m/s, positive if >
    PASP_HIGH: float = 35.0              # mmHg, positive if >
    DT_SHORT_MAX: float = 160.0          # ms, positive if ≤

    # Tally exits
    NORMAL_MAX_COUNT: int = 1            # ≤ 1 → Normal LAP
    ELEVATED_MIN_COUNT: int = 3          # ≥ 3 → Elevated LAP

    # Secondary criteria (tie-break when exactly 2 primary positive)
    LARS_LOW: float = 18.0               # %, positive if <
    PV_SD_LOW: float = 1.0               # positive if <
    BMI_HIGH: float = 30.0               # kg/m², positive if >
    SECONDARY_ELEVATED_MIN: int = 2      # ≥ 2 positive → Elevated LAP


AF: Final[AFThresholds] = AFThresholds()


# =============================================================================
# Grade Vocabulary
# =============================================================================

@dataclass(frozen=True)
class GradeLabels:
    """Closed set of grade labels emitted by the two algorithms."""

    # Sinus rhythm
    NORMAL_DF: str = "Normal DF"
    GRADE_1: str = "Grade 1"
    GRADE_2: str = "Grade 2"
    GRADE_3: str = "Grade 3"
    INCREASED_LAP_UNKNOWN: str = "Increased LAP (grade unknown)"

    # Atrial fibrillation
    NORMAL_LAP: str = "Normal LAP"
    ELEVATED_LAP: str = "Elevated LAP"

    # Both
    INDETERMINATE: str = "Indeterminate"


GRADES: Final[GradeLabels] = GradeLabels()


# =============================================================================
# UI Colors
# =============================================================================

@dataclass(frozen=True)
class UIColors:
    """Color scheme for the result badge and charts."""

    GREEN: str = '#28a745'
    BLUE: str = '#1E90FF'
    AMBER: str = '#f0ad4e'
    RED: str = '#dc3545'
    GRAY: str = '#6c757d'

    # Chart
    GRID: str = '#E5E5E5'
    BACKGROUND: str = '#FAFAFA'
    THRESHOLD_LINE: str = '#343a40'

    @property
    def tone_colors(self) -> Dict[str, str]:
        """Get color mapping for tones."""
        return {
            'green': self.GREEN,
            'blue': self.BLUE,
            'amber': self.AMBER,
            'red': self.RED,
            'gray': self.GRAY,
        }


UI_COLORS: Final[UIColors] = UIColors()


# =============================================================================
# Application
# =============================================================================

@dataclass(frozen=True)
class AppConfig:
    """Static application settings."""

    TITLE: str = "LV Diastolic Function (2025)"
    DISCLAIMER: str = "Educational tool. Not for clinical decision making."
    DERIVED_DECIMALS: int = 2
    MODE_SINUS: str = "Sinus rhythm"
    MODE_AF: str = "Atrial fibrillation"


APP: Final[AppConfig] = AppConfig()


# =============================================================================
# Convenience Exports
# =============================================================================

__all__ = [
    'SINUS',
    'AF',
    'GRADES',
    'UI_COLORS',
    'APP',
    'SinusThresholds',
    'AFThresholds',
    'GradeLabels',
    'UIColors',
    'AppConfig',
]
