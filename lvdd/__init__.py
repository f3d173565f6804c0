"""
LVDD - LV Diastolic Function Calculator (2025).

A deterministic rule engine grading left-ventricular diastolic function and
left atrial pressure from echocardiographic measurements:
- Sinus rhythm algorithm (Normal DF, Grade 1-3)
- Atrial fibrillation algorithm (Normal / Elevated LAP)
- Partial-data handling with missing-input advisories and a rule trace

Modules:
    config: Centralized thresholds, labels and colors
    data: Measurement bundle and form input normalization
    rules: Sinus and AF decision tables
    analysis: Summary text and badge helpers
    ui: Streamlit form and Plotly figures
    utils: Null-propagating numeric helpers

Quick Start:
    >>> from lvdd.data import bundle_from_form
    >>> from lvdd.rules import compute_dd2025
    >>> from lvdd.analysis import build_summary_text

    >>> bundle = bundle_from_form({'e': '80', 'a': '60', 'e_septal': '7', 'e_lateral': '10'})
    >>> result = compute_dd2025(bundle)
    >>> print(build_summary_text(bundle, result))
"""

__version__ = "1.0.0"

# Expose main configuration
from lvdd.config import SINUS, AF, GRADES, UI_COLORS, APP

__all__ = [
    '__version__',
    'SINUS',
    'AF',
    'GRADES',
    'UI_COLORS',
    'APP',
]
