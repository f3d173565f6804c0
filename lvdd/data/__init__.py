"""
Input data modules for LVDD.

Modules:
    measurements: Measurement bundle and field catalogue (MeasurementBundle, FIELDS)
    preprocess: Form text normalization (parse_measurement, bundle_from_form)

Usage:
    >>> from lvdd.data import bundle_from_form, MeasurementBundle
    >>> bundle = bundle_from_form({'is_af': True, 'e': '110', 'dt': '140'})
    >>> bundle.mode
    <RhythmMode.AF: 'af'>
"""

from .measurements import (
    FIELDS,
    FieldSpec,
    MeasurementBundle,
    MeasurementError,
    RhythmMode,
    get_field,
)
from .preprocess import EMPTY_FORM, bundle_from_form, parse_measurement

__all__ = [
    "FIELDS",
    "FieldSpec",
    "MeasurementBundle",
    "MeasurementError",
    "RhythmMode",
    "get_field",
    "EMPTY_FORM",
    "bundle_from_form",
    "parse_measurement",
]
