"""
Form Input Normalization.

Turns raw form values (usually text typed into an input box) into a
MeasurementBundle the decision engine can consume.

Normalization rules:
    - Empty or whitespace-only text → None (not measured)
    - Unparseable text → None
    - NaN / ±inf → None
    - A decimal comma is accepted ("2,8" → 2.8)

The engine itself never parses text. Everything that reaches it has already
been normalized here, so a MeasurementBundle built by ``bundle_from_form``
never fails validation.

Example:
    >>> from lvdd.data.preprocess import bundle_from_form
    >>> bundle = bundle_from_form({'is_af': False, 'e': '80', 'a': ' 60 ', 'pasp': ''})
    >>> bundle.e, bundle.a, bundle.pasp
    (80.0, 60.0, None)
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, Mapping, Optional

from lvdd.data.measurements import MEASUREMENT_NAMES, MeasurementBundle

# Configure module logger
logger = logging.getLogger(__name__)


# Reset state of the input form: sinus rhythm, every box empty
EMPTY_FORM: Dict[str, Any] = {'is_af': False, **{name: "" for name in MEASUREMENT_NAMES}}


def parse_measurement(raw: Any) -> Optional[float]:
    """
    Normalize a raw form value to an optional finite float.

    Args:
        raw: Text, number or None.

    Returns:
        The parsed value, or None when the input is empty, unparseable
        or not finite.

    Example:
        >>> parse_measurement("7.5")
        7.5
        >>> parse_measurement("abc") is None
        True
    """
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        text = str(raw).strip().replace(",", ".")
        if not text:
            return None
        try:
            value = float(text)
        except ValueError:
            logger.debug(f"Ignoring unparseable input {raw!r}")
            return None

    if not math.isfinite(value):
        logger.debug(f"Ignoring non-finite input {raw!r}")
        return None
    return value


def bundle_from_form(form: Mapping[str, Any]) -> MeasurementBundle:
    """
    Build a MeasurementBundle from raw form values.

    Args:
        form: Mapping of field name to raw value, plus an optional
            ``is_af`` flag. Unknown keys are ignored and missing keys
            are treated as not measured.

    Returns:
        MeasurementBundle with every field normalized.
    """
    values = {name: parse_measurement(form.get(name)) for name in MEASUREMENT_NAMES}
    return MeasurementBundle(is_af=bool(form.get('is_af', False)), **values)
