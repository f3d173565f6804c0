"""
Utility functions for LVDD.

This package contains reusable utility functions organized by domain:
- numeric: Null-propagating arithmetic (guarded division, averaging, rounding)

Usage:
    from lvdd.utils import safe_div, avg2
"""

from lvdd.utils.numeric import (
    round2,
    safe_div,
    avg2,
)

__all__ = [
    'round2',
    'safe_div',
    'avg2',
]
