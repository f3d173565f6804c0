"""
Analysis module for LVDD.

This module provides:
    - Summary text for copying into an echo report
    - Badge label, color and emoji per result tone

Usage:
    >>> from lvdd.analysis import build_summary_text, get_badge_label
    >>> text = build_summary_text(bundle, result, show_trace=True)
    >>> badge = get_badge_label(result.tone)
"""

from .summary import (
    build_derived_line,
    build_input_lines,
    build_summary_text,
    format_value,
    get_badge_label,
    get_tone_color,
    get_tone_emoji,
)

__all__ = [
    'build_derived_line',
    'build_input_lines',
    'build_summary_text',
    'format_value',
    'get_badge_label',
    'get_tone_color',
    'get_tone_emoji',
]
