"""
Summary Text and Badge Helpers for LVDD.

Formats a DDResult for people: the multi-line summary that is copied into
an echo report, and the label / colour / emoji of the result badge.

Nothing here changes the grade. These functions only read the bundle and
the result.
"""

from __future__ import annotations

from typing import List, Optional

from lvdd.config import APP, UI_COLORS
from lvdd.data.measurements import FIELDS, MeasurementBundle, RhythmMode
from lvdd.rules.result import DDResult, Tone

EMPTY_VALUE = "—"


def format_value(value: Optional[float], digits: int = APP.DERIVED_DECIMALS) -> str:
    """
    Format a number for display.

    Args:
        value: Number or None.
        digits: Maximum number of decimals.

    Returns:
        "—" for None, otherwise the value rounded to ``digits`` decimals
        without trailing zeros.

    Example:
        >>> format_value(80.0)
        '80'
        >>> format_value(9.4)
        '9.4'
        >>> format_value(None)
        '—'
    """
    if value is None:
        return EMPTY_VALUE
    text = f"{value:.{digits}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return text


def _mode_name(mode: RhythmMode) -> str:
    return APP.MODE_AF if mode is RhythmMode.AF else APP.MODE_SINUS


def build_input_lines(bundle: MeasurementBundle) -> List[str]:
    """
    List the measurements that were provided, with units.

    Only fields that apply to the bundle's rhythm mode are listed.
    """
    lines: List[str] = []
    for spec in FIELDS:
        if not spec.applies_to(bundle.mode):
            continue
        value = getattr(bundle, spec.name)
        if value is None:
            continue
        unit = f" {spec.unit}" if spec.unit else ""
        lines.append(f"{spec.label}: {format_value(value, digits=6)}{unit}")
    return lines


def build_derived_line(result: DDResult, mode: RhythmMode) -> str:
    """Format the derived ratios. E/A is omitted in atrial fibrillation."""
    parts: List[str] = []
    if mode is not RhythmMode.AF:
        parts.append(f"E/A {format_value(result.derived.ea)}")
    parts.append(f"Avg e′ {format_value(result.derived.e_avg)}")
    parts.append(f"E/e′ {format_value(result.derived.ee_avg)}")
    return f"Derived: {', '.join(parts)}"


def build_summary_text(
    bundle: MeasurementBundle,
    result: DDResult,
    show_trace: bool = False
) -> str:
    """
    Build the copyable multi-line summary of an evaluation.

    Layout:
        title, mode, provided inputs, result and reason, derived ratios,
        then the missing inputs and the rule trace when there are any.

    Args:
        bundle: Measurements the result was computed from.
        result: Engine output for ``bundle``.
        show_trace: Append the rule trace.

    Returns:
        Summary text with lines joined by newlines.

    Example:
        >>> text = build_summary_text(bundle, compute_dd2025(bundle))
        >>> text.splitlines()[0]
        'LV Diastolic Function (2025)'
    """
    lines: List[str] = [APP.TITLE, f"Mode: {_mode_name(bundle.mode)}", ""]

    lines.extend(build_input_lines(bundle))

    lines.append("")
    lines.append(f"Result: {result.grade_label}")
    lines.append(f"Reason: {result.summary}")
    lines.append(build_derived_line(result, bundle.mode))

    if result.missing:
        lines.append("")
        lines.append(f"Missing/recommended: {'; '.join(result.missing)}")

    if show_trace and result.rule_trace:
        lines.append("")
        lines.append("Rule trace:")
        lines.extend(f"- {step}" for step in result.rule_trace)

    return "\n".join(lines)


def get_badge_label(tone: Tone) -> str:
    """
    Get the short badge text for a tone.

    Args:
        tone: Result tone.

    Returns:
        Badge label (e.g. "Normal", "Elevated").
    """
    labels = {
        Tone.GREEN: 'Normal',
        Tone.BLUE: 'Grade 1',
        Tone.AMBER: 'Indeterminate',
        Tone.RED: 'Elevated',
    }
    return labels.get(tone, EMPTY_VALUE)


def get_tone_color(tone: Tone) -> str:
    """Get the hex display color for a tone."""
    return UI_COLORS.tone_colors.get(tone.value, UI_COLORS.GRAY)


def get_tone_emoji(tone: Tone) -> str:
    """Get the emoji indicator for a tone."""
    emojis = {
        Tone.GREEN: '🟢',
        Tone.BLUE: '🔵',
        Tone.AMBER: '🟠',
        Tone.RED: '🔴',
    }
    return emojis.get(tone, '⚪')
