"""
LVDD Calculator - Streamlit Application.

Input form for echocardiographic measurements and the resulting diastolic
function grade, with derived ratios, missing inputs, rule trace and a
summary ready to paste into a report.

Usage:
    streamlit run lvdd/ui/app.py
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict
import logging

import streamlit as st

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from lvdd.config import APP
from lvdd.data.measurements import FIELDS, FieldSpec, MeasurementBundle, RhythmMode
from lvdd.data.preprocess import EMPTY_FORM, bundle_from_form
from lvdd.rules import DDResult, compute_dd2025
from lvdd.analysis.summary import (
    build_summary_text,
    format_value,
    get_badge_label,
    get_tone_color,
    get_tone_emoji,
)
from lvdd.ui.plots import create_derived_chart

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


# ============================================================================
# State Management
# ============================================================================

def _widget_key(name: str) -> str:
    return f"field_{name}"


def reset_form() -> None:
    """Clear every input and the display toggles."""
    st.session_state['is_af'] = EMPTY_FORM['is_af']
    for spec in FIELDS:
        st.session_state[_widget_key(spec.name)] = EMPTY_FORM[spec.name]
    st.session_state['show_trace'] = False


def read_form() -> Dict[str, Any]:
    """Collect the raw form values from session state."""
    form: Dict[str, Any] = {'is_af': st.session_state.get('is_af', False)}
    for spec in FIELDS:
        form[spec.name] = st.session_state.get(_widget_key(spec.name), "")
    return form


# ============================================================================
# UI Components
# ============================================================================

def render_field(spec: FieldSpec, mode: RhythmMode) -> None:
    """Render one measurement input."""
    st.text_input(
        spec.input_label,
        key=_widget_key(spec.name),
        placeholder=spec.placeholder,
        help=spec.hint(mode) or None,
        disabled=not spec.applies_to(mode)
    )


def render_inputs() -> None:
    """Render the rhythm toggle, reset button and measurement inputs."""
    col_mode, col_reset = st.columns([3, 1])
    with col_mode:
        st.checkbox("Atrial fibrillation", key='is_af')
    with col_reset:
        st.button("Reset", on_click=reset_form)

    mode = RhythmMode.from_flag(st.session_state.get('is_af', False))

    # AF-only fields are hidden in sinus rhythm, sinus-only fields are disabled in AF
    visible = [
        spec for spec in FIELDS
        if mode is RhythmMode.AF or spec.applies_to(RhythmMode.SINUS)
    ]

    columns = st.columns(2)
    for i, spec in enumerate(visible):
        with columns[i % 2]:
            render_field(spec, mode)

    if mode is RhythmMode.AF:
        st.info(
            "**AF mode**  \n"
            "Grading uses the AF LAP algorithm (E, septal E/e′, TR/PASP, DT + secondary criteria)."
        )


def render_result(bundle: MeasurementBundle, result: DDResult) -> None:
    """Render grade, derived ratios, missing inputs, trace and summary."""
    color = get_tone_color(result.tone)
    emoji = get_tone_emoji(result.tone)

    header_col, badge_col = st.columns([3, 1])
    with header_col:
        st.subheader("Result")
    with badge_col:
        st.toggle("Show rule trace", key='show_trace')

    st.markdown(
        f"""
        <div style="background-color: {color}; padding: 15px; border-radius: 10px; margin-bottom: 10px;">
            <h2 style="color: white; margin: 0;">{emoji} {result.grade_label}</h2>
            <p style="color: white; margin: 5px 0 0 0;">{get_badge_label(result.tone)} | {result.summary}</p>
        </div>
        """,
        unsafe_allow_html=True
    )

    is_af = bundle.mode is RhythmMode.AF
    metrics = []
    if not is_af:
        metrics.append(("E/A", result.derived.ea))
    metrics.append(("Avg e′", result.derived.e_avg))
    metrics.append(("E/e′", result.derived.ee_avg))

    for col, (name, value) in zip(st.columns(len(metrics)), metrics):
        with col:
            st.metric(name, format_value(value))

    with st.expander("📊 Derived ratios vs. cut-points"):
        st.plotly_chart(create_derived_chart(result, is_af=is_af), use_container_width=True)

    if result.missing:
        st.warning(
            "**Missing / recommended inputs**\n\n"
            + "\n".join(f"- {item}" for item in result.missing)
        )

    show_trace = st.session_state.get('show_trace', False)
    if show_trace and result.rule_trace:
        st.markdown("**Rule trace**")
        for step in result.rule_trace:
            st.write(f"• {step}")

    st.markdown("**Summary** (use the copy button)")
    st.code(build_summary_text(bundle, result, show_trace=show_trace), language=None)


# ============================================================================
# Main Application
# ============================================================================

def main():
    """Main Streamlit application."""
    st.set_page_config(
        page_title=APP.TITLE,
        page_icon="🫀",
        layout="centered"
    )

    st.title(APP.TITLE)
    st.caption(APP.DISCLAIMER)

    render_inputs()
    st.markdown("---")

    bundle = bundle_from_form(read_form())
    result = compute_dd2025(bundle)
    logger.info(f"Evaluated {bundle.mode.value} bundle: {result.grade_label}")

    render_result(bundle, result)


if __name__ == "__main__":
    main()
