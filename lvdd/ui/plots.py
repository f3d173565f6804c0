"""
Result Visualization Utilities for LVDD.

This module provides Plotly figures for the result panel:
- Derived ratios as bars, with the published cut-points as dashed lines
- A colored indicator showing the grade and badge tone
"""

from __future__ import annotations

from typing import List, Optional, Tuple

import plotly.graph_objects as go

from lvdd.analysis.summary import format_value, get_badge_label, get_tone_color
from lvdd.config import AF, SINUS, UI_COLORS
from lvdd.rules.result import DDResult


def _derived_bars(result: DDResult, is_af: bool) -> List[Tuple[str, Optional[float], Optional[float]]]:
    """(name, value, cut-point) for every ratio shown in the chart."""
    bars: List[Tuple[str, Optional[float], Optional[float]]] = []
    if not is_af:
        bars.append(('E/A', result.derived.ea, SINUS.EA_GRADE3_MIN))
    bars.append(('Avg e′', result.derived.e_avg, None if is_af else SINUS.E_AVG_REDUCED_MAX))
    # AF grades on septal E/e′, the average is shown for reference only
    bars.append(('E/e′', result.derived.ee_avg, AF.EE_SEPTAL_HIGH if is_af else SINUS.EE_AVG_HIGH_MIN))
    return bars


def create_derived_chart(
    result: DDResult,
    is_af: bool = False,
    height: int = 260
) -> go.Figure:
    """
    Create a bar chart of the derived ratios.

    Absent ratios are drawn as empty bars labelled "—".

    Args:
        result: Engine result.
        is_af: Whether the result comes from the atrial fibrillation algorithm.
        height: Figure height in pixels.

    Returns:
        Plotly Figure object.

    Example:
        >>> fig = create_derived_chart(result)
        >>> st.plotly_chart(fig)
    """
    bars = _derived_bars(result, is_af)
    names = [name for name, _, _ in bars]
    values = [value if value is not None else 0 for _, value, _ in bars]

    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=names,
        y=values,
        marker_color=get_tone_color(result.tone),
        text=[format_value(value) for _, value, _ in bars],
        textposition='outside',
        hoverinfo='text'
    ))

    for i, (name, _, cut) in enumerate(bars):
        if cut is None:
            continue
        fig.add_shape(
            type='line',
            x0=i - 0.4, x1=i + 0.4,
            y0=cut, y1=cut,
            line=dict(color=UI_COLORS.THRESHOLD_LINE, width=2, dash='dash')
        )

    fig.update_layout(
        title='Derived ratios',
        showlegend=False,
        height=height,
        margin=dict(l=20, r=20, t=50, b=20),
        paper_bgcolor=UI_COLORS.BACKGROUND,
        plot_bgcolor='white'
    )
    fig.update_yaxes(gridcolor=UI_COLORS.GRID)

    return fig


def create_tone_indicator(result: DDResult, height: int = 160) -> go.Figure:
    """
    Create a badge-style indicator for the result.

    Args:
        result: Engine result.
        height: Figure height in pixels.

    Returns:
        Plotly Figure object.
    """
    color = get_tone_color(result.tone)

    fig = go.Figure()
    fig.add_annotation(
        x=0.5, y=0.6,
        text=f"<b>{result.grade_label}</b>",
        showarrow=False,
        font=dict(size=26, color=color)
    )
    fig.add_annotation(
        x=0.5, y=0.2,
        text=get_badge_label(result.tone),
        showarrow=False,
        font=dict(size=14, color='white'),
        bgcolor=color,
        borderpad=6
    )

    fig.update_layout(
        height=height,
        margin=dict(l=10, r=10, t=10, b=10),
        xaxis={'visible': False, 'range': [0, 1]},
        yaxis={'visible': False, 'range': [0, 1]},
        paper_bgcolor=UI_COLORS.BACKGROUND,
        plot_bgcolor=UI_COLORS.BACKGROUND
    )

    return fig
