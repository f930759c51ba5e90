"""
Scaling Charts

Plotly figures for a stat curve and for attack rating as one stat is
levelled. Input frames come from ar_reports.
"""

import plotly.graph_objects as go
import pandas as pd

from core.constants import DAMAGE_TYPES, DAMAGE_TYPE_LABELS

# Conventional in-game colors per damage type
DAMAGE_TYPE_COLORS = {
    "Physical": "#b0b0b0",
    "Magic": "#4a90e2",
    "Fire": "#e8743b",
    "Lightning": "#f2d13d",
    "Holy": "#e8d9a0",
}


def create_curve_chart(frame: pd.DataFrame, curve_id: int, height: int = 300) -> go.Figure:
    """
    Line chart of a CalcCorrectGraph curve.

    Args:
        frame: ar_reports.curve_series_frame output
        curve_id: Curve id for the title
        height: Figure height in pixels

    Returns:
        Plotly Figure object
    """
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=frame["Level"],
        y=frame["Value"],
        mode='lines',
        line=dict(color='rgba(76, 175, 80, 0.9)', width=2),
        hovertemplate='Level %{x}<br>Scaling: %{y:.2f}%<extra></extra>',
        name=f'Curve {curve_id}',
        showlegend=False,
    ))
    fig.update_layout(
        title=dict(text=f"Curve {curve_id}", font=dict(size=14)),
        xaxis=dict(title="Stat Level", gridcolor='rgba(128, 128, 128, 0.2)'),
        yaxis=dict(title="Scaling %", gridcolor='rgba(128, 128, 128, 0.2)'),
        height=height,
        margin=dict(l=40, r=20, t=40, b=40),
    )
    return fig


def create_ar_by_stat_chart(frame: pd.DataFrame, stat_label: str, height: int = 350) -> go.Figure:
    """
    Stacked area of AR per damage type, with the total as a dashed line.

    Damage types that stay at zero across the whole frame are skipped.
    """
    fig = go.Figure()
    for damage_type in DAMAGE_TYPES:
        label = DAMAGE_TYPE_LABELS[damage_type]
        if label not in frame or not (frame[label] != 0).any():
            continue
        fig.add_trace(go.Scatter(
            x=frame["Level"],
            y=frame[label],
            mode='lines',
            stackgroup='ar',
            line=dict(color=DAMAGE_TYPE_COLORS[label], width=1),
            name=label,
            hovertemplate=f'{label}: %{{y:.1f}}<extra></extra>',
        ))

    fig.add_trace(go.Scatter(
        x=frame["Level"],
        y=frame["Total"],
        mode='lines',
        line=dict(color='#ff6b6b', width=2, dash='dash'),
        name='Total',
        hovertemplate='Total AR: %{y:.1f}<extra></extra>',
    ))

    fig.update_layout(
        title=dict(text=f"Attack Rating by {stat_label}", font=dict(size=14)),
        xaxis=dict(title=stat_label, gridcolor='rgba(128, 128, 128, 0.2)'),
        yaxis=dict(title="Attack Rating", gridcolor='rgba(128, 128, 128, 0.2)'),
        height=height,
        hovermode='x unified',
        margin=dict(l=40, r=20, t=40, b=40),
    )
    return fig
