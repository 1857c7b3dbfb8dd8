"""
Plotly chart factory functions with consistent styling for the dashboard.
"""

from __future__ import annotations

from typing import Optional, Sequence

import pandas as pd
import plotly.graph_objects as go
import streamlit as st


DEFAULT_TEMPLATE = "plotly_white"
PRIMARY_COLOR = "#551A8B"
ACCENT_COLOR = "#9333ea"
MEETS_TARGET_COLOR = "#22c55e"
BELOW_TARGET_COLOR = "#ef4444"
NO_DATA_COLOR = "#d1d5db"


def _configure_layout(
    fig: go.Figure,
    title: Optional[str] = None,
    yaxis_title: Optional[str] = None,
    yaxis_range: Optional[Sequence[float]] = None,
    legend_title: Optional[str] = None,
) -> go.Figure:
    fig.update_layout(
        template=DEFAULT_TEMPLATE,
        title=title,
        legend_title=legend_title,
        hovermode="x unified",
        margin=dict(l=40, r=20, t=60, b=40),
    )
    if yaxis_title:
        fig.update_yaxes(title=yaxis_title)
    if yaxis_range:
        fig.update_yaxes(range=list(yaxis_range))
    fig.update_xaxes(showgrid=False)
    fig.update_yaxes(showgrid=True, zeroline=True)
    return fig


def render_plotly(fig: go.Figure, key: Optional[str] = None) -> None:
    st.plotly_chart(fig, use_container_width=True, config={"displayModeBar": False}, key=key)


def value_target_chart(frame: pd.DataFrame, title: Optional[str] = None) -> go.Figure:
    """
    Horizontal bars pairing each metric (last record, 7/30-day aggregate) with the target.

    ``frame`` comes from ``helpers.value_target_frame`` and carries
    ``metric``, ``value``, ``target``, ``status``, ``value_label`` and
    ``target_label`` columns.
    """
    colors = {
        "meets": MEETS_TARGET_COLOR,
        "below": BELOW_TARGET_COLOR,
        "no_data": NO_DATA_COLOR,
    }
    fig = go.Figure()
    fig.add_trace(
        go.Bar(
            y=frame["metric"],
            x=frame["value"].fillna(0),
            orientation="h",
            name="Valor",
            marker_color=[colors.get(status, NO_DATA_COLOR) for status in frame["status"]],
            text=frame["value_label"],
            textposition="outside",
            cliponaxis=False,
        )
    )
    fig.add_trace(
        go.Bar(
            y=frame["metric"],
            x=frame["target"],
            orientation="h",
            name="Meta",
            marker_color=ACCENT_COLOR,
            text=frame["target_label"],
            textposition="outside",
            cliponaxis=False,
        )
    )
    fig = _configure_layout(fig, title)
    fig.update_layout(barmode="group", hovermode="y unified", height=260)
    fig.update_yaxes(autorange="reversed", showgrid=False)
    return fig


def history_area_chart(
    frame: pd.DataFrame,
    target: Optional[float] = None,
    yaxis_range: Optional[Sequence[float]] = None,
    series_name: str = "Valor",
    title: Optional[str] = None,
) -> go.Figure:
    """Area chart of ``frame`` (``label``/``value`` columns, oldest first) with an optional dashed target line."""
    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=frame["label"],
            y=frame["value"],
            mode="lines+markers",
            name=series_name,
            line=dict(color=PRIMARY_COLOR, width=2),
            fill="tozeroy",
            hovertext=frame.get("display"),
        )
    )
    if target is not None:
        fig.add_trace(
            go.Scatter(
                x=frame["label"],
                y=[target] * len(frame),
                mode="lines",
                name="Meta",
                line=dict(color=ACCENT_COLOR, width=2, dash="dash"),
            )
        )
    return _configure_layout(fig, title, yaxis_range=yaxis_range)
