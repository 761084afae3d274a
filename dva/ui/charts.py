"""Plotly figure builders for the downsize-vs-rent analyzer.

Each function takes a finished ``Projection`` (or a sensitivity table) and
returns a ``plotly.graph_objects.Figure``. Nothing here renders; a UI decides
where the figure goes (``st.plotly_chart``, ``fig.write_html``, ...), which
keeps the builders unit-testable.

Functions
---------
net_worth_figure(projection)
    Year-end net worth of the three strategies.

outflows_figure(projection)
    Stacked annual cash outflows (rent + storage, home costs).

sensitivity_figure(table, field)
    NPV of each strategy across a ``dva.core.sensitivity.sweep`` table.
"""

from __future__ import annotations

import pandas as pd
import plotly.graph_objects as go

from dva.core.engine import Projection
from dva.ui.tables import yearly_frame

COLORS = {
    "A": "#00B8A9",
    "B": "#F6416C",
    "C": "#FFB400",
}

_CURRENCY_AXIS = dict(tickprefix="$", separatethousands=True, tickformat=",.0f")


def net_worth_figure(projection: Projection) -> go.Figure:
    df = yearly_frame(projection)
    fig = go.Figure()
    for col, name, key in (
        ("Net Worth A", "A: Rent (100% invest)", "A"),
        ("Net Worth B", "B: Buy Smaller", "B"),
        ("Net Worth C", "C: Rent+Storage (50% invest)", "C"),
    ):
        fig.add_trace(go.Scatter(x=df["Year"], y=df[col], mode="lines", name=name, line=dict(color=COLORS[key])))
    fig.update_layout(
        title="Net Worth Over Time",
        xaxis_title="Year",
        yaxis_title="Net Worth ($)",
        yaxis=_CURRENCY_AXIS,
        legend_title_text="Scenario",
        template="plotly_white",
    )
    return fig


def outflows_figure(projection: Projection) -> go.Figure:
    df = yearly_frame(projection)
    fig = go.Figure()
    for col, name, key in (
        ("Out A", "A: Rent+Storage", "A"),
        ("Home Costs B", "B: Home Costs", "B"),
        ("Out C", "C: Rent+Storage (50% invest)", "C"),
    ):
        fig.add_trace(
            go.Scatter(
                x=df["Year"],
                y=df[col],
                mode="lines",
                name=name,
                stackgroup="outflows",
                line=dict(color=COLORS[key]),
            )
        )
    fig.update_layout(
        title="Annual Cash Outflows",
        xaxis_title="Year",
        yaxis_title="Outflow ($)",
        yaxis=_CURRENCY_AXIS,
        legend_title_text="Scenario",
        template="plotly_white",
    )
    return fig


def sensitivity_figure(table: pd.DataFrame, field: str) -> go.Figure:
    fig = go.Figure()
    for col, key in (("NPV A", "A"), ("NPV B", "B"), ("NPV C", "C")):
        fig.add_trace(
            go.Scatter(x=table["value"], y=table[col], mode="lines+markers", name=col, line=dict(color=COLORS[key]))
        )
    fig.update_layout(
        title=f"NPV Sensitivity to {field}",
        xaxis_title=field,
        yaxis_title="NPV ($)",
        yaxis=_CURRENCY_AXIS,
        template="plotly_white",
    )
    return fig
