from __future__ import annotations

from typing import Any, Dict, Optional

import altair as alt
import pandas as pd

from core.ring import TRACK_COLOR, RingGeometry

alt.data_transformers.disable_max_rows()


def to_vega_spec(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def ring_chart(geometry: RingGeometry, title: str = "") -> alt.LayerChart:
    # Arc marks cannot draw negative or >100% slices, so the chart data is clipped.
    filled = min(100.0, max(0.0, float(geometry.percentage)))
    data = pd.DataFrame(
        {
            "part": ["filled", "remaining"],
            "value": [filled, 100.0 - filled],
            "order": [0, 1],
        }
    )
    outer = geometry.radius + geometry.stroke_width / 2
    inner = geometry.radius - geometry.stroke_width / 2
    arc = (
        alt.Chart(data)
        .mark_arc(innerRadius=inner, outerRadius=outer, cornerRadius=geometry.stroke_width / 2 if geometry.line_cap == "round" else 0)
        .encode(
            theta=alt.Theta("value:Q", stack=True),
            order=alt.Order("order:Q"),
            color=alt.Color(
                "part:N",
                scale=alt.Scale(domain=["filled", "remaining"], range=[geometry.color, TRACK_COLOR]),
                legend=None,
            ),
            tooltip=[alt.Tooltip("part:N", title=title or "Rate"), alt.Tooltip("value:Q", format=".1f")],
        )
    )
    label = (
        alt.Chart(pd.DataFrame({"label": [geometry.label]}))
        .mark_text(fontSize=float(geometry.font_size.rstrip("px")), fontWeight=600, color="white")
        .encode(text="label:N")
    )
    chart = alt.layer(arc, label).properties(width=geometry.size, height=geometry.size)
    return chart.properties(title=title) if title else chart


def judge_rates_chart(judges: pd.DataFrame, *, reference: Optional[float] = None, title: str = "") -> alt.LayerChart:
    """Horizontal bars of each judge's asylum grant rate, in the given row order."""
    if judges.empty:
        judges = pd.DataFrame({"judge_name": pd.Series(dtype=str), "granted_asylum_rate": pd.Series(dtype=float)})
    order = judges["judge_name"].astype(str).tolist()
    tooltip = [
        alt.Tooltip("judge_name:N", title="Judge"),
        alt.Tooltip("granted_asylum_rate:Q", title="Asylum %", format=".1f"),
    ]
    if "total_decisions" in judges.columns:
        tooltip.append(alt.Tooltip("total_decisions:Q", title="Decisions", format=","))
    hover = alt.selection_point(fields=["judge_name"], on="mouseover", empty="all")
    bars = (
        alt.Chart(judges)
        .mark_bar()
        .encode(
            x=alt.X("granted_asylum_rate:Q", title=title or "Asylum Granted", scale=alt.Scale(domain=[0, 100]),
                    axis=alt.Axis(format="~s", gridDash=[4, 4], domain=False, ticks=False)),
            y=alt.Y("judge_name:N", sort=order, title=None, axis=alt.Axis(grid=False)),
            opacity=alt.condition(hover, alt.value(1), alt.value(0.6)),
            tooltip=tooltip,
        )
        .add_params(hover)
    )
    layers = [bars]
    if reference is not None:
        rule = alt.Chart(pd.DataFrame({"reference": [reference]})).mark_rule(strokeDash=[4, 4], color="white").encode(
            x="reference:Q"
        )
        layers.append(rule)
    return alt.layer(*layers).properties(height=max(60, 24 * len(order)))
