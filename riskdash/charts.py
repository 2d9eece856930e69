from __future__ import annotations

from typing import Any, Dict, List, Optional

import altair as alt
import pandas as pd

from riskdash.config import HEATMAP_RANGE, RISK_COLORS
from riskdash.records import RISK_KEYS

alt.data_transformers.disable_max_rows()

NO_DATA = "No data available for this chart."


def to_vega_spec(chart: alt.TopLevelMixin) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def risk_scale() -> alt.Scale:
    return alt.Scale(domain=RISK_KEYS, range=[RISK_COLORS[k] for k in RISK_KEYS])


def risk_color(field: str = "risk_level", title: str = "Risk Level") -> alt.Color:
    # Legend lists Low, Medium, High in scale-domain order.
    return alt.Color(f"{field}:N", title=title, scale=risk_scale(), sort=RISK_KEYS)


def heatmap_scale() -> alt.Scale:
    return alt.Scale(domain=[0, 1, 2], range=HEATMAP_RANGE)


def stacked_bars(
    stacked: pd.DataFrame,
    group_col: str,
    group_order: List[str],
    *,
    x_title: str,
    y_title: str = "People",
    y_max: Optional[int] = None,
    height: int = 260,
) -> alt.Chart:
    """Bars from precomputed ``[y0, y1]`` intervals; Low sits at the bottom."""
    y_scale = alt.Scale(domain=[0, y_max], nice=True) if y_max else alt.Undefined
    return (
        alt.Chart(stacked)
        .mark_bar()
        .encode(
            x=alt.X(f"{group_col}:N", title=x_title, sort=group_order, axis=alt.Axis(labelAngle=0)),
            y=alt.Y("y0:Q", title=y_title, scale=y_scale),
            y2="y1:Q",
            color=risk_color(),
            order=alt.Order("order:Q", sort="descending"),
            tooltip=[
                alt.Tooltip(f"{group_col}:N", title=x_title),
                alt.Tooltip("risk_level:N", title="Risk"),
                alt.Tooltip("count:Q", title="People", format=","),
            ],
        )
        .properties(height=height)
    )


def chart_payload(series: pd.DataFrame, chart: Optional[alt.TopLevelMixin], placeholder: str = NO_DATA) -> Dict[str, Any]:
    if chart is None or series.empty:
        return {"series": [], "placeholder": placeholder}
    return {"series": series.to_dict(orient="records"), "spec": to_vega_spec(chart)}
