from __future__ import annotations

from typing import Any, Dict

import altair as alt
import pandas as pd

from riskdash.aggregations import RISK_RANK
from riskdash.charts import chart_payload, risk_color
from riskdash.records import RISK_KEYS

RISK_TICK_LABELS = "datum.value == 0 ? 'Low' : datum.value == 1 ? 'Medium' : datum.value == 2 ? 'High' : ''"


def compute_bmi_scatter(filtered: pd.DataFrame, *, height: int = 260) -> Dict[str, Any]:
    """BMI against risk level, point size by sleep hours."""
    points = filtered[["id", "age", "bmi", "sleep_hours", "risk_level"]].copy()
    points["risk_rank"] = points["risk_level"].map(RISK_RANK)
    points = points.dropna(subset=["risk_rank"])
    if points.empty:
        return chart_payload(points, None)

    chart = (
        alt.Chart(points)
        .mark_circle(opacity=0.6, stroke="#333", strokeWidth=0.5)
        .encode(
            x=alt.X("bmi:Q", title="BMI", scale=alt.Scale(zero=False, nice=True), axis=alt.Axis(tickCount=5)),
            y=alt.Y(
                "risk_rank:Q",
                title="Risk Level",
                scale=alt.Scale(domain=[0, len(RISK_KEYS) - 1], nice=True),
                axis=alt.Axis(values=list(range(len(RISK_KEYS))), labelExpr=RISK_TICK_LABELS),
            ),
            size=alt.Size("sleep_hours:Q", title="Sleep (h)", scale=alt.Scale(range=[50, 700], zero=False)),
            color=risk_color(),
            tooltip=[
                alt.Tooltip("age:Q", title="Age"),
                alt.Tooltip("bmi:Q", title="BMI", format=".1f"),
                alt.Tooltip("risk_level:N", title="Risk"),
                alt.Tooltip("sleep_hours:Q", title="Sleep (h)", format=".1f"),
            ],
        )
        .properties(height=height)
    )
    return chart_payload(points, chart)
