from __future__ import annotations

from typing import Any, Dict

import altair as alt
import pandas as pd

from riskdash.aggregations import mean_risk_grid, sort_grid
from riskdash.charts import chart_payload, heatmap_scale
from riskdash.records import DietType, StressLevel


def compute_diet_stress_heatmap(filtered: pd.DataFrame, *, height: int = 260) -> Dict[str, Any]:
    grid = mean_risk_grid(filtered, "diet_type", "mental_stress_level")
    grid = sort_grid(grid, "diet_type", DietType.labels(), "mental_stress_level", StressLevel.labels())
    if grid.empty:
        return chart_payload(grid, None, "No valid cells for the heatmap.")

    chart = (
        alt.Chart(grid)
        .mark_rect()
        .encode(
            x=alt.X("diet_type:N", title="Diet Type", sort=DietType.labels(), axis=alt.Axis(labelAngle=0)),
            y=alt.Y("mental_stress_level:N", title="Mental Stress Level", sort=list(reversed(StressLevel.labels()))),
            color=alt.Color("avg_risk:Q", title="Mean Risk", scale=heatmap_scale()),
            tooltip=[
                alt.Tooltip("diet_type:N", title="Diet"),
                alt.Tooltip("mental_stress_level:N", title="Stress"),
                alt.Tooltip("avg_risk:Q", title="Mean Risk", format=".2f"),
                alt.Tooltip("count:Q", title="People"),
            ],
        )
        .properties(height=height)
    )
    return chart_payload(grid, chart)
