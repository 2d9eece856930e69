from __future__ import annotations

from typing import Any, Dict

import altair as alt
import pandas as pd

from riskdash.aggregations import stack_series, tally_by
from riskdash.charts import chart_payload, stacked_bars
from riskdash.records import ActivityLevel, DietType


def compute_diet_activity(filtered: pd.DataFrame, *, height: int = 260) -> Dict[str, Any]:
    """Side-by-side stacked bars of risk by diet type and by activity level."""
    diet = tally_by(filtered, "diet_type", DietType.labels())
    activity = tally_by(filtered, "physical_activity_level", ActivityLevel.labels())
    if diet.empty and activity.empty:
        return {"series": {"diet": [], "activity": []}, "placeholder": "No data could be grouped for the current filters."}

    y_max = int(max(diet["total"].max() if not diet.empty else 0, activity["total"].max() if not activity.empty else 0))
    if y_max == 0:
        return {"series": {"diet": [], "activity": []}, "placeholder": "Bar totals are zero for the current filters."}

    panels = []
    for frame, col, title in [(diet, "diet_type", "Diet Type"), (activity, "physical_activity_level", "Physical Activity Level")]:
        if frame.empty:
            continue
        panels.append(
            stacked_bars(
                stack_series(frame, col),
                col,
                frame[col].tolist(),
                x_title=title,
                y_max=y_max,
                height=height,
            )
        )
    chart = alt.hconcat(*panels).resolve_scale(y="shared")
    payload = chart_payload(diet if not diet.empty else activity, chart)
    payload["series"] = {"diet": diet.to_dict(orient="records"), "activity": activity.to_dict(orient="records")}
    return payload
