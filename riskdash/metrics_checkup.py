from __future__ import annotations

from typing import Any, Dict

import pandas as pd

from riskdash.aggregations import stack_series, tally_by
from riskdash.charts import chart_payload, stacked_bars
from riskdash.records import CHECKUP_DISPLAY_ORDER


def compute_checkup_risk(filtered: pd.DataFrame, *, height: int = 260) -> Dict[str, Any]:
    checkup = tally_by(filtered, "regular_health_checkup", CHECKUP_DISPLAY_ORDER)
    if checkup.empty:
        return chart_payload(checkup, None, "No valid checkup data.")

    chart = stacked_bars(
        stack_series(checkup, "regular_health_checkup"),
        "regular_health_checkup",
        checkup["regular_health_checkup"].tolist(),
        x_title="Regular Health Checkup",
        y_max=int(checkup["total"].max()),
        height=height,
    )
    return chart_payload(checkup, chart)
