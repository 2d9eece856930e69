from __future__ import annotations

from typing import Any, Dict

import pandas as pd

from riskdash.aggregations import bucket_counts_by_risk, stack_series
from riskdash.charts import chart_payload, stacked_bars


def compute_age_risk(filtered: pd.DataFrame, full: pd.DataFrame, *, width: int = 10, height: int = 260) -> Dict[str, Any]:
    # Bucket edges come from the full dataset so they stay put across filters.
    age_min = int(full["age"].min()) if not full.empty else None
    age_max = int(full["age"].max()) if not full.empty else None
    buckets = bucket_counts_by_risk(filtered, age_min=age_min, age_max=age_max, width=width)
    if buckets.empty:
        return chart_payload(buckets, None, "No valid age ranges for the current filters.")

    stacked = stack_series(buckets, "bucket")
    chart = stacked_bars(
        stacked,
        "bucket",
        buckets["bucket"].tolist(),
        x_title="Age Range",
        y_max=int(buckets["total"].max()),
        height=height,
    )
    return chart_payload(buckets, chart)
