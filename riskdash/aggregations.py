"""Pure aggregation helpers that turn record frames into chart-ready series.

Every function takes a DataFrame of records (see ``riskdash.records``) and
returns a new DataFrame; inputs are never mutated.
"""

from __future__ import annotations

from typing import Dict, Optional, Sequence

import pandas as pd

from riskdash.records import RISK_KEYS, RiskLevel

RISK_RANK: Dict[str, int] = {level.value: level.rank() for level in RiskLevel}


def _order_position(series: pd.Series, order: Sequence[str]) -> pd.Series:
    """Position of each value in ``order``; unknown values sort last."""
    pos = {v: i for i, v in enumerate(order)}
    return series.map(pos).fillna(len(order))


def _risk_crosstab(df: pd.DataFrame, by: pd.Series) -> pd.DataFrame:
    counts = pd.crosstab(by, df["risk_level"]).reindex(columns=RISK_KEYS, fill_value=0)
    counts.columns.name = None
    counts["total"] = counts[RISK_KEYS].sum(axis=1)
    return counts


def bucket_counts_by_risk(
    filtered: pd.DataFrame,
    *,
    age_min: Optional[int],
    age_max: Optional[int],
    width: int = 10,
) -> pd.DataFrame:
    """Risk-level counts per age bucket.

    Buckets are half-open ``[x0, x0 + width)`` starting at
    ``floor(age_min / width) * width``. ``age_min``/``age_max`` come from the
    full dataset so bucket edges do not move when filters change. Empty
    buckets are dropped; rows are ordered by ``x0``.
    """
    columns = ["bucket", "x0", *RISK_KEYS, "total"]
    if filtered.empty or age_min is None or age_max is None:
        return pd.DataFrame(columns=columns)

    start = (int(age_min) // width) * width
    stop = (int(age_max) // width + 1) * width
    in_range = filtered[(filtered["age"] >= start) & (filtered["age"] < stop)]
    if in_range.empty:
        return pd.DataFrame(columns=columns)

    x0 = (start + ((in_range["age"] - start) // width) * width).astype(int).rename("x0")
    counts = _risk_crosstab(in_range, x0).reset_index()
    counts = counts[counts["total"] > 0].sort_values("x0").reset_index(drop=True)
    counts["bucket"] = counts["x0"].map(lambda v: f"{v}-{v + width - 1}")
    return counts[columns]


def stack_series(rows: pd.DataFrame, group_col: str, keys: Sequence[str] = tuple(RISK_KEYS)) -> pd.DataFrame:
    """Stacked-bar transform.

    For each key in ``keys`` order and each group, emit the interval
    ``[y0, y1]`` where ``y0`` is the sum of the preceding keys in that group.
    The first key sits at the bottom of the stack.
    """
    columns = [group_col, "risk_level", "count", "y0", "y1", "order"]
    if rows.empty:
        return pd.DataFrame(columns=columns)

    base = rows[[group_col, *keys]].reset_index(drop=True)
    base["_pos"] = base.index
    long_df = base.melt(id_vars=[group_col, "_pos"], value_vars=list(keys), var_name="risk_level", value_name="count")
    long_df["order"] = _order_position(long_df["risk_level"], keys).astype(int)
    long_df["count"] = long_df["count"].astype(int)
    long_df = long_df.sort_values(["_pos", "order"])
    long_df["y1"] = long_df.groupby("_pos")["count"].cumsum()
    long_df["y0"] = long_df["y1"] - long_df["count"]
    long_df = long_df.sort_values(["order", "_pos"]).reset_index(drop=True)
    return long_df[columns]


def tally_by(filtered: pd.DataFrame, column: str, order: Sequence[str]) -> pd.DataFrame:
    """Group by ``column`` and count risk levels inside each group.

    Groups follow ``order`` (values outside it come last, alphabetically).
    Missing risk levels count as 0.
    """
    columns = [column, *RISK_KEYS, "total"]
    if filtered.empty:
        return pd.DataFrame(columns=columns)

    counts = _risk_crosstab(filtered, filtered[column]).reset_index()
    counts = counts.assign(_pos=_order_position(counts[column], order))
    counts = counts.sort_values(["_pos", column]).reset_index(drop=True)
    return counts[columns]


def mean_risk_grid(filtered: pd.DataFrame, row_col: str, col_col: str) -> pd.DataFrame:
    """Mean risk rank (Low=0, Medium=1, High=2) per populated cell.

    Cells without records are absent, never zero.
    """
    columns = [row_col, col_col, "avg_risk", "count"]
    if filtered.empty:
        return pd.DataFrame(columns=columns)

    ranked = filtered.assign(risk_rank=filtered["risk_level"].map(RISK_RANK))
    grid = (
        ranked.groupby([row_col, col_col])["risk_rank"]
        .agg(avg_risk="mean", count="count")
        .reset_index()
    )
    grid = grid[grid["count"] > 0].reset_index(drop=True)
    return grid[columns]


def sort_grid(grid: pd.DataFrame, row_col: str, row_order: Sequence[str], col_col: str, col_order: Sequence[str]) -> pd.DataFrame:
    if grid.empty:
        return grid
    keyed = grid.assign(
        _row=_order_position(grid[row_col], row_order),
        _col=_order_position(grid[col_col], col_order),
    )
    return keyed.sort_values(["_row", "_col"]).drop(columns=["_row", "_col"]).reset_index(drop=True)
