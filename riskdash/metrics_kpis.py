from __future__ import annotations

from typing import Any, Dict, List, Optional

import pandas as pd

from riskdash.records import RISK_KEYS, YesNo


NA = "N/A"


def _pct(part: int, total: int) -> Optional[float]:
    if not total:
        return None
    return part / total * 100


def _mean_by_risk(df: pd.DataFrame, column: str) -> Optional[List[Dict[str, Any]]]:
    if df.empty:
        return None
    means = df.groupby("risk_level")[column].mean()
    return [
        {"risk_level": level, "value": float(means[level])}
        for level in RISK_KEYS
        if level in means.index and pd.notna(means[level])
    ]


def count_no_checkup_high_risk(filtered: pd.DataFrame) -> int:
    if filtered.empty:
        return 0
    mask = (filtered["regular_health_checkup"] == YesNo.NO.value) & (filtered["risk_level"] == "High")
    return int(mask.sum())


def compute_kpis(filtered: pd.DataFrame) -> Dict[str, Any]:
    """KPI panel values for the filtered subset.

    Percentages and means are ``None`` when there is nothing to summarize;
    the no-checkup/high-risk count is a plain 0 in that case.
    """
    total = int(len(filtered))
    if total == 0:
        risk_pct: Dict[str, Optional[float]] = {level: None for level in RISK_KEYS}
        checkup_pct = None
    else:
        counts = filtered["risk_level"].value_counts()
        risk_pct = {level: _pct(int(counts.get(level, 0)), total) for level in RISK_KEYS}
        checkup_pct = _pct(int((filtered["regular_health_checkup"] == YesNo.YES.value).sum()), total)

    return {
        "total": total,
        "risk_pct": risk_pct,
        "checkup_pct": checkup_pct,
        "avg_age_by_risk": _mean_by_risk(filtered, "age"),
        "avg_sleep_by_risk": _mean_by_risk(filtered, "sleep_hours"),
        "no_checkup_high_risk": count_no_checkup_high_risk(filtered),
    }


def _fmt_pct(value: Optional[float]) -> str:
    return f"{value:.1f}%" if value is not None else NA


def _fmt_by_risk(items: Optional[List[Dict[str, Any]]], suffix: str = "") -> List[str]:
    if not items:
        return [NA]
    return [f"{item['risk_level']}: {item['value']:.1f}{suffix}" for item in items]


def format_kpis(kpis: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "risk_low": _fmt_pct(kpis["risk_pct"]["Low"]),
        "risk_medium": _fmt_pct(kpis["risk_pct"]["Medium"]),
        "risk_high": _fmt_pct(kpis["risk_pct"]["High"]),
        "checkups": _fmt_pct(kpis["checkup_pct"]),
        "avg_age_by_risk": _fmt_by_risk(kpis["avg_age_by_risk"]),
        "avg_sleep_by_risk": _fmt_by_risk(kpis["avg_sleep_by_risk"], suffix="h"),
        "no_checkup_high_risk": str(kpis["no_checkup_high_risk"]),
    }
