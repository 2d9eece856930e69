"""Normalized per-risk-level attribute profiles for the radar chart.

Profiles are always computed over the full dataset, independent of the
active filters: they describe the population baseline for each risk level.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from riskdash.config import RISK_COLORS
from riskdash.records import CATEGORICAL_DOMAINS, RiskLevel


logger = logging.getLogger(__name__)

PROFILE_ATTRIBUTES: List[str] = [
    "age",
    "bmi",
    "smoker",
    "alcohol_consumption",
    "diet_type",
    "physical_activity_level",
    "family_history",
    "mental_stress_level",
    "sleep_hours",
    "regular_health_checkup",
]

NUMERIC_ATTRIBUTES = {"age", "bmi", "sleep_hours"}


def axis_label(attribute: str) -> str:
    return attribute.replace("_", " ").title()


def normalize(value: float, lo: float, hi: float) -> float:
    """Min-max normalize; a degenerate range maps to 0.5."""
    if hi - lo == 0:
        return 0.5
    return (value - lo) / (hi - lo)


def ordinal_values(df: pd.DataFrame, attribute: str) -> pd.Series:
    domain = CATEGORICAL_DOMAINS[attribute]
    table = {member.value: member.rank() for member in domain}
    return df[attribute].map(table)


def attribute_ranges(full: pd.DataFrame) -> Dict[str, Tuple[float, float]]:
    ranges: Dict[str, Tuple[float, float]] = {}
    for attribute in PROFILE_ATTRIBUTES:
        if attribute in NUMERIC_ATTRIBUTES:
            ranges[attribute] = (float(full[attribute].min()), float(full[attribute].max()))
        else:
            ranges[attribute] = (0.0, float(CATEGORICAL_DOMAINS[attribute].max_rank()))
    return ranges


def risk_profile(full: pd.DataFrame, level: str) -> Optional[List[Dict[str, Any]]]:
    """Mean of each attribute for ``level``, normalized to the full range.

    Returns ``None`` when no record in ``full`` has that risk level.
    """
    subset = full[full["risk_level"] == level]
    if subset.empty:
        logger.warning("No records with risk level %r; profile skipped", level)
        return None

    ranges = attribute_ranges(full)
    profile = []
    for attribute in PROFILE_ATTRIBUTES:
        if attribute in NUMERIC_ATTRIBUTES:
            mean = float(subset[attribute].mean())
        else:
            mean = float(ordinal_values(subset, attribute).mean())
        lo, hi = ranges[attribute]
        profile.append({"axis": axis_label(attribute), "value": normalize(mean, lo, hi)})
    return profile


def risk_profiles(full: pd.DataFrame) -> List[Dict[str, Any]]:
    out = []
    for level in RiskLevel:
        values = risk_profile(full, level.value)
        if values is None:
            continue
        out.append({
            "risk_level": level.value,
            "name": f"{level.value} Risk",
            "color": RISK_COLORS[level.value],
            "values": values,
        })
    return out
