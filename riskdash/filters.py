from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional

import pandas as pd

from riskdash.records import CATEGORICAL_DOMAINS


logger = logging.getLogger(__name__)

ALL = "All"

# criteria field -> record column
FILTER_FIELDS: Dict[str, str] = {
    "activity": "physical_activity_level",
    "smoker": "smoker",
    "alcohol": "alcohol_consumption",
    "diet": "diet_type",
    "checkup": "regular_health_checkup",
    "stress": "mental_stress_level",
}

FILTER_LABELS: Dict[str, str] = {
    "activity": "Activity",
    "smoker": "Smoker",
    "alcohol": "Alcohol",
    "diet": "Diet",
    "checkup": "Checkup",
    "stress": "Stress",
}


@dataclass(frozen=True)
class Constraint:
    """Either unconstrained (value is None) or an exact-match on one value."""

    value: Optional[str] = None

    @classmethod
    def unconstrained(cls) -> "Constraint":
        return cls()

    @classmethod
    def equals(cls, value: str) -> "Constraint":
        return cls(value=value)

    @property
    def is_active(self) -> bool:
        return self.value is not None

    def mask(self, series: pd.Series) -> pd.Series:
        if not self.is_active:
            return pd.Series(True, index=series.index)
        return series == self.value

    def __str__(self) -> str:
        return self.value if self.is_active else ALL


@dataclass(frozen=True)
class FilterCriteria:
    min_age: int = 0
    activity: Constraint = field(default_factory=Constraint)
    smoker: Constraint = field(default_factory=Constraint)
    alcohol: Constraint = field(default_factory=Constraint)
    diet: Constraint = field(default_factory=Constraint)
    checkup: Constraint = field(default_factory=Constraint)
    stress: Constraint = field(default_factory=Constraint)

    def constraints(self) -> Dict[str, Constraint]:
        return {f.name: getattr(self, f.name) for f in fields(self) if f.name in FILTER_FIELDS}

    def as_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"min_age": self.min_age}
        out.update({name: str(c) for name, c in self.constraints().items()})
        return out


def default_criteria(full: pd.DataFrame) -> FilterCriteria:
    min_age = int(full["age"].min()) if not full.empty else 0
    return FilterCriteria(min_age=min_age)


def _as_constraint(name: str, value: object) -> Constraint:
    if value is None:
        return Constraint.unconstrained()
    s = str(value).strip()
    if not s or s == ALL:
        return Constraint.unconstrained()
    domain = CATEGORICAL_DOMAINS[FILTER_FIELDS[name]]
    try:
        member = domain.from_label(s)
    except ValueError as exc:
        raise ValueError(f"Invalid value for {name}: {s!r} (expected one of {', '.join([ALL] + domain.labels())})") from exc
    return Constraint.equals(member.value)


def normalize_filters(raw: dict, *, min_age_floor: int = 0) -> FilterCriteria:
    min_age = raw.get("min_age", min_age_floor)
    try:
        min_age = int(min_age)
    except (TypeError, ValueError):
        min_age = min_age_floor

    return FilterCriteria(
        min_age=min_age,
        **{name: _as_constraint(name, raw.get(name)) for name in FILTER_FIELDS},
    )


def apply_filters(full: pd.DataFrame, criteria: FilterCriteria) -> pd.DataFrame:
    """AND of min age and every active constraint; keeps the order of ``full``."""
    if full.empty:
        return full.copy()
    mask = full["age"] >= criteria.min_age
    for name, constraint in criteria.constraints().items():
        if constraint.is_active:
            mask &= constraint.mask(full[FILTER_FIELDS[name]])
    filtered = full[mask].copy()
    if filtered.empty:
        logger.warning("No records match filters %s", criteria.as_dict())
    else:
        logger.info("Filters kept %d of %d records", len(filtered), len(full))
    return filtered


def describe_filters(criteria: FilterCriteria) -> List[str]:
    chips = [f"Age: {criteria.min_age}+"]
    for name, constraint in criteria.constraints().items():
        chips.append(f"{FILTER_LABELS[name]}: {constraint}")
    return chips


def domain_options() -> Dict[str, List[str]]:
    """Selector options per filter field, each led by "All"."""
    return {name: [ALL] + CATEGORICAL_DOMAINS[col].labels() for name, col in FILTER_FIELDS.items()}
