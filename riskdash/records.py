"""Record model and categorical domains for the cancer risk dataset."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Dict, Iterable, List, Type

import pandas as pd


class OrderedDomain(Enum):
    """Categorical domain whose declaration order is its total order."""

    @classmethod
    def labels(cls) -> List[str]:
        return [member.value for member in cls]

    @classmethod
    def from_label(cls, label: str) -> "OrderedDomain":
        key = str(label).strip()
        for member in cls:
            if member.value == key:
                return member
        raise ValueError(f"Unknown {cls.__name__} label: {label!r}")

    @classmethod
    def max_rank(cls) -> int:
        return len(cls) - 1

    def rank(self) -> int:
        return type(self).labels().index(self.value)


class YesNo(OrderedDomain):
    NO = "No"
    YES = "Yes"


class AlcoholConsumption(OrderedDomain):
    NONE = "None"
    MODERATE = "Moderate"
    HIGH = "High"


class DietType(OrderedDomain):
    FATTY = "Fatty"
    MIXED = "Mixed"
    HEALTHY = "Healthy"


class ActivityLevel(OrderedDomain):
    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"


class StressLevel(OrderedDomain):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class RiskLevel(OrderedDomain):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


RISK_KEYS: List[str] = RiskLevel.labels()

# Checkup bars show "Yes" first; the ordinal table keeps No=0, Yes=1.
CHECKUP_DISPLAY_ORDER: List[str] = [YesNo.YES.value, YesNo.NO.value]

CATEGORICAL_DOMAINS: Dict[str, Type[OrderedDomain]] = {
    "smoker": YesNo,
    "alcohol_consumption": AlcoholConsumption,
    "diet_type": DietType,
    "physical_activity_level": ActivityLevel,
    "family_history": YesNo,
    "mental_stress_level": StressLevel,
    "regular_health_checkup": YesNo,
    "prostate_exam_done": YesNo,
    "risk_level": RiskLevel,
}

INT_COLUMNS = ["id", "age"]
FLOAT_COLUMNS = ["bmi", "sleep_hours"]

COLUMNS = [
    "id",
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
    "prostate_exam_done",
    "risk_level",
]


@dataclass(frozen=True)
class Record:
    id: int
    age: int
    bmi: float
    smoker: str
    alcohol_consumption: str
    diet_type: str
    physical_activity_level: str
    family_history: str
    mental_stress_level: str
    sleep_hours: float
    regular_health_checkup: str
    prostate_exam_done: str
    risk_level: str

    def to_row(self) -> Dict[str, object]:
        return asdict(self)


def empty_frame() -> pd.DataFrame:
    df = pd.DataFrame({col: pd.Series(dtype=object) for col in COLUMNS})
    for col in INT_COLUMNS:
        df[col] = df[col].astype("int64")
    for col in FLOAT_COLUMNS:
        df[col] = df[col].astype("float64")
    return df


def frame_from_records(records: Iterable[Record]) -> pd.DataFrame:
    rows = [r.to_row() for r in records]
    if not rows:
        return empty_frame()
    return pd.DataFrame(rows, columns=COLUMNS)
