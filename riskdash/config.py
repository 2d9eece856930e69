"""
Application-wide configuration for the risk dashboard.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import List


ROOT_DIR = Path(__file__).resolve().parents[1]
DEFAULT_DATA_PATH = ROOT_DIR / "data" / "riesgo_cancer_dataset.csv"

RISK_COLORS = {"Low": "green", "Medium": "orange", "High": "red"}
HEATMAP_RANGE = ["green", "yellow", "red"]


def _origins_from_env() -> List[str]:
    raw = os.environ.get("RISKDASH_CORS_ORIGINS", "")
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    return origins or ["http://localhost:3000", "http://127.0.0.1:3000"]


@dataclass(frozen=True)
class Settings:
    data_path: Path = DEFAULT_DATA_PATH
    age_bucket_width: int = 10
    chart_height: int = 260
    radar_size: int = 400
    cors_origins: List[str] = field(default_factory=_origins_from_env)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    data_path = os.environ.get("RISKDASH_DATA_PATH")
    width = os.environ.get("RISKDASH_AGE_BUCKET_WIDTH")
    return Settings(
        data_path=Path(data_path) if data_path else DEFAULT_DATA_PATH,
        age_bucket_width=int(width) if width else 10,
    )
