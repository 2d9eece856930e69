from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class RiskFiltersModel(BaseModel):
    min_age: Optional[int] = None
    activity: str = "All"
    smoker: str = "All"
    alcohol: str = "All"
    diet: str = "All"
    checkup: str = "All"
    stress: str = "All"


class MetaDomainsResponse(BaseModel):
    age_min: Optional[int]
    age_max: Optional[int]
    options: dict
