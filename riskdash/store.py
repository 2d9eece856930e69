from __future__ import annotations

from typing import Optional, Tuple

import pandas as pd

from riskdash.filters import FilterCriteria, apply_filters, default_criteria


class DatasetStore:
    """Owns the full dataset and the currently filtered subset.

    ``full`` is set once; ``filtered`` is replaced wholesale on every
    ``apply``.
    """

    def __init__(self, full: pd.DataFrame):
        self._full = full.reset_index(drop=True)
        self._filtered = self._full.copy()
        self._criteria: FilterCriteria = default_criteria(self._full)

    @property
    def full(self) -> pd.DataFrame:
        return self._full

    @property
    def filtered(self) -> pd.DataFrame:
        return self._filtered

    @property
    def criteria(self) -> FilterCriteria:
        return self._criteria

    def apply(self, criteria: FilterCriteria) -> pd.DataFrame:
        self._criteria = criteria
        self._filtered = apply_filters(self._full, criteria)
        return self._filtered

    def reset(self) -> pd.DataFrame:
        return self.apply(default_criteria(self._full))

    def age_extent(self) -> Tuple[Optional[int], Optional[int]]:
        if self._full.empty:
            return None, None
        return int(self._full["age"].min()), int(self._full["age"].max())
