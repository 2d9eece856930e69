"""Dashboard state machine: load once, then re-render on every criteria change."""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import pandas as pd

from riskdash.config import Settings, get_settings
from riskdash.data import load_dataset
from riskdash.filters import FilterCriteria, default_criteria, describe_filters
from riskdash.metrics_age_risk import compute_age_risk
from riskdash.metrics_bmi import compute_bmi_scatter
from riskdash.metrics_checkup import compute_checkup_risk
from riskdash.metrics_heatmap import compute_diet_stress_heatmap
from riskdash.metrics_kpis import compute_kpis, format_kpis
from riskdash.metrics_lifestyle import compute_diet_activity
from riskdash.metrics_radar import compute_radar
from riskdash.store import DatasetStore


logger = logging.getLogger(__name__)

EMPTY_MESSAGE = "No data to display for the current filters."

CHART_NAMES = ["age_risk", "bmi_scatter", "diet_activity", "diet_stress_heatmap", "checkup_risk", "radar"]


class DashboardState(Enum):
    UNINITIALIZED = "uninitialized"
    LOADED = "loaded"


class DashboardNotLoadedError(RuntimeError):
    pass


class Dashboard:
    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.state = DashboardState.UNINITIALIZED
        self.store: Optional[DatasetStore] = None

    def load(self, path: Optional[Path] = None) -> Dict[str, Any]:
        """Load the dataset and render everything with default criteria.

        A ``DatasetLoadError`` propagates and leaves the dashboard
        uninitialized.
        """
        self.attach(load_dataset(path or self.settings.data_path))
        return self.render()

    def attach(self, full: pd.DataFrame) -> None:
        self.store = DatasetStore(full)
        self.state = DashboardState.LOADED

    def _require_store(self) -> DatasetStore:
        if self.state is not DashboardState.LOADED or self.store is None:
            raise DashboardNotLoadedError("Dataset has not been loaded")
        return self.store

    def default_criteria(self) -> FilterCriteria:
        return default_criteria(self._require_store().full)

    def on_criteria_changed(self, criteria: FilterCriteria) -> Dict[str, Any]:
        self._require_store().apply(criteria)
        return self.render()

    def reset(self) -> Dict[str, Any]:
        self._require_store().reset()
        return self.render()

    def render_chart(self, name: str) -> Dict[str, Any]:
        if name not in CHART_NAMES:
            raise KeyError(f"Unknown chart: {name}")
        store = self._require_store()
        filtered, full = store.filtered, store.full
        height = self.settings.chart_height
        if name == "radar":
            return compute_radar(full, size=self.settings.radar_size)
        if filtered.empty:
            return {"series": [], "placeholder": EMPTY_MESSAGE}
        if name == "age_risk":
            return compute_age_risk(filtered, full, width=self.settings.age_bucket_width, height=height)
        if name == "bmi_scatter":
            return compute_bmi_scatter(filtered, height=height)
        if name == "diet_activity":
            return compute_diet_activity(filtered, height=height)
        if name == "diet_stress_heatmap":
            return compute_diet_stress_heatmap(filtered, height=height)
        return compute_checkup_risk(filtered, height=height)

    def render(self) -> Dict[str, Any]:
        store = self._require_store()
        filtered = store.filtered
        if filtered.empty:
            logger.warning(EMPTY_MESSAGE)

        kpis = compute_kpis(filtered)
        charts = {name: self.render_chart(name) for name in CHART_NAMES}
        return {
            "filters": store.criteria.as_dict(),
            "filter_chips": describe_filters(store.criteria),
            "row_counts": {"full": int(len(store.full)), "filtered": int(len(filtered))},
            "kpis": kpis,
            "kpi_display": format_kpis(kpis),
            "charts": charts,
        }
