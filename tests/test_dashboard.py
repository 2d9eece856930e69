import pytest

from riskdash.config import Settings
from riskdash.dashboard import CHART_NAMES, Dashboard, DashboardNotLoadedError, DashboardState
from riskdash.data import DatasetLoadError
from riskdash.filters import Constraint, FilterCriteria


@pytest.fixture
def dashboard(csv_path):
    dash = Dashboard(Settings(data_path=csv_path))
    dash.load()
    return dash


def test_starts_uninitialized():
    dash = Dashboard()
    assert dash.state is DashboardState.UNINITIALIZED
    with pytest.raises(DashboardNotLoadedError):
        dash.render()


def test_load_failure_stays_uninitialized(tmp_path):
    dash = Dashboard(Settings(data_path=tmp_path / "missing.csv"))
    with pytest.raises(DatasetLoadError):
        dash.load()
    assert dash.state is DashboardState.UNINITIALIZED
    assert dash.store is None


def test_load_renders_everything(csv_path):
    dash = Dashboard(Settings(data_path=csv_path))
    payload = dash.load()
    assert dash.state is DashboardState.LOADED
    assert payload["row_counts"] == {"full": 8, "filtered": 8}
    assert list(payload["charts"]) == CHART_NAMES
    assert all("spec" in chart for chart in payload["charts"].values())
    assert payload["filters"]["min_age"] == 25


def test_criteria_change_replaces_filtered(dashboard):
    payload = dashboard.on_criteria_changed(FilterCriteria(min_age=50, diet=Constraint.equals("Fatty")))
    assert payload["row_counts"]["filtered"] == 2
    assert dashboard.store.filtered["id"].tolist() == [2, 5]
    assert payload["kpis"]["risk_pct"]["High"] == pytest.approx(100.0)
    assert "Diet: Fatty" in payload["filter_chips"]


def test_radar_ignores_filters(dashboard):
    before = dashboard.render()["charts"]["radar"]["profiles"]
    after = dashboard.on_criteria_changed(FilterCriteria(min_age=60))["charts"]["radar"]["profiles"]
    assert after == before
    assert len(after) == 3


def test_empty_filter_degrades_to_placeholders(dashboard):
    payload = dashboard.on_criteria_changed(FilterCriteria(min_age=200))
    assert payload["row_counts"]["filtered"] == 0
    for name in CHART_NAMES[:-1]:
        assert "placeholder" in payload["charts"][name]
    assert "spec" in payload["charts"]["radar"]
    assert payload["kpis"]["checkup_pct"] is None
    assert payload["kpis"]["no_checkup_high_risk"] == 0
    assert payload["kpi_display"]["risk_low"] == "N/A"


def test_reset_restores_defaults(dashboard):
    dashboard.on_criteria_changed(FilterCriteria(min_age=60, smoker=Constraint.equals("Yes")))
    payload = dashboard.reset()
    assert payload["row_counts"]["filtered"] == 8
    assert dashboard.store.criteria == dashboard.default_criteria()


def test_unknown_chart_name(dashboard):
    with pytest.raises(KeyError):
        dashboard.render_chart("pie")


def test_unknown_chart_name_with_empty_filter(dashboard):
    dashboard.on_criteria_changed(FilterCriteria(min_age=200))
    with pytest.raises(KeyError):
        dashboard.render_chart("pie")
