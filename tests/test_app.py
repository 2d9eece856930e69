from pathlib import Path

import pytest
from conftest import make_record
from streamlit.testing.v1 import AppTest

from riskdash.config import get_settings
from riskdash.records import frame_from_records

APP_PATH = Path(__file__).resolve().parents[1] / "app.py"


@pytest.fixture
def data_path(monkeypatch, tmp_path):
    def _write(records):
        path = tmp_path / "riesgo_cancer_dataset.csv"
        frame_from_records(records).to_csv(path, index=False)
        monkeypatch.setenv("RISKDASH_DATA_PATH", str(path))
        get_settings.cache_clear()
        return path

    yield _write
    get_settings.cache_clear()


def run_app() -> AppTest:
    at = AppTest.from_file(str(APP_PATH), default_timeout=60)
    return at.run()


def test_app_renders_with_age_slider(data_path, records):
    data_path(records)
    at = run_app()
    assert not at.exception
    assert len(at.slider) == 1
    assert at.slider[0].value == 25
    assert any("8 of 8 records" in c.value for c in at.caption)


def test_app_handles_a_single_age(data_path):
    data_path([make_record(1, 40, "Low"), make_record(2, 40, "High")])
    at = run_app()
    assert not at.exception
    assert len(at.slider) == 0
    assert any("Minimum age: 40" in c.value for c in at.caption)
    assert any("2 of 2 records" in c.value for c in at.caption)


def test_app_reports_missing_dataset(monkeypatch, tmp_path):
    monkeypatch.setenv("RISKDASH_DATA_PATH", str(tmp_path / "missing.csv"))
    get_settings.cache_clear()
    try:
        at = run_app()
    finally:
        get_settings.cache_clear()
    assert not at.exception
    assert len(at.error) == 1
    assert "Could not load the dataset" in at.error[0].value
