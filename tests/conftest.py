import pandas as pd
import pytest

from riskdash.config import get_settings
from riskdash.records import Record, frame_from_records


def make_record(id: int, age: int, risk_level: str = "Low", **overrides) -> Record:
    values = dict(
        id=id,
        age=age,
        bmi=25.0,
        smoker="No",
        alcohol_consumption="None",
        diet_type="Mixed",
        physical_activity_level="Moderate",
        family_history="No",
        mental_stress_level="Medium",
        sleep_hours=7.0,
        regular_health_checkup="Yes",
        prostate_exam_done="No",
        risk_level=risk_level,
    )
    values.update(overrides)
    return Record(**values)


@pytest.fixture
def records():
    """
    Eight subjects covering every risk level, diet and checkup value.
    """
    return [
        make_record(1, 25, "Low", diet_type="Healthy", physical_activity_level="High", mental_stress_level="Low", sleep_hours=8.0, bmi=22.0),
        make_record(2, 62, "High", diet_type="Fatty", physical_activity_level="Low", mental_stress_level="High", regular_health_checkup="No", smoker="Yes", sleep_hours=5.0, bmi=31.0),
        make_record(3, 40, "Medium", diet_type="Mixed", mental_stress_level="Medium", sleep_hours=6.5, bmi=27.0),
        make_record(4, 33, "Low", diet_type="Healthy", mental_stress_level="Low", regular_health_checkup="No", sleep_hours=7.5, bmi=23.5),
        make_record(5, 71, "High", diet_type="Fatty", physical_activity_level="Low", mental_stress_level="High", regular_health_checkup="No", smoker="Yes", sleep_hours=4.5, bmi=33.0),
        make_record(6, 48, "Medium", diet_type="Fatty", mental_stress_level="Medium", regular_health_checkup="No", smoker="Yes", sleep_hours=6.0, bmi=28.5),
        make_record(7, 55, "Low", diet_type="Mixed", physical_activity_level="High", mental_stress_level="Low", sleep_hours=7.0, bmi=25.0),
        make_record(8, 39, "High", diet_type="Mixed", physical_activity_level="Low", mental_stress_level="High", smoker="Yes", sleep_hours=5.5, bmi=30.0),
    ]


@pytest.fixture
def full(records) -> pd.DataFrame:
    return frame_from_records(records)


@pytest.fixture
def csv_path(tmp_path, full):
    path = tmp_path / "riesgo_cancer_dataset.csv"
    full.to_csv(path, index=False)
    return path


@pytest.fixture
def configured_data_path(monkeypatch, csv_path):
    """Point the settings at the fixture CSV for code that reads the default path."""
    monkeypatch.setenv("RISKDASH_DATA_PATH", str(csv_path))
    get_settings.cache_clear()
    yield csv_path
    get_settings.cache_clear()
