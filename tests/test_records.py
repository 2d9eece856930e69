import pytest

from riskdash.records import (
    CATEGORICAL_DOMAINS,
    COLUMNS,
    ActivityLevel,
    AlcoholConsumption,
    RiskLevel,
    YesNo,
    empty_frame,
    frame_from_records,
)


def test_domain_order_defines_rank():
    assert [level.rank() for level in RiskLevel] == [0, 1, 2]
    assert ActivityLevel.from_label("Moderate").rank() == 1
    assert YesNo.from_label("Yes").rank() == 1
    assert AlcoholConsumption.max_rank() == 2


def test_from_label_strips_whitespace():
    assert RiskLevel.from_label(" High ") is RiskLevel.HIGH


def test_unknown_label_raises():
    with pytest.raises(ValueError):
        RiskLevel.from_label("Extreme")


def test_every_categorical_column_has_a_domain():
    numeric = {"id", "age", "bmi", "sleep_hours"}
    assert set(CATEGORICAL_DOMAINS) == set(COLUMNS) - numeric


def test_frame_from_records_keeps_column_order(full, records):
    assert list(full.columns) == COLUMNS
    assert full["id"].tolist() == [r.id for r in records]
    assert frame_from_records([]).empty


def test_empty_frame_has_all_columns():
    df = empty_frame()
    assert list(df.columns) == COLUMNS
    assert df.empty
    assert str(df["age"].dtype) == "int64"
