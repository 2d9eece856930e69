import pytest

from riskdash.data import DatasetLoadError, load_dataset


def test_load_dataset_coerces_types(csv_path):
    df = load_dataset(csv_path)
    assert len(df) == 8
    assert str(df["age"].dtype) == "int64"
    assert str(df["bmi"].dtype) == "float64"
    assert df.loc[0, "sleep_hours"] == pytest.approx(8.0)


def test_none_alcohol_label_is_kept_as_text(csv_path):
    df = load_dataset(csv_path)
    assert set(df["alcohol_consumption"]) == {"None"}


def test_load_dataset_returns_a_copy(csv_path):
    first = load_dataset(csv_path)
    first.loc[0, "age"] = 999
    assert load_dataset(csv_path).loc[0, "age"] == 25


def test_default_path_comes_from_settings(configured_data_path):
    assert len(load_dataset()) == 8


def test_missing_file_raises(tmp_path):
    with pytest.raises(DatasetLoadError, match="not found"):
        load_dataset(tmp_path / "nope.csv")


def test_missing_columns_raise(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text("id,age\n1,30\n")
    with pytest.raises(DatasetLoadError, match="Missing columns"):
        load_dataset(path)


def test_non_numeric_age_raises(tmp_path, full):
    bad = full.astype({"age": object})
    bad.loc[2, "age"] = "forty"
    path = tmp_path / "bad_age.csv"
    bad.to_csv(path, index=False)
    with pytest.raises(DatasetLoadError, match="age"):
        load_dataset(path)


def test_empty_file_raises(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("")
    with pytest.raises(DatasetLoadError):
        load_dataset(path)


def test_fractional_age_raises(tmp_path, full):
    bad = full.astype({"age": object})
    bad.loc[0, "age"] = "25.9"
    path = tmp_path / "fractional_age.csv"
    bad.to_csv(path, index=False)
    with pytest.raises(DatasetLoadError, match="Non-integer values in columns: age"):
        load_dataset(path)


def test_integral_float_age_is_accepted(tmp_path, full):
    ok = full.astype({"age": object})
    ok.loc[0, "age"] = "25.0"
    path = tmp_path / "float_age.csv"
    ok.to_csv(path, index=False)
    assert load_dataset(path).loc[0, "age"] == 25
