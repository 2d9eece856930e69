import pytest

from riskdash.metrics_kpis import NA, compute_kpis, count_no_checkup_high_risk, format_kpis


def test_risk_percentages_sum_to_100(full):
    kpis = compute_kpis(full)
    assert kpis["risk_pct"]["Low"] == pytest.approx(37.5)
    assert kpis["risk_pct"]["Medium"] == pytest.approx(25.0)
    assert kpis["risk_pct"]["High"] == pytest.approx(37.5)
    assert sum(kpis["risk_pct"].values()) == pytest.approx(100.0)


def test_checkup_share_and_count(full):
    kpis = compute_kpis(full)
    assert kpis["checkup_pct"] == pytest.approx(50.0)
    assert kpis["no_checkup_high_risk"] == 2


def test_means_are_ordered_low_to_high(full):
    kpis = compute_kpis(full)
    assert [item["risk_level"] for item in kpis["avg_age_by_risk"]] == ["Low", "Medium", "High"]
    ages = {item["risk_level"]: item["value"] for item in kpis["avg_age_by_risk"]}
    assert ages["Medium"] == pytest.approx(44.0)
    sleep = {item["risk_level"]: item["value"] for item in kpis["avg_sleep_by_risk"]}
    assert sleep["High"] == pytest.approx(5.0)


def test_means_only_list_present_levels(full):
    kpis = compute_kpis(full[full["risk_level"] != "Medium"])
    assert [item["risk_level"] for item in kpis["avg_age_by_risk"]] == ["Low", "High"]
    assert kpis["risk_pct"]["Medium"] == 0.0


def test_empty_subset_reports_sentinels_but_zero_count(full):
    kpis = compute_kpis(full.iloc[0:0])
    assert kpis["risk_pct"] == {"Low": None, "Medium": None, "High": None}
    assert kpis["checkup_pct"] is None
    assert kpis["avg_age_by_risk"] is None
    assert kpis["avg_sleep_by_risk"] is None
    assert kpis["no_checkup_high_risk"] == 0
    assert count_no_checkup_high_risk(full.iloc[0:0]) == 0


def test_format_kpis(full):
    display = format_kpis(compute_kpis(full))
    assert display["risk_low"] == "37.5%"
    assert display["checkups"] == "50.0%"
    assert display["avg_age_by_risk"][1] == "Medium: 44.0"
    assert display["avg_sleep_by_risk"][2] == "High: 5.0h"
    assert display["no_checkup_high_risk"] == "2"


def test_format_kpis_empty(full):
    display = format_kpis(compute_kpis(full.iloc[0:0]))
    assert display["risk_high"] == NA
    assert display["avg_age_by_risk"] == [NA]
    assert display["no_checkup_high_risk"] == "0"
