from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import streamlit as st

from riskdash.dashboard import Dashboard
from riskdash.data import DatasetLoadError, load_dataset
from riskdash.filters import ALL, FILTER_LABELS, domain_options, normalize_filters
from riskdash.records import RISK_KEYS
from riskdash.config import RISK_COLORS


# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .app-top-bar {padding: 6px 0 4px;border-bottom: 1px solid #e5e7eb;margin-bottom: 10px;}
        .app-top-bar .page-title {font-size: 1.4rem;font-weight: 700;color: #111827;}
        .card {border: 1px solid #e5e7eb;border-radius: 12px;padding: 16px;background: #ffffff;
               box-shadow: 0 1px 2px rgba(0,0,0,0.04); margin-bottom: 12px;}
        .card-header {display: flex;justify-content: space-between;align-items: center;margin-bottom: 8px;}
        .card-title {font-weight: 600;font-size: 1.0rem;color: #111827;}
        .chip-row {display: flex;flex-wrap: wrap;gap: 6px;margin-top: 6px;}
        .chip {background: #f3f4f6;border: 1px solid #e5e7eb;border-radius: 14px;padding: 4px 10px;font-size: 0.85rem;color: #374151;}
        .kpi-line {font-size: 0.95rem;font-weight: 600;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


@contextmanager
def card(title: str):
    container = st.container()
    container.markdown(
        f"""
        <div class="card">
          <div class="card-header">
            <div class="card-title">{title}</div>
          </div>
        """,
        unsafe_allow_html=True,
    )
    body = container.container()
    with body:
        yield body
    container.markdown("</div>", unsafe_allow_html=True)


def format_filter_summary(chips: List[str]) -> str:
    return "".join([f"<span class='chip'>{txt}</span>" for txt in chips])


def render_chart_card(title: str, payload: Dict[str, Any]):
    with card(title):
        if "spec" in payload:
            st.vega_lite_chart(payload["spec"], use_container_width=True)
        else:
            st.info(payload.get("placeholder", "No data to display."))


def render_by_risk_lines(lines: List[str]):
    html = []
    for line in lines:
        level = line.split(":", 1)[0]
        color = RISK_COLORS.get(level, "#333")
        html.append(f"<div class='kpi-line' style='color: {color}'>{line}</div>")
    st.markdown("".join(html), unsafe_allow_html=True)


def render_kpi_tiles(display: Dict[str, Any]):
    cols = st.columns(4)
    cols[0].metric("Low Risk", display["risk_low"], help="Share of filtered subjects with Low risk.")
    cols[1].metric("Medium Risk", display["risk_medium"], help="Share of filtered subjects with Medium risk.")
    cols[2].metric("High Risk", display["risk_high"], help="Share of filtered subjects with High risk.")
    cols[3].metric("Regular Checkups", display["checkups"], help="Share with regular_health_checkup = Yes.")
    by_risk = st.columns(2)
    with by_risk[0]:
        st.caption("Mean age by risk level")
        render_by_risk_lines(display["avg_age_by_risk"])
    with by_risk[1]:
        st.caption("Mean sleep hours by risk level")
        render_by_risk_lines(display["avg_sleep_by_risk"])


# ---------- UI setup ----------
st.set_page_config(page_title="Cancer Risk Dashboard", layout="wide")
inject_base_styles()
st.markdown("<div class='app-top-bar'><div class='page-title'>Cancer Risk Dashboard</div></div>", unsafe_allow_html=True)
st.caption("Filter the cohort and compare risk across age, lifestyle and preventive-care habits.")

dashboard = Dashboard()
try:
    dashboard.attach(load_dataset())
except DatasetLoadError as exc:
    st.error(f"Could not load the dataset. Make sure riesgo_cancer_dataset.csv is in the data folder. ({exc})")
    st.stop()

if dashboard.store.full.empty:
    st.error("The dataset has no records.")
    st.stop()

age_min, age_max = dashboard.store.age_extent()
options = domain_options()


def reset_filters():
    st.session_state["min_age"] = age_min
    for name in options:
        st.session_state[name] = ALL


# ----- Sidebar: filters -----
with st.sidebar:
    st.markdown("### Filters")
    if age_min < age_max:
        st.session_state.setdefault("min_age", age_min)
        min_age = st.slider("Minimum age", min_value=age_min, max_value=age_max, key="min_age")
    else:
        # a slider needs a non-empty range
        min_age = age_min
        st.caption(f"Minimum age: {age_min} (all records share this age)")
    selections: Dict[str, Optional[str]] = {}
    for name, values in options.items():
        st.session_state.setdefault(name, ALL)
        selections[name] = st.selectbox(FILTER_LABELS[name], options=values, key=name)
    st.markdown("---")
    st.button("Reset filters", on_click=reset_filters)

criteria = normalize_filters({"min_age": min_age, **selections}, min_age_floor=age_min)
payload = dashboard.on_criteria_changed(criteria)
charts = payload["charts"]

st.markdown(f"<div class='chip-row'>{format_filter_summary(payload['filter_chips'])}</div>", unsafe_allow_html=True)
st.caption(f"{payload['row_counts']['filtered']:,} of {payload['row_counts']['full']:,} records")

# ----- I. General risk profile -----
with card("Key indicators"):
    render_kpi_tiles(payload["kpi_display"])

cols = st.columns(2)
with cols[0]:
    render_chart_card("Risk by age range", charts["age_risk"])
with cols[1]:
    render_chart_card("BMI vs risk level (size = sleep hours)", charts["bmi_scatter"])

# ----- II. Lifestyle and habits -----
cols = st.columns(2)
with cols[0]:
    render_chart_card("Risk by diet and physical activity", charts["diet_activity"])
with cols[1]:
    render_chart_card("Mean risk: diet x mental stress", charts["diet_stress_heatmap"])

# ----- III. Preventive health -----
cols = st.columns(2)
with cols[0]:
    render_chart_card("Risk by regular health checkup", charts["checkup_risk"])
with cols[1]:
    with card("No checkup and high risk"):
        st.metric("People", payload["kpi_display"]["no_checkup_high_risk"], help="regular_health_checkup = No and risk_level = High.")

# ----- IV. Exploratory panel -----
render_chart_card("Average profile by risk level (full dataset)", charts["radar"])
if charts["radar"].get("profiles"):
    with st.expander("Profile values"):
        for profile in charts["radar"]["profiles"]:
            st.markdown(f"**{profile['name']}**")
            st.write({item["axis"]: f"{item['value']:.1%}" for item in profile["values"]})

st.download_button(
    "Export filtered CSV",
    data=dashboard.store.filtered.to_csv(index=False).encode("utf-8"),
    file_name="filtered.csv",
    mime="text/csv",
)
st.caption("Risk colors: " + ", ".join(f"{k} = {RISK_COLORS[k]}" for k in RISK_KEYS))
