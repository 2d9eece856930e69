from __future__ import annotations

import math
from typing import Any, Dict, List, Tuple

import altair as alt
import pandas as pd

from riskdash.charts import to_vega_spec
from riskdash.profiles import PROFILE_ATTRIBUTES, axis_label, risk_profiles

GRID_LEVELS = 5
RING_SEGMENTS = 72
LABEL_RADIUS = 1.15


def _polar(radius: float, index: int, count: int) -> Tuple[float, float]:
    # Angle 0 points up; axes advance clockwise.
    angle = 2 * math.pi * index / count
    return radius * math.sin(angle), radius * math.cos(angle)


def profile_points(profiles: List[Dict[str, Any]]) -> pd.DataFrame:
    """Cartesian vertices of each profile polygon, one per axis."""
    rows = []
    for profile in profiles:
        values = profile["values"]
        n = len(values)
        for i, item in enumerate(values):
            x, y = _polar(item["value"], i, n)
            rows.append({
                "name": profile["name"],
                "risk_level": profile["risk_level"],
                "axis": item["axis"],
                "value": item["value"],
                "x": x,
                "y": y,
                "order": i,
            })
    return pd.DataFrame(rows)


def _grid_frame() -> pd.DataFrame:
    rows = []
    for level in range(1, GRID_LEVELS + 1):
        r = level / GRID_LEVELS
        for step in range(RING_SEGMENTS + 1):
            angle = 2 * math.pi * step / RING_SEGMENTS
            rows.append({"ring": level, "x": r * math.sin(angle), "y": r * math.cos(angle), "order": step})
    return pd.DataFrame(rows)


def _spoke_frame(labels: List[str]) -> pd.DataFrame:
    rows = []
    for i, label in enumerate(labels):
        x, y = _polar(1.0, i, len(labels))
        rows.append({"axis": label, "x": 0.0, "y": 0.0, "order": 0})
        rows.append({"axis": label, "x": x, "y": y, "order": 1})
    return pd.DataFrame(rows)


def _label_frame(labels: List[str]) -> pd.DataFrame:
    rows = []
    for i, label in enumerate(labels):
        x, y = _polar(LABEL_RADIUS, i, len(labels))
        rows.append({"axis": label, "x": x, "y": y})
    return pd.DataFrame(rows)


def compute_radar(full: pd.DataFrame, *, size: int = 400) -> Dict[str, Any]:
    """Radar of normalized risk profiles. Always built from the full dataset."""
    if full.empty:
        return {"profiles": [], "placeholder": "Loading data for the radar chart..."}
    profiles = risk_profiles(full)
    if not profiles:
        return {"profiles": [], "placeholder": "Not enough data to build risk profiles."}

    labels = [axis_label(a) for a in PROFILE_ATTRIBUTES]
    points = profile_points(profiles)
    names = [p["name"] for p in profiles]
    colors = [p["color"] for p in profiles]
    domain = [-LABEL_RADIUS - 0.25, LABEL_RADIUS + 0.25]
    x = alt.X("x:Q", axis=None, scale=alt.Scale(domain=domain))
    y = alt.Y("y:Q", axis=None, scale=alt.Scale(domain=domain))

    rings = alt.Chart(_grid_frame()).mark_line(color="#ccc", strokeDash=[2, 2]).encode(
        x=x, y=y, detail="ring:N", order="order:Q"
    )
    spokes = alt.Chart(_spoke_frame(labels)).mark_line(color="#ccc").encode(
        x=x, y=y, detail="axis:N", order="order:Q"
    )
    axis_text = alt.Chart(_label_frame(labels)).mark_text(fontSize=10, color="#333").encode(
        x=x, y=y, text="axis:N"
    )
    color = alt.Color("name:N", title="Profile", scale=alt.Scale(domain=names, range=colors), sort=names)
    lines = alt.Chart(points).mark_line(strokeWidth=2, interpolate="cardinal-closed").encode(
        x=x, y=y, color=color, detail="name:N", order="order:Q"
    )
    vertices = alt.Chart(points).mark_circle(size=40, opacity=0.9).encode(
        x=x,
        y=y,
        color=color,
        tooltip=[
            alt.Tooltip("name:N", title="Profile"),
            alt.Tooltip("axis:N", title="Attribute"),
            alt.Tooltip("value:Q", title="Value", format=".1%"),
        ],
    )
    chart = alt.layer(rings, spokes, axis_text, lines, vertices).properties(width=size, height=size)
    return {"profiles": profiles, "spec": to_vega_spec(chart)}
