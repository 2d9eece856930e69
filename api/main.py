from __future__ import annotations

import logging
import math

import numpy as np
import pandas as pd
from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from api.schemas import MetaDomainsResponse, RiskFiltersModel
from riskdash.config import get_settings
from riskdash.dashboard import CHART_NAMES, Dashboard
from riskdash.data import DatasetLoadError, load_dataset
from riskdash.filters import FilterCriteria, domain_options, normalize_filters
from riskdash.metrics_kpis import compute_kpis, format_kpis
from riskdash.metrics_radar import compute_radar
from riskdash.store import DatasetStore


app = FastAPI(title="Cancer Risk Dashboard API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _criteria_from_model(model: RiskFiltersModel, full: pd.DataFrame) -> FilterCriteria:
    floor = int(full["age"].min()) if not full.empty else 0
    raw = model.model_dump()
    if raw.get("min_age") is None:
        raw["min_age"] = floor
    return normalize_filters(raw, min_age_floor=floor)


def _dashboard_for(model: RiskFiltersModel) -> Dashboard:
    dash = Dashboard()
    dash.attach(load_dataset())
    dash.store.apply(_criteria_from_model(model, dash.store.full))
    return dash


def _json(data: object) -> JSONResponse:
    """Return JSON with safe encoding for pandas/numpy objects."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except Exception:
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        content=jsonable_encoder(
            data,
            custom_encoder={
                type(pd.NA): lambda _: None,
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
                np.ndarray: lambda arr: arr.tolist(),
            },
        )
    )


def _error(exc: Exception, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": str(exc), "type": type(exc).__name__})


@app.get("/meta/domains")
def meta_domains():
    try:
        age_min, age_max = DatasetStore(load_dataset()).age_extent()
        body = MetaDomainsResponse(
            age_min=age_min,
            age_max=age_max,
            options=domain_options(),
        )
        return _json(body.model_dump())
    except DatasetLoadError as exc:
        logger.error("meta_domains: %s", exc)
        return _error(exc, 503)
    except Exception as exc:
        logger.exception("meta_domains failed")
        return _error(exc, 500)


@app.post("/dashboard")
def dashboard(filters: RiskFiltersModel):
    try:
        return _json(_dashboard_for(filters).render())
    except DatasetLoadError as exc:
        logger.error("dashboard: %s", exc)
        return _error(exc, 503)
    except ValueError as exc:
        return _error(exc, 422)
    except Exception as exc:
        logger.exception("dashboard failed")
        return _error(exc, 500)


@app.post("/kpis")
def kpis(filters: RiskFiltersModel):
    try:
        values = compute_kpis(_dashboard_for(filters).store.filtered)
        return _json({"kpis": values, "kpi_display": format_kpis(values)})
    except DatasetLoadError as exc:
        logger.error("kpis: %s", exc)
        return _error(exc, 503)
    except ValueError as exc:
        return _error(exc, 422)
    except Exception as exc:
        logger.exception("kpis failed")
        return _error(exc, 500)


@app.post("/charts/{name}")
def chart(name: str, filters: RiskFiltersModel):
    if name not in CHART_NAMES:
        return JSONResponse(status_code=404, content={"error": f"Unknown chart: {name}", "charts": CHART_NAMES})
    try:
        return _json(_dashboard_for(filters).render_chart(name))
    except DatasetLoadError as exc:
        logger.error("chart %s: %s", name, exc)
        return _error(exc, 503)
    except ValueError as exc:
        return _error(exc, 422)
    except Exception as exc:
        logger.exception("chart %s failed", name)
        return _error(exc, 500)


@app.get("/profiles")
def profiles():
    try:
        return _json(compute_radar(load_dataset(), size=get_settings().radar_size))
    except DatasetLoadError as exc:
        logger.error("profiles: %s", exc)
        return _error(exc, 503)
    except Exception as exc:
        logger.exception("profiles failed")
        return _error(exc, 500)


@app.post("/export")
def export_filtered(filters: RiskFiltersModel):
    try:
        export_df = _dashboard_for(filters).store.filtered
    except DatasetLoadError as exc:
        logger.error("export: %s", exc)
        return _error(exc, 503)
    except ValueError as exc:
        return _error(exc, 422)
    csv_bytes = export_df.to_csv(index=False).encode("utf-8")
    return Response(content=csv_bytes, media_type="text/csv", headers={"Content-Disposition": "attachment; filename=filtered.csv"})
