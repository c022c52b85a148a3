from __future__ import annotations

from dataclasses import asdict
import logging
import math

import numpy as np
import pandas as pd
from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.responses import Response
from fastapi.encoders import jsonable_encoder

from api.schemas import MetaListResponse, MetaSortOptionsResponse, RingRequestModel, ViewFiltersModel
from core.data import list_cities, load_judge_table
from core.filters import ViewFilters, normalize_filters, thresholds_for
from core.i18n import sort_options
from core.metrics_city import compute_city_page
from core.metrics_judge import compute_judge_page
from core.ring import compute_geometry
from core.svg import ring_svg


app = FastAPI(title="Asylum Decisions API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _filters_from_model(model: ViewFiltersModel) -> ViewFilters:
    return normalize_filters(model.model_dump())


def _json(data: object, status_code: int = 200) -> JSONResponse:
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
        status_code=status_code,
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
        ),
    )


def _error(exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": str(exc), "type": type(exc).__name__})


@app.get("/meta/cities")
def meta_cities():
    try:
        table = load_judge_table()
        return _json(MetaListResponse(values=list_cities(table)).model_dump())
    except Exception as exc:
        logger.exception("meta_cities failed")
        return _error(exc)


@app.get("/meta/sort-options")
def meta_sort_options(lang: str = Query(default="en")):
    try:
        return _json(MetaSortOptionsResponse(options=sort_options(lang)).model_dump())
    except Exception as exc:
        logger.exception("meta_sort_options failed")
        return _error(exc)


@app.post("/city")
def city(filters: ViewFiltersModel):
    try:
        table = load_judge_table()
        payload = compute_city_page(_filters_from_model(filters), table)
        return _json(payload, status_code=200 if payload["found"] else 404)
    except Exception as exc:
        logger.exception("city failed")
        return _error(exc)


@app.get("/judge/{judge_name}")
def judge(
    judge_name: str,
    lang: str = Query(default="en"),
    thresholds_version: str = Query(default="v1"),
    animate: bool = Query(default=True),
):
    try:
        table = load_judge_table()
        f = normalize_filters({"language": lang, "thresholds_version": thresholds_version, "animate": animate})
        payload = compute_judge_page(judge_name, f, table)
        return _json(payload, status_code=200 if payload["found"] else 404)
    except Exception as exc:
        logger.exception("judge failed")
        return _error(exc)


def _geometry_from_request(req: RingRequestModel):
    return compute_geometry(
        percentage=req.percentage,
        size=req.size,
        stroke_width=req.stroke_width,
        reference_mark_percentage=req.reference_mark_percentage,
        color=req.color,
        thresholds=thresholds_for(req.thresholds_version),
    )


@app.post("/ring")
def ring(req: RingRequestModel):
    try:
        geometry = _geometry_from_request(req)
        return _json({"animate": req.animate, "geometry": asdict(geometry)})
    except Exception as exc:
        logger.exception("ring failed")
        return _error(exc)


@app.post("/ring.svg")
def ring_image(req: RingRequestModel):
    try:
        geometry = _geometry_from_request(req)
        svg = ring_svg(geometry, animate=req.animate, title=req.title)
        return Response(content=svg.encode("utf-8"), media_type="image/svg+xml")
    except Exception as exc:
        logger.exception("ring_image failed")
        return _error(exc)
