from __future__ import annotations

import logging
import math
from typing import Callable, Dict, List

import numpy as np
import pandas as pd
from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from api.schemas import EventFiltersModel, EventQueryModel, QuotationFiltersModel, QuotationQueryModel, SourceResponse
from core.csv_io import serialize_csv
from core.data import load_dashboard_data, prepare_context, refresh_dashboard_data
from core.facets import derive_all_options
from core.filters import normalize_filters
from core.media import process_event_media
from core.metrics_events import compute_events
from core.metrics_quotations import compute_quotations
from core.records import EVENTS, QUOTATIONS, RECORD_FIELDS


app = FastAPI(title="Quotation & Maintenance Dashboard API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000", "http://localhost:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


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
                pd.Timestamp: lambda ts: ts.isoformat(),
            },
        )
    )


def _error(exc: Exception, status_code: int = 500) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": str(exc), "type": type(exc).__name__})


def _guarded(name: str, func: Callable[[], object]) -> JSONResponse:
    try:
        return _json(func())
    except ValueError as exc:
        return _error(exc, status_code=400)
    except Exception as exc:
        logger.exception("%s failed", name)
        return _error(exc)


def _unknown_kind(kind: str) -> JSONResponse | None:
    if kind in RECORD_FIELDS:
        return None
    return JSONResponse(status_code=404, content={"error": f"Unknown record kind: {kind}", "type": "NotFound"})


@app.get("/meta/source/{kind}", response_model=SourceResponse)
def meta_source(kind: str):
    return _unknown_kind(kind) or _guarded("meta_source", lambda: load_dashboard_data(kind).summary())


@app.post("/meta/options/quotations")
def meta_options_quotations(filters: QuotationFiltersModel):
    def run() -> Dict[str, List[str]]:
        result = load_dashboard_data(QUOTATIONS)
        return derive_all_options(result.records, normalize_filters(filters.model_dump(), QUOTATIONS))

    return _guarded("meta_options_quotations", run)


@app.post("/meta/options/events")
def meta_options_events(filters: EventFiltersModel):
    def run() -> Dict[str, List[str]]:
        result = load_dashboard_data(EVENTS)
        return derive_all_options(result.records, normalize_filters(filters.model_dump(), EVENTS))

    return _guarded("meta_options_events", run)


@app.post("/quotations")
def quotations(query: QuotationQueryModel):
    def run() -> object:
        ctx = prepare_context(QUOTATIONS, query.filters.model_dump(), query.sort.model_dump(), load_dashboard_data(QUOTATIONS))
        return compute_quotations(ctx["filters"], ctx, top_n=query.top_n)

    return _guarded("quotations", run)


@app.post("/events")
def events(query: EventQueryModel):
    def run() -> object:
        ctx = prepare_context(EVENTS, query.filters.model_dump(), query.sort.model_dump(), load_dashboard_data(EVENTS))
        return compute_events(ctx["filters"], ctx)

    return _guarded("events", run)


@app.get("/events/{index}/media")
def event_media(index: int):
    result = load_dashboard_data(EVENTS)
    if index < 0 or index >= len(result.records):
        return JSONResponse(status_code=404, content={"error": f"No event at index {index}", "type": "NotFound"})
    return _guarded("event_media", lambda: process_event_media(result.records[index]))


@app.post("/refresh/{kind}")
def refresh(kind: str):
    return _unknown_kind(kind) or _guarded("refresh", lambda: refresh_dashboard_data(kind).summary())


def _csv_response(kind: str, filters: dict, sort: dict) -> Response:
    ctx = prepare_context(kind, filters, sort, load_dashboard_data(kind))
    csv_text = serialize_csv(ctx["filtered"], RECORD_FIELDS[kind])
    return Response(
        content=csv_text.encode("utf-8"),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={kind}.csv"},
    )


@app.post("/export/quotations")
def export_quotations(query: QuotationQueryModel):
    try:
        return _csv_response(QUOTATIONS, query.filters.model_dump(), query.sort.model_dump())
    except ValueError as exc:
        return _error(exc, status_code=400)


@app.post("/export/events")
def export_events(query: EventQueryModel):
    try:
        return _csv_response(EVENTS, query.filters.model_dump(), query.sort.model_dump())
    except ValueError as exc:
        return _error(exc, status_code=400)
