from __future__ import annotations

import logging
import math
from dataclasses import asdict

import numpy as np
import pandas as pd
from fastapi import FastAPI, Query
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from city_api.schemas import CityQueryModel, MetaListResponse, SettingsModel, SummaryModel
from city_core.data import CityNotFoundError, load_dataset
from city_core.filters import (
    CityQuery,
    InvalidSortDirectionError,
    InvalidSortKeyError,
    normalize_query,
    normalize_settings,
    query_to_dict,
)
from city_core.metrics_comparison import compute_comparison, compute_population_breakdown
from city_core.metrics_detail import compute_city_detail
from city_core.metrics_overview import city_row, compute_overview
from city_core.query import run_query


APP_TITLE = "India Cities Explorer API"
APP_VERSION = "0.1.0"
CORS_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000", "http://localhost:8501"]

app = FastAPI(title=APP_TITLE, version=APP_VERSION)
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _query_from_model(model: CityQueryModel) -> CityQuery:
    return normalize_query(model.model_dump())


def _json(data: object) -> JSONResponse:
    """Return JSON with safe encoding for pandas/numpy objects."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
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


def _error(status_code: int, exc: Exception) -> JSONResponse:
    message = exc.args[0] if isinstance(exc, KeyError) and exc.args else str(exc)
    return JSONResponse(status_code=status_code, content={"error": str(message), "type": type(exc).__name__})


@app.get("/meta/states", response_model=MetaListResponse)
def meta_states():
    try:
        return _json({"values": load_dataset().distinct_states()})
    except Exception as exc:
        logger.exception("meta_states failed")
        return _error(500, exc)


@app.get("/meta/regions", response_model=MetaListResponse)
def meta_regions():
    try:
        return _json({"values": load_dataset().distinct_regions()})
    except Exception as exc:
        logger.exception("meta_regions failed")
        return _error(500, exc)


@app.post("/cities")
def cities(query: CityQueryModel):
    try:
        q = _query_from_model(query)
        result = run_query(load_dataset(), q)
        summary = SummaryModel(**result.summary.to_dict())
        return _json(
            {
                "query": query_to_dict(q),
                "total": result.total_count,
                "cities": [asdict(c) for c in result.cities],
                "summary": summary.model_dump(),
            }
        )
    except (InvalidSortKeyError, InvalidSortDirectionError) as exc:
        return _error(400, exc)
    except Exception as exc:
        logger.exception("cities failed")
        return _error(500, exc)


@app.post("/overview")
def overview(query: CityQueryModel):
    try:
        return _json(compute_overview(load_dataset(), _query_from_model(query)))
    except (InvalidSortKeyError, InvalidSortDirectionError) as exc:
        return _error(400, exc)
    except Exception as exc:
        logger.exception("overview failed")
        return _error(500, exc)


@app.get("/cities/{city_id}")
def city_detail(
    city_id: int,
    national_literacy_average: float = Query(default=77.7),
):
    try:
        settings = normalize_settings({"national_literacy_average": national_literacy_average})
        return _json(compute_city_detail(load_dataset().get(city_id), settings))
    except CityNotFoundError as exc:
        return _error(404, exc)
    except Exception as exc:
        logger.exception("city_detail failed")
        return _error(500, exc)


@app.get("/cities/{city_id}/comparison")
def city_comparison(city_id: int, top_n: int = Query(default=SettingsModel().comparison_top_n)):
    try:
        dataset = load_dataset()
        settings = normalize_settings({"comparison_top_n": top_n})
        return _json(compute_comparison(dataset, dataset.get(city_id), settings))
    except CityNotFoundError as exc:
        return _error(404, exc)
    except Exception as exc:
        logger.exception("city_comparison failed")
        return _error(500, exc)


@app.get("/population-breakdown")
def population_breakdown():
    try:
        return _json(compute_population_breakdown(load_dataset()))
    except Exception as exc:
        logger.exception("population_breakdown failed")
        return _error(500, exc)


@app.post("/export")
def export_cities(query: CityQueryModel):
    try:
        result = run_query(load_dataset(), _query_from_model(query))
        export_df = pd.DataFrame([city_row(c) for c in result.cities])
        csv_bytes = export_df.to_csv(index=False).encode("utf-8")
    except (InvalidSortKeyError, InvalidSortDirectionError) as exc:
        return _error(400, exc)
    except Exception as exc:
        logger.exception("export failed")
        return _error(500, exc)
    return Response(
        content=csv_bytes,
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=cities.csv"},
    )
