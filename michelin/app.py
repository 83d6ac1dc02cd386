from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute

from .config import DEFAULT_SERVICE_CONFIG
from .restaurants.cache import get_cache_stats
from .restaurants.data_store import get_store, load_store
from .restaurants.errors import StoreUnavailable
from .restaurants.models import FilterField, InvalidQuery, NotFound, Restaurant
from .restaurants.query import QueryService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    store = get_store()
    if DEFAULT_SERVICE_CONFIG.reset_db or not store.is_loaded:
        try:
            load_store(DEFAULT_SERVICE_CONFIG.data_path, store)
        except StoreUnavailable:
            logger.error("Starting without a restaurant dataset", exc_info=True)
    yield


app = FastAPI(title="Michelin Restaurant API", version="1.0.0", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=DEFAULT_SERVICE_CONFIG.cors_origins,
    allow_methods=["GET"],
    allow_headers=["*"],
)


@app.exception_handler(StoreUnavailable)
async def store_unavailable_handler(request: Request, exc: StoreUnavailable):
    logger.error("Store unavailable on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": "Restaurant data is unavailable"})


def get_query_service() -> QueryService:
    return QueryService(get_store(), page_size=DEFAULT_SERVICE_CONFIG.page_size)


def _raise_for(outcome: NotFound | InvalidQuery) -> None:
    if isinstance(outcome, InvalidQuery):
        raise HTTPException(status_code=400, detail=outcome.message)
    raise HTTPException(status_code=404, detail=outcome.message)


# ── Service endpoints ───────────────────────────────────────────────────


@app.get("/")
def list_endpoints() -> list[dict]:
    return [
        {"path": route.path, "methods": sorted(route.methods)}
        for route in app.routes
        if isinstance(route, APIRoute)
    ]


@app.get("/health")
def health() -> dict:
    return {"status": "ok", "restaurants": len(get_store())}


@app.get("/cache/stats")
def cache_stats() -> dict:
    return get_cache_stats()


# ── Restaurant endpoints ────────────────────────────────────────────────


@app.get("/restaurants", response_model=list[Restaurant])
def restaurants(
    page: str | None = None,
    service: QueryService = Depends(get_query_service),
) -> list[Restaurant]:
    # page stays a string so junk like ?page=abc falls back to page 1
    outcome = service.list_page(page)
    if isinstance(outcome, NotFound):
        _raise_for(outcome)
    return outcome.restaurants


@app.get("/restaurants/{query}", response_model=Restaurant)
def restaurant(query: str, service: QueryService = Depends(get_query_service)) -> Restaurant:
    outcome = service.get_one(query)
    if isinstance(outcome, NotFound):
        _raise_for(outcome)
    return outcome.restaurant


@app.get("/cuisines")
def cuisines(service: QueryService = Depends(get_query_service)) -> list[str]:
    return service.distinct_cuisines()


@app.get("/cuisines/{cuisine}", response_model=list[Restaurant])
def restaurants_by_cuisine(
    cuisine: str, service: QueryService = Depends(get_query_service)
) -> list[Restaurant]:
    outcome = service.filter_by_field(FilterField.cuisine, cuisine)
    if isinstance(outcome, (NotFound, InvalidQuery)):
        _raise_for(outcome)
    return outcome.restaurants


@app.get("/locations/{location}", response_model=list[Restaurant])
def restaurants_by_location(
    location: str, service: QueryService = Depends(get_query_service)
) -> list[Restaurant]:
    outcome = service.filter_by_field(FilterField.location, location)
    if isinstance(outcome, (NotFound, InvalidQuery)):
        _raise_for(outcome)
    return outcome.restaurants
