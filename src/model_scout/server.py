"""FastAPI server exposing catalog search, details and alternatives."""

from __future__ import annotations

import secrets
from contextlib import asynccontextmanager
from collections.abc import Awaitable
from typing import Annotated, TypeVar

from fastapi import FastAPI, HTTPException, Query, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from model_scout import __version__
from model_scout.cache import TTLCache
from model_scout.catalog import CatalogClient, CatalogFetchError, CatalogStore
from model_scout.cost import estimate_cost, rates_from_detail
from model_scout.logging import bind_context, clear_context, configure_logging, get_logger
from model_scout.models import (
    AlternativesResponse,
    CatalogIndex,
    CatalogMeta,
    CostRequest,
    CostResponse,
    HealthResponse,
    ModelResponse,
    SearchRequest,
    SearchResponse,
    WarmResponse,
)
from model_scout.search import find_alternatives, is_sort_option, search_summaries
from model_scout.settings import settings

logger = get_logger(__name__)

T = TypeVar("T")

SEARCH_CACHE_CONTROL = "public, max-age=30, stale-while-revalidate=120"
MODEL_CACHE_CONTROL = "public, max-age=3600, stale-while-revalidate=86400"
ALTERNATIVES_CACHE_CONTROL = "public, max-age=300, stale-while-revalidate=600"


# ============================================================================
# Application Lifespan
# ============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    configure_logging(json_output=settings.log_json, log_level=settings.log_level)

    logger.info("Starting Model Scout...")

    client = CatalogClient(url=settings.catalog_url, timeout=settings.request_timeout)
    app.state.store = CatalogStore(client, refresh_interval=settings.refresh_interval)
    app.state.alternatives_cache = TTLCache(
        ttl=settings.alternatives_cache_ttl,
        max_size=settings.alternatives_cache_size,
    )

    logger.info(
        "Model Scout started",
        host=settings.host,
        port=settings.port,
        catalog_url=settings.catalog_url,
    )

    yield

    logger.info("Model Scout shutdown complete")


# ============================================================================
# FastAPI Application
# ============================================================================

app = FastAPI(
    title="Model Scout",
    description="Search, rank and compare AI models from the models.dev catalog",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


@app.middleware("http")
async def bind_request_context(request: Request, call_next):
    """Tag every log line of a request with its method and path."""
    clear_context()
    bind_context(method=request.method, path=request.url.path)
    return await call_next(request)


# ============================================================================
# Helpers
# ============================================================================


def parse_list(value: str | None) -> list[str]:
    """Split a comma-separated query value, dropping blanks."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def clamp_int(value: int | None, default: int, minimum: int, maximum: int) -> int:
    if value is None:
        value = default
    return min(maximum, max(minimum, value))


def get_store(request: Request) -> CatalogStore:
    return request.app.state.store


async def from_store(pending: Awaitable[T]) -> T:
    """Await a store call, mapping catalog fetch failures to 502."""
    try:
        return await pending
    except CatalogFetchError as e:
        logger.error("Failed to load catalog", error=str(e))
        raise HTTPException(status_code=502, detail=f"Failed to load catalog: {e}") from e


async def load_catalog(request: Request) -> CatalogIndex:
    """Get the current snapshot index."""
    return await from_store(get_store(request).get())


def require_id(model_id: str | None) -> str:
    if not model_id or not model_id.strip():
        raise HTTPException(status_code=400, detail="Missing id")
    return model_id.strip()


# ============================================================================
# Health
# ============================================================================


@app.get("/health", response_model=HealthResponse)
async def health(request: Request) -> HealthResponse:
    """Health check endpoint. Does not trigger a catalog fetch."""
    snapshot = get_store(request).snapshot
    return HealthResponse(
        status="ok",
        catalog_loaded=snapshot is not None,
        model_count=snapshot.index.model_count if snapshot else 0,
    )


# ============================================================================
# Catalog Endpoints
# ============================================================================


@app.get("/search", response_model=SearchResponse)
async def search(
    request: Request,
    response: Response,
    q: Annotated[str, Query(description="Free-text or id query")] = "",
    providers: Annotated[str | None, Query(description="Comma-separated provider ids")] = None,
    modalities_in: Annotated[str | None, Query(description="Required input modalities")] = None,
    modalities_out: Annotated[str | None, Query(description="Required output modalities")] = None,
    tool_call: bool = False,
    structured_output: bool = False,
    temperature: bool = False,
    open_weights: bool = False,
    reasoning: bool = False,
    min_context: float | None = None,
    min_output: float | None = None,
    max_price_in: float | None = None,
    max_price_out: float | None = None,
    hide_deprecated: bool = False,
    page: int | None = None,
    page_size: int | None = None,
    sort: str | None = None,
) -> SearchResponse:
    """Filter, sort and paginate the catalog.

    Falls back to loose (any-token) matching when a query matches nothing
    strictly; ``used_strict`` reports which mode produced the items.
    """
    catalog = await load_catalog(request)

    search_request = SearchRequest(
        query=q.strip(),
        providers=parse_list(providers),
        modalities_in=parse_list(modalities_in),
        modalities_out=parse_list(modalities_out),
        tool_call=tool_call,
        structured_output=structured_output,
        temperature=temperature,
        open_weights=open_weights,
        reasoning=reasoning,
        min_context=min_context,
        min_output=min_output,
        max_price_in=max_price_in,
        max_price_out=max_price_out,
        hide_deprecated=hide_deprecated,
        page=max(1, page or 1),
        page_size=clamp_int(page_size, settings.default_page_size, 1, settings.max_page_size),
        sort=sort if is_sort_option(sort) else settings.default_sort,
    )
    result = search_summaries(catalog.summaries, search_request)

    response.headers["Cache-Control"] = SEARCH_CACHE_CONTROL
    return SearchResponse(
        page=search_request.page,
        page_size=search_request.page_size,
        total=result.total,
        items=result.items,
        used_strict=result.used_strict,
    )


@app.get("/model", response_model=ModelResponse)
async def get_model(
    request: Request,
    response: Response,
    id: Annotated[str | None, Query(description="Model id, e.g. openai/gpt-4o")] = None,
) -> ModelResponse:
    """Get the summary and full detail record of one model."""
    model_id = require_id(id)
    store = get_store(request)
    summary = await from_store(store.get_summary(model_id))
    detail = await from_store(store.get_detail(model_id))
    if summary is None or detail is None:
        raise HTTPException(status_code=404, detail=f"Model not found for id: {model_id}")

    response.headers["Cache-Control"] = MODEL_CACHE_CONTROL
    return ModelResponse(summary=summary, detail=detail)


@app.get("/alternatives", response_model=AlternativesResponse)
async def get_alternatives(
    request: Request,
    response: Response,
    id: Annotated[str | None, Query(description="Base model id")] = None,
    limit: Annotated[int | None, Query(description="Maximum alternatives (1-20)")] = None,
) -> AlternativesResponse:
    """Rank open-weights alternatives to a model."""
    model_id = require_id(id)
    catalog = await load_catalog(request)

    store = get_store(request)
    cache: TTLCache = request.app.state.alternatives_cache
    refreshed_at = store.snapshot.refreshed_at.isoformat() if store.snapshot else ""
    cache_key = f"{refreshed_at}|{model_id}?{request.url.query}"

    response.headers["Cache-Control"] = ALTERNATIVES_CACHE_CONTROL
    cached = cache.get(cache_key)
    if cached is not None:
        return cached

    base = await from_store(store.get_summary(model_id))
    if base is None:
        raise HTTPException(status_code=404, detail=f"Model not found for id: {model_id}")

    items = find_alternatives(
        catalog.summaries,
        base,
        limit=clamp_int(
            limit, settings.default_alternatives_limit, 1, settings.max_alternatives_limit
        ),
    )
    payload = AlternativesResponse(base_id=base.id, items=items)
    cache.set(cache_key, payload)

    logger.debug("Ranked alternatives", base_id=base.id, count=len(items))
    return payload


@app.get("/meta", response_model=CatalogMeta)
async def get_meta(request: Request) -> CatalogMeta:
    """Providers and modality vocabularies for building filter menus."""
    return await from_store(get_store(request).get_meta())


@app.post("/cost", response_model=CostResponse)
async def estimate_model_cost(request: Request, body: CostRequest) -> CostResponse:
    """Estimate the usage cost of a model for the given token volumes."""
    detail = await from_store(get_store(request).get_detail(body.id))
    if detail is None:
        raise HTTPException(status_code=404, detail=f"Model not found for id: {body.id}")

    return CostResponse(id=body.id, estimate=estimate_cost(rates_from_detail(detail), body.inputs))


@app.get("/warm", response_model=WarmResponse)
async def warm(
    request: Request,
    response: Response,
    secret: str | None = None,
) -> WarmResponse:
    """Load the catalog snapshot ahead of traffic (e.g. from a cron job)."""
    if settings.warm_secret is not None:
        expected = settings.warm_secret.get_secret_value()
        if secret is None or not secrets.compare_digest(secret.encode(), expected.encode()):
            raise HTTPException(status_code=401, detail="Unauthorized")

    catalog = await load_catalog(request)

    response.headers["Cache-Control"] = "no-store"
    return WarmResponse(ok=True, model_count=catalog.model_count)
