"""
Proxy endpoints for API v1.

Same‑origin access to the statistics APIs used by the front‑end.  The
handlers are plain functions so that the blocking ``requests`` calls
run in FastAPI's thread pool.

The explicit routes (bitcoin, covid, cocktail) must be registered
before the generic ``/{upstream}`` pass‑through.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask
from starlette.concurrency import run_in_threadpool

from forest_fires_api.app.api.deps import get_proxy_service
from forest_fires_api.app.services.proxy_service import ProxyService


router = APIRouter()

PASS_THROUGH_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]


@router.get("/bitcoin-stats")
def bitcoin_stats(request: Request, proxy: ProxyService = Depends(get_proxy_service)) -> Any:
    """Bitcoin market chart (CoinGecko); query parameters are forwarded as given."""
    return proxy.bitcoin_stats(request.url.query)


@router.get("/covid-stats", response_model=List[Dict[str, Any]])
def covid_stats(
    country: Optional[str] = Query(None, description="Country name, defaults to spain"),
    proxy: ProxyService = Depends(get_proxy_service),
) -> List[Dict[str, Any]]:
    """Cumulative COVID‑19 cases of the last 30 days as ``{date, value}`` pairs."""
    return proxy.covid_stats(country)


@router.get("/cocktail-stats")
def cocktail_stats(request: Request, proxy: ProxyService = Depends(get_proxy_service)) -> Any:
    """Cocktail search (TheCocktailDB); query parameters are forwarded as given."""
    return proxy.cocktail_stats(request.url.query)


async def _pass_through(
    upstream: str, path: str, request: Request, proxy: ProxyService
) -> StreamingResponse:
    body = await request.body()
    response = await run_in_threadpool(
        proxy.forward,
        upstream,
        path,
        request.url.query,
        request.method,
        body,
        request.headers,
    )
    return StreamingResponse(
        response.iter_content(chunk_size=8192),
        status_code=response.status_code,
        media_type=response.headers.get("content-type"),
        background=BackgroundTask(response.close),
    )


@router.api_route("/{upstream}", methods=PASS_THROUGH_METHODS)
async def pass_through_root(
    upstream: str, request: Request, proxy: ProxyService = Depends(get_proxy_service)
) -> StreamingResponse:
    return await _pass_through(upstream, "", request, proxy)


@router.api_route("/{upstream}/{path:path}", methods=PASS_THROUGH_METHODS)
async def pass_through(
    upstream: str, path: str, request: Request, proxy: ProxyService = Depends(get_proxy_service)
) -> StreamingResponse:
    """Relay the request to the upstream registered under ``upstream``."""
    return await _pass_through(upstream, path, request, proxy)
