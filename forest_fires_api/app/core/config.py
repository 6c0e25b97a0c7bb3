"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
application starts without any configuration; override them via
environment variables (or a process manager) in a deployment.

Upstream statistics services used by the proxy endpoints are kept in
the ``proxy_upstreams`` mapping rather than in the route handlers.
Each entry can be overridden with a ``PROXY_<NAME>_URL`` variable,
where ``<NAME>`` is the route name upper‑cased with dashes replaced by
underscores (e.g. ``PROXY_BITCOIN_STATS_URL``).
"""

import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional


DEFAULT_PROXY_UPSTREAMS: Dict[str, str] = {
    # Raw path‑rewrite proxies to the sibling statistics APIs
    "temperature-stats": "https://sos2425-15.onrender.com/api/v1/temperature-stats",
    "fines": "https://sos2425-20.onrender.com/api/v1/fines",
    "annual-evolutions": "https://sos2425-12.onrender.com/api/v1/annual-evolutions",
    "public-transit-stats": "https://sos2425-21.onrender.com/api/v1/public-transit-stats",
    # Public APIs called with explicit request/response handling
    "bitcoin-stats": "https://api.coingecko.com/api/v3/coins/bitcoin/market_chart",
    "covid-stats": "https://disease.sh/v3/covid-19/historical",
    "cocktail-stats": "https://www.thecocktaildb.com/api/json/v1/1/search.php",
}

# Route names served by the raw pass‑through proxy.  The remaining
# upstreams have dedicated handlers in ``services.proxy_service``.
RAW_PROXY_ROUTES = ("temperature-stats", "fines", "annual-evolutions", "public-transit-stats")


def _env_float(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    if raw.lower() == "none":
        return None
    return float(raw)


def _env_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


def load_proxy_upstreams() -> Dict[str, str]:
    """Return the upstream mapping with environment overrides applied."""
    upstreams = dict(DEFAULT_PROXY_UPSTREAMS)
    for name in upstreams:
        env_name = "PROXY_" + name.upper().replace("-", "_") + "_URL"
        override = os.getenv(env_name)
        if override:
            upstreams[name] = override.rstrip("/")
    return upstreams


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Forest Fires API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    # All routes are mounted under this prefix.
    api_prefix: str = os.getenv("API_PREFIX", "/api/v1")

    # Path to the SQLite database file.  ``:memory:`` keeps the data in
    # process memory only.  Relative paths are resolved against the
    # project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "forest_fires.db")

    # Public documentation of the forest fires resource (Postman).
    docs_url: str = os.getenv(
        "DOCS_URL", "https://documenter.getpostman.com/view/46820698/2sB3B7PZd2"
    )

    # Seconds to wait for an upstream before giving up.  ``PROXY_TIMEOUT=none``
    # leaves the transport default (no timeout).
    proxy_timeout: Optional[float] = _env_float("PROXY_TIMEOUT", 15.0)

    # Cross-origin requests are allowed from ``cors_origins`` (comma
    # separated in ``CORS_ORIGINS``) unless ``CORS_ENABLED`` is false.
    cors_enabled: bool = os.getenv("CORS_ENABLED", "true").lower() in {"1", "true", "yes"}
    cors_origins: List[str] = field(default_factory=lambda: _env_list("CORS_ORIGINS", "*"))

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "16078"))

    proxy_upstreams: Dict[str, str] = field(default_factory=load_proxy_upstreams)


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at class definition time, environment variables should
# be set before importing this module.
settings = Settings()
