"""
Proxy to third‑party statistics services.

The front‑end queries every dataset through this API so that all
requests are same‑origin.  Upstreams are looked up by route name in
the mapping configured in ``Settings.proxy_upstreams``.

Two styles of proxying are supported:

* :meth:`ProxyService.forward` rewrites the path onto the upstream base
  URL and returns the streaming ``requests`` response so the caller
  can relay status, content type and body unchanged.
* :meth:`ProxyService.bitcoin_stats`, :meth:`ProxyService.covid_stats`
  and :meth:`ProxyService.cocktail_stats` call public APIs, parse the
  JSON and (for COVID data) reshape it.  Any failure is reported as
  ``UpstreamFailureError`` with a generic message; upstream error
  bodies are never relayed.

Calls are made once; nothing is retried.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import quote

import requests

from forest_fires_api.app.core.errors import NotFoundError, UpstreamFailureError

logger = logging.getLogger(__name__)

COVID_LAST_DAYS = 30
DEFAULT_COUNTRY = "spain"

# Request headers passed through to raw upstreams.
FORWARDED_HEADERS = ("content-type", "accept")


def _with_query(url: str, query_string: str) -> str:
    return f"{url}?{query_string}" if query_string else url


class ProxyService:
    """Forward requests to the configured upstream services."""

    def __init__(
        self,
        upstreams: Mapping[str, str],
        raw_routes: Optional[List[str]] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.upstreams = dict(upstreams)
        self.raw_routes = set(raw_routes) if raw_routes is not None else set(self.upstreams)
        self.session = session or requests.Session()
        self.timeout = timeout

    def close(self) -> None:
        self.session.close()

    def base_url(self, name: str) -> str:
        try:
            return self.upstreams[name].rstrip("/")
        except KeyError:
            raise NotFoundError(f"Unknown proxy target: {name}") from None

    # ------------------------------------------------------------------
    # Raw pass‑through
    # ------------------------------------------------------------------
    def forward(
        self,
        name: str,
        path: str = "",
        query_string: str = "",
        method: str = "GET",
        body: Optional[bytes] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> requests.Response:
        """Send the request to the upstream and return the streaming response.

        The caller is responsible for closing the response once its body
        has been relayed.  Transport errors raise ``UpstreamFailureError``;
        non‑success statuses are returned as they are.
        """
        if name not in self.raw_routes:
            raise NotFoundError(f"Unknown proxy target: {name}")
        url = self.base_url(name)
        if path:
            url = f"{url}/{path.lstrip('/')}"
        url = _with_query(url, query_string)
        forwarded = {
            key: value
            for key, value in (headers or {}).items()
            if key.lower() in FORWARDED_HEADERS
        }
        logger.info("Proxy request to: %s %s", method, url)
        try:
            return self.session.request(
                method,
                url,
                data=body or None,
                headers=forwarded,
                stream=True,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("Error proxying request to %s: %s", url, exc)
            raise UpstreamFailureError(f"Failed to fetch data from {name}") from exc

    # ------------------------------------------------------------------
    # JSON APIs
    # ------------------------------------------------------------------
    def fetch_json(self, url: str, label: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """GET ``url`` and return its decoded JSON body.

        Non‑success statuses, transport errors and invalid JSON raise
        ``UpstreamFailureError`` naming ``label``.
        """
        logger.info("Proxying request to: %s", url)
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            logger.error("Error proxying request to %s: upstream returned %s", url, status)
            raise UpstreamFailureError(f"Failed to fetch data from {label}") from exc
        except (requests.RequestException, ValueError) as exc:
            logger.error("Error proxying request to %s: %s", url, exc)
            raise UpstreamFailureError(f"Failed to fetch data from {label}") from exc

    def bitcoin_stats(self, query_string: str = "") -> Any:
        """Bitcoin market chart from CoinGecko; the query is forwarded verbatim."""
        url = _with_query(self.base_url("bitcoin-stats"), query_string)
        return self.fetch_json(url, "CoinGecko API")

    def covid_stats(self, country: Optional[str] = None) -> List[Dict[str, Any]]:
        """Daily cumulative cases for ``country`` over the last 30 days.

        The upstream ``timeline.cases`` mapping (date -> count) is
        returned as a list of ``{"date", "value"}`` objects in the
        upstream order.
        """
        country = country or DEFAULT_COUNTRY
        url = f"{self.base_url('covid-stats')}/{quote(country, safe='')}"
        data = self.fetch_json(url, "disease.sh API", params={"lastdays": COVID_LAST_DAYS})
        try:
            cases = data["timeline"]["cases"]
            return [{"date": date, "value": value} for date, value in cases.items()]
        except (KeyError, TypeError, AttributeError) as exc:
            logger.error("Unexpected response shape from %s: %s", url, exc)
            raise UpstreamFailureError("Failed to fetch data from disease.sh API") from exc

    def cocktail_stats(self, query_string: str = "") -> Any:
        """Cocktail search on TheCocktailDB; the query is forwarded verbatim."""
        url = _with_query(self.base_url("cocktail-stats"), query_string)
        return self.fetch_json(url, "TheCocktailDB API")
