import pytest
import requests

from forest_fires_api.app.core.config import DEFAULT_PROXY_UPSTREAMS, RAW_PROXY_ROUTES
from forest_fires_api.app.core.errors import NotFoundError, UpstreamFailureError
from forest_fires_api.app.services.proxy_service import ProxyService
from tests.conftest import FakeResponse, FakeSession


def make_proxy(session, timeout=None):
    return ProxyService(
        DEFAULT_PROXY_UPSTREAMS, raw_routes=list(RAW_PROXY_ROUTES), session=session, timeout=timeout
    )


def test_forward_rewrites_path_and_query():
    session = FakeSession(FakeResponse(content=b"[]"))
    proxy = make_proxy(session, timeout=5)

    proxy.forward("fines", "2024/sevilla", "limit=2&offset=1", headers={"Accept": "application/json", "Cookie": "x"})

    call = session.calls[0]
    assert call["method"] == "GET"
    assert call["url"] == "https://sos2425-20.onrender.com/api/v1/fines/2024/sevilla?limit=2&offset=1"
    assert call["headers"] == {"Accept": "application/json"}
    assert call["stream"] is True
    assert call["timeout"] == 5


def test_forward_root_without_query():
    session = FakeSession()
    make_proxy(session).forward("annual-evolutions")
    assert session.calls[0]["url"] == "https://sos2425-12.onrender.com/api/v1/annual-evolutions"


def test_forward_relays_error_status():
    session = FakeSession(FakeResponse(status_code=404, content=b"missing"))
    response = make_proxy(session).forward("temperature-stats", "1900")
    assert response.status_code == 404


def test_forward_unknown_target():
    with pytest.raises(NotFoundError):
        make_proxy(FakeSession()).forward("weather")
    # Explicit upstreams are not reachable through the raw pass-through.
    with pytest.raises(NotFoundError):
        make_proxy(FakeSession()).forward("bitcoin-stats")


def test_forward_transport_error():
    session = FakeSession(error=requests.ConnectionError("refused"))
    with pytest.raises(UpstreamFailureError):
        make_proxy(session).forward("fines")


def test_bitcoin_stats_forwards_query_verbatim():
    payload = {"prices": [[1, 2.0]]}
    session = FakeSession(FakeResponse(json_data=payload))
    assert make_proxy(session).bitcoin_stats("vs_currency=eur&days=7") == payload
    assert (
        session.calls[0]["url"]
        == "https://api.coingecko.com/api/v3/coins/bitcoin/market_chart?vs_currency=eur&days=7"
    )


def test_covid_stats_reshapes_timeline():
    payload = {"country": "Spain", "timeline": {"cases": {"3/1/23": 10, "3/2/23": 12}}}
    session = FakeSession(FakeResponse(json_data=payload))

    result = make_proxy(session).covid_stats()

    assert result == [{"date": "3/1/23", "value": 10}, {"date": "3/2/23", "value": 12}]
    assert session.calls[0]["url"] == "https://disease.sh/v3/covid-19/historical/spain"
    assert session.calls[0]["params"] == {"lastdays": 30}


def test_covid_stats_country_is_escaped():
    session = FakeSession(FakeResponse(json_data={"timeline": {"cases": {}}}))
    make_proxy(session).covid_stats("united kingdom")
    assert session.calls[0]["url"].endswith("/historical/united%20kingdom")


def test_covid_stats_unexpected_shape():
    session = FakeSession(FakeResponse(json_data={"message": "Country not found"}))
    with pytest.raises(UpstreamFailureError):
        make_proxy(session).covid_stats("atlantis")


@pytest.mark.parametrize(
    "session",
    [
        FakeSession(FakeResponse(status_code=503, json_data={"error": "down"})),
        FakeSession(error=requests.Timeout("slow")),
        FakeSession(FakeResponse(json_data=None)),
    ],
)
def test_cocktail_stats_failures_are_upstream_failures(session):
    with pytest.raises(UpstreamFailureError) as exc_info:
        make_proxy(session).cocktail_stats("s=margarita")
    assert exc_info.value.message == "Failed to fetch data from TheCocktailDB API"
    assert exc_info.value.status_code == 502
