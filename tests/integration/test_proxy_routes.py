import json

import requests

from tests.conftest import FakeResponse, FakeSession

PROXY = "/api/v1/proxy"


def use_session(client, session):
    client.app.state.proxy_service.session = session
    return session


def test_raw_proxy_relays_status_and_body(client):
    session = use_session(
        client, FakeSession(FakeResponse(status_code=201, content=b'{"ok": true}'))
    )
    response = client.post(f"{PROXY}/fines/2024?x=1", json={"city": "sevilla"})

    assert response.status_code == 201
    assert response.json() == {"ok": True}
    call = session.calls[0]
    assert call["method"] == "POST"
    assert call["url"] == "https://sos2425-20.onrender.com/api/v1/fines/2024?x=1"
    assert json.loads(call["data"]) == {"city": "sevilla"}


def test_raw_proxy_collection_root(client):
    session = use_session(client, FakeSession(FakeResponse(content=b"[]")))
    response = client.get(f"{PROXY}/public-transit-stats")
    assert response.status_code == 200
    assert session.calls[0]["url"] == "https://sos2425-21.onrender.com/api/v1/public-transit-stats"


def test_raw_proxy_relays_upstream_errors_unchanged(client):
    use_session(client, FakeSession(FakeResponse(status_code=404, content=b'{"error": "nope"}')))
    response = client.get(f"{PROXY}/temperature-stats/1800")
    assert response.status_code == 404
    assert response.json() == {"error": "nope"}


def test_raw_proxy_unknown_target(client):
    use_session(client, FakeSession())
    assert client.get(f"{PROXY}/weather/today").status_code == 404


def test_raw_proxy_transport_error(client):
    use_session(client, FakeSession(error=requests.ConnectionError("refused")))
    response = client.get(f"{PROXY}/annual-evolutions")
    assert response.status_code == 502


def test_bitcoin_stats(client):
    payload = {"prices": [[1711929600000, 65000.5]]}
    session = use_session(client, FakeSession(FakeResponse(json_data=payload)))
    response = client.get(f"{PROXY}/bitcoin-stats?vs_currency=usd&days=30")
    assert response.status_code == 200
    assert response.json() == payload
    assert session.calls[0]["url"].endswith("/market_chart?vs_currency=usd&days=30")


def test_covid_stats(client):
    payload = {"timeline": {"cases": {"1/1/23": 5, "1/2/23": 7}}}
    session = use_session(client, FakeSession(FakeResponse(json_data=payload)))
    response = client.get(f"{PROXY}/covid-stats", params={"country": "france"})
    assert response.status_code == 200
    assert response.json() == [{"date": "1/1/23", "value": 5}, {"date": "1/2/23", "value": 7}]
    assert session.calls[0]["url"] == "https://disease.sh/v3/covid-19/historical/france"


def test_cocktail_stats_upstream_failure(client):
    use_session(client, FakeSession(FakeResponse(status_code=500, json_data={"trace": "secret"})))
    response = client.get(f"{PROXY}/cocktail-stats?s=mojito")
    assert response.status_code == 502
    assert response.json() == {"detail": "Failed to fetch data from TheCocktailDB API"}
