from typing import Any, Dict, Iterator, List, Optional

import pytest
import requests
from fastapi.testclient import TestClient

from forest_fires_api.app.core.config import Settings
from forest_fires_api.app.core.db import ForestFireStore
from forest_fires_api.app.main import create_app

BASE = "/api/v1/forest-fires"


# -----------------------------------------------------------------------------
# Fake upstream HTTP
# -----------------------------------------------------------------------------


class FakeResponse:
    def __init__(
        self,
        status_code: int = 200,
        json_data: Any = None,
        content: bytes = b"",
        content_type: str = "application/json",
    ):
        self.status_code = status_code
        self._json = json_data
        self.content = content
        self.headers = {"content-type": content_type}
        self.closed = False

    def json(self) -> Any:
        if self._json is None:
            raise ValueError("No JSON object could be decoded")
        return self._json

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def iter_content(self, chunk_size: int = 1) -> Iterator[bytes]:
        yield self.content

    def close(self) -> None:
        self.closed = True


class FakeSession:
    """Stands in for ``requests.Session``; records every call."""

    def __init__(self, response: Optional[FakeResponse] = None, error: Optional[Exception] = None):
        self.response = response or FakeResponse(json_data={})
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def _respond(self, **call: Any) -> FakeResponse:
        self.calls.append(call)
        if self.error is not None:
            raise self.error
        return self.response

    def get(self, url: str, params=None, timeout=None) -> FakeResponse:
        return self._respond(method="GET", url=url, params=params, timeout=timeout)

    def request(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        return self._respond(method=method, url=url, **kwargs)

    def close(self) -> None:
        pass


# -----------------------------------------------------------------------------
# Application fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(database_url=str(tmp_path / "forest_fires.db"), proxy_timeout=None)


@pytest.fixture
def client(settings) -> Iterator[TestClient]:
    app = create_app(settings)
    # Entering the client runs the startup and shutdown handlers.
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def seeded_client(client) -> TestClient:
    response = client.get(f"{BASE}/loadInitialData")
    assert response.status_code == 200
    return client


@pytest.fixture
def store() -> Iterator[ForestFireStore]:
    store = ForestFireStore(":memory:")
    yield store
    store.close()


def make_record(year: int = 2030, community: str = "galicia", accidents: Any = 100, large: Any = 0.5):
    return {
        "year": year,
        "autonomous_community": community,
        "number_of_accidents": accidents,
        "percentage_of_large_fires": large,
    }
