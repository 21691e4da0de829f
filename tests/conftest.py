import httpx
import pytest
from fastapi.testclient import TestClient

from edge_cache import TTLCache
from main import app, get_cache, get_http_client
from settings import Settings

API_SERVER = "https://upstream.test/v3"


def monitor_payload(**overrides):
    monitor = {
        "id": "abc123",
        "uptime": 99.95,
        "resolve_address_info": {"City": "Jakarta", "Country": "Indonesia"},
        "locations": {
            "singapore": {"response_time": 100},
            "tokyo": {"response_time": 200},
        },
    }
    monitor.update(overrides)
    return {"monitors": [monitor]}


class Upstream:
    """Scripted monitoring API; records every request it receives."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.json = monitor_payload()
        self.content: bytes | None = None
        self.exc: Exception | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.json)


@pytest.fixture
def upstream():
    return Upstream()


@pytest.fixture
def settings():
    return Settings(api_server=API_SERVER, api_key="secret-key", allowed_origin="*")


@pytest.fixture
def cache():
    return TTLCache()


@pytest.fixture
def client(upstream, settings, cache):
    async def _client():
        async with httpx.AsyncClient(transport=httpx.MockTransport(upstream)) as c:
            yield c

    app.dependency_overrides[get_cache] = lambda: cache
    app.dependency_overrides[get_http_client] = _client
    with TestClient(app) as c:
        app.state.settings = settings
        yield c
    app.dependency_overrides.clear()
