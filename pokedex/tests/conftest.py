import io
import json

import pytest
import requests

from pokedex.core.cache import Cache
from pokedex.core.logging import configure
from pokedex.repl.state import ReplState
from pokedex.services.pokeapi_client import PokeAPIClient

BASE_URL = "https://pokeapi.test/api/v2"


class FakeClock:
    """Manually advanced stand-in for time.monotonic."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeSession:
    """Serves canned responses by URL and records every request."""

    def __init__(self):
        self.routes = {}
        self.calls = []

    def add_json(self, url: str, payload, status: int = 200) -> None:
        self.routes[url] = (status, json.dumps(payload).encode())

    def add_raw(self, url: str, body: bytes, status: int = 200) -> None:
        self.routes[url] = (status, body)

    def get(self, url, timeout=None):
        self.calls.append(url)
        status, body = self.routes.get(url, (404, b'"Not Found"'))
        response = requests.Response()
        response.status_code = status
        response._content = body
        response.url = url
        return response

    def close(self):
        pass


@pytest.fixture(autouse=True)
def quiet_logging():
    """Send logs to a throwaway buffer unless a test configures its own stream."""
    configure("pokedex", level="WARN", stream=io.StringIO())


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    """Cache whose reaper never fires during a test; sweep manually."""
    c = Cache(interval=3600, clock=clock)
    yield c
    c.close()


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def client(cache, session):
    return PokeAPIClient(cache, base_url=BASE_URL, timeout=5, session=session)


@pytest.fixture
def state(client):
    return ReplState(client=client)


@pytest.fixture
def pikachu_payload():
    return {
        "name": "pikachu",
        "height": 4,
        "weight": 60,
        "base_experience": 112,
        "stats": [
            {"base_stat": 35, "stat": {"name": "hp", "url": "https://pokeapi.test/stat/1/"}},
            {"base_stat": 55, "stat": {"name": "attack", "url": "https://pokeapi.test/stat/2/"}},
        ],
        "types": [
            {"slot": 1, "type": {"name": "electric", "url": "https://pokeapi.test/type/13/"}},
        ],
    }


@pytest.fixture
def pidgey_payload():
    return {
        "name": "pidgey",
        "height": 3,
        "weight": 18,
        "base_experience": 50,
        "stats": [{"base_stat": 40, "stat": {"name": "hp"}}],
        "types": [
            {"slot": 2, "type": {"name": "flying"}},
            {"slot": 1, "type": {"name": "normal"}},
        ],
    }
