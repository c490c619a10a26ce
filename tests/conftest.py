from pathlib import Path

import httpx
import pytest

from google_geocoding import Geocoder

FIXTURES = Path(__file__).parent / "fixtures"

API_KEY = "test-key"


def load_fixture(name: str) -> str:
    return (FIXTURES / name).read_text(encoding="utf-8")


@pytest.fixture
def sent_requests() -> list[httpx.Request]:
    """Requests that reached the fake transport"""
    return []


@pytest.fixture
def make_geocoder(sent_requests):
    """Build a Geocoder whose sync and async calls hit a canned response"""

    def factory(body: str = "", status_code: int = 200, error: Exception | None = None) -> Geocoder:
        def handler(request: httpx.Request) -> httpx.Response:
            sent_requests.append(request)
            if error is not None:
                raise error
            return httpx.Response(status_code, text=body)

        transport = httpx.MockTransport(handler)
        return Geocoder(API_KEY, transport=transport, async_transport=transport)

    return factory


@pytest.fixture
def fixture_text():
    """Read a canned payload from tests/fixtures"""
    return load_fixture
