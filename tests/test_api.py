"""Tests for the geocoding HTTP endpoints."""

import pytest
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient

from google_geocoding import ResponseFormat, TransportError, api
from google_geocoding.config import settings


@pytest.fixture
def app():
    app = FastAPI()
    app.include_router(api.router)
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def use_geocoder(app):
    def install(geocoder):
        app.dependency_overrides[api.get_geocoder] = lambda: geocoder

    return install


def test_forward(client, use_geocoder, make_geocoder, sent_requests, fixture_text):
    use_geocoder(make_geocoder(fixture_text("geocode_response.json")))

    response = client.get("/geocoding/forward", params={"address": "1600 Amphitheatre Parkway"})

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "OK"
    assert data["results"][0]["formatted_address"] == "1600 Amphitheatre Parkway, Mountain View, CA 94043, USA"
    assert data["results"][0]["geometry"]["location"] == {"lat": 37.4224, "lng": -122.0841}
    assert sent_requests[0].url.params["address"] == "1600 Amphitheatre Parkway"


def test_forward_xml(client, use_geocoder, make_geocoder, sent_requests, fixture_text):
    use_geocoder(make_geocoder(fixture_text("geocode_response.xml")))

    response = client.get("/geocoding/forward", params={"address": "1600 Amphitheatre Parkway", "format": "xml"})

    assert response.status_code == 200
    assert response.json()["results"][0]["place_id"] == "ChIJ2eUgeAK6j4ARbn5u_wAGqWA"
    assert sent_requests[0].url.path.endswith("/xml")


def test_reverse(client, use_geocoder, make_geocoder, sent_requests, fixture_text):
    use_geocoder(make_geocoder(fixture_text("reverse_response.json")))

    response = client.get("/geocoding/reverse", params={"lat": 40.714224, "lon": -73.961452})

    assert response.status_code == 200
    assert len(response.json()["results"]) == 2
    assert sent_requests[0].url.params["latlng"] == "40.714224,-73.961452"


def test_missing_address(client, use_geocoder, make_geocoder):
    use_geocoder(make_geocoder("{}"))

    response = client.get("/geocoding/forward")

    assert response.status_code == 422


def test_unknown_format(client, use_geocoder, make_geocoder, sent_requests):
    use_geocoder(make_geocoder("{}"))

    response = client.get("/geocoding/forward", params={"address": "Paris", "format": "yaml"})

    assert response.status_code == 422
    assert sent_requests == []


def test_upstream_failure(client, use_geocoder, make_geocoder):
    use_geocoder(make_geocoder("Server Error", status_code=500))

    response = client.get("/geocoding/forward", params={"address": "Paris"})

    assert response.status_code == 502
    assert "HTTP 500" in response.json()["detail"]


def test_unreadable_body(client, use_geocoder, make_geocoder):
    use_geocoder(make_geocoder("not json"))

    response = client.get("/geocoding/reverse", params={"lat": 1.0, "lon": 2.0})

    assert response.status_code == 502
    assert "Unreadable" in response.json()["detail"]


def test_invalid_coordinate(client, use_geocoder, make_geocoder, sent_requests):
    use_geocoder(make_geocoder("{}"))

    response = client.get("/geocoding/reverse", params={"lat": "inf", "lon": 2.0})

    assert response.status_code == 400
    assert sent_requests == []


def test_not_configured(client, monkeypatch):
    monkeypatch.setattr(api, "_geocoder", None)
    monkeypatch.setattr(settings, "GOOGLE_MAPS_API_KEY", "")

    response = client.get("/geocoding/forward", params={"address": "Paris"})

    assert response.status_code == 503


def test_configured_from_settings(monkeypatch):
    monkeypatch.setattr(api, "_geocoder", None)
    monkeypatch.setattr(settings, "GOOGLE_MAPS_API_KEY", "env-key")

    geocoder = api.get_geocoder()

    assert geocoder.api_key == "env-key"
    assert api.get_geocoder() is geocoder


@pytest.mark.asyncio
async def test_oversized_address(make_geocoder, sent_requests):
    geocoder = make_geocoder("{}")

    with pytest.raises(HTTPException) as exc_info:
        await api.geocode_address(address="a" * 70000, format=ResponseFormat.JSON, geocoder=geocoder)

    assert exc_info.value.status_code == 502
    assert sent_requests == []


@pytest.mark.asyncio
async def test_http_error_keeps_cause(make_geocoder):
    geocoder = make_geocoder("Server Error", status_code=500)

    with pytest.raises(HTTPException) as exc_info:
        await api.geocode_address(address="Paris", format=ResponseFormat.JSON, geocoder=geocoder)

    assert exc_info.value.status_code == 502
    assert isinstance(exc_info.value.__cause__, TransportError)
