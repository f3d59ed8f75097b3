"""Tests for the FastAPI application (orchestrator mocked)."""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from daft_finder.api.app import app
from daft_finder.api.dependencies import get_orchestrator
from daft_finder.exceptions import ApiError, AuthError, NetworkError, ScraperError
from daft_finder.scraper.base import SearchCriteria
from tests.conftest import make_listing


@pytest.fixture
def orchestrator():
    return MagicMock()


@pytest.fixture
def client(orchestrator):
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestSearchEndpoint:
    """Tests for POST /api/search."""

    def test_returns_results(self, client, orchestrator):
        orchestrator.search.return_value = [make_listing("1"), make_listing("2", price=2100)]

        response = client.post("/api/search", json={"location": "Dublin 4", "max_price": 2500})

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 2
        assert [r["id"] for r in data["results"]] == ["1", "2"]
        assert data["results"][1]["parsedPrice"] == 2100
        assert data["results"][0]["priceType"] == "numeric"
        orchestrator.search.assert_called_once_with(
            SearchCriteria(locations=("Dublin 4",), max_price=2500)
        )

    def test_multiple_locations(self, client, orchestrator):
        orchestrator.search.return_value = []

        response = client.post("/api/search", json={"location": ["Ringsend", "Sandymount"]})

        assert response.status_code == 200
        assert response.json() == {"count": 0, "results": []}
        criteria = orchestrator.search.call_args.args[0]
        assert criteria.locations == ("Ringsend", "Sandymount")

    def test_empty_body_searches_everything(self, client, orchestrator):
        orchestrator.search.return_value = []

        response = client.post("/api/search", json={})

        assert response.status_code == 200
        orchestrator.search.assert_called_once_with(SearchCriteria())

    def test_validation_error(self, client, orchestrator):
        response = client.post("/api/search", json={"num_beds": "lots"})

        assert response.status_code == 400
        body = response.json()
        assert body["errorType"] == "ValidationError"
        assert "num_beds" in body["details"]
        orchestrator.search.assert_not_called()

    def test_inverted_price_range(self, client):
        response = client.post("/api/search", json={"min_price": 3000, "max_price": 1000})

        assert response.status_code == 400
        assert response.json()["errorType"] == "ValidationError"

    def test_scraper_error(self, client, orchestrator):
        orchestrator.search.side_effect = ScraperError(
            "Failed to fetch initial page for location: ['Ringsend'].",
            stage="fetch_initial_page",
            params={"location": ["Ringsend"]},
        )

        response = client.post("/api/search", json={"location": "Ringsend"})

        assert response.status_code == 500
        assert response.json() == {
            "errorType": "ScraperError",
            "message": "Failed to fetch initial page for location: ['Ringsend'].",
            "details": {"stage": "fetch_initial_page", "receivedParams": {"location": ["Ringsend"]}},
        }

    def test_network_error(self, client, orchestrator):
        orchestrator.search.side_effect = NetworkError("Failed to fetch", url="https://www.daft.ie", status_code=503)

        response = client.post("/api/search", json={})

        assert response.status_code == 502
        assert response.json()["details"] == {"url": "https://www.daft.ie", "status": 503}


class TestPropertiesEndpoint:
    """Tests for GET /api/properties/{property_id}."""

    def test_returns_api_payload(self, client, orchestrator):
        orchestrator.get_details.return_value = {"id": 123, "title": "2 Bed Apartment"}

        response = client.get("/api/properties/123")

        assert response.status_code == 200
        assert response.json() == {"id": 123, "title": "2 Bed Apartment"}
        orchestrator.get_details.assert_called_once_with("123")

    def test_auth_error(self, client, orchestrator):
        orchestrator.get_details.side_effect = AuthError("A valid DAFT_API_KEY is required.", status_code=403)

        response = client.get("/api/properties/123")

        assert response.status_code == 401
        assert response.json()["errorType"] == "AuthError"
        assert response.json()["details"] == {"status": 403}

    def test_api_error(self, client, orchestrator):
        orchestrator.get_details.side_effect = ApiError("Daft.ie API error", status_code=500)

        response = client.get("/api/properties/123")

        assert response.status_code == 502
        assert response.json()["errorType"] == "ApiError"
