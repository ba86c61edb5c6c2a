"""Tests for the grocery list API routes."""

import pytest
from fastapi.testclient import TestClient

from groceryplanner.main import app
from groceryplanner.routers.grocery_lists import get_unit_catalog


@pytest.fixture
def client(catalog):
    """Client running the app lifespan, with the fixture unit catalog."""
    app.dependency_overrides[get_unit_catalog] = lambda: catalog
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _request(**overrides) -> dict:
    body = {
        "meal_plan_id": "plan-42",
        "household_id": "household-7",
        "today": "2026-03-02",
        "requirements": [
            {
                "ingredient_id": "flour",
                "ingredient_name": "Flour",
                "quantity": 2,
                "unit_code": "cup",
                "source_recipe_id": "pancakes",
                "meal_date": "2026-03-12",
            },
            {
                "ingredient_id": "flour",
                "ingredient_name": "Flour",
                "quantity": 250,
                "unit_code": "g",
                "source_recipe_id": "bread",
                "meal_date": "2026-03-12",
            },
            {
                "ingredient_id": "olive-oil",
                "ingredient_name": "Olive oil",
                "quantity": 2,
                "unit_code": "tbsp",
                "meal_date": "2026-03-12",
            },
        ],
        "pantry": [{"ingredient_id": "olive-oil", "on_hand_milliliters": 500}],
    }
    body.update(overrides)
    return body


class TestAggregateEndpoint:
    """Tests for POST /api/v1/grocery-lists/aggregate."""

    def test_aggregate(self, client):
        response = client.post("/api/v1/grocery-lists/aggregate", json=_request())
        assert response.status_code == 200

        data = response.json()
        assert data["meal_plan_id"] == "plan-42"
        assert data["is_valid"] is True
        assert [item["ingredient_id"] for item in data["items"]] == ["flour", "olive-oil"]

        flour = data["items"][0]
        assert flour["display_quantity"] == 490.0
        assert flour["display_unit"] == "g"
        assert flour["pantry_status"] == "none"
        assert flour["priority"] == "high"
        assert len(flour["contributing_requirements"]) == 2
        assert flour["contributing_requirements"][0]["unit_code"] == "cup"

        oil = data["items"][1]
        assert oil["pantry_status"] == "sufficient"
        assert data["summary"]["pantry_savings_count"] == 1
        assert data["summary"]["total_items"] == 2

    def test_options_applied(self, client):
        body = _request(options={"preferred_units": {"flour": "kg"}})
        response = client.post("/api/v1/grocery-lists/aggregate", json=body)
        flour = response.json()["items"][0]
        assert (flour["display_quantity"], flour["display_unit"]) == (0.49, "kg")

    def test_unknown_option_rejected(self, client):
        """Test option keys outside the recognized set are refused."""
        body = _request(options={"round_to_packages": True})
        response = client.post("/api/v1/grocery-lists/aggregate", json=body)
        assert response.status_code == 422

    def test_malformed_requirement_reported(self, client):
        body = _request()
        body["requirements"].append(
            {"ingredient_id": "sugar", "ingredient_name": "Sugar", "quantity": 0, "unit_code": "g"}
        )
        response = client.post("/api/v1/grocery-lists/aggregate", json=body)
        assert response.status_code == 200

        data = response.json()
        assert data["is_valid"] is False
        assert len(data["errors"]) == 1
        assert data["errors"][0].startswith("Requirement #3 (Sugar): non-positive quantity")
        assert len(data["items"]) == 2

    def test_negative_pantry_rejected(self, client):
        body = _request(pantry=[{"ingredient_id": "flour", "on_hand_grams": -5}])
        response = client.post("/api/v1/grocery-lists/aggregate", json=body)
        assert response.status_code == 422


class TestUnitEndpoints:
    """Tests for unit catalog endpoints."""

    def test_get_unit(self, client):
        response = client.get("/api/v1/grocery-lists/units/TBSP")
        assert response.status_code == 200
        assert response.json() == {
            "code": "tbsp",
            "display_name": "tbsp",
            "family": "volume",
            "canonical_factor": 15.0,
            "normalizable": True,
        }

    def test_count_unit(self, client):
        data = client.get("/api/v1/grocery-lists/units/each").json()
        assert data["family"] == "count"
        assert data["normalizable"] is False

    def test_unknown_unit_404(self, client):
        response = client.get("/api/v1/grocery-lists/units/handful")
        assert response.status_code == 404
        assert response.json()["detail"] == "Unknown unit: handful"

    def test_refresh(self, client, catalog):
        response = client.post("/api/v1/grocery-lists/units/refresh")
        assert response.status_code == 200
        assert response.json() == {"status": "refreshed", "units_loaded": len(catalog)}
