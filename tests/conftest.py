"""Pytest configuration and shared fixtures."""

from datetime import date, timedelta

import pytest

from groceryplanner.config import Settings
from groceryplanner.normalize.catalog import MeasurementFamily, Unit, UnitCatalog
from groceryplanner.plan.items import PantryRecord, RawIngredientRequirement
from groceryplanner.plan.shopping_list import GroceryListAggregator

# =============================================================================
# Unit Catalog Fixtures
# =============================================================================

# Small reference table; "cup" is weighed as flour (1 cup ~ 120 g)
FIXTURE_UNITS = [
    Unit("g", MeasurementFamily.MASS, 1.0),
    Unit("kg", MeasurementFamily.MASS, 1000.0),
    Unit("mg", MeasurementFamily.MASS, 0.001),
    Unit("oz", MeasurementFamily.MASS, 28.3495),
    Unit("cup", MeasurementFamily.MASS, 120.0),
    Unit("ml", MeasurementFamily.VOLUME, 1.0),
    Unit("l", MeasurementFamily.VOLUME, 1000.0, display_name="L"),
    Unit("tbsp", MeasurementFamily.VOLUME, 15.0),
    Unit("tsp", MeasurementFamily.VOLUME, 5.0),
    Unit("each", MeasurementFamily.COUNT),
    Unit("slice", MeasurementFamily.COUNT),
]


@pytest.fixture
def catalog() -> UnitCatalog:
    """Catalog backed by the fixture unit table."""
    return UnitCatalog(lambda: FIXTURE_UNITS)


@pytest.fixture
def settings() -> Settings:
    """Default settings, isolated from any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def today() -> date:
    return date(2026, 3, 2)


@pytest.fixture
def aggregator(catalog, settings) -> GroceryListAggregator:
    return GroceryListAggregator(catalog, settings=settings)


# =============================================================================
# Record Factories
# =============================================================================


@pytest.fixture
def make_requirement(today):
    """Factory for requirements; meals default to well beyond the urgency window."""

    def _make(
        ingredient_id: str,
        quantity: float,
        unit_code: str,
        ingredient_name: str | None = None,
        recipe_id: str = "recipe-1",
        days_ahead: int = 10,
        preparation_note: str | None = None,
    ) -> RawIngredientRequirement:
        return RawIngredientRequirement(
            ingredient_id=ingredient_id,
            ingredient_name=ingredient_name or ingredient_id.replace("-", " "),
            quantity=quantity,
            unit_code=unit_code,
            source_recipe_id=recipe_id,
            source_recipe_title=recipe_id.replace("-", " ").title(),
            meal_date=today + timedelta(days=days_ahead),
            meal_type="dinner",
            preparation_note=preparation_note,
        )

    return _make


@pytest.fixture
def make_pantry(today):
    """Factory for pantry records."""

    def _make(
        ingredient_id: str,
        grams: float | None = None,
        milliliters: float | None = None,
        expires_in: int | None = None,
    ) -> PantryRecord:
        return PantryRecord(
            ingredient_id=ingredient_id,
            ingredient_name=ingredient_id.replace("-", " "),
            on_hand_grams=grams,
            on_hand_milliliters=milliliters,
            expiry_date=today + timedelta(days=expires_in) if expires_in is not None else None,
        )

    return _make
