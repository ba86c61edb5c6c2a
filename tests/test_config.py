"""Tests for application settings."""

import pytest
from pydantic import ValidationError

from groceryplanner.config import Settings


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, settings):
        assert settings.unit_source == "builtin"
        assert settings.near_meal_days == 3
        assert settings.expiry_window_days == 7
        assert settings.large_quantity_threshold == 10.0
        assert settings.default_category == "Uncategorized"

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("NEAR_MEAL_DAYS", "5")
        monkeypatch.setenv("UNIT_SOURCE", "database")
        settings = Settings(_env_file=None)
        assert settings.near_meal_days == 5
        assert settings.unit_source == "database"

    def test_invalid_unit_source(self, monkeypatch):
        monkeypatch.setenv("UNIT_SOURCE", "spreadsheet")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_origins(self):
        settings = Settings(_env_file=None, allowed_origins="http://a.test, http://b.test,")
        assert settings.origins == ["http://a.test", "http://b.test"]

    def test_is_development(self):
        assert Settings(_env_file=None, environment="Development").is_development
        assert not Settings(_env_file=None, environment="production").is_development
