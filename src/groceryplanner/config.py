"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Reference data
    database_url: str = "sqlite:///./groceryplanner.db"
    unit_source: Literal["builtin", "database"] = "builtin"

    # Priority thresholds
    near_meal_days: int = Field(default=3, ge=0)  # meals this soon make an item urgent
    expiry_window_days: int = Field(default=7, ge=0)
    expiry_critical_days: int = Field(default=3, ge=0)
    large_quantity_threshold: float = Field(default=10.0, gt=0)
    medium_quantity_threshold: float = Field(default=2.0, gt=0)
    medium_requirement_count: int = Field(default=2, ge=0)

    # Annotation
    many_recipes_threshold: int = Field(default=3, ge=0)
    default_category: str = "Uncategorized"

    # Application
    environment: str = "development"
    log_level: str = "INFO"
    allowed_origins: str = "http://localhost:3000,http://localhost:8000"

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment.lower() == "development"

    @property
    def origins(self) -> list[str]:
        """Allowed CORS origins as a list."""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
