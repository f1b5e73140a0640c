"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="MENUCOST_",
        extra="ignore",
    )

    # Default cost settings applied when a calculation does not pass its own
    labor_cost_per_hour: float = 15.0  # EUR/hour average for kitchen labor
    overhead_percentage: float = 25.0  # % of food cost (utilities, rent, ...)
    target_food_cost_percentage: float = 30.0
    wastage_percentage: float = 5.0
    vat_percentage: float = 19.0  # German VAT

    currency: str = "EUR"

    # Application
    environment: str = "development"
    log_level: str = "INFO"
    log_format: str = "auto"  # "text", "json" or "auto" (json in non-tty production)
    log_file: str | None = None
    allowed_origins: str = "http://localhost:3000,http://localhost:8000"

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment.lower() == "development"

    @property
    def origins(self) -> list[str]:
        """Allowed CORS origins as a list."""
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
