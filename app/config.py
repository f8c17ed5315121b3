# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.OPENWEATHER_BASE_URL)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Required values (the API key and the Supabase credentials) have no
    default, so a misconfigured deployment fails at startup instead of on
    the first request.
    """

    # -------------------------------------------------------------------------
    # OpenWeatherMap Configuration
    # -------------------------------------------------------------------------

    OPENWEATHER_API_KEY: str = Field(
        ...,
        description="OpenWeatherMap API key (sent as the appid parameter)"
    )

    OPENWEATHER_BASE_URL: str = Field(
        default="https://api.openweathermap.org/data/2.5",
        description="Base URL for the current weather and forecast endpoints"
    )

    OPENWEATHER_ICON_URL: str = Field(
        default="http://openweathermap.org/img/wn",
        description="Base URL for condition icons (<base>/<code>@2x.png)"
    )

    OPENWEATHER_LANG: str = Field(
        default="en",
        description="Language for condition descriptions on city lookups"
    )

    OPENWEATHER_TIMEOUT: float = Field(
        default=10.0,
        gt=0,
        description="Timeout in seconds for upstream requests"
    )

    # -------------------------------------------------------------------------
    # Supabase Configuration
    # -------------------------------------------------------------------------

    SUPABASE_URL: str = Field(
        ...,
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_SERVICE_KEY: str = Field(
        ...,
        description="Supabase service_role key (bypasses RLS)"
    )

    HISTORY_TABLE: str = Field(
        default="search_history",
        description="Table holding one row per successful lookup"
    )

    FAVORITES_TABLE: str = Field(
        default="favorites",
        description="Table holding favorite cities"
    )

    HISTORY_LIMIT: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Maximum number of history entries returned"
    )

    # -------------------------------------------------------------------------
    # Display
    # -------------------------------------------------------------------------

    DISPLAY_TIMEZONE: str = Field(
        default="Asia/Kolkata",
        description="IANA timezone used when rendering history and forecast times"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging)"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=5000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000",
        description="Allowed CORS origins (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "http://localhost:3000, https://myapp.com" -> ["http://localhost:3000", "https://myapp.com"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
