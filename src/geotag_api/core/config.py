"""Application configuration via Pydantic Settings.

All configuration is loaded from environment variables following 12-factor principles.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Minimum log level")
    log_dir: str | None = Field(
        default=None,
        description="Directory for rotating log files (stderr only when unset)",
    )

    # API
    api_v1_prefix: str = Field(default="/api/v1", description="URL prefix for v1 routes")

    # Reverse geocoding - Nominatim (OpenStreetMap)
    geocoder_nominatim_base_url: str = Field(
        default="https://nominatim.openstreetmap.org",
        description="Nominatim base URL (self-hostable)",
    )
    geocoder_user_agent: str = Field(
        default="geotag-api/1.0",
        min_length=1,
        description="Application identifier sent as User-Agent, required by the Nominatim usage policy",
    )
    geocoder_nominatim_email: str = Field(
        default="",
        description="Contact email for Nominatim usage policy compliance",
    )
    geocoder_timeout: float = Field(
        default=10.0,
        description="Per-request timeout in seconds for the geopy client; the HTTP fallback is fixed at 10s",
        gt=0,
    )
    geocoder_min_interval: float = Field(
        default=1.0,
        description="Minimum spacing between provider requests in seconds",
        gt=0,
    )
    geocoder_throttle_cooldown: float = Field(
        default=5.0,
        description="Extra delay in seconds after the provider throttles or blocks us",
        ge=0,
    )
    geocoder_cache_precision: int = Field(
        default=4,
        description="Decimal places kept when quantizing coordinates into cache keys",
        ge=0,
        le=8,
    )

    @field_validator("geocoder_nominatim_base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if not v.startswith(("http://", "https://")):
            msg = "geocoder_nominatim_base_url must start with http:// or https://"
            raise ValueError(msg)
        return v


def get_settings() -> Settings:
    """Create and return application settings."""
    return Settings()
