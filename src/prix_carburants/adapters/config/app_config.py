"""12-factor configuration adapter using environment variables and a .env file."""

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from prix_carburants.adapters.nominatim_api.constants import (
    NOMINATIM_MIN_DELAY_SECONDS,
    NOMINATIM_SEARCH_URL,
)
from prix_carburants.adapters.opendatasoft_api.constants import (
    DEFAULT_MAX_RECORDS,
    FALLBACK_RECORDS_URL,
    MAX_PAGE_SIZE,
    RECORDS_URL,
)


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Fuel price API configuration
    fuel_api_url: str = Field(
        default=RECORDS_URL, description="Records endpoint of the fuel price dataset"
    )
    fuel_api_fallback_url: str | None = Field(
        default=FALLBACK_RECORDS_URL,
        description="Alternate records endpoint tried once when a city query fails",
    )
    page_size: int = Field(
        default=MAX_PAGE_SIZE, description="Number of records requested per page"
    )
    max_records: int = Field(
        default=DEFAULT_MAX_RECORDS,
        description="Upper bound on the number of records fetched when listing all stations",
    )
    http_timeout_seconds: float = Field(
        default=10.0, description="Timeout for each HTTP request in seconds"
    )

    # Geocoding configuration
    geocoding_url: str = Field(
        default=NOMINATIM_SEARCH_URL, description="Search endpoint of the geocoding service"
    )
    geocoding_country_codes: str | None = Field(
        default="fr",
        description="Comma-separated ISO country codes restricting geocoding matches",
    )
    geocoding_user_agent: str = Field(
        default="prix-carburants/0.1",
        description="User-Agent sent to the geocoding service (required by Nominatim)",
    )
    geocoding_min_delay_seconds: float = Field(
        default=NOMINATIM_MIN_DELAY_SECONDS,
        description="Minimum delay between geocoding requests (0 disables throttling)",
    )
    itinerary_geocode_cache: bool = Field(
        default=True,
        description="Geocode each distinct station city once per itinerary query",
    )

    # Local storage
    favorites_file: str = Field(
        default="favorites.json", description="JSON file holding favorite station ids"
    )

    log_level: str = Field(default="WARNING", description="Log level for the CLI")

    @field_validator("page_size")
    @classmethod
    def validate_page_size(cls, v: int) -> int:
        """Validate page size is accepted by the records API."""
        if not 1 <= v <= MAX_PAGE_SIZE:
            raise ValueError(f"page_size must be between 1 and {MAX_PAGE_SIZE}")
        return v

    @field_validator("max_records")
    @classmethod
    def validate_max_records(cls, v: int) -> int:
        """Validate max_records is positive."""
        if v <= 0:
            raise ValueError("max_records must be positive")
        return v

    @field_validator("http_timeout_seconds", "geocoding_min_delay_seconds")
    @classmethod
    def validate_non_negative(cls, v: float) -> float:
        """Validate durations are not negative."""
        if v < 0:
            raise ValueError("durations must not be negative")
        return v

    @field_validator("fuel_api_fallback_url", "geocoding_country_codes")
    @classmethod
    def validate_optional_text(cls, v: str | None) -> str | None:
        """Treat empty strings as unset."""
        if v is not None and not v.strip():
            return None
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a standard logging level name."""
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"log_level must be a logging level name, got '{v}'")
        return level
