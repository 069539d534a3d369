import logging
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # File Locations
    coordinates_path: Path = Field(
        Path("data/venueCoordinates.csv"),
        description="CSV with team_name, lat, lon columns used for geo enrichment.",
    )
    output_path: Path = Field(
        Path("data/venues.csv"),
        description="Where the final venue dataset is written.",
    )

    # HTTP Configuration
    request_timeout: float = Field(
        30.0, gt=0, description="Timeout in seconds for fetching source pages."
    )
    user_agent: str = Field(
        "sports-venues/0.1 (venue dataset refresh; python-httpx)",
        description="User-Agent header sent with every page request.",
    )

    # Logging Configuration
    log_level: str = Field(
        "INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."
    )

    # Pydantic Settings Configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )


def load_settings() -> AppSettings:
    """Loads and validates application settings."""
    try:
        settings = AppSettings()
        log_level_upper = settings.log_level.upper()
        # Validate log_level even if loaded from .env
        if log_level_upper not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            logging.warning(
                f"Invalid LOG_LEVEL '{settings.log_level}' found in .env or default. Using INFO."
            )
            settings.log_level = "INFO"
        else:
            settings.log_level = log_level_upper
        return settings
    except Exception as e:
        logging.exception(f"Error loading application settings: {e}")
        raise SystemExit("Failed to load application settings. Exiting.")


settings: AppSettings = load_settings()
