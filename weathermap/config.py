# ABOUTME: Runtime configuration loaded from environment variables and an optional .env file.
# ABOUTME: Also sets up application logging.

import logging

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEMO_API_KEY = "demo"


class Settings(BaseSettings):
    """Settings for the weather map session.

    Each field reads the environment variable named by its alias. Values that
    don't parse (``WEATHERMAP_PRIMED_CITIES=abc``) raise a ValidationError.
    """

    api_key: str = Field(default=DEMO_API_KEY, alias="OPENWEATHER_API_KEY")
    weather_api_base: str = Field(default="https://api.openweathermap.org/data/2.5", alias="OPENWEATHER_API_BASE")
    geocoding_api_base: str = Field(default="https://api.openweathermap.org/geo/1.0", alias="OPENWEATHER_GEO_BASE")
    error_dismiss_seconds: float = Field(default=5.0, ge=0, alias="WEATHERMAP_ERROR_DISMISS_SECONDS")
    primed_cities: int = Field(default=4, ge=0, alias="WEATHERMAP_PRIMED_CITIES")
    simulation_delay: float = Field(default=1.0, ge=0, alias="WEATHERMAP_SIMULATION_DELAY")
    discard_stale_responses: bool = Field(default=True, alias="WEATHERMAP_DISCARD_STALE")
    log_level: str = Field(default="INFO", alias="WEATHERMAP_LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def simulation_mode(self) -> bool:
        """Run against built-in sample data when no real API key is configured."""
        return not self.api_key or self.api_key == DEMO_API_KEY


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a console handler to the package logger."""
    logger = logging.getLogger("weathermap")
    logger.setLevel(level.upper())

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
        logger.addHandler(handler)

    return logger
