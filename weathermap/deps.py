# ABOUTME: Dependency container and weather provider implementations for the session.
# ABOUTME: Chooses between live OpenWeatherMap calls over httpx and the offline simulation.

from typing import Protocol, runtime_checkable

import httpx
from pydantic import BaseModel, ConfigDict

from weathermap import weather_service
from weathermap.config import Settings
from weathermap.models import Coordinate, CurrentConditions, ForecastSample, GeoLocation
from weathermap.simulation import SimulatedWeatherProvider


@runtime_checkable
class WeatherProvider(Protocol):
    async def geocode(self, query: str) -> GeoLocation | None: ...

    async def fetch_current(self, coordinate: Coordinate) -> CurrentConditions: ...

    async def fetch_forecast_samples(self, coordinate: Coordinate) -> list[ForecastSample]: ...


class LiveWeatherProvider:
    """Provider backed by the OpenWeatherMap HTTP API."""

    def __init__(self, http_client: httpx.AsyncClient, settings: Settings):
        self.http_client = http_client
        self.settings = settings

    async def geocode(self, query: str) -> GeoLocation | None:
        return await weather_service.geocode(self.http_client, query, self.settings)

    async def fetch_current(self, coordinate: Coordinate) -> CurrentConditions:
        return await weather_service.fetch_current(self.http_client, coordinate, self.settings)

    async def fetch_forecast_samples(self, coordinate: Coordinate) -> list[ForecastSample]:
        return await weather_service.fetch_forecast_samples(self.http_client, coordinate, self.settings)


class WeatherDeps(BaseModel):
    """Dependencies injected into the session orchestrator."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    settings: Settings
    provider: WeatherProvider
    http_client: httpx.AsyncClient | None = None

    async def aclose(self) -> None:
        if self.http_client is not None:
            await self.http_client.aclose()


def create_http_client() -> httpx.AsyncClient:
    """Create an httpx client for single-attempt requests with default timeouts."""
    return httpx.AsyncClient()


def create_deps(settings: Settings) -> WeatherDeps:
    """Build the dependency container for the configured operating mode."""
    if settings.simulation_mode:
        return WeatherDeps(settings=settings, provider=SimulatedWeatherProvider(delay=settings.simulation_delay))

    http_client = create_http_client()
    return WeatherDeps(
        settings=settings,
        provider=LiveWeatherProvider(http_client, settings),
        http_client=http_client,
    )
