# ABOUTME: Shared test fixtures for the weather map test suite.
# ABOUTME: Provides settings, a controllable fake weather provider and sample builders.

import asyncio
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import httpx
import pytest

from weathermap.config import Settings
from weathermap.deps import WeatherDeps
from weathermap.errors import FetchFailure
from weathermap.models import Coordinate, CurrentConditions, ForecastSample, GeoLocation

START = datetime(2025, 1, 15, 0, 0, tzinfo=timezone.utc)


def mock_client(json_data, status_code: int = 200) -> httpx.AsyncClient:
    """Create a mock httpx.AsyncClient that returns the given JSON response."""
    mock = AsyncMock(spec=httpx.AsyncClient)
    response = httpx.Response(status_code=status_code, json=json_data, request=httpx.Request("GET", "https://test"))
    mock.get.return_value = response
    return mock


def sample(hours: float, temp: float, description: str = "clear sky", icon: str = "01d") -> ForecastSample:
    """A forecast sample ``hours`` after START."""
    return ForecastSample(
        timestamp=START + timedelta(hours=hours), temperature=temp, icon=icon, description=description
    )


def five_day_samples() -> list[ForecastSample]:
    """40 samples, 3 hours apart, covering 2025-01-15..19 in UTC."""
    descriptions = ["clear sky", "few clouds", "light rain", "clear sky"]
    icons = ["01d", "02n", "10d", "01n"]
    return [
        sample(i * 3, -2 + (i * 7) % 11, descriptions[i % 4], icons[(i // 2) % 4])
        for i in range(40)
    ]


def conditions(name: str = "Copenhagen", temp: float = 5.4, icon: str = "10d") -> CurrentConditions:
    return CurrentConditions(
        name=name,
        country="DK",
        temperature=temp,
        feels_like=2.6,
        humidity=81,
        visibility=10000,
        wind_speed=4.1,
        icon=icon,
        description="light rain",
    )


class FakeProvider:
    """In-memory weather provider.

    ``gates`` maps a latitude to an asyncio.Event; fetches for that latitude wait
    until the event is set, which lets tests choose completion order.
    ``geocode_gates`` and ``locations_by_query`` do the same for geocoding by query.
    """

    def __init__(self, location=None, current=None, samples=None):
        self.location = location
        self.current = current or conditions()
        self.samples = samples if samples is not None else [sample(0, 4), sample(3, 6)]
        self.geocode_error: Exception | None = None
        self.current_error: Exception | None = None
        self.forecast_error: Exception | None = None
        self.current_by_latitude: dict[float, CurrentConditions] = {}
        self.failing_latitudes: set[float] = set()
        self.gates: dict[float, asyncio.Event] = {}
        self.geocode_gates: dict[str, asyncio.Event] = {}
        self.locations_by_query: dict[str, GeoLocation] = {}
        self.geocode_calls: list[str] = []
        self.current_calls: list[Coordinate] = []

    async def geocode(self, query: str) -> GeoLocation | None:
        self.geocode_calls.append(query)
        if self.geocode_error:
            raise self.geocode_error
        gate = self.geocode_gates.get(query)
        if gate is not None:
            await gate.wait()
        return self.locations_by_query.get(query, self.location)

    async def fetch_current(self, coordinate: Coordinate) -> CurrentConditions:
        self.current_calls.append(coordinate)
        await self._wait(coordinate)
        if self.current_error:
            raise self.current_error
        if coordinate.latitude in self.failing_latitudes:
            raise FetchFailure(f"no data at {coordinate}")
        return self.current_by_latitude.get(coordinate.latitude, self.current)

    async def fetch_forecast_samples(self, coordinate: Coordinate) -> list[ForecastSample]:
        await self._wait(coordinate)
        if self.forecast_error:
            raise self.forecast_error
        return self.samples

    async def _wait(self, coordinate: Coordinate) -> None:
        gate = self.gates.get(coordinate.latitude)
        if gate is not None:
            await gate.wait()


@pytest.fixture
def settings() -> Settings:
    return Settings(api_key="test-key", error_dismiss_seconds=5.0, simulation_delay=0)


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider(
        location=GeoLocation(coordinate=Coordinate(latitude=55.6761, longitude=12.5683), name="Copenhagen", country="DK")
    )


@pytest.fixture
def deps(settings, provider) -> WeatherDeps:
    return WeatherDeps(settings=settings, provider=provider)
