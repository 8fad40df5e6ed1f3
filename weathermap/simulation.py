# ABOUTME: Offline stand-in for the OpenWeatherMap endpoints, used when no API key is set.
# ABOUTME: Returns fixed or randomised sample data after an artificial delay.

import asyncio
import logging
import random
from datetime import datetime, timedelta, timezone

from weathermap.models import Coordinate, CurrentConditions, ForecastSample, GeoLocation

logger = logging.getLogger(__name__)

ANCHOR = Coordinate(latitude=40.7128, longitude=-74.0060)
# Simulated geocoding lands uniformly within +/- this many degrees of ANCHOR.
GEOCODE_SPREAD = 5.0

SIMULATED_FORECAST_DAYS = 10
SAMPLES_PER_DAY = 8

DEMO_CURRENT = CurrentConditions(
    name="Demo City",
    country="XX",
    temperature=22,
    feels_like=24,
    humidity=65,
    visibility=10000,
    wind_speed=3.5,
    icon="02d",
    description="partly cloudy",
)

_DEMO_DESCRIPTIONS = ["sunny", "cloudy", "rainy", "partly cloudy"]
_DEMO_ICONS = ["01d", "02d", "03d", "10d"]


class SimulatedWeatherProvider:
    """Weather provider that never touches the network.

    Geocoding waits half of ``delay``; weather requests wait the full ``delay``.
    Pass a seeded ``random.Random`` and ``delay=0`` for deterministic tests.
    """

    def __init__(self, delay: float = 1.0, rng: random.Random | None = None, now=None):
        self.delay = delay
        self.rng = rng or random.Random()
        self._now = now or (lambda: datetime.now(timezone.utc))

    async def geocode(self, query: str) -> GeoLocation | None:
        await asyncio.sleep(self.delay / 2)
        coordinate = Coordinate(
            latitude=ANCHOR.latitude + (self.rng.random() - 0.5) * 2 * GEOCODE_SPREAD,
            longitude=ANCHOR.longitude + (self.rng.random() - 0.5) * 2 * GEOCODE_SPREAD,
        )
        logger.debug("Simulated geocode %r -> %s", query, coordinate)
        return GeoLocation(coordinate=coordinate, name=query, country="XX")

    async def fetch_current(self, coordinate: Coordinate) -> CurrentConditions:
        await asyncio.sleep(self.delay)
        return DEMO_CURRENT.model_copy()

    async def fetch_forecast_samples(self, coordinate: Coordinate) -> list[ForecastSample]:
        await asyncio.sleep(self.delay)
        start = self._now().replace(minute=0, second=0, microsecond=0)
        step = timedelta(hours=24 // SAMPLES_PER_DAY)

        samples = []
        for i in range(SIMULATED_FORECAST_DAYS * SAMPLES_PER_DAY):
            samples.append(
                ForecastSample(
                    timestamp=start + i * step,
                    temperature=15 + self.rng.randint(0, 14),
                    icon=self.rng.choice(_DEMO_ICONS),
                    description=self.rng.choice(_DEMO_DESCRIPTIONS),
                )
            )
        return samples
