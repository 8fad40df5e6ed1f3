# ABOUTME: Service layer for OpenWeatherMap API calls and response parsing.
# ABOUTME: Handles geocoding, current conditions, and raw forecast sample retrieval.

import logging
from datetime import datetime, timezone

import httpx
from pydantic import ValidationError

from weathermap.config import Settings
from weathermap.errors import FetchFailure, LookupFailure
from weathermap.models import Coordinate, CurrentConditions, ForecastSample, GeoLocation

logger = logging.getLogger(__name__)

UNITS = "metric"

_PAYLOAD_ERRORS = (
    AttributeError,
    KeyError,
    IndexError,
    TypeError,
    ValueError,
    OverflowError,
    OSError,
    ValidationError,
)


async def geocode(client: httpx.AsyncClient, query: str, settings: Settings) -> GeoLocation | None:
    """Resolve a place name to its best-ranked match, or None when nothing matches."""
    try:
        resp = await client.get(
            f"{settings.geocoding_api_base}/direct",
            params={"q": query, "limit": 1, "appid": settings.api_key},
        )
        resp.raise_for_status()
        data = resp.json()
    except (httpx.HTTPError, ValueError) as exc:
        raise LookupFailure(f"Geocoding failed for {query!r}: {exc}") from exc

    if not data:
        logger.debug("No geocoding match for %r", query)
        return None

    try:
        r = data[0]
        return GeoLocation(
            coordinate=Coordinate(latitude=r["lat"], longitude=r["lon"]),
            name=r["name"],
            country=r.get("country"),
        )
    except _PAYLOAD_ERRORS as exc:
        raise LookupFailure(f"Unexpected geocoding payload for {query!r}: {exc}") from exc


async def fetch_current(client: httpx.AsyncClient, coordinate: Coordinate, settings: Settings) -> CurrentConditions:
    """Fetch current conditions for a coordinate."""
    data = await _get_weather_json(client, "weather", coordinate, settings)
    try:
        return parse_current(data)
    except _PAYLOAD_ERRORS as exc:
        raise FetchFailure(f"Unexpected current weather payload: {exc}") from exc


async def fetch_forecast_samples(
    client: httpx.AsyncClient, coordinate: Coordinate, settings: Settings
) -> list[ForecastSample]:
    """Fetch the raw 3-hourly forecast samples for a coordinate."""
    data = await _get_weather_json(client, "forecast", coordinate, settings)
    try:
        return parse_forecast_samples(data)
    except _PAYLOAD_ERRORS as exc:
        raise FetchFailure(f"Unexpected forecast payload: {exc}") from exc


async def _get_weather_json(client: httpx.AsyncClient, endpoint: str, coordinate: Coordinate, settings: Settings):
    """Issue a single GET against a weather endpoint and decode the JSON body."""
    try:
        resp = await client.get(
            f"{settings.weather_api_base}/{endpoint}",
            params={
                "lat": coordinate.latitude,
                "lon": coordinate.longitude,
                "appid": settings.api_key,
                "units": UNITS,
            },
        )
        resp.raise_for_status()
        return resp.json()
    except (httpx.HTTPError, ValueError) as exc:
        raise FetchFailure(f"Weather API {endpoint!r} failed: {exc}") from exc


def parse_current(data: dict) -> CurrentConditions:
    """Flatten the nested weather endpoint payload into CurrentConditions."""
    main = data["main"]
    weather = data["weather"][0]
    return CurrentConditions(
        name=data["name"],
        country=(data.get("sys") or {}).get("country"),
        temperature=main["temp"],
        feels_like=main["feels_like"],
        humidity=main["humidity"],
        visibility=data.get("visibility"),
        wind_speed=data["wind"]["speed"],
        icon=weather["icon"],
        description=weather["description"],
    )


def parse_forecast_samples(data: dict) -> list[ForecastSample]:
    """Convert the forecast `list` array into ForecastSample rows, keeping input order."""
    result = []
    for item in data["list"]:
        weather = item["weather"][0]
        result.append(
            ForecastSample(
                timestamp=datetime.fromtimestamp(item["dt"], tz=timezone.utc),
                temperature=item["main"]["temp"],
                icon=weather["icon"],
                description=weather["description"],
            )
        )
    return result
