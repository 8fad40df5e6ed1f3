# ABOUTME: Pydantic BaseModels for coordinates, weather conditions and forecast data.
# ABOUTME: Defines structured types for OpenWeatherMap data used throughout the app.

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field


class Coordinate(BaseModel):
    """A validated latitude/longitude pair."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class GeoLocation(BaseModel):
    """Geocoded location with coordinates and display metadata."""

    model_config = ConfigDict(frozen=True)

    coordinate: Coordinate
    name: str
    country: str | None = None


class CurrentConditions(BaseModel):
    """Current weather at a location from the OpenWeatherMap weather endpoint."""

    name: str
    country: str | None = None
    temperature: float
    feels_like: float
    humidity: int
    visibility: int | None = None
    wind_speed: float
    icon: str
    description: str


class ForecastSample(BaseModel):
    """One timestamped 3-hourly reading from the forecast endpoint."""

    timestamp: datetime
    temperature: float
    icon: str
    description: str


class DailyForecast(BaseModel):
    """Aggregated summary of all samples falling on one calendar date."""

    date: date
    timestamp: datetime
    avg_temp: int
    max_temp: int
    min_temp: int
    description: str
    icon: str


class WeatherBundle(BaseModel):
    """Current conditions plus the daily forecast shown in the detail panel."""

    current: CurrentConditions
    forecast: list[DailyForecast] = Field(default=[], max_length=10)


class CurrentLocation(BaseModel):
    """The location whose weather is currently on display."""

    coordinate: Coordinate
    name: str
    country: str | None = None
