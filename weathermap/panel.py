# ABOUTME: Detail panel presenter: formats current conditions and the daily forecast.
# ABOUTME: Produces a serialisable view model instead of touching any rendering surface.

from pydantic import BaseModel

from weathermap.icons import icon_class
from weathermap.models import CurrentConditions, CurrentLocation, DailyForecast


class CurrentView(BaseModel):
    location: str
    temperature: int
    description: str
    icon_class: str
    visibility: str
    humidity: str
    wind_speed: str
    feels_like: str


class ForecastRow(BaseModel):
    date: str
    icon_class: str
    description: str
    high: str
    low: str


class PanelView(BaseModel):
    visible: bool = False
    stale: bool = False
    current: CurrentView | None = None
    forecast: list[ForecastRow] = []


def format_location(name: str, country: str | None) -> str:
    return f"{name}, {country}" if country else name


def format_visibility(metres: int | None) -> str:
    if metres is None:
        return "n/a"
    return f"{metres / 1000:.1f} km"


def format_current(conditions: CurrentConditions) -> CurrentView:
    """Format current conditions the way the detail panel displays them."""
    return CurrentView(
        location=format_location(conditions.name, conditions.country),
        temperature=round(conditions.temperature),
        description=conditions.description,
        icon_class=icon_class(conditions.icon),
        visibility=format_visibility(conditions.visibility),
        humidity=f"{conditions.humidity}%",
        wind_speed=f"{conditions.wind_speed} m/s",
        feels_like=f"{round(conditions.feels_like)}°C",
    )


def format_forecast_row(day: DailyForecast) -> ForecastRow:
    """One forecast line, e.g. date "Wed, Jan 15" with high and low."""
    return ForecastRow(
        date=f"{day.date:%a}, {day.date:%b} {day.date.day}",
        icon_class=icon_class(day.icon),
        description=day.description,
        high=f"{day.max_temp}°",
        low=f"{day.min_temp}°",
    )


class PanelPresenter:
    def __init__(self):
        self.view = PanelView()
        self.location: CurrentLocation | None = None

    def show_current(self, location: CurrentLocation, conditions: CurrentConditions) -> None:
        self.location = location
        self.view = self.view.model_copy(update={"current": format_current(conditions), "stale": False})

    def show_forecast(self, days: list[DailyForecast]) -> None:
        self.view = self.view.model_copy(update={"forecast": [format_forecast_row(d) for d in days]})

    def open(self) -> None:
        self.view = self.view.model_copy(update={"visible": True})

    def close(self) -> None:
        self.view = self.view.model_copy(update={"visible": False})

    def mark_stale(self) -> None:
        """Flag the displayed data as out of date after a failed refresh."""
        if self.view.current is not None:
            self.view = self.view.model_copy(update={"stale": True})
