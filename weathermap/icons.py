# ABOUTME: Maps OpenWeatherMap condition codes (e.g. "10d") to icon categories.
# ABOUTME: Provides the day/night variant and the Font Awesome class used by the front end.

from enum import Enum

from pydantic import BaseModel


class IconCategory(str, Enum):
    CLEAR = "clear"
    PARTLY_CLOUDY = "partly-cloudy"
    CLOUDY = "cloudy"
    RAIN_SHOWER = "rain-shower"
    RAIN = "rain"
    THUNDERSTORM = "thunderstorm"
    SNOW = "snow"
    MIST = "mist"
    UNKNOWN = "unknown"


class WeatherIcon(BaseModel):
    """Resolved icon for a condition code."""

    category: IconCategory
    night: bool
    css_class: str


_CATEGORY_BY_PREFIX: dict[str, IconCategory] = {
    "01": IconCategory.CLEAR,
    "02": IconCategory.PARTLY_CLOUDY,
    "03": IconCategory.CLOUDY,
    "04": IconCategory.CLOUDY,
    "09": IconCategory.RAIN_SHOWER,
    "10": IconCategory.RAIN,
    "11": IconCategory.THUNDERSTORM,
    "13": IconCategory.SNOW,
    "50": IconCategory.MIST,
}

# category -> (day class, night class)
_CSS_BY_CATEGORY: dict[IconCategory, tuple[str, str]] = {
    IconCategory.CLEAR: ("fas fa-sun", "fas fa-moon"),
    IconCategory.PARTLY_CLOUDY: ("fas fa-cloud-sun", "fas fa-cloud-moon"),
    IconCategory.CLOUDY: ("fas fa-cloud", "fas fa-cloud"),
    IconCategory.RAIN_SHOWER: ("fas fa-cloud-rain", "fas fa-cloud-rain"),
    IconCategory.RAIN: ("fas fa-cloud-sun-rain", "fas fa-cloud-moon-rain"),
    IconCategory.THUNDERSTORM: ("fas fa-bolt", "fas fa-bolt"),
    IconCategory.SNOW: ("fas fa-snowflake", "fas fa-snowflake"),
    IconCategory.MIST: ("fas fa-smog", "fas fa-smog"),
}

FALLBACK_CSS_CLASS = "fas fa-cloud"


def icon_for(code: str | None) -> WeatherIcon:
    """Resolve a condition code; unknown codes fall back to a generic cloud."""
    if not code or len(code) != 3 or code[2] not in ("d", "n"):
        return WeatherIcon(category=IconCategory.UNKNOWN, night=False, css_class=FALLBACK_CSS_CLASS)

    category = _CATEGORY_BY_PREFIX.get(code[:2])
    if category is None:
        return WeatherIcon(category=IconCategory.UNKNOWN, night=False, css_class=FALLBACK_CSS_CLASS)

    night = code[2] == "n"
    day_class, night_class = _CSS_BY_CATEGORY[category]
    return WeatherIcon(category=category, night=night, css_class=night_class if night else day_class)


def icon_class(code: str | None) -> str:
    return icon_for(code).css_class
