# ABOUTME: Map viewport state and the layer of weather markers placed on it.
# ABOUTME: Markers closer than DEDUP_DEGREES in both axes are treated as the same place.

import logging

from pydantic import BaseModel

from weathermap.icons import WeatherIcon, icon_for
from weathermap.models import Coordinate, CurrentConditions

logger = logging.getLogger(__name__)

DEDUP_DEGREES = 0.01

WORLD_CENTER = Coordinate(latitude=20, longitude=0)
WORLD_ZOOM = 2
SEARCH_ZOOM = 10


class MarkerPopup(BaseModel):
    title: str
    temperature: str
    description: str
    feels_like: str


class Marker(BaseModel):
    """A temperature marker pinned to the map with its popup snapshot."""

    coordinate: Coordinate
    temperature: int
    icon: WeatherIcon
    conditions: CurrentConditions
    popup: MarkerPopup


class Viewport(BaseModel):
    center: Coordinate = WORLD_CENTER
    zoom: int = WORLD_ZOOM


def is_near(a: Coordinate, b: Coordinate) -> bool:
    """True when both latitude and longitude differ by less than DEDUP_DEGREES."""
    return abs(a.latitude - b.latitude) < DEDUP_DEGREES and abs(a.longitude - b.longitude) < DEDUP_DEGREES


def build_marker(coordinate: Coordinate, conditions: CurrentConditions) -> Marker:
    temp = round(conditions.temperature)
    return Marker(
        coordinate=coordinate,
        temperature=temp,
        icon=icon_for(conditions.icon),
        conditions=conditions,
        popup=MarkerPopup(
            title=conditions.name,
            temperature=f"{temp}°C",
            description=conditions.description,
            feels_like=f"Feels like {round(conditions.feels_like)}°C",
        ),
    )


class MarkerLayer:
    """Ordered collection of markers with approximate-coordinate dedup."""

    def __init__(self):
        self._markers: list[Marker] = []

    def __len__(self) -> int:
        return len(self._markers)

    @property
    def markers(self) -> list[Marker]:
        return list(self._markers)

    def clear_near(self, coordinate: Coordinate) -> int:
        """Remove every marker near ``coordinate``; returns how many were removed."""
        kept = [m for m in self._markers if not is_near(m.coordinate, coordinate)]
        removed = len(self._markers) - len(kept)
        self._markers = kept
        return removed

    def place_marker(self, coordinate: Coordinate, conditions: CurrentConditions) -> Marker:
        """Place a marker, replacing any existing one at approximately the same spot."""
        if self.clear_near(coordinate):
            logger.debug("Replaced marker near %s", coordinate)
        marker = build_marker(coordinate, conditions)
        self._markers.append(marker)
        return marker


class MapView:
    """Viewport plus marker layer, the map half of the UI."""

    def __init__(self):
        self.viewport = Viewport()
        self.layer = MarkerLayer()

    def center(self, coordinate: Coordinate, zoom: int) -> None:
        self.viewport = Viewport(center=coordinate, zoom=zoom)

    def place_marker(self, coordinate: Coordinate, conditions: CurrentConditions) -> Marker:
        return self.layer.place_marker(coordinate, conditions)
