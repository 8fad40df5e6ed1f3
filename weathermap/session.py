# ABOUTME: Session orchestrator wiring search and map clicks to geocoding, weather fetches and presenters.
# ABOUTME: Holds the explicit session state and the request epoch used to drop superseded lookups.

import asyncio
import logging
from datetime import tzinfo

from pydantic import BaseModel

from weathermap.banner import BannerView, ErrorBanner, LoadingIndicator, ToggleView, toggle
from weathermap.deps import WeatherDeps
from weathermap.errors import USER_MESSAGES, FailureKind, FetchFailure, PartialFailure, WeatherMapError
from weathermap.forecast import aggregate
from weathermap.markers import SEARCH_ZOOM, MapView, Marker, Viewport
from weathermap.models import Coordinate, CurrentLocation, WeatherBundle
from weathermap.panel import PanelPresenter, PanelView

logger = logging.getLogger(__name__)


class PopularCity(BaseModel):
    name: str
    country: str
    coordinate: Coordinate


POPULAR_CITIES = [
    PopularCity(name="London", country="GB", coordinate=Coordinate(latitude=51.5074, longitude=-0.1278)),
    PopularCity(name="New York", country="US", coordinate=Coordinate(latitude=40.7128, longitude=-74.0060)),
    PopularCity(name="Tokyo", country="JP", coordinate=Coordinate(latitude=35.6762, longitude=139.6503)),
    PopularCity(name="Paris", country="FR", coordinate=Coordinate(latitude=48.8566, longitude=2.3522)),
    PopularCity(name="Sydney", country="AU", coordinate=Coordinate(latitude=-33.8688, longitude=151.2093)),
    PopularCity(name="Dubai", country="AE", coordinate=Coordinate(latitude=25.2048, longitude=55.2708)),
    PopularCity(name="Mumbai", country="IN", coordinate=Coordinate(latitude=19.0760, longitude=72.8777)),
    PopularCity(name="São Paulo", country="BR", coordinate=Coordinate(latitude=-23.5505, longitude=-46.6333)),
]


class SessionState:
    """Everything one user session knows: the current lookup and the map."""

    def __init__(self):
        self.current_location: CurrentLocation | None = None
        self.current_bundle: WeatherBundle | None = None
        self.epoch = 0
        self.map = MapView()

    def next_epoch(self) -> int:
        self.epoch += 1
        return self.epoch

    def is_latest(self, epoch: int) -> bool:
        return epoch == self.epoch


class LookupOutcome(BaseModel):
    """What happened to one search or map-click lookup."""

    epoch: int
    applied: bool = False
    failure: FailureKind | None = None


class SessionSnapshot(BaseModel):
    epoch: int
    current_location: CurrentLocation | None
    current_bundle: WeatherBundle | None
    viewport: Viewport
    markers: list[Marker]
    panel: PanelView
    banner: BannerView
    loading: bool
    view_toggle: ToggleView


class WeatherSession:
    """Drives lookups and keeps the presenters in sync with the session state."""

    def __init__(self, deps: WeatherDeps, tz: tzinfo | None = None):
        self.deps = deps
        self.settings = deps.settings
        self.provider = deps.provider
        self.tz = tz
        self.state = SessionState()
        self.panel = PanelPresenter()
        self.banner = ErrorBanner(dismiss_after=self.settings.error_dismiss_seconds)
        self.loading = LoadingIndicator()
        self.view_toggle = ToggleView()

    async def search(self, query: str) -> LookupOutcome | None:
        """Geocode ``query`` and look up weather at the best match.

        Blank queries are ignored and return None.
        """
        query = query.strip()
        if not query:
            return None

        epoch = self.state.next_epoch()
        logger.info("Lookup %d: searching for %r", epoch, query)
        with self.loading:
            try:
                match = await self.provider.geocode(query)
                if match is None:
                    return self._fail(epoch, FailureKind.NOT_FOUND)
                if not self._is_stale(epoch):
                    self.state.map.center(match.coordinate, SEARCH_ZOOM)
                bundle = await self.fetch_bundle(match.coordinate)
            except WeatherMapError as e:
                logger.warning("Lookup %d for %r failed: %s", epoch, query, e)
                return self._fail(epoch, e.kind)
            return self._apply(epoch, match.coordinate, bundle)

    async def select_point(self, latitude: float, longitude: float) -> LookupOutcome:
        """Look up weather at a clicked map point."""
        coordinate = Coordinate(latitude=latitude, longitude=longitude)
        epoch = self.state.next_epoch()
        logger.info("Lookup %d: map click at %s", epoch, coordinate)
        with self.loading:
            try:
                bundle = await self.fetch_bundle(coordinate)
            except WeatherMapError as e:
                logger.warning("Lookup %d at %s failed: %s", epoch, coordinate, e)
                return self._fail(epoch, e.kind)
            return self._apply(epoch, coordinate, bundle)

    async def fetch_bundle(self, coordinate: Coordinate) -> WeatherBundle:
        """Fetch current conditions and forecast together; both must succeed."""
        current, samples = await asyncio.gather(
            self.provider.fetch_current(coordinate),
            self.provider.fetch_forecast_samples(coordinate),
            return_exceptions=True,
        )

        failures = [r for r in (current, samples) if isinstance(r, BaseException)]
        for failure in failures:
            if not isinstance(failure, WeatherMapError):
                raise failure
        if len(failures) == 2:
            raise FetchFailure(f"Current and forecast requests failed at {coordinate}") from failures[0]
        if failures:
            raise PartialFailure(f"Only one of current/forecast succeeded at {coordinate}") from failures[0]

        return WeatherBundle(current=current, forecast=aggregate(samples, self.tz))

    async def prime_popular_cities(self) -> int:
        """Place markers for the first few popular cities; returns how many succeeded."""
        cities = POPULAR_CITIES[: self.settings.primed_cities]
        results = await asyncio.gather(*(self._prime_city(city) for city in cities))
        placed = sum(results)
        logger.info("Primed %d of %d popular cities", placed, len(cities))
        return placed

    async def _prime_city(self, city: PopularCity) -> bool:
        try:
            conditions = await self.provider.fetch_current(city.coordinate)
        except WeatherMapError as e:
            logger.warning("Error loading weather for %s: %s", city.name, e)
            return False
        self.state.map.place_marker(city.coordinate, conditions)
        return True

    def _is_stale(self, epoch: int) -> bool:
        return self.settings.discard_stale_responses and not self.state.is_latest(epoch)

    def _apply(self, epoch: int, coordinate: Coordinate, bundle: WeatherBundle) -> LookupOutcome:
        # Superseded lookups still place markers; only the current slot and panel are epoch-gated.
        self.state.map.place_marker(coordinate, bundle.current)
        if self._is_stale(epoch):
            logger.info("Lookup %d superseded by %d, not updating the panel", epoch, self.state.epoch)
            return LookupOutcome(epoch=epoch)

        location = CurrentLocation(coordinate=coordinate, name=bundle.current.name, country=bundle.current.country)
        self.state.current_location = location
        self.state.current_bundle = bundle
        self.panel.show_current(location, bundle.current)
        self.panel.show_forecast(bundle.forecast)
        self.panel.open()
        return LookupOutcome(epoch=epoch, applied=True)

    def _fail(self, epoch: int, kind: FailureKind) -> LookupOutcome:
        if self._is_stale(epoch):
            logger.info("Ignoring %s from superseded lookup %d", kind.value, epoch)
        else:
            if kind in (FailureKind.FETCH_FAILURE, FailureKind.PARTIAL_FAILURE):
                self.panel.mark_stale()
            self.banner.show(USER_MESSAGES[kind])
        return LookupOutcome(epoch=epoch, failure=kind)

    def close_panel(self) -> None:
        self.panel.close()

    def close_error(self) -> None:
        self.banner.close()

    def toggle_view(self) -> ToggleView:
        self.view_toggle = toggle(self.view_toggle)
        return self.view_toggle

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            epoch=self.state.epoch,
            current_location=self.state.current_location,
            current_bundle=self.state.current_bundle,
            viewport=self.state.map.viewport,
            markers=self.state.map.layer.markers,
            panel=self.panel.view,
            banner=self.banner.view,
            loading=self.loading.visible,
            view_toggle=self.view_toggle,
        )
