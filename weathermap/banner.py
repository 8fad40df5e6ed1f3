# ABOUTME: Error banner with auto-dismiss, loading indicator and the map/list view toggle.
# ABOUTME: The auto-dismiss timer is an asyncio task cancelled whenever the banner changes.

import asyncio
import logging
from enum import Enum

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class BannerView(BaseModel):
    visible: bool = False
    message: str | None = None


class ErrorBanner:
    """Single error banner that hides itself after ``dismiss_after`` seconds."""

    def __init__(self, dismiss_after: float = 5.0):
        self.dismiss_after = dismiss_after
        self.view = BannerView()
        self._dismiss_task: asyncio.Task | None = None

    def show(self, message: str) -> None:
        """Display ``message`` and restart the auto-dismiss timer. Needs a running loop."""
        self._cancel_timer()
        self.view = BannerView(visible=True, message=message)
        self._dismiss_task = asyncio.get_running_loop().create_task(self._auto_dismiss())

    def close(self) -> None:
        self._cancel_timer()
        self.view = BannerView()

    async def _auto_dismiss(self) -> None:
        await asyncio.sleep(self.dismiss_after)
        self._dismiss_task = None
        self.view = BannerView()

    def _cancel_timer(self) -> None:
        if self._dismiss_task is not None:
            self._dismiss_task.cancel()
            self._dismiss_task = None


class LoadingIndicator:
    """Visible while at least one lookup is in flight."""

    def __init__(self):
        self.in_flight = 0

    @property
    def visible(self) -> bool:
        return self.in_flight > 0

    def __enter__(self):
        self.in_flight += 1
        return self

    def __exit__(self, exc_type, exc, tb):
        self.in_flight -= 1
        return False


class ViewMode(str, Enum):
    MAP = "map"
    LIST = "list"


class ToggleView(BaseModel):
    mode: ViewMode = ViewMode.MAP
    label: str = "List View"
    icon_class: str = "fas fa-list"


def toggle(view: ToggleView) -> ToggleView:
    """Flip between map and list mode; the button offers the other mode."""
    if view.mode is ViewMode.MAP:
        return ToggleView(mode=ViewMode.LIST, label="Map View", icon_class="fas fa-map")
    return ToggleView()
