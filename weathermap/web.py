# ABOUTME: ASGI web entry point exposing the weather map session as JSON endpoints.
# ABOUTME: Creates a Starlette app whose lifespan owns the HTTP client and startup marker priming.

import asyncio
import contextlib
import logging

from pydantic import ValidationError
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from weathermap.config import Settings, configure_logging
from weathermap.deps import WeatherDeps, create_deps
from weathermap.session import WeatherSession

logger = logging.getLogger(__name__)


def _snapshot_response(session: WeatherSession) -> JSONResponse:
    return JSONResponse(session.snapshot().model_dump(mode="json"))


async def _read_json(request: Request) -> dict:
    """Read a JSON object body, treating anything else as empty."""
    try:
        data = await request.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


async def get_state(request: Request) -> JSONResponse:
    return _snapshot_response(request.app.state.session)


async def search(request: Request) -> JSONResponse:
    """Run a search lookup; blank queries are a no-op."""
    session: WeatherSession = request.app.state.session
    body = await _read_json(request)
    query = body.get("query")
    if not isinstance(query, str):
        return JSONResponse({"detail": "'query' must be a string"}, status_code=422)
    await session.search(query)
    return _snapshot_response(session)


async def click(request: Request) -> JSONResponse:
    """Run a lookup at a clicked map point."""
    session: WeatherSession = request.app.state.session
    body = await _read_json(request)
    try:
        await session.select_point(body.get("lat"), body.get("lon"))
    except ValidationError as e:
        return JSONResponse({"detail": e.errors(include_url=False, include_context=False)}, status_code=422)
    return _snapshot_response(session)


async def close_panel(request: Request) -> JSONResponse:
    request.app.state.session.close_panel()
    return _snapshot_response(request.app.state.session)


async def close_error(request: Request) -> JSONResponse:
    request.app.state.session.close_error()
    return _snapshot_response(request.app.state.session)


async def toggle_view(request: Request) -> JSONResponse:
    request.app.state.session.toggle_view()
    return _snapshot_response(request.app.state.session)


routes = [
    Route("/api/state", get_state, methods=["GET"]),
    Route("/api/search", search, methods=["POST"]),
    Route("/api/click", click, methods=["POST"]),
    Route("/api/panel/close", close_panel, methods=["POST"]),
    Route("/api/error/close", close_error, methods=["POST"]),
    Route("/api/view/toggle", toggle_view, methods=["POST"]),
]


def create_app(settings: Settings | None = None, deps: WeatherDeps | None = None, prime: bool = True) -> Starlette:
    """Build the ASGI app. Tests pass their own deps and usually disable priming."""
    settings = settings or (deps.settings if deps is not None else Settings())
    configure_logging(settings.log_level)

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette):
        app_deps = deps or create_deps(settings)
        if settings.simulation_mode:
            logger.warning("No OpenWeatherMap API key configured, running in simulation mode")
        session = WeatherSession(app_deps)
        app.state.session = session

        priming = asyncio.create_task(session.prime_popular_cities()) if prime else None
        try:
            yield
        finally:
            try:
                if priming is not None:
                    priming.cancel()
                    with contextlib.suppress(asyncio.CancelledError):
                        await priming
            except Exception:
                logger.exception("Popular city priming failed")
            finally:
                session.close_error()
                await app_deps.aclose()

    return Starlette(routes=routes, lifespan=lifespan)


app = create_app()
