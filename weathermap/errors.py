# ABOUTME: Exception hierarchy for geocoding and weather retrieval failures.
# ABOUTME: The session orchestrator catches these and turns them into banner messages.

from enum import Enum


class FailureKind(str, Enum):
    """Why a lookup did not update the display."""

    NOT_FOUND = "not_found"
    LOOKUP_FAILURE = "lookup_failure"
    FETCH_FAILURE = "fetch_failure"
    PARTIAL_FAILURE = "partial_failure"


class WeatherMapError(RuntimeError):
    """Base class for recoverable lookup errors."""

    kind: FailureKind


class LookupFailure(WeatherMapError):
    """The geocoding service could not be reached or returned garbage."""

    kind = FailureKind.LOOKUP_FAILURE


class FetchFailure(WeatherMapError):
    """A weather endpoint failed (status, transport or payload shape)."""

    kind = FailureKind.FETCH_FAILURE


class PartialFailure(FetchFailure):
    """Exactly one of the current/forecast requests failed."""

    kind = FailureKind.PARTIAL_FAILURE


USER_MESSAGES: dict[FailureKind, str] = {
    FailureKind.NOT_FOUND: "Location not found. Please try a different search term.",
    FailureKind.LOOKUP_FAILURE: "Error searching for location. Please try again.",
    FailureKind.PARTIAL_FAILURE: "Unable to fetch weather data for this location.",
    FailureKind.FETCH_FAILURE: "Error fetching weather data. Please try again.",
}
