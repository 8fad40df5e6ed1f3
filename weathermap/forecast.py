# ABOUTME: Groups 3-hourly forecast samples into per-day summaries.
# ABOUTME: Pure functions, no I/O; the only place forecast numbers are computed.

from collections.abc import Iterable, Sequence
from datetime import date, tzinfo
from statistics import fmean

from weathermap.models import DailyForecast, ForecastSample

MAX_FORECAST_DAYS = 10


def aggregate(samples: Iterable[ForecastSample], tz: tzinfo | None = None) -> list[DailyForecast]:
    """Summarise forecast samples per calendar day.

    Days are keyed by the sample's date in ``tz`` (the machine's local zone when
    None) and come out in the order they first appear in ``samples``, not sorted.
    Temperatures use the built-in ``round`` (half to even). At most
    ``MAX_FORECAST_DAYS`` days are returned.
    """
    groups: dict[date, list[ForecastSample]] = {}
    for sample in samples:
        key = sample.timestamp.astimezone(tz).date()
        groups.setdefault(key, []).append(sample)

    result = []
    for day, day_samples in list(groups.items())[:MAX_FORECAST_DAYS]:
        temps = [s.temperature for s in day_samples]
        result.append(
            DailyForecast(
                date=day,
                timestamp=day_samples[0].timestamp,
                avg_temp=round(fmean(temps)),
                max_temp=round(max(temps)),
                min_temp=round(min(temps)),
                description=most_common([s.description for s in day_samples]),
                icon=most_common([s.icon for s in day_samples]),
            )
        )
    return result


def most_common(values: Sequence[str]) -> str:
    """Return the most frequent value; ties go to whichever reached the top count first."""
    if not values:
        raise ValueError("most_common() requires at least one value")

    counts: dict[str, int] = {}
    best, best_count = values[0], 0
    for value in values:
        counts[value] = counts.get(value, 0) + 1
        if counts[value] > best_count:
            best, best_count = value, counts[value]
    return best
