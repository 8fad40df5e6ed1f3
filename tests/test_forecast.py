# ABOUTME: Contract tests for the daily forecast aggregation.
# ABOUTME: Covers grouping, ordering, rounding, dominant-condition tie-breaks and truncation.

from datetime import date, timedelta, timezone

import pytest
from conftest import five_day_samples, sample

from weathermap.forecast import MAX_FORECAST_DAYS, aggregate, most_common


class TestAggregate:
    def test_empty_input_returns_empty_list(self):
        assert aggregate([], tz=timezone.utc) == []

    def test_two_day_fixture(self):
        """Day one temps [10, 12, 14] and day two [20] give the documented summaries.

        Implementation: Three samples on 2025-01-15 and one on 2025-01-16 (UTC).
        Passing implies: avg/max/min are computed per calendar day and rounded to ints.
        """
        samples = [sample(3, 10), sample(9, 12), sample(15, 14), sample(27, 20)]

        result = aggregate(samples, tz=timezone.utc)

        assert len(result) == 2
        assert (result[0].avg_temp, result[0].max_temp, result[0].min_temp) == (12, 14, 10)
        assert (result[1].avg_temp, result[1].max_temp, result[1].min_temp) == (20, 20, 20)
        assert result[0].date == date(2025, 1, 15)
        assert result[1].date == date(2025, 1, 16)

    def test_single_sample_day_has_equal_stats(self):
        result = aggregate([sample(6, 7.6)], tz=timezone.utc)

        assert len(result) == 1
        assert result[0].avg_temp == result[0].max_temp == result[0].min_temp == 8

    def test_rounding_is_half_to_even(self):
        """A day averaging exactly 12.5 rounds to 12 with the built-in round."""
        result = aggregate([sample(0, 12), sample(3, 13)], tz=timezone.utc)
        assert result[0].avg_temp == 12
        assert result[0].max_temp == 13

    def test_one_entry_per_distinct_date(self):
        """Forty 3-hourly samples over five days collapse to five entries in order."""
        result = aggregate(five_day_samples(), tz=timezone.utc)

        assert [d.date for d in result] == [date(2025, 1, day) for day in range(15, 20)]

    def test_is_deterministic(self):
        samples = five_day_samples()
        assert aggregate(samples, tz=timezone.utc) == aggregate(samples, tz=timezone.utc)

    def test_keeps_first_seen_order_not_calendar_order(self):
        """Out-of-order input keeps the order in which dates first appear.

        Implementation: A day-two sample precedes the day-one samples.
        Passing implies: Output is not re-sorted by calendar date.
        """
        samples = [sample(30, 5), sample(2, 1), sample(5, 3), sample(33, 7)]

        result = aggregate(samples, tz=timezone.utc)

        assert [d.date for d in result] == [date(2025, 1, 16), date(2025, 1, 15)]
        assert result[0].max_temp == 7

    def test_truncates_to_first_ten_days(self):
        samples = [sample(day * 24 + 12, day) for day in range(12)]

        result = aggregate(samples, tz=timezone.utc)

        assert len(result) == MAX_FORECAST_DAYS
        assert result[-1].date == date(2025, 1, 24)

    def test_date_follows_requested_time_zone(self):
        """A 23:00 UTC sample belongs to the next day in a UTC+2 observer zone."""
        plus_two = timezone(timedelta(hours=2))
        result = aggregate([sample(23, 4)], tz=plus_two)
        assert result[0].date == date(2025, 1, 16)

    def test_representative_timestamp_is_first_sample(self):
        samples = [sample(6, 1), sample(9, 2)]
        assert aggregate(samples, tz=timezone.utc)[0].timestamp == samples[0].timestamp

    def test_dominant_description_and_icon(self):
        samples = [
            sample(0, 1, "light rain", "10n"),
            sample(3, 1, "clear sky", "01d"),
            sample(6, 1, "light rain", "10d"),
            sample(9, 1, "clear sky", "10d"),
            sample(12, 1, "light rain", "01d"),
        ]
        result = aggregate(samples, tz=timezone.utc)

        assert result[0].description == "light rain"
        assert result[0].icon == "10d"


class TestMostCommon:
    def test_tie_goes_to_first_to_reach_max(self):
        assert most_common(["a", "b", "a", "b"]) == "a"

    def test_tie_is_not_first_occurrence(self):
        """In [a, b, b, a] 'b' reaches two before 'a' does, so it wins."""
        assert most_common(["a", "b", "b", "a"]) == "b"

    def test_not_lexicographic(self):
        assert most_common(["z", "a"]) == "z"

    def test_clear_winner(self):
        assert most_common(["x", "y", "y"]) == "y"

    def test_empty_raises(self):
        with pytest.raises(ValueError):
            most_common([])
