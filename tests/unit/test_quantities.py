"""
Tests for quantity calculators

Checked invariants:
1. Calendar-day counts for night/day/week/month, end exclusive
2. Hour durations are fractional where needed, integral otherwise
3. Surcharge windows are half-open [from, to) in local time of the start day
4. DST transition days count real elapsed hours
5. Naive datetimes are UTC
"""

from datetime import date, datetime, timezone

import pytest

from src.core.errors import UnsupportedUnitType
from src.core.math.quantities import (
    calculate_non_business_hours,
    calculate_overlapping_hours,
    calculate_quantity_from_dates,
    calculate_quantity_from_hours,
)


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


# =============================================================================
# DATES
# =============================================================================


class TestQuantityFromDates:
    """Whole calendar days between two instants."""

    @pytest.mark.parametrize(
        "code", ["line-item/night", "line-item/day", "line-item/week", "line-item/month"]
    )
    def test_day_count_codes(self, code):
        """All day-granularity codes count days."""
        assert calculate_quantity_from_dates(utc(2025, 6, 1), utc(2025, 6, 4), code) == 3

    @pytest.mark.parametrize("code", ["line-item/night", "line-item/day"])
    def test_two_nights(self, code):
        """2017-01-01 → 2017-01-03 is 2."""
        assert calculate_quantity_from_dates(utc(2017, 1, 1), utc(2017, 1, 3), code) == 2

    def test_plain_dates(self):
        """date objects work across a month boundary."""
        assert (
            calculate_quantity_from_dates(date(2025, 2, 27), date(2025, 3, 2), "line-item/night")
            == 3
        )

    def test_same_day_is_zero(self):
        """Zero-length range."""
        assert calculate_quantity_from_dates(utc(2025, 6, 1), utc(2025, 6, 1), "line-item/day") == 0

    def test_unsupported_code(self):
        """Non-day codes → UnsupportedUnitType."""
        with pytest.raises(UnsupportedUnitType) as exc_info:
            calculate_quantity_from_dates(utc(2025, 6, 1), utc(2025, 6, 2), "line-item/hour")

        assert exc_info.value.code == "line-item/hour"


# =============================================================================
# HOURS
# =============================================================================


class TestQuantityFromHours:
    """Duration in hours."""

    def test_whole_hours_are_int(self):
        """Integral durations come back as int."""
        hours = calculate_quantity_from_hours(utc(2025, 6, 15, 16), utc(2025, 6, 15, 18))
        assert hours == 2
        assert isinstance(hours, int)

    def test_fractional_hours(self):
        """3h30 → 3.5."""
        assert (
            calculate_quantity_from_hours(utc(2025, 6, 15, 16), utc(2025, 6, 15, 19, 30)) == 3.5
        )

    def test_naive_is_utc(self):
        """Naive datetimes are read as UTC."""
        assert (
            calculate_quantity_from_hours(datetime(2025, 6, 15, 16), utc(2025, 6, 15, 17)) == 1
        )


# =============================================================================
# SURCHARGE WINDOWS
# =============================================================================


class TestOverlappingHours:
    """Default window [17, 24) Europe/Zurich; June is UTC+2."""

    def test_fully_inside(self):
        """18:00–21:00 local → 3."""
        assert calculate_overlapping_hours(utc(2025, 6, 15, 16), utc(2025, 6, 15, 19)) == 3

    def test_empty_booking(self):
        """start == end → 0."""
        assert calculate_overlapping_hours(utc(2025, 6, 15, 16), utc(2025, 6, 15, 16)) == 0

    def test_ends_at_window_start(self):
        """10:00–17:00 local → 0."""
        assert calculate_overlapping_hours(utc(2025, 6, 15, 8), utc(2025, 6, 15, 15)) == 0

    def test_starts_at_window_start(self):
        """17:00–19:00 local counts fully from 17:00."""
        assert calculate_overlapping_hours(utc(2025, 6, 15, 15), utc(2025, 6, 15, 17)) == 2

    def test_partial_overlap(self):
        """16:30–18:00 local → 1."""
        assert calculate_overlapping_hours(utc(2025, 6, 15, 14, 30), utc(2025, 6, 15, 16)) == 1

    def test_starts_at_window_end(self):
        """00:00–02:00 local on the next day: only the start day's window applies."""
        assert calculate_overlapping_hours(utc(2025, 6, 15, 22), utc(2025, 6, 16, 0)) == 0

    def test_crosses_midnight_counts_until_midnight(self):
        """22:00–02:00 local → 2."""
        assert calculate_overlapping_hours(utc(2025, 6, 15, 20), utc(2025, 6, 16, 0)) == 2

    def test_winter_offset(self):
        """January is UTC+1: 18:00–20:00 local → 2."""
        assert calculate_overlapping_hours(utc(2025, 1, 15, 17), utc(2025, 1, 15, 19)) == 2

    def test_custom_window_and_timezone(self):
        """06:00–09:00 New York (UTC-4) against [7, 8) → 1."""
        assert (
            calculate_overlapping_hours(
                utc(2025, 6, 15, 10), utc(2025, 6, 15, 13), "America/New_York", 7, 8
            )
            == 1
        )

    def test_fractional_window(self):
        """17:00–19:00 local against [17.5, 24) → 1.5."""
        assert (
            calculate_overlapping_hours(
                utc(2025, 6, 15, 15), utc(2025, 6, 15, 17), from_hour=17.5, to_hour=24
            )
            == 1.5
        )

    def test_reversed_booking_is_zero(self):
        """end < start → 0."""
        assert calculate_overlapping_hours(utc(2025, 6, 15, 19), utc(2025, 6, 15, 16)) == 0

    def test_reversed_window_is_zero(self):
        """[22, 2) does not wrap past midnight."""
        assert (
            calculate_overlapping_hours(
                utc(2025, 6, 15, 20), utc(2025, 6, 16, 2), from_hour=22, to_hour=2
            )
            == 0
        )

    def test_spring_forward_day(self):
        """2025-03-30 Zurich: local 00:00–07:00 against [0, 6) is 5 real hours."""
        assert (
            calculate_overlapping_hours(
                utc(2025, 3, 29, 23), utc(2025, 3, 30, 5), from_hour=0, to_hour=6
            )
            == 5
        )

    def test_fall_back_day(self):
        """2025-10-26 Zurich: the whole local day lasts 25 hours."""
        assert (
            calculate_overlapping_hours(
                utc(2025, 10, 25, 22), utc(2025, 10, 26, 23), from_hour=0, to_hour=24
            )
            == 25
        )


class TestNonBusinessHours:
    """Window [business_hours_end, 24)."""

    def test_default_business_hours_end(self):
        """16:00–19:00 local, end 17 → 2."""
        assert calculate_non_business_hours(utc(2025, 6, 15, 14), utc(2025, 6, 15, 17)) == 2

    def test_custom_business_hours_end(self):
        """16:00–19:00 local, end 18 → 1."""
        assert (
            calculate_non_business_hours(
                utc(2025, 6, 15, 14), utc(2025, 6, 15, 17), business_hours_end=18
            )
            == 1
        )
