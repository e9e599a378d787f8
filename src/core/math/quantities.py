"""
Quantity calculators — nights/days/hours from booking instants

Pure functions, no hidden state: timezone and window defaults are explicit
arguments taken from src.core.config.

TIME SEMANTICS:
    - Naive datetimes are interpreted as UTC.
    - Surcharge windows are half-open [from_hour, to_hour) in local wall-clock
      time of the booking's start day. Window bounds are resolved to absolute
      instants before comparison, so DST transition days measure real hours.
    - to_hour = 24 means local midnight at the end of the start day.
"""

from datetime import date, datetime, time, timedelta, timezone as dt_timezone
from typing import Final
from zoneinfo import ZoneInfo

from src.core.config import (
    DEFAULT_BUSINESS_HOURS_END,
    DEFAULT_FROM_HOUR,
    DEFAULT_TIMEZONE,
    DEFAULT_TO_HOUR,
)
from src.core.domain.line_item import (
    LINE_ITEM_DAY,
    LINE_ITEM_MONTH,
    LINE_ITEM_NIGHT,
    LINE_ITEM_WEEK,
)
from src.core.errors import UnsupportedUnitType


SECONDS_PER_HOUR: Final[int] = 3600

# Codes counted in calendar days
DAY_COUNT_CODES: Final[frozenset[str]] = frozenset(
    {LINE_ITEM_NIGHT, LINE_ITEM_DAY, LINE_ITEM_WEEK, LINE_ITEM_MONTH}
)


# =============================================================================
# HELPERS
# =============================================================================


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=dt_timezone.utc)
    return value.astimezone(dt_timezone.utc)


def _as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(dt_timezone.utc)
        return value.date()
    return value


def _hours(delta: timedelta) -> int | float:
    hours = delta.total_seconds() / SECONDS_PER_HOUR
    return int(hours) if hours.is_integer() else hours


def _local_instant(day: date, hour: float, tz: ZoneInfo) -> datetime:
    """Absolute instant (UTC) of ``hour`` o'clock local time on ``day``."""
    local_midnight = datetime.combine(day, time.min, tzinfo=tz)
    return (local_midnight + timedelta(hours=hour)).astimezone(dt_timezone.utc)


# =============================================================================
# DATE / HOUR QUANTITIES
# =============================================================================


def calculate_quantity_from_dates(start: date | datetime, end: date | datetime, code: str) -> int:
    """
    Number of calendar days between ``start`` and ``end`` (end exclusive).

    Args:
        start: booking start
        end: booking end
        code: line-item/night, line-item/day, line-item/week or line-item/month

    Returns:
        end - start in whole days

    Raises:
        UnsupportedUnitType: for any other code
    """
    if code not in DAY_COUNT_CODES:
        raise UnsupportedUnitType(code)
    return (_as_date(end) - _as_date(start)).days


def calculate_quantity_from_hours(start: datetime, end: datetime) -> int | float:
    """
    Duration between ``start`` and ``end`` in hours (3.5 for 3h30).
    """
    return _hours(_as_utc(end) - _as_utc(start))


# =============================================================================
# SURCHARGE WINDOWS
# =============================================================================


def calculate_overlapping_hours(
    start: datetime,
    end: datetime,
    timezone: str = DEFAULT_TIMEZONE,
    from_hour: float = DEFAULT_FROM_HOUR,
    to_hour: float = DEFAULT_TO_HOUR,
) -> int | float:
    """
    Hours of [start, end) falling into the start day's local window [from_hour, to_hour).

    The window is evaluated once, against the start day; it does not recur
    for bookings spanning several days and never wraps past midnight.

    Examples (Europe/Zurich, window [17, 24)):
        18:00–21:00 → 3
        10:00–17:00 → 0   (ends exactly at window start)
        16:30–18:00 → 1
    """
    start_utc = _as_utc(start)
    end_utc = _as_utc(end)
    if end_utc <= start_utc or to_hour <= from_hour:
        return 0

    tz = ZoneInfo(timezone)
    start_day = start_utc.astimezone(tz).date()
    window_start = _local_instant(start_day, from_hour, tz)
    window_end = _local_instant(start_day, to_hour, tz)

    overlap_start = max(start_utc, window_start)
    overlap_end = min(end_utc, window_end)
    if overlap_end <= overlap_start:
        return 0
    return _hours(overlap_end - overlap_start)


def calculate_non_business_hours(
    start: datetime,
    end: datetime,
    timezone: str = DEFAULT_TIMEZONE,
    business_hours_end: float = DEFAULT_BUSINESS_HOURS_END,
) -> int | float:
    """Hours of [start, end) after ``business_hours_end`` on the start day."""
    return calculate_overlapping_hours(start, end, timezone, business_hours_end, DEFAULT_TO_HOUR)
