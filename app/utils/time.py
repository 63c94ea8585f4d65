"""Time utilities for price timestamps."""

from datetime import date, datetime, time, timedelta

FRESHNESS_WINDOW = timedelta(minutes=30)

# Fallback timestamp offset for stored prices with no last-updated date.
# Anything outside FRESHNESS_WINDOW works; one day is unambiguous in logs.
STALE_SENTINEL_OFFSET = timedelta(days=1)


def now_local() -> datetime:
    """
    Current local wall-clock time as a naive datetime.
    """
    return datetime.now()


def start_of_day(day: date) -> datetime:
    """Midnight of the given date as a naive datetime."""
    return datetime.combine(day, time.min)
