"""
Date and Time utilities

Slot timestamp parsing and broadcast-day calculations. The provider's
schedule day runs from 05:00 to 05:00 local time, so the small hours still
belong to the previous calendar day.
"""
from datetime import datetime, timedelta
import logging

from tvnow.errors import InvalidTimestamp

logger = logging.getLogger(__name__)

BROADCAST_DAY_START_HOUR = 5
WEEK_DAY_COUNT = 8
SLOT_TIMESTAMP_FORMAT = "%Y%m%d%H%M"
BROADCAST_DATE_FORMAT = "%Y%m%d"


def parse_slot_timestamp(value: str | None) -> datetime:
    """
    Parse a slot start/end attribute

    Args:
        value: 12-digit timestamp like '202401100930'

    Returns:
        Naive datetime in the provider's local time

    Raises:
        InvalidTimestamp: If the value is missing or not exactly 12 digits
    """
    if value is None:
        raise InvalidTimestamp(value)
    stripped = value.strip()
    if len(stripped) != 12 or not stripped.isascii() or not stripped.isdigit():
        raise InvalidTimestamp(value)
    try:
        return datetime.strptime(stripped, SLOT_TIMESTAMP_FORMAT)
    except ValueError as e:
        raise InvalidTimestamp(value) from e


def broadcast_today(now: datetime) -> datetime:
    """Start of the broadcast day containing `now` is on this calendar date."""
    if now.hour < BROADCAST_DAY_START_HOUR:
        return now - timedelta(days=1)
    return now


def broadcast_dates(now: datetime | None = None, count: int = WEEK_DAY_COUNT) -> list[str]:
    """
    Calendar dates covered by a multi-day guide request

    Args:
        now: Local time of the request (defaults to the current local time)
        count: Number of consecutive days

    Returns:
        `count` consecutive YYYYMMDD strings starting at broadcast-today
    """
    if now is None:
        now = datetime.now()
    first = broadcast_today(now).date()
    dates = [(first + timedelta(days=offset)).strftime(BROADCAST_DATE_FORMAT) for offset in range(count)]
    logger.debug("Broadcast dates for %s: %s .. %s", now.isoformat(), dates[0] if dates else None, dates[-1] if dates else None)
    return dates
