"""Event date validation and reminder date arithmetic.

All arithmetic happens on local wall-clock time: "2 days before at 9:00"
means 9:00 on the calendar day two days earlier, whatever the UTC offset
is on that day.
"""

from datetime import date, datetime, timedelta
from typing import Any, Optional

from dateutil import parser as date_parser

from logger import logger
from .config import REMIND_HOUR
from .types import DelayOption


def _to_local(value: str) -> datetime:
    """Parse an ISO-8601 string and express it as naive local wall-clock time."""
    parsed = date_parser.isoparse(value)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def parse_event_date(value: Any) -> Optional[str]:
    """Validate an event date read from front matter.

    Args:
        value: Raw front matter value (string, or date/datetime from YAML)

    Returns:
        ISO date string, or None if missing or not ISO-8601
    """
    if isinstance(value, (date, datetime)):
        return value.isoformat()

    if not value or not isinstance(value, str):
        return None

    # ISO-8601 only; free-form words like "Sunday" are not dates
    try:
        date_parser.isoparse(value)
    except (ValueError, OverflowError) as e:
        logger.error(f"Invalid date format: {value} ({e})")
        return None

    return value


def calculate_remind_date(event_date: str, option: DelayOption) -> str:
    """Calculate the reminder timestamp for an event.

    Args:
        event_date: ISO event date
        option: Selected delay

    Returns:
        ISO-8601 timestamp at REMIND_HOUR local time, with local offset
    """
    local = _to_local(event_date) + timedelta(days=option.offset)
    local = local.replace(hour=REMIND_HOUR, minute=0, second=0, microsecond=0)
    # Naive astimezone() resolves the offset in force on that day (DST aware)
    return local.astimezone().isoformat(timespec="milliseconds")


def format_event_date(event_date: str) -> str:
    """Human readable event date, e.g. 'Sun 10 at 0:00'."""
    local = _to_local(event_date)
    return f"{local:%a %d} at {local.hour}:{local:%M}"


def to_epoch_millis(iso_date: str) -> int:
    """Milliseconds since the epoch for an ISO timestamp (naive = local)."""
    parsed = date_parser.isoparse(iso_date)
    if parsed.tzinfo is None:
        parsed = parsed.astimezone()
    return int(parsed.timestamp() * 1000)
