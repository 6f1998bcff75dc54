"""
Timezone helpers
Timestamps are stored as naive UTC; conversions to a washroom's local time happen here.
"""

from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from ..config import DEFAULT_TIMEZONE

WEEKDAY_NAMES = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]


def utcnow() -> datetime:
    """Current time as naive UTC, matching how the database stores timestamps"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def as_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime; naive values are assumed to already be UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_naive_utc(value: datetime) -> datetime:
    return as_utc(value).replace(tzinfo=None)


def to_local(value: datetime, tz_name: Optional[str] = None) -> datetime:
    """Convert a UTC timestamp into the given IANA timezone (raises on unknown zones)"""
    return as_utc(value).astimezone(ZoneInfo(tz_name or DEFAULT_TIMEZONE))


def is_valid_timezone(tz_name: str) -> bool:
    try:
        ZoneInfo(tz_name)
        return True
    except Exception:
        return False


def parse_time_string(value: str) -> tuple[int, int]:
    """Parse "HH:MM" into (hours, minutes); raises ValueError when malformed"""
    parts = value.strip().split(":")
    if len(parts) != 2:
        raise ValueError(f"Invalid time string: {value!r}")
    hours, minutes = int(parts[0]), int(parts[1])
    if not (0 <= hours <= 23 and 0 <= minutes <= 59):
        raise ValueError(f"Time out of range: {value!r}")
    return hours, minutes


def _format_hour(local: datetime) -> str:
    hour = local.hour % 12 or 12
    suffix = "AM" if local.hour < 12 else "PM"
    return f"{hour}:{local.minute:02d} {suffix}"


def format_datetime(value: datetime, tz_name: Optional[str] = None) -> str:
    """e.g. "Jan 5, 2026, 2:07 PM" in the given timezone"""
    local = to_local(value, tz_name)
    return f"{local.strftime('%b')} {local.day}, {local.year}, {_format_hour(local)}"


def format_long_date(value: datetime, tz_name: Optional[str] = None) -> str:
    """e.g. "Monday, January 5, 2026" in the given timezone"""
    local = to_local(value, tz_name)
    return f"{local.strftime('%A')}, {local.strftime('%B')} {local.day}, {local.year}"


def format_time(value: datetime, tz_name: Optional[str] = None) -> str:
    return _format_hour(to_local(value, tz_name))


def weekday_name(value: datetime, tz_name: Optional[str] = None) -> str:
    """Lower-case English weekday of the timestamp in the given timezone"""
    return WEEKDAY_NAMES[to_local(value, tz_name).weekday()]
