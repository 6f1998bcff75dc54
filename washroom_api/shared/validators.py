"""Shared validation utilities"""

import re
from typing import Optional

from ..utils.timezone import WEEKDAY_NAMES, is_valid_timezone, parse_time_string


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Returns:
        Lowercase email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip().lower()

    # Basic email validation pattern
    email_pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

    if not re.match(email_pattern, email):
        raise ValueError("Invalid email format")

    return email


def validate_pin(pin: str) -> str:
    """Staff PINs are exactly four digits"""
    pin = (pin or "").strip()
    if not re.fullmatch(r"\d{4}", pin):
        raise ValueError("PIN must be exactly 4 digits")
    return pin


def validate_time_string(value: Optional[str]) -> Optional[str]:
    """Normalize "H:MM" / "HH:MM" to zero-padded "HH:MM" """
    if value is None:
        return value
    hours, minutes = parse_time_string(value)
    return f"{hours:02d}:{minutes:02d}"


def validate_alert_days(days: Optional[list[str]]) -> Optional[list[str]]:
    """Lower-case, de-duplicate and check weekday names, keeping week order"""
    if days is None:
        return days

    normalized = {day.strip().lower() for day in days}
    unknown = normalized - set(WEEKDAY_NAMES)
    if unknown:
        raise ValueError(f"Unknown weekday(s): {', '.join(sorted(unknown))}")

    return [day for day in WEEKDAY_NAMES if day in normalized]


def validate_timezone(tz_name: Optional[str]) -> Optional[str]:
    if tz_name is None:
        return tz_name
    if not is_valid_timezone(tz_name):
        raise ValueError(f"Unknown timezone: {tz_name}")
    return tz_name
