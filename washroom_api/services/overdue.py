"""
Overdue alert predicates
Pure checks deciding whether a washroom should get an overdue email right now.
Every function takes the current time explicitly; stored timestamps are naive UTC.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from ..config import (
    ALERT_COOLDOWN_HOURS,
    DEFAULT_BUSINESS_HOURS_END,
    DEFAULT_BUSINESS_HOURS_START,
    DEFAULT_THRESHOLD_HOURS,
    DEFAULT_TIMEZONE,
)
from ..utils.timezone import as_utc, parse_time_string, to_local, weekday_name

logger = logging.getLogger(__name__)

# Skip statuses, in evaluation order
NOT_ALERT_DAY = "not_alert_day"
OUTSIDE_BUSINESS_HOURS = "outside_business_hours"
NOT_OVERDUE = "not_overdue"
ALERT_RECENTLY_SENT = "alert_recently_sent"
# Dispatch outcomes
NO_RECIPIENTS = "no_recipients"
ALERT_SENT = "alert_sent"
SEND_FAILED = "send_failed"


def is_within_business_hours(start: str, end: str, tz_name: str, now: datetime) -> bool:
    """True when `now`, seen in `tz_name`, falls inside [start, end] (inclusive, minute precision)"""
    try:
        local = to_local(now, tz_name)
        current_minutes = local.hour * 60 + local.minute

        start_hour, start_minute = parse_time_string(start)
        end_hour, end_minute = parse_time_string(end)

        start_minutes = start_hour * 60 + start_minute
        end_minutes = end_hour * 60 + end_minute

        return start_minutes <= current_minutes <= end_minutes
    except Exception as e:
        logger.error(f"❌ Error checking business hours ({start}-{end} {tz_name}): {e}")
        return False


def is_alert_day(alert_days: list[str], tz_name: str, now: datetime) -> bool:
    """True when today's weekday in `tz_name` is one of the configured alert days"""
    try:
        days = {day.strip().lower() for day in alert_days}
        return weekday_name(now, tz_name) in days
    except Exception as e:
        logger.error(f"❌ Error checking alert day ({tz_name}): {e}")
        return False


def is_overdue(last_cleaned: Optional[datetime], threshold_hours: float, now: datetime) -> bool:
    """A washroom never cleaned is always overdue"""
    if last_cleaned is None:
        return True
    return as_utc(now) - as_utc(last_cleaned) > timedelta(hours=threshold_hours)


def should_send_alert(
    last_alert_sent_at: Optional[datetime],
    now: datetime,
    cooldown_hours: float = ALERT_COOLDOWN_HOURS,
) -> bool:
    """Resend cooldown: no alert for the same washroom within `cooldown_hours`"""
    if last_alert_sent_at is None:
        return True
    return as_utc(now) - as_utc(last_alert_sent_at) > timedelta(hours=cooldown_hours)


def cooldown_cutoff(now: datetime, cooldown_hours: float = ALERT_COOLDOWN_HOURS) -> datetime:
    """Naive UTC timestamp before which a previous alert no longer blocks a new one"""
    return (as_utc(now) - timedelta(hours=cooldown_hours)).replace(tzinfo=None)


def hours_overdue(last_cleaned: Optional[datetime], threshold_hours: float, now: datetime) -> int:
    """Rounded hours since the last cleaning; the threshold itself when never cleaned"""
    if last_cleaned is None:
        return int(threshold_hours)
    elapsed = as_utc(now) - as_utc(last_cleaned)
    return round(elapsed.total_seconds() / 3600)


def evaluate_washroom(washroom, now: datetime) -> Optional[str]:
    """
    Run the four checks in order and return the first skip status,
    or None when an overdue alert is due for this washroom.
    """
    tz_name = washroom.timezone or DEFAULT_TIMEZONE

    if not is_alert_day(washroom.alert_days or [], tz_name, now):
        return NOT_ALERT_DAY

    if not is_within_business_hours(
        washroom.business_hours_start or DEFAULT_BUSINESS_HOURS_START,
        washroom.business_hours_end or DEFAULT_BUSINESS_HOURS_END,
        tz_name,
        now,
    ):
        return OUTSIDE_BUSINESS_HOURS

    if not is_overdue(washroom.last_cleaned, washroom.alert_threshold_hours or DEFAULT_THRESHOLD_HOURS, now):
        return NOT_OVERDUE

    if not should_send_alert(washroom.last_alert_sent_at, now):
        return ALERT_RECENTLY_SENT

    return None
