"""Tests for the overdue alert predicates."""

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

from washroom_api.services.overdue import (
    ALERT_RECENTLY_SENT,
    NOT_ALERT_DAY,
    NOT_OVERDUE,
    OUTSIDE_BUSINESS_HOURS,
    cooldown_cutoff,
    evaluate_washroom,
    hours_overdue,
    is_alert_day,
    is_overdue,
    is_within_business_hours,
    should_send_alert,
)

MONCTON = "America/Moncton"
# Monday 2026-01-05 10:00 in Moncton (UTC-4 in winter)
MONDAY_10AM = datetime(2026, 1, 5, 14, 0)
SATURDAY_10AM = datetime(2026, 1, 10, 14, 0)
MONDAY_7PM = datetime(2026, 1, 5, 23, 0)


def _washroom(**overrides):
    data = {
        "timezone": MONCTON,
        "alert_days": ["monday", "tuesday", "wednesday", "thursday", "friday"],
        "business_hours_start": "08:00",
        "business_hours_end": "17:00",
        "alert_threshold_hours": 8,
        "last_cleaned": None,
        "last_alert_sent_at": None,
    }
    data.update(overrides)
    return SimpleNamespace(**data)


# ---------------------------------------------------------------------------
# is_overdue
# ---------------------------------------------------------------------------


def test_never_cleaned_is_overdue():
    assert is_overdue(None, 8, MONDAY_10AM) is True


def test_overdue_only_strictly_past_threshold():
    assert is_overdue(MONDAY_10AM - timedelta(hours=8), 8, MONDAY_10AM) is False
    assert is_overdue(MONDAY_10AM - timedelta(hours=8, minutes=1), 8, MONDAY_10AM) is True
    assert is_overdue(MONDAY_10AM - timedelta(hours=2), 8, MONDAY_10AM) is False


def test_overdue_accepts_aware_timestamps():
    now = MONDAY_10AM.replace(tzinfo=timezone.utc)
    assert is_overdue(MONDAY_10AM - timedelta(hours=9), 8, now) is True


# ---------------------------------------------------------------------------
# should_send_alert
# ---------------------------------------------------------------------------


def test_alert_sent_within_cooldown_suppresses():
    assert should_send_alert(MONDAY_10AM - timedelta(hours=1), MONDAY_10AM) is False
    assert should_send_alert(MONDAY_10AM - timedelta(hours=2), MONDAY_10AM) is False


def test_alert_allowed_after_cooldown_or_never_sent():
    assert should_send_alert(None, MONDAY_10AM) is True
    assert should_send_alert(MONDAY_10AM - timedelta(hours=2, minutes=1), MONDAY_10AM) is True


def test_cooldown_cutoff_is_naive_utc():
    cutoff = cooldown_cutoff(MONDAY_10AM.replace(tzinfo=timezone.utc))
    assert cutoff == datetime(2026, 1, 5, 12, 0)
    assert cutoff.tzinfo is None


# ---------------------------------------------------------------------------
# is_within_business_hours
# ---------------------------------------------------------------------------


def test_business_hours_inside_and_outside():
    assert is_within_business_hours("08:00", "17:00", MONCTON, MONDAY_10AM) is True
    assert is_within_business_hours("08:00", "17:00", MONCTON, MONDAY_7PM) is False


def test_business_hours_bounds_are_inclusive():
    opening = datetime(2026, 1, 5, 12, 0)  # 08:00 local
    closing = datetime(2026, 1, 5, 21, 0)  # 17:00 local
    assert is_within_business_hours("08:00", "17:00", MONCTON, opening) is True
    assert is_within_business_hours("08:00", "17:00", MONCTON, closing) is True
    assert is_within_business_hours("08:00", "17:00", MONCTON, opening - timedelta(minutes=1)) is False
    assert is_within_business_hours("08:00", "17:00", MONCTON, closing + timedelta(minutes=1)) is False


def test_business_hours_follow_daylight_saving():
    # July: Moncton is UTC-3, so 11:30 UTC is 08:30 local
    summer_morning = datetime(2026, 7, 6, 11, 30)
    assert is_within_business_hours("08:00", "17:00", MONCTON, summer_morning) is True


def test_malformed_hours_or_timezone_return_false():
    assert is_within_business_hours("8am", "17:00", MONCTON, MONDAY_10AM) is False
    assert is_within_business_hours("08:00", "17:00", "Mars/Olympus", MONDAY_10AM) is False


# ---------------------------------------------------------------------------
# is_alert_day
# ---------------------------------------------------------------------------


def test_alert_day_membership():
    weekdays = ["monday", "tuesday", "wednesday", "thursday", "friday"]
    assert is_alert_day(weekdays, MONCTON, MONDAY_10AM) is True
    assert is_alert_day(weekdays, MONCTON, SATURDAY_10AM) is False
    assert is_alert_day([], MONCTON, MONDAY_10AM) is False


def test_alert_day_uses_local_weekday():
    # 02:00 UTC Tuesday is still Monday evening in Moncton
    late_monday = datetime(2026, 1, 6, 2, 0)
    assert is_alert_day(["monday"], MONCTON, late_monday) is True
    assert is_alert_day(["tuesday"], MONCTON, late_monday) is False


def test_alert_day_is_case_insensitive():
    assert is_alert_day(["Monday"], MONCTON, MONDAY_10AM) is True


# ---------------------------------------------------------------------------
# hours_overdue / evaluate_washroom
# ---------------------------------------------------------------------------


def test_hours_overdue_rounds_elapsed_hours():
    assert hours_overdue(MONDAY_10AM - timedelta(hours=9, minutes=40), 8, MONDAY_10AM) == 10
    assert hours_overdue(None, 8, MONDAY_10AM) == 8


def test_evaluate_due_washroom_returns_none():
    assert evaluate_washroom(_washroom(), MONDAY_10AM) is None


def test_evaluate_checks_in_order():
    assert evaluate_washroom(_washroom(), SATURDAY_10AM) == NOT_ALERT_DAY
    assert evaluate_washroom(_washroom(), MONDAY_7PM) == OUTSIDE_BUSINESS_HOURS
    assert (
        evaluate_washroom(_washroom(last_cleaned=MONDAY_10AM - timedelta(hours=1)), MONDAY_10AM)
        == NOT_OVERDUE
    )
    assert (
        evaluate_washroom(_washroom(last_alert_sent_at=MONDAY_10AM - timedelta(minutes=30)), MONDAY_10AM)
        == ALERT_RECENTLY_SENT
    )


def test_evaluate_with_no_alert_days_never_alerts():
    assert evaluate_washroom(_washroom(alert_days=None), MONDAY_10AM) == NOT_ALERT_DAY


def test_evaluate_falls_back_to_defaults_for_missing_settings():
    washroom = _washroom(
        timezone=None,
        business_hours_start=None,
        business_hours_end=None,
        alert_threshold_hours=None,
    )
    assert evaluate_washroom(washroom, MONDAY_10AM) is None
