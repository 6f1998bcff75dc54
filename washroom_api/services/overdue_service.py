"""
Scheduled overdue check
Walks every alert-enabled washroom once per tick and emails recipients for the overdue ones.
Runs from the cron endpoint and from the arq worker.
"""

import asyncio
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from ..config import ALERT_SEND_DELAY_SECONDS, DEFAULT_THRESHOLD_HOURS, DEFAULT_TIMEZONE
from ..domain.businesses.repository import BusinessRepository
from ..domain.washrooms.repository import WashroomRepository
from ..email_service import send_overdue_alert_email
from ..models import Washroom
from ..utils.timezone import to_naive_utc, utcnow
from .overdue import (
    ALERT_RECENTLY_SENT,
    ALERT_SENT,
    NO_RECIPIENTS,
    SEND_FAILED,
    cooldown_cutoff,
    evaluate_washroom,
    hours_overdue,
)

logger = logging.getLogger(__name__)


def get_alert_recipients(db: Session, washroom: Washroom) -> list[str]:
    """
    Location alert email first, then the business-wide list when the business opted in.
    Lower-cased and de-duplicated, order preserved.
    """
    emails: list[str] = []

    if washroom.alert_email and washroom.alert_email.strip():
        emails.append(washroom.alert_email.strip().lower())

    if washroom.business_name:
        business = BusinessRepository.get_by_name(db, washroom.business_name)
        if business and business.use_global_alerts and business.global_alert_emails:
            for email in business.global_alert_emails:
                normalized = (email or "").strip().lower()
                if normalized and normalized not in emails:
                    emails.append(normalized)

    return emails


async def dispatch_overdue_alert(
    db: Session, washroom: Washroom, recipients: list[str], now: datetime
) -> str:
    """
    Send one overdue alert, at most once per cooldown window per washroom.

    The washroom row is claimed first by stamping last_alert_sent_at under the
    cooldown guard; a concurrent or retried run loses the claim and skips.
    A failed send restores the previous timestamp so the next tick retries.
    """
    previous_sent_at = washroom.last_alert_sent_at
    claimed_at = to_naive_utc(now)

    if not WashroomRepository.claim_alert(db, washroom.id, claimed_at, cooldown_cutoff(now)):
        logger.info(f"⏭️ Alert for {washroom.display_name} already claimed by another run")
        return ALERT_RECENTLY_SENT

    threshold = washroom.alert_threshold_hours or DEFAULT_THRESHOLD_HOURS
    try:
        await send_overdue_alert_email(
            to=recipients,
            business_name=washroom.business_name,
            room_name=washroom.room_name,
            last_cleaned=washroom.last_cleaned,
            hours_overdue=hours_overdue(washroom.last_cleaned, threshold, now),
            threshold_hours=threshold,
            tz_name=washroom.timezone or DEFAULT_TIMEZONE,
            now=now,
        )
    except Exception as e:
        logger.error(f"❌ Overdue alert send failed for {washroom.display_name}: {e}")
        WashroomRepository.release_alert(db, washroom.id, claimed_at, previous_sent_at)
        return SEND_FAILED

    logger.info(f"✅ Alert sent for: {washroom.display_name} to {', '.join(recipients)}")
    return ALERT_SENT


async def run_overdue_check(
    db: Session,
    now: Optional[datetime] = None,
    send_delay: float = ALERT_SEND_DELAY_SECONDS,
) -> dict:
    """
    Evaluate every eligible washroom and send the alerts that are due.

    Database errors while loading candidates propagate; anything that goes wrong
    for a single washroom is logged and recorded as send_failed.
    """
    now = now or utcnow()

    washrooms = WashroomRepository.get_alert_candidates(db, cooldown_cutoff(now))

    if not washrooms:
        logger.info("No washrooms to check (all recently alerted or none enabled)")
        return {"message": "No washrooms to check", "checked": 0, "alerts": 0}

    logger.info(f"Checking {len(washrooms)} eligible washrooms...")

    alerts_sent = 0
    results: list[dict] = []

    # Claims commit and expire every loaded row; a row deleted mid-run then fails
    # to reload, so names are read up front
    names = [washroom.display_name for washroom in washrooms]

    for washroom, name in zip(washrooms, names):
        try:
            skip_status = evaluate_washroom(washroom, now)
            if skip_status:
                results.append({"washroom": name, "status": skip_status})
                continue

            recipients = get_alert_recipients(db, washroom)
            if not recipients:
                results.append({"washroom": name, "status": NO_RECIPIENTS})
                continue

            status = await dispatch_overdue_alert(db, washroom, recipients, now)
        except Exception as e:
            logger.error(f"❌ Overdue check failed for {name}: {e}")
            db.rollback()
            status = SEND_FAILED

        if status == ALERT_SENT:
            alerts_sent += 1
        results.append({"washroom": name, "status": status})

        # Space out provider calls
        if send_delay > 0:
            await asyncio.sleep(send_delay)

    logger.info(f"Overdue check complete. Checked: {len(washrooms)}, Alerts sent: {alerts_sent}")

    return {
        "message": "Overdue check complete",
        "checked": len(washrooms),
        "alerts": alerts_sent,
        "results": results,
    }
