"""Cleaning log service - Checklist submissions and manager review"""

import logging
import secrets
from datetime import date, datetime, time, timedelta
from typing import Optional

from dateutil.relativedelta import relativedelta
from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...config import DEFAULT_TIMEZONE
from ...domain.washrooms.repository import WashroomRepository
from ...email_service import send_attention_required_email
from ...models import Business, CleaningLog
from ...services.overdue_service import get_alert_recipients
from ...utils.timezone import utcnow
from .checklist import (
    STATUS_ATTENTION_REQUIRED,
    checklist_status,
    to_legacy_columns,
    unchecked_items,
)
from .repository import CleaningLogRepository
from .schemas import CleaningLogSubmit

logger = logging.getLogger(__name__)

RECENT_LOG_MONTHS = 6


class CleaningLogService:
    """Service layer for cleaning logs"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = CleaningLogRepository()
        self.washrooms = WashroomRepository()

    # Access scoping
    def visible_location_ids(self, business: Business) -> Optional[list[str]]:
        """None for admins (every location), else the business's own washrooms"""
        if business.is_admin:
            return None
        return self.washrooms.list_ids_for_business(self.db, business.name)

    def check_location_access(self, location_id: str, business: Business) -> None:
        if business.is_admin:
            return
        washroom = self.washrooms.get_by_id(self.db, location_id, active_only=False)
        if not washroom or washroom.business_name != business.name:
            raise HTTPException(status_code=404, detail="Washroom not found")

    # Staff submission
    async def submit(self, data: CleaningLogSubmit) -> tuple[CleaningLog, list[str], bool]:
        """
        Store a checklist, stamp the washroom as cleaned and, when items were left
        unchecked, notify the location's alert recipients.

        Returns:
            Tuple of (log, unchecked item labels, email_sent)
        """
        washroom = self.washrooms.get_by_id(self.db, data.location_id)
        if not washroom:
            raise HTTPException(status_code=404, detail="Washroom not found")

        if not secrets.compare_digest(washroom.pin_code.encode(), data.pin.strip().encode()):
            logger.warning(f"⚠️ Invalid PIN on checklist submission for {washroom.display_name}")
            raise HTTPException(status_code=403, detail="Invalid PIN")

        not_applicable = set(data.not_applicable)
        status = checklist_status(data.checklist, not_applicable)
        missing = unchecked_items(data.checklist, not_applicable)
        now = utcnow()

        log = self.repo.create(
            self.db,
            location_id=washroom.id,
            location_name=washroom.room_name,
            staff_name=data.staff_name,
            timestamp=now,
            status=status,
            notes=data.notes or "",
            **to_legacy_columns(data.checklist),
        )
        self.washrooms.set_last_cleaned(self.db, washroom.id, now)
        logger.info(f"✅ Cleaning logged for {washroom.display_name} by {data.staff_name}: {status}")

        email_sent = False
        if status == STATUS_ATTENTION_REQUIRED:
            recipients = get_alert_recipients(self.db, washroom)
            if not recipients:
                logger.info(f"No alert recipients for {washroom.display_name}, skipping attention email")
            else:
                try:
                    await send_attention_required_email(
                        to=recipients,
                        location_name=washroom.room_name,
                        location_id=washroom.id,
                        staff_name=data.staff_name,
                        notes=data.notes or "",
                        unchecked_items=missing,
                        logged_at=now,
                        tz_name=washroom.timezone or DEFAULT_TIMEZONE,
                    )
                    email_sent = True
                except Exception as e:
                    # The log is already stored; the manager sees it on the dashboard
                    logger.error(f"❌ Attention email failed for {washroom.display_name}: {e}")

        return log, missing, email_sent

    # Manager queries
    def list_for_location(self, location_id: str, business: Business) -> list[CleaningLog]:
        self.check_location_access(location_id, business)
        return self.repo.list_for_location(self.db, location_id)

    def list_recent_for_location(self, location_id: str, business: Business) -> list[CleaningLog]:
        """Last six months, newest first"""
        self.check_location_access(location_id, business)
        since = utcnow() - relativedelta(months=RECENT_LOG_MONTHS)
        return self.repo.list_for_location(self.db, location_id, since=since)

    def list_all(self, business: Business) -> list[CleaningLog]:
        return self.repo.list_all(self.db, self.visible_location_ids(business))

    def list_for_business(self, business_name: str, business: Business) -> list[CleaningLog]:
        if not business.is_admin and business_name != business.name:
            raise HTTPException(status_code=403, detail="Not allowed to view this business")
        location_ids = self.washrooms.list_ids_for_business(self.db, business_name)
        return self.repo.list_all(self.db, location_ids)

    def list_in_range(self, start: date, end: date, business: Business) -> list[CleaningLog]:
        """Both dates inclusive, as UTC calendar days"""
        if start > end:
            raise HTTPException(status_code=400, detail="Start date must not be after end date")
        range_start = datetime.combine(start, time.min)
        range_end = datetime.combine(end + timedelta(days=1), time.min)
        return self.repo.list_in_range(
            self.db, range_start, range_end, self.visible_location_ids(business)
        )

    def list_unresolved(self, business: Business) -> list[CleaningLog]:
        return self.repo.list_unresolved(
            self.db, STATUS_ATTENTION_REQUIRED, self.visible_location_ids(business)
        )

    def resolve(self, log_id: str, business: Business) -> CleaningLog:
        log = self.repo.get_by_id(self.db, log_id)
        if not log:
            raise HTTPException(status_code=404, detail="Cleaning log not found")
        self.check_location_access(log.location_id, business)
        logger.info(f"✅ Cleaning log {log_id} resolved by {business.name}")
        return self.repo.resolve(self.db, log, utcnow())

    def delete_for_location(self, location_id: str, business: Business) -> dict:
        self.check_location_access(location_id, business)
        deleted = self.repo.delete_for_location(self.db, location_id)
        logger.info(f"🗑️ Deleted {deleted} cleaning logs for washroom {location_id}")
        return {"message": "Cleaning logs deleted", "deleted": deleted}
