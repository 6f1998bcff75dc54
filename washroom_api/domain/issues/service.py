"""Reported issue service - Visitor reports and manager follow-up"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...config import DEFAULT_TIMEZONE
from ...domain.washrooms.repository import WashroomRepository
from ...email_service import send_issue_report_email
from ...models import Business, ReportedIssue
from ...services.overdue_service import get_alert_recipients
from ...utils.timezone import utcnow
from .catalogue import STATUS_OPEN, STATUS_RESOLVED, issue_label
from .repository import IssueRepository
from .schemas import IssueReport

logger = logging.getLogger(__name__)


class IssueService:
    """Service layer for reported issues"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = IssueRepository()
        self.washrooms = WashroomRepository()

    async def report(self, data: IssueReport) -> tuple[ReportedIssue, bool]:
        """Store the report as open, then alert the location's recipients"""
        washroom = self.washrooms.get_by_id(self.db, data.location_id)
        if not washroom:
            raise HTTPException(status_code=404, detail="Washroom not found")

        now = utcnow()
        issue = self.repo.create(
            self.db,
            location_id=washroom.id,
            location_name=washroom.room_name,
            issue_type=data.issue_type,
            description=data.description or "",
            status=STATUS_OPEN,
            created_at=now,
        )
        logger.info(f"🚨 Issue reported at {washroom.display_name}: {data.issue_type}")

        recipients = get_alert_recipients(self.db, washroom)
        if not recipients:
            logger.warning(f"⚠️ No alert recipients for {washroom.display_name}, issue {issue.id} not emailed")
            return issue, False

        try:
            await send_issue_report_email(
                to=recipients,
                location_name=washroom.room_name,
                issue_label=issue_label(data.issue_type),
                comment=data.description or "",
                reported_at=now,
                tz_name=washroom.timezone or DEFAULT_TIMEZONE,
                issue_id=issue.id,
            )
        except Exception as e:
            logger.error(f"❌ Issue report email failed for {washroom.display_name}: {e}")
            return issue, False

        return issue, True

    def list_open(self, business: Business) -> list[ReportedIssue]:
        if business.is_admin:
            return self.repo.list_open(self.db)
        location_ids = self.washrooms.list_ids_for_business(self.db, business.name)
        return self.repo.list_open(self.db, location_ids)

    def list_for_business(self, business_name: str, business: Business) -> list[ReportedIssue]:
        if not business.is_admin and business_name != business.name:
            raise HTTPException(status_code=403, detail="Not allowed to view this business")
        location_ids = self.washrooms.list_ids_for_business(self.db, business_name)
        return self.repo.list_for_locations(self.db, location_ids)

    def resolve(self, issue_id: str, business: Business) -> ReportedIssue:
        issue = self.repo.get_by_id(self.db, issue_id)
        if not issue:
            raise HTTPException(status_code=404, detail="Issue not found")

        if not business.is_admin:
            washroom = self.washrooms.get_by_id(self.db, issue.location_id, active_only=False)
            if not washroom or washroom.business_name != business.name:
                raise HTTPException(status_code=404, detail="Issue not found")

        if issue.status == STATUS_RESOLVED:
            return issue

        logger.info(f"✅ Issue {issue_id} resolved by {business.name}")
        return self.repo.resolve(self.db, issue, utcnow())
