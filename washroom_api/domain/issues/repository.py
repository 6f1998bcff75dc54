"""Reported issue repository - Database operations for visitor reports"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from ...models import ReportedIssue
from .catalogue import STATUS_OPEN, STATUS_RESOLVED


class IssueRepository:
    """Repository for reported issue database operations"""

    @staticmethod
    def create(db: Session, **issue_data) -> ReportedIssue:
        issue = ReportedIssue(**issue_data)
        db.add(issue)
        db.commit()
        db.refresh(issue)
        return issue

    @staticmethod
    def get_by_id(db: Session, issue_id: str) -> Optional[ReportedIssue]:
        return db.query(ReportedIssue).filter(ReportedIssue.id == issue_id).first()

    @staticmethod
    def list_open(db: Session, location_ids: Optional[list[str]] = None) -> list[ReportedIssue]:
        """Open issues, newest first; location_ids=None means every location"""
        query = db.query(ReportedIssue).filter(ReportedIssue.status == STATUS_OPEN)
        if location_ids is not None:
            query = query.filter(ReportedIssue.location_id.in_(location_ids))
        return query.order_by(ReportedIssue.created_at.desc()).all()

    @staticmethod
    def list_for_locations(db: Session, location_ids: list[str]) -> list[ReportedIssue]:
        return (
            db.query(ReportedIssue)
            .filter(ReportedIssue.location_id.in_(location_ids))
            .order_by(ReportedIssue.created_at.desc())
            .all()
        )

    @staticmethod
    def resolve(db: Session, issue: ReportedIssue, resolved_at: datetime) -> ReportedIssue:
        issue.status = STATUS_RESOLVED
        issue.resolved_at = resolved_at
        db.commit()
        db.refresh(issue)
        return issue
