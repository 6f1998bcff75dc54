"""Cleaning log repository - Database operations for cleaning logs"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Query, Session

from ...models import CleaningLog


class CleaningLogRepository:
    """Repository for cleaning log database operations"""

    @staticmethod
    def _scoped(db: Session, location_ids: Optional[list[str]]) -> Query:
        """location_ids=None means every location"""
        query = db.query(CleaningLog)
        if location_ids is not None:
            query = query.filter(CleaningLog.location_id.in_(location_ids))
        return query

    @staticmethod
    def create(db: Session, **log_data) -> CleaningLog:
        log = CleaningLog(**log_data)
        db.add(log)
        db.commit()
        db.refresh(log)
        return log

    @staticmethod
    def get_by_id(db: Session, log_id: str) -> Optional[CleaningLog]:
        return db.query(CleaningLog).filter(CleaningLog.id == log_id).first()

    @staticmethod
    def list_for_location(
        db: Session, location_id: str, since: Optional[datetime] = None
    ) -> list[CleaningLog]:
        query = db.query(CleaningLog).filter(CleaningLog.location_id == location_id)
        if since is not None:
            query = query.filter(CleaningLog.timestamp >= since)
        return query.order_by(CleaningLog.timestamp.desc()).all()

    @staticmethod
    def list_all(db: Session, location_ids: Optional[list[str]] = None) -> list[CleaningLog]:
        return (
            CleaningLogRepository._scoped(db, location_ids)
            .order_by(CleaningLog.timestamp.desc())
            .all()
        )

    @staticmethod
    def list_in_range(
        db: Session, start: datetime, end: datetime, location_ids: Optional[list[str]] = None
    ) -> list[CleaningLog]:
        """Logs with start <= timestamp < end"""
        return (
            CleaningLogRepository._scoped(db, location_ids)
            .filter(CleaningLog.timestamp >= start, CleaningLog.timestamp < end)
            .order_by(CleaningLog.timestamp.desc())
            .all()
        )

    @staticmethod
    def list_unresolved(
        db: Session, status: str, location_ids: Optional[list[str]] = None
    ) -> list[CleaningLog]:
        return (
            CleaningLogRepository._scoped(db, location_ids)
            .filter(CleaningLog.status == status, CleaningLog.resolved.is_(False))
            .order_by(CleaningLog.timestamp.desc())
            .all()
        )

    @staticmethod
    def resolve(db: Session, log: CleaningLog, resolved_at: datetime) -> CleaningLog:
        log.resolved = True
        log.resolved_at = resolved_at
        db.commit()
        db.refresh(log)
        return log

    @staticmethod
    def delete_for_location(db: Session, location_id: str) -> int:
        deleted = (
            db.query(CleaningLog)
            .filter(CleaningLog.location_id == location_id)
            .delete(synchronize_session=False)
        )
        db.commit()
        return deleted
