"""Washroom repository - Database operations for washrooms"""

from datetime import datetime
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ...models import Washroom


class WashroomRepository:
    """Repository for washroom database operations"""

    @staticmethod
    def get_by_id(db: Session, washroom_id: str, active_only: bool = True) -> Optional[Washroom]:
        query = db.query(Washroom).filter(Washroom.id == washroom_id)
        if active_only:
            query = query.filter(Washroom.is_active.is_(True))
        return query.first()

    @staticmethod
    def list_active(db: Session, business_name: Optional[str] = None) -> list[Washroom]:
        """Active washrooms ordered by business, then room"""
        query = db.query(Washroom).filter(Washroom.is_active.is_(True))
        if business_name:
            query = query.filter(Washroom.business_name == business_name)
        return query.order_by(Washroom.business_name.asc(), Washroom.room_name.asc()).all()

    @staticmethod
    def list_ids_for_business(db: Session, business_name: str) -> list[str]:
        """Every washroom the business owns, deactivated ones included"""
        rows = db.query(Washroom.id).filter(Washroom.business_name == business_name).all()
        return [row[0] for row in rows]

    @staticmethod
    def create(db: Session, **washroom_data) -> Washroom:
        washroom = Washroom(**washroom_data)
        db.add(washroom)
        db.commit()
        db.refresh(washroom)
        return washroom

    @staticmethod
    def update(db: Session, washroom: Washroom, **updates) -> Washroom:
        """Apply updates; None values are skipped"""
        for key, value in updates.items():
            if value is not None and hasattr(washroom, key):
                setattr(washroom, key, value)
        db.commit()
        db.refresh(washroom)
        return washroom

    @staticmethod
    def set_last_cleaned(db: Session, washroom_id: str, cleaned_at: datetime) -> int:
        updated = (
            db.query(Washroom)
            .filter(Washroom.id == washroom_id)
            .update({Washroom.last_cleaned: cleaned_at}, synchronize_session=False)
        )
        db.commit()
        return updated

    # Overdue alert queries
    @staticmethod
    def get_alert_candidates(db: Session, cooldown_cutoff: datetime) -> list[Washroom]:
        """Active, alert-enabled washrooms not alerted since the cutoff"""
        return (
            db.query(Washroom)
            .filter(
                Washroom.is_active.is_(True),
                Washroom.alert_enabled.is_(True),
                or_(
                    Washroom.last_alert_sent_at.is_(None),
                    Washroom.last_alert_sent_at < cooldown_cutoff,
                ),
            )
            .order_by(Washroom.business_name.asc(), Washroom.room_name.asc())
            .all()
        )

    @staticmethod
    def claim_alert(
        db: Session, washroom_id: str, claimed_at: datetime, cooldown_cutoff: datetime
    ) -> bool:
        """
        Atomically stamp last_alert_sent_at if no alert went out since the cutoff.
        Returns False when another run already claimed this washroom.
        """
        updated = (
            db.query(Washroom)
            .filter(
                Washroom.id == washroom_id,
                or_(
                    Washroom.last_alert_sent_at.is_(None),
                    Washroom.last_alert_sent_at < cooldown_cutoff,
                ),
            )
            .update({Washroom.last_alert_sent_at: claimed_at}, synchronize_session=False)
        )
        db.commit()
        return updated == 1

    @staticmethod
    def release_alert(
        db: Session, washroom_id: str, claimed_at: datetime, previous: Optional[datetime]
    ) -> None:
        """Undo a claim after a failed send, unless something newer replaced it"""
        (
            db.query(Washroom)
            .filter(Washroom.id == washroom_id, Washroom.last_alert_sent_at == claimed_at)
            .update({Washroom.last_alert_sent_at: previous}, synchronize_session=False)
        )
        db.commit()

    @staticmethod
    def get_missing_alert_flag(db: Session) -> list[Washroom]:
        """Washrooms with an alert email whose alerts are off or unset"""
        return (
            db.query(Washroom)
            .filter(
                Washroom.alert_email.isnot(None),
                Washroom.alert_email != "",
                or_(Washroom.alert_enabled.is_(None), Washroom.alert_enabled.is_(False)),
            )
            .all()
        )

    @staticmethod
    def enable_alerts(db: Session, washroom_ids: list[str]) -> int:
        if not washroom_ids:
            return 0
        updated = (
            db.query(Washroom)
            .filter(Washroom.id.in_(washroom_ids))
            .update({Washroom.alert_enabled: True}, synchronize_session=False)
        )
        db.commit()
        return updated
