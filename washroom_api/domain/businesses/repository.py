"""Business repository - Database operations for businesses"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Business


class BusinessRepository:
    """Repository for business database operations"""

    @staticmethod
    def get_by_name(db: Session, name: str) -> Optional[Business]:
        return db.query(Business).filter(Business.name == name).first()

    @staticmethod
    def get_by_email(db: Session, email: str) -> Optional[Business]:
        return db.query(Business).filter(Business.email == email.strip().lower()).first()

    @staticmethod
    def list_all(db: Session) -> list[Business]:
        return db.query(Business).order_by(Business.name.asc()).all()

    @staticmethod
    def create(db: Session, **business_data) -> Business:
        business = Business(**business_data)
        db.add(business)
        db.commit()
        db.refresh(business)
        return business

    @staticmethod
    def update(db: Session, business: Business, **updates) -> Business:
        for key, value in updates.items():
            if hasattr(business, key):
                setattr(business, key, value)
        db.commit()
        db.refresh(business)
        return business
