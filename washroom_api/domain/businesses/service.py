"""Business service - Registration, login and alert recipients"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Business
from ...security_utils import (
    constant_time_compare,
    create_session_token,
    hash_password,
    is_bcrypt_hash,
    verify_password,
)
from .repository import BusinessRepository
from .schemas import BusinessCreate, GlobalAlertsUpdate

logger = logging.getLogger(__name__)


class BusinessService:
    """Service layer for business accounts"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = BusinessRepository()

    def register(self, data: BusinessCreate) -> Business:
        if self.repo.get_by_email(self.db, data.email):
            raise HTTPException(status_code=409, detail="A business with this email already exists")
        if self.repo.get_by_name(self.db, data.name.strip()):
            raise HTTPException(status_code=409, detail="A business with this name already exists")

        logger.info(f"📥 Registering business: {data.name}")
        return self.repo.create(
            self.db,
            name=data.name.strip(),
            email=data.email,
            password_hash=hash_password(data.password),
            is_admin=data.is_admin,
        )

    def authenticate(self, email: str, password: str) -> Business:
        """
        Check credentials. Accounts created before hashing was introduced hold the
        plain password; a successful login upgrades them to bcrypt.
        """
        business = self.repo.get_by_email(self.db, email)
        if not business:
            raise HTTPException(status_code=401, detail="Invalid email or password")

        if is_bcrypt_hash(business.password_hash):
            valid = verify_password(password, business.password_hash)
        else:
            valid = constant_time_compare(business.password_hash, password)
            if valid:
                logger.info(f"🔐 Upgrading legacy password storage for {business.name}")
                self.repo.update(self.db, business, password_hash=hash_password(password))

        if not valid:
            logger.warning(f"⚠️ Failed login for {email}")
            raise HTTPException(status_code=401, detail="Invalid email or password")

        return business

    def login(self, email: str, password: str) -> tuple[str, Business]:
        business = self.authenticate(email, password)
        token = create_session_token({"business_id": business.id})
        logger.info(f"✅ Login successful: {business.name}")
        return token, business

    def list_businesses(self) -> list[Business]:
        return self.repo.list_all(self.db)

    def update_global_alerts(self, business: Business, data: GlobalAlertsUpdate) -> Business:
        logger.info(
            f"🔔 Global alerts for {business.name}: use={data.use_global_alerts}, "
            f"{len(data.emails)} recipient(s)"
        )
        return self.repo.update(
            self.db,
            business,
            global_alert_emails=data.emails,
            use_global_alerts=data.use_global_alerts,
        )
