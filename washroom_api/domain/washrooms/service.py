"""Washroom service - Business logic for washroom operations"""

import base64
import io
import logging
import secrets
from typing import Optional

import qrcode
from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...config import APP_URL
from ...models import Business, Washroom
from ...utils.timezone import utcnow
from .repository import WashroomRepository
from .schemas import AlertSettingsUpdate, WashroomCreate

logger = logging.getLogger(__name__)


class WashroomService:
    """Service layer for washroom business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = WashroomRepository()

    def get_washroom(self, washroom_id: str) -> Washroom:
        """Get an active washroom"""
        washroom = self.repo.get_by_id(self.db, washroom_id)
        if not washroom:
            raise HTTPException(status_code=404, detail="Washroom not found")
        return washroom

    def get_owned_washroom(self, washroom_id: str, business: Business) -> Washroom:
        """Get a washroom the business may manage (admins manage all)"""
        washroom = self.get_washroom(washroom_id)
        if not business.is_admin and washroom.business_name != business.name:
            raise HTTPException(status_code=404, detail="Washroom not found")
        return washroom

    def list_washrooms(self, business_name: Optional[str] = None) -> list[Washroom]:
        return self.repo.list_active(self.db, business_name)

    def create_washroom(self, data: WashroomCreate, business: Business) -> Washroom:
        washroom_id = data.id or secrets.token_hex(6)
        if self.repo.get_by_id(self.db, washroom_id, active_only=False):
            raise HTTPException(status_code=409, detail="A washroom with this ID already exists")

        logger.info(f"📥 Creating washroom {data.room_name} for business {business.name}")
        return self.repo.create(
            self.db,
            id=washroom_id,
            business_name=business.name,
            room_name=data.room_name.strip(),
            pin_code=data.pin_code,
            alert_email=data.alert_email,
            # A location created with an alert address starts receiving alerts
            alert_enabled=bool(data.alert_email),
        )

    def delete_washroom(self, washroom_id: str, business: Business) -> dict:
        washroom = self.get_owned_washroom(washroom_id, business)
        # Soft delete: logs and issues keep pointing at the row
        self.repo.update(self.db, washroom, is_active=False)
        logger.info(f"🗑️ Washroom deactivated: {washroom_id}")
        return {"message": "Washroom deleted"}

    def verify_pin(self, washroom_id: str, pin: str) -> bool:
        """Unknown or inactive washrooms simply fail verification"""
        washroom = self.repo.get_by_id(self.db, washroom_id)
        if not washroom:
            return False
        valid = secrets.compare_digest(washroom.pin_code.encode(), (pin or "").strip().encode())
        logger.info(f"Washroom PIN verification for {washroom_id}: {valid}")
        return valid

    def mark_cleaned(self, washroom_id: str) -> Washroom:
        washroom = self.get_washroom(washroom_id)
        self.repo.set_last_cleaned(self.db, washroom.id, utcnow())
        self.db.refresh(washroom)
        return washroom

    def update_alert_settings(
        self, washroom_id: str, data: AlertSettingsUpdate, business: Business
    ) -> Washroom:
        washroom = self.get_owned_washroom(washroom_id, business)

        updates = data.model_dump(exclude_unset=True)
        if "alert_email" in updates:
            email = updates["alert_email"] or None
            washroom.alert_email = email
            # Setting an address turns alerts on unless the caller says otherwise
            if email and "alert_enabled" not in updates:
                updates["alert_enabled"] = True
            updates.pop("alert_email")

        start = updates.get("business_hours_start", washroom.business_hours_start)
        end = updates.get("business_hours_end", washroom.business_hours_end)
        if start and end and start > end:
            raise HTTPException(
                status_code=400, detail="Business hours start must not be after the end"
            )

        logger.info(f"🔔 Updating alert settings for {washroom.display_name}: {sorted(updates)}")
        return self.repo.update(self.db, washroom, **updates)

    def scan_url(self, washroom: Washroom) -> str:
        return f"{APP_URL}/washroom/{washroom.id}?scan=true"

    def qr_code(self, washroom_id: str, business: Business) -> dict:
        """PNG QR code (data URI) pointing staff and visitors at the washroom page"""
        washroom = self.get_owned_washroom(washroom_id, business)
        url = self.scan_url(washroom)

        qr = qrcode.QRCode(version=1, box_size=10, border=5)
        qr.add_data(url)
        qr.make(fit=True)

        img = qr.make_image(fill_color="black", back_color="white")
        buffer = io.BytesIO()
        img.save(buffer, format="PNG")
        qr_code_base64 = base64.b64encode(buffer.getvalue()).decode()

        return {"url": url, "qr_code": f"data:image/png;base64,{qr_code_base64}"}
