"""Washroom router - FastAPI endpoints for washroom operations"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_business
from ...database import get_db
from ...models import Business
from ...rate_limiter import create_rate_limiter
from .schemas import (
    AlertSettingsUpdate,
    PinVerification,
    PinVerificationResponse,
    PublicWashroomResponse,
    QRCodeResponse,
    WashroomCreate,
    WashroomResponse,
)
from .service import WashroomService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/washrooms", tags=["Washrooms"])

# 4-digit PINs are cheap to enumerate
pin_rate_limit = create_rate_limiter(limit=10, window_seconds=300, key_prefix="washroom_pin")


def get_washroom_service(db: Session = Depends(get_db)) -> WashroomService:
    """Dependency injection for WashroomService"""
    return WashroomService(db)


@router.get("", response_model=list[WashroomResponse])
async def list_washrooms(
    business_name: Optional[str] = Query(None),
    current_business: Business = Depends(get_current_business),
    service: WashroomService = Depends(get_washroom_service),
):
    """Active washrooms; non-admin businesses only see their own"""
    if not current_business.is_admin:
        business_name = current_business.name
    return service.list_washrooms(business_name)


@router.post("", response_model=WashroomResponse, status_code=201)
async def create_washroom(
    data: WashroomCreate,
    current_business: Business = Depends(get_current_business),
    service: WashroomService = Depends(get_washroom_service),
):
    return service.create_washroom(data, current_business)


@router.get("/{washroom_id}", response_model=PublicWashroomResponse)
async def get_washroom(
    washroom_id: str,
    service: WashroomService = Depends(get_washroom_service),
):
    """Public lookup used by the QR-code scan page"""
    return service.get_washroom(washroom_id)


@router.delete("/{washroom_id}")
async def delete_washroom(
    washroom_id: str,
    current_business: Business = Depends(get_current_business),
    service: WashroomService = Depends(get_washroom_service),
):
    return service.delete_washroom(washroom_id, current_business)


@router.post("/{washroom_id}/verify-pin", response_model=PinVerificationResponse)
async def verify_washroom_pin(
    washroom_id: str,
    data: PinVerification,
    service: WashroomService = Depends(get_washroom_service),
    _: None = Depends(pin_rate_limit),
):
    return PinVerificationResponse(valid=service.verify_pin(washroom_id, data.pin))


@router.post("/{washroom_id}/mark-cleaned", response_model=WashroomResponse)
async def mark_washroom_cleaned(
    washroom_id: str,
    current_business: Business = Depends(get_current_business),
    service: WashroomService = Depends(get_washroom_service),
):
    """Manager override: record a cleaning without a checklist"""
    service.get_owned_washroom(washroom_id, current_business)
    return service.mark_cleaned(washroom_id)


@router.patch("/{washroom_id}/alerts", response_model=WashroomResponse)
async def update_alert_settings(
    washroom_id: str,
    data: AlertSettingsUpdate,
    current_business: Business = Depends(get_current_business),
    service: WashroomService = Depends(get_washroom_service),
):
    return service.update_alert_settings(washroom_id, data, current_business)


@router.get("/{washroom_id}/qr-code", response_model=QRCodeResponse)
async def get_washroom_qr_code(
    washroom_id: str,
    current_business: Business = Depends(get_current_business),
    service: WashroomService = Depends(get_washroom_service),
):
    """QR code to print and post at the washroom"""
    return service.qr_code(washroom_id, current_business)
