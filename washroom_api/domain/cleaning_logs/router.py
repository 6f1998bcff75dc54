"""Cleaning log router - FastAPI endpoints for checklist submissions"""

import logging
from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_business
from ...database import get_db
from ...models import Business
from ...rate_limiter import create_rate_limiter
from .checklist import checklist_by_section
from .schemas import (
    ChecklistSectionResponse,
    CleaningLogResponse,
    CleaningLogSubmit,
    CleaningLogSubmitResponse,
)
from .service import CleaningLogService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/logs", tags=["Cleaning Logs"])

# Submissions carry a PIN
submit_rate_limit = create_rate_limiter(limit=20, window_seconds=300, key_prefix="log_submit")


def get_cleaning_log_service(db: Session = Depends(get_db)) -> CleaningLogService:
    """Dependency injection for CleaningLogService"""
    return CleaningLogService(db)


@router.post("", response_model=CleaningLogSubmitResponse, status_code=201)
async def submit_cleaning_log(
    data: CleaningLogSubmit,
    service: CleaningLogService = Depends(get_cleaning_log_service),
    _: None = Depends(submit_rate_limit),
):
    log, missing, email_sent = await service.submit(data)
    return CleaningLogSubmitResponse(
        log=CleaningLogResponse.model_validate(log),
        unchecked_items=missing,
        email_sent=email_sent,
    )


@router.get("/checklist", response_model=list[ChecklistSectionResponse])
async def get_checklist():
    """Checklist sections and items shown on the staff form"""
    return checklist_by_section()


@router.get("", response_model=list[CleaningLogResponse])
async def list_all_logs(
    current_business: Business = Depends(get_current_business),
    service: CleaningLogService = Depends(get_cleaning_log_service),
):
    return service.list_all(current_business)


@router.get("/unresolved", response_model=list[CleaningLogResponse])
async def list_unresolved_logs(
    current_business: Business = Depends(get_current_business),
    service: CleaningLogService = Depends(get_cleaning_log_service),
):
    return service.list_unresolved(current_business)


@router.get("/range", response_model=list[CleaningLogResponse])
async def list_logs_in_range(
    start: date = Query(...),
    end: date = Query(...),
    current_business: Business = Depends(get_current_business),
    service: CleaningLogService = Depends(get_cleaning_log_service),
):
    return service.list_in_range(start, end, current_business)


@router.get("/business/{business_name}", response_model=list[CleaningLogResponse])
async def list_business_logs(
    business_name: str,
    current_business: Business = Depends(get_current_business),
    service: CleaningLogService = Depends(get_cleaning_log_service),
):
    return service.list_for_business(business_name, current_business)


@router.get("/location/{location_id}", response_model=list[CleaningLogResponse])
async def list_location_logs(
    location_id: str,
    current_business: Business = Depends(get_current_business),
    service: CleaningLogService = Depends(get_cleaning_log_service),
):
    return service.list_for_location(location_id, current_business)


@router.get("/location/{location_id}/recent", response_model=list[CleaningLogResponse])
async def list_recent_location_logs(
    location_id: str,
    current_business: Business = Depends(get_current_business),
    service: CleaningLogService = Depends(get_cleaning_log_service),
):
    return service.list_recent_for_location(location_id, current_business)


@router.delete("/location/{location_id}")
async def delete_location_logs(
    location_id: str,
    current_business: Business = Depends(get_current_business),
    service: CleaningLogService = Depends(get_cleaning_log_service),
):
    return service.delete_for_location(location_id, current_business)


@router.post("/{log_id}/resolve", response_model=CleaningLogResponse)
async def resolve_log(
    log_id: str,
    current_business: Business = Depends(get_current_business),
    service: CleaningLogService = Depends(get_cleaning_log_service),
):
    return service.resolve(log_id, current_business)
