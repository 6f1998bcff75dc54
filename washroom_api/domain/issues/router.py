"""Reported issue router"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_business
from ...database import get_db
from ...models import Business
from ...rate_limiter import create_rate_limiter
from .catalogue import ISSUE_TYPES
from .schemas import IssueReport, IssueReportResponse, IssueResponse, IssueTypeResponse
from .service import IssueService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/issues", tags=["Reported Issues"])

report_rate_limit = create_rate_limiter(limit=5, window_seconds=600, key_prefix="issue_report")


def get_issue_service(db: Session = Depends(get_db)) -> IssueService:
    """Dependency injection for IssueService"""
    return IssueService(db)


@router.post("", response_model=IssueReportResponse, status_code=201)
async def report_issue(
    data: IssueReport,
    service: IssueService = Depends(get_issue_service),
    _: None = Depends(report_rate_limit),
):
    """Public endpoint: anyone who scans the washroom QR code may report"""
    issue, email_sent = await service.report(data)
    return IssueReportResponse(issue=IssueResponse.model_validate(issue), email_sent=email_sent)


@router.get("/types", response_model=list[IssueTypeResponse])
async def get_issue_types():
    return ISSUE_TYPES


@router.get("/open", response_model=list[IssueResponse])
async def list_open_issues(
    current_business: Business = Depends(get_current_business),
    service: IssueService = Depends(get_issue_service),
):
    return service.list_open(current_business)


@router.get("/business/{business_name}", response_model=list[IssueResponse])
async def list_business_issues(
    business_name: str,
    current_business: Business = Depends(get_current_business),
    service: IssueService = Depends(get_issue_service),
):
    return service.list_for_business(business_name, current_business)


@router.post("/{issue_id}/resolve", response_model=IssueResponse)
async def resolve_issue(
    issue_id: str,
    current_business: Business = Depends(get_current_business),
    service: IssueService = Depends(get_issue_service),
):
    return service.resolve(issue_id, current_business)
