"""Business router - Accounts and business-wide alert settings"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_business, require_admin
from ...database import get_db
from ...models import Business
from ...rate_limiter import create_rate_limiter
from .schemas import (
    BusinessCreate,
    BusinessResponse,
    GlobalAlertsUpdate,
    LoginRequest,
    LoginResponse,
)
from .service import BusinessService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/businesses", tags=["Businesses"])

login_rate_limit = create_rate_limiter(limit=10, window_seconds=900, key_prefix="business_login")


def get_business_service(db: Session = Depends(get_db)) -> BusinessService:
    """Dependency injection for BusinessService"""
    return BusinessService(db)


@router.post("/login", response_model=LoginResponse)
async def login(
    data: LoginRequest,
    service: BusinessService = Depends(get_business_service),
    _: None = Depends(login_rate_limit),
):
    token, business = service.login(data.email, data.password)
    return LoginResponse(token=token, business=BusinessResponse.model_validate(business))


@router.get("/me", response_model=BusinessResponse)
async def get_me(current_business: Business = Depends(get_current_business)):
    return current_business


@router.put("/me/global-alerts", response_model=BusinessResponse)
async def update_global_alerts(
    data: GlobalAlertsUpdate,
    current_business: Business = Depends(get_current_business),
    service: BusinessService = Depends(get_business_service),
):
    return service.update_global_alerts(current_business, data)


@router.get("", response_model=list[BusinessResponse])
async def list_businesses(
    _admin: Business = Depends(require_admin),
    service: BusinessService = Depends(get_business_service),
):
    return service.list_businesses()


@router.post("", response_model=BusinessResponse, status_code=201)
async def register_business(
    data: BusinessCreate,
    _admin: Business = Depends(require_admin),
    service: BusinessService = Depends(get_business_service),
):
    return service.register(data)
