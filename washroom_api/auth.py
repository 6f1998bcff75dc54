import logging

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from .config import CRON_SECRET
from .database import get_db
from .models import Business
from .security_utils import constant_time_compare, verify_session_token

logger = logging.getLogger(__name__)

security = HTTPBearer()

MISSING_TOKEN_DETAIL = "Sign in first: send the session token as a Bearer Authorization header."

# Header set by the hosting platform's cron scheduler
PLATFORM_CRON_HEADER = "x-vercel-cron"


async def get_current_business(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db),
) -> Business:
    """Resolve the business behind a session token issued at login"""
    if not credentials:
        raise HTTPException(
            status_code=401,
            detail=MISSING_TOKEN_DETAIL,
        )

    payload = verify_session_token(credentials.credentials)
    if not payload or "business_id" not in payload:
        raise HTTPException(status_code=401, detail="Invalid or expired session")

    business = db.query(Business).filter(Business.id == payload["business_id"]).first()
    if not business:
        logger.warning(f"⚠️ Session for unknown business {payload['business_id']}")
        raise HTTPException(status_code=401, detail="Invalid or expired session")

    return business


async def require_admin(business: Business = Depends(get_current_business)) -> Business:
    if not business.is_admin:
        logger.warning(f"⚠️ Business {business.name} attempted an admin-only action")
        raise HTTPException(status_code=403, detail="Admin access required")
    return business


def is_authorized_cron_request(request: Request) -> bool:
    """
    Allow the platform scheduler (cron header) or a caller presenting
    `Authorization: Bearer <CRON_SECRET>`.
    """
    if request.headers.get(PLATFORM_CRON_HEADER) == "1":
        logger.info("Cron auth method: platform scheduler")
        return True

    if not CRON_SECRET:
        return False

    auth_header = request.headers.get("authorization", "")
    if constant_time_compare(auth_header, f"Bearer {CRON_SECRET}"):
        logger.info("Cron auth method: Bearer token")
        return True

    return False
