"""
Scheduler-facing endpoints
The hosting platform's cron hits /api/check-overdue every 30 minutes.
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..auth import is_authorized_cron_request
from ..config import DATABASE_URL
from ..database import get_db
from ..domain.washrooms.repository import WashroomRepository
from ..email_service import is_email_configured
from ..services.overdue_service import run_overdue_check

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Cron"])


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.api_route("/check-overdue", methods=["GET", "POST"])
async def check_overdue(request: Request, db: Session = Depends(get_db)):
    """Evaluate every alert-enabled washroom and email the overdue ones"""
    logger.info("Check overdue triggered")

    if not is_authorized_cron_request(request):
        logger.warning("⚠️ Unauthorized check-overdue request")
        return _error(401, "Unauthorized")

    if not DATABASE_URL:
        logger.error("❌ DATABASE_URL not configured")
        return _error(500, "Database not configured")

    if not is_email_configured():
        logger.error("❌ RESEND_API_KEY not configured")
        return _error(500, "Email service not configured")

    try:
        return await run_overdue_check(db)
    except SQLAlchemyError as e:
        logger.error(f"❌ Database error during overdue check: {e}")
        db.rollback()
        return _error(500, "Database error")
    except Exception as e:
        logger.error(f"❌ Overdue check failed: {e}")
        return _error(500, "Internal server error")


@router.get("/fix-alert-enabled")
async def fix_alert_enabled(request: Request, db: Session = Depends(get_db)):
    """Turn alerts on for washrooms that have an alert email but alerts off or unset"""
    if not is_authorized_cron_request(request):
        return _error(401, "Unauthorized")

    try:
        washrooms = WashroomRepository.get_missing_alert_flag(db)
        if not washrooms:
            return {"message": "No washrooms need fixing", "fixed": 0, "washrooms": []}

        fixed_list = [
            {
                "id": w.id,
                "name": w.room_name,
                "business": w.business_name,
                "email": w.alert_email,
            }
            for w in washrooms
        ]
        fixed = WashroomRepository.enable_alerts(db, [w.id for w in washrooms])
    except SQLAlchemyError as e:
        logger.error(f"❌ Database error while fixing alert flags: {e}")
        db.rollback()
        return _error(500, "Database error")

    logger.info(f"✅ Enabled alerts for {fixed} washrooms")
    return {
        "message": f"Successfully enabled alerts for {fixed} washrooms",
        "fixed": fixed,
        "washrooms": fixed_list,
    }
