"""
Email Routes - Server-side proxy so the provider key never reaches the browser
"""

import logging
from typing import Optional, Union

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..auth import require_admin
from ..config import DEFAULT_TIMEZONE
from ..email_service import (
    EmailNotConfiguredError,
    EmailServiceError,
    is_email_configured,
    send_diagnostic_email,
    send_html_email,
)
from ..models import Business
from ..rate_limiter import create_rate_limiter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Email"])

send_email_rate_limit = create_rate_limiter(limit=30, window_seconds=60, key_prefix="send_email")


class SendEmailRequest(BaseModel):
    to: Optional[Union[str, list[str]]] = None
    subject: Optional[str] = None
    html: Optional[str] = None
    text: Optional[str] = None


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post("/send-email")
async def send_email_proxy(
    data: SendEmailRequest,
    _: None = Depends(send_email_rate_limit),
):
    """Send pre-rendered HTML built by the client"""
    if not is_email_configured():
        logger.error("❌ RESEND_API_KEY not configured")
        return _error(500, "Email service not configured")

    logger.info(f"Send email request: to={data.to}, subject={(data.subject or '')[:50]}")

    if not data.to or not data.subject or not data.html:
        return _error(400, "Missing required fields: to, subject, html")

    try:
        response = send_html_email(data.to, data.subject, data.html, text_content=data.text)
    except EmailServiceError as e:
        return _error(502, str(e))

    email_id = response.get("id") if isinstance(response, dict) else getattr(response, "id", None)
    return {"success": True, "id": email_id}


@router.post("/send-email/test")
async def send_test_email(admin: Business = Depends(require_admin)):
    """Send a delivery test to the signed-in admin"""
    try:
        response = await send_diagnostic_email(admin.email, DEFAULT_TIMEZONE)
    except EmailNotConfiguredError:
        return _error(500, "Email service not configured")
    except EmailServiceError as e:
        return _error(502, str(e))

    email_id = response.get("id") if isinstance(response, dict) else getattr(response, "id", None)
    return {"success": True, "id": email_id, "to": admin.email}
