"""
Email Service using Resend
Compiles MJML templates to HTML and sends overdue, attention-required and issue-report notifications
"""

import logging
from datetime import datetime
from typing import Optional, Union

import resend
from mjml import mjml_to_html

from .config import APP_URL, EMAIL_FROM_ADDRESS, RESEND_API_KEY
from .email_templates import (
    attention_required_template,
    attention_required_text,
    diagnostic_template,
    issue_report_template,
    overdue_alert_template,
)
from .utils.timezone import format_datetime, format_long_date, format_time, utcnow

logger = logging.getLogger(__name__)


class EmailServiceError(Exception):
    """Raised when an email could not be handed to the provider"""

    pass


class EmailNotConfiguredError(EmailServiceError):
    """Raised when no API key is configured"""

    pass


def is_email_configured() -> bool:
    return bool(RESEND_API_KEY)


def compile_mjml_to_html(mjml_content: str) -> str:
    """MJML markup to email-client-safe HTML; template warnings are logged, not fatal"""
    try:
        result = mjml_to_html(mjml_content)
    except Exception as e:
        logger.error(f"❌ MJML could not compile the template: {e}")
        raise EmailServiceError(f"Could not render email template: {e}") from e

    # dict-like result with html and errors
    if not isinstance(result, dict):
        return str(result)
    if result.get("errors"):
        logger.warning(f"⚠️ MJML template warnings: {result['errors']}")
    return result.get("html", "")


def send_html_email(
    to: Union[str, list[str]],
    subject: str,
    html_content: str,
    text_content: Optional[str] = None,
    from_address: Optional[str] = None,
) -> dict:
    """
    Send pre-rendered HTML through Resend.

    Returns:
        Provider response dict (contains the message "id")

    Raises:
        EmailNotConfiguredError: RESEND_API_KEY missing
        EmailServiceError: provider rejected the message or was unreachable
    """
    if not is_email_configured():
        logger.error("❌ No email service configured - RESEND_API_KEY missing")
        raise EmailNotConfiguredError("Email service not configured")

    recipients = [to] if isinstance(to, str) else list(to)
    sender = from_address or EMAIL_FROM_ADDRESS

    email_data = {
        "from": sender,
        "to": recipients,
        "subject": subject,
        "html": html_content,
    }
    if text_content:
        email_data["text"] = text_content

    try:
        resend.api_key = RESEND_API_KEY
        logger.info(f"📧 Sending email via Resend to: {recipients}")
        response = resend.Emails.send(email_data)
        logger.info(f"✅ Email sent successfully via Resend: {response}")
        return response
    except Exception as e:
        logger.error(f"❌ Email send error to {recipients}: {e}")
        raise EmailServiceError(f"Failed to send email: {str(e)}") from e


async def send_email(
    to: Union[str, list[str]],
    subject: str,
    mjml_content: str,
    text_content: Optional[str] = None,
) -> dict:
    """Compile an MJML template and send it"""
    html_content = compile_mjml_to_html(mjml_content)
    return send_html_email(to, subject, html_content, text_content=text_content)


# ============================================
# Notification emails
# ============================================


async def send_overdue_alert_email(
    to: list[str],
    business_name: str,
    room_name: str,
    last_cleaned: Optional[datetime],
    hours_overdue: int,
    threshold_hours: int,
    tz_name: str,
    now: Optional[datetime] = None,
) -> dict:
    """Overdue cleaning alert; all times rendered in the washroom's timezone"""
    now = now or utcnow()
    mjml_content = overdue_alert_template(
        business_name=business_name,
        room_name=room_name,
        last_cleaned=format_datetime(last_cleaned, tz_name) if last_cleaned else "Never",
        hours_overdue=hours_overdue,
        alert_date=format_long_date(now, tz_name),
        alert_time=format_time(now, tz_name),
        threshold_hours=threshold_hours,
        dashboard_url=f"{APP_URL}/manager",
    )
    return await send_email(
        to=to,
        subject=f"⚠️ Cleaning Overdue: {room_name} - {business_name}",
        mjml_content=mjml_content,
    )


async def send_attention_required_email(
    to: Union[str, list[str]],
    location_name: str,
    location_id: str,
    staff_name: str,
    notes: str,
    unchecked_items: list[str],
    logged_at: datetime,
    tz_name: str,
) -> dict:
    """Checklist submitted with unchecked items"""
    params = {
        "location_name": location_name,
        "location_id": location_id,
        "staff_name": staff_name,
        "notes": notes,
        "unchecked_items": unchecked_items,
        "log_date": format_long_date(logged_at, tz_name),
        "log_time": format_time(logged_at, tz_name),
        "dashboard_url": f"{APP_URL}/manager",
    }
    return await send_email(
        to=to,
        subject=f"[Acadia Clean] Attention Required - {location_name}",
        mjml_content=attention_required_template(**params),
        text_content=attention_required_text(**params),
    )


async def send_issue_report_email(
    to: Union[str, list[str]],
    location_name: str,
    issue_label: str,
    comment: str,
    reported_at: datetime,
    tz_name: str,
    issue_id: Optional[str] = None,
) -> dict:
    """Urgent visitor-reported issue; the dashboard link deep-links to the issue"""
    dashboard_url = f"{APP_URL}/manager?issueId={issue_id}" if issue_id else f"{APP_URL}/manager"
    mjml_content = issue_report_template(
        location_name=location_name,
        issue_label=issue_label,
        comment=comment,
        report_date=format_long_date(reported_at, tz_name),
        report_time=format_time(reported_at, tz_name),
        dashboard_url=dashboard_url,
    )
    text_content = (
        f"URGENT: Issue Reported at {location_name}\n\n"
        f"Issue Type: {issue_label}\n"
        f"Comment: {comment or 'No comment provided'}\n\n"
        "Please address this immediately."
    )
    return await send_email(
        to=to,
        subject=f"URGENT: Issue Reported at {location_name} - {issue_label}",
        mjml_content=mjml_content,
        text_content=text_content,
    )


async def send_diagnostic_email(to: str, tz_name: str) -> dict:
    """Delivery test"""
    mjml_content = diagnostic_template(format_datetime(utcnow(), tz_name))
    return await send_email(
        to=to,
        subject="[Acadia Clean] Email Delivery Test",
        mjml_content=mjml_content,
    )
