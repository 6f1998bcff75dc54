"""Tests for the email proxy, the Resend wrapper and the templates."""

from datetime import datetime
from unittest.mock import AsyncMock, patch

import pytest

from washroom_api import email_service
from washroom_api.email_templates import issue_report_template, overdue_alert_template

RESEND_SEND = "washroom_api.email_service.resend.Emails.send"


# ---------------------------------------------------------------------------
# POST /api/send-email
# ---------------------------------------------------------------------------


def test_send_email_requires_api_key(client):
    with patch("washroom_api.email_service.RESEND_API_KEY", None):
        response = client.post("/api/send-email", json={"to": "a@b.test", "subject": "Hi", "html": "<p>x</p>"})

    assert response.status_code == 500
    assert response.json() == {"error": "Email service not configured"}


@pytest.mark.parametrize(
    "payload",
    [
        {"subject": "Hi", "html": "<p>x</p>"},
        {"to": "a@b.test", "html": "<p>x</p>"},
        {"to": "a@b.test", "subject": "Hi"},
        {"to": [], "subject": "Hi", "html": "<p>x</p>"},
    ],
)
def test_send_email_missing_fields(client, payload):
    with patch("washroom_api.email_service.RESEND_API_KEY", "re_test"):
        response = client.post("/api/send-email", json=payload)

    assert response.status_code == 400
    assert response.json() == {"error": "Missing required fields: to, subject, html"}


def test_send_email_success(client):
    with patch("washroom_api.email_service.RESEND_API_KEY", "re_test"), patch(
        RESEND_SEND, return_value={"id": "msg_123"}
    ) as mock_send:
        response = client.post(
            "/api/send-email",
            json={"to": "a@b.test", "subject": "Hi", "html": "<p>x</p>", "text": "x"},
        )

    assert response.status_code == 200
    assert response.json() == {"success": True, "id": "msg_123"}

    payload = mock_send.call_args.args[0]
    assert payload["to"] == ["a@b.test"]
    assert payload["from"] == "Acadia Clean <alerts@acadiacleaniq.ca>"
    assert payload["text"] == "x"


def test_send_email_provider_failure(client):
    with patch("washroom_api.email_service.RESEND_API_KEY", "re_test"), patch(
        RESEND_SEND, side_effect=Exception("domain not verified")
    ):
        response = client.post("/api/send-email", json={"to": ["a@b.test"], "subject": "Hi", "html": "<p>x</p>"})

    assert response.status_code == 502
    assert "domain not verified" in response.json()["error"]


def test_diagnostic_email_is_admin_only(client, business_headers):
    response = client.post("/api/send-email/test", headers=business_headers)
    assert response.status_code == 403


def test_diagnostic_email_sent_to_admin(client, admin, admin_headers):
    with patch(
        "washroom_api.routes.email.send_diagnostic_email",
        new_callable=AsyncMock,
        return_value={"id": "msg_diag"},
    ) as mock_send:
        response = client.post("/api/send-email/test", headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == {"success": True, "id": "msg_diag", "to": "admin@acadia.test"}
    assert mock_send.await_args.args[0] == "admin@acadia.test"


# ---------------------------------------------------------------------------
# Resend wrapper
# ---------------------------------------------------------------------------


def test_send_html_email_without_key_raises():
    with patch("washroom_api.email_service.RESEND_API_KEY", None):
        with pytest.raises(email_service.EmailNotConfiguredError):
            email_service.send_html_email("a@b.test", "Hi", "<p>x</p>")


def test_send_html_email_wraps_provider_errors():
    with patch("washroom_api.email_service.RESEND_API_KEY", "re_test"), patch(
        RESEND_SEND, side_effect=RuntimeError("timeout")
    ):
        with pytest.raises(email_service.EmailServiceError, match="timeout"):
            email_service.send_html_email(["a@b.test", "c@d.test"], "Hi", "<p>x</p>")


async def test_overdue_alert_subject():
    with patch(
        "washroom_api.email_service.send_email", new_callable=AsyncMock, return_value={"id": "x"}
    ) as mock_send:
        await email_service.send_overdue_alert_email(
            to=["manager@acme.test"],
            business_name="Acme Foods",
            room_name="Main Floor",
            last_cleaned=None,
            hours_overdue=8,
            threshold_hours=8,
            tz_name="America/Moncton",
            now=datetime(2026, 1, 5, 14, 0),
        )

    kwargs = mock_send.await_args.kwargs
    assert kwargs["subject"] == "⚠️ Cleaning Overdue: Main Floor - Acme Foods"
    assert "Never" in kwargs["mjml_content"]
    assert "Monday, January 5, 2026 at 10:00 AM" in kwargs["mjml_content"]


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------


def test_overdue_template_escapes_names():
    mjml = overdue_alert_template(
        business_name="Bob's <b>Diner</b>",
        room_name="Men's Room",
        last_cleaned="Jan 5, 2026, 2:07 PM",
        hours_overdue=10,
        alert_date="Monday, January 5, 2026",
        alert_time="4:00 PM",
        threshold_hours=8,
        dashboard_url="https://app.acadiacleaniq.ca/manager",
    )

    assert "<b>Diner</b>" not in mjml
    assert "&lt;b&gt;Diner&lt;/b&gt;" in mjml
    assert "10+ hours" in mjml
    assert "Threshold: 8 hours" in mjml


def test_issue_template_without_comment():
    mjml = issue_report_template(
        location_name="Main Floor",
        issue_label="Needs Cleaning / Nécessite un nettoyage",
        comment="",
        report_date="Monday, January 5, 2026",
        report_time="10:00 AM",
        dashboard_url="https://app.acadiacleaniq.ca/manager?issueId=1",
    )

    assert "No comment provided" in mjml
    assert "issueId=1" in mjml
