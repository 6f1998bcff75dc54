"""
MJML Email Templates
Overdue, attention-required and issue-report notifications, bilingual EN/FR headings
"""

from typing import Optional

from .utils.sanitization import sanitize_string

# Slate/gold brand colors with amber for warnings
THEME = {
    "primary": "#059669",
    "header_bg": "#0f172a",
    "accent": "#d4af37",
    "background": "#f8fafc",
    "card_bg": "#ffffff",
    "text_primary": "#0f172a",
    "text_secondary": "#334155",
    "text_muted": "#64748b",
    "border": "#e2e8f0",
    "warning_bg": "#fef3c7",
    "warning_text": "#92400e",
    "danger": "#dc2626",
}

BRAND_NAME = "ACADIA CLEAN"


def get_base_template(
    title: str,
    preview_text: str,
    content_sections: str,
    cta_url: Optional[str] = None,
    cta_label: Optional[str] = None,
    footer_note: Optional[str] = None,
) -> str:
    """Base MJML template wrapper for all emails"""

    cta_section = ""
    if cta_url and cta_label:
        cta_section = f"""
        <mj-section background-color="#ffffff" padding="0 40px 32px 40px">
          <mj-column>
            <mj-button
              href="{cta_url}"
              background-color="{THEME['primary']}"
              color="#ffffff"
              font-weight="700"
              border-radius="12px"
              padding="18px 40px"
              font-size="18px">
              {cta_label}
            </mj-button>
          </mj-column>
        </mj-section>
        """

    footer_extra = ""
    if footer_note:
        footer_extra = f"""
            <mj-text align="center" font-size="11px" color="#94a3b8" padding="8px 0 0 0">
              {footer_note}
            </mj-text>
        """

    return f"""
    <mjml>
      <mj-head>
        <mj-title>{title}</mj-title>
        <mj-preview>{preview_text}</mj-preview>
        <mj-attributes>
          <mj-all font-family="-apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, 'Helvetica Neue', Arial, sans-serif" />
          <mj-text font-size="16px" line-height="1.6" color="{THEME['text_secondary']}" />
        </mj-attributes>
      </mj-head>
      <mj-body background-color="{THEME['background']}">
        <mj-section background-color="{THEME['header_bg']}" padding="32px 20px">
          <mj-column>
            <mj-text align="center" font-size="28px" font-weight="700" color="#ffffff" padding="0">
              {BRAND_NAME}
            </mj-text>
            <mj-divider border-color="{THEME['accent']}" border-width="4px" width="60px" padding="16px 0 0 0" />
          </mj-column>
        </mj-section>

        {content_sections}

        {cta_section}

        <mj-section background-color="{THEME['background']}" padding="24px 32px">
          <mj-column>
            <mj-text align="center" font-size="12px" color="{THEME['text_muted']}" padding="0">
              This is an automated alert from Acadia Clean
            </mj-text>
            {footer_extra}
          </mj-column>
        </mj-section>
      </mj-body>
    </mjml>
    """


def _banner(heading_en: str, heading_fr: str) -> str:
    return f"""
        <mj-section background-color="{THEME['warning_bg']}" padding="20px 32px" border-bottom="3px solid #f59e0b">
          <mj-column>
            <mj-text font-size="20px" font-weight="700" color="{THEME['warning_text']}" padding="0">
              ⚠️ {heading_en}
            </mj-text>
            <mj-text font-size="14px" color="#b45309" padding="4px 0 0 0">
              {heading_fr}
            </mj-text>
          </mj-column>
        </mj-section>
    """


def _field(label: str, value: str, size: str = "18px", color: Optional[str] = None) -> str:
    return f"""
            <mj-text font-size="12px" color="{THEME['text_muted']}" text-transform="uppercase" letter-spacing="1px" padding="0 0 4px 0">
              {label}
            </mj-text>
            <mj-text font-size="{size}" font-weight="700" color="{color or THEME['text_primary']}" padding="0 0 16px 0">
              {value}
            </mj-text>
    """


def overdue_alert_template(
    business_name: str,
    room_name: str,
    last_cleaned: str,
    hours_overdue: int,
    alert_date: str,
    alert_time: str,
    threshold_hours: int,
    dashboard_url: str,
) -> str:
    """Overdue cleaning alert sent by the scheduled check"""
    content = f"""
        {_banner("Cleaning Overdue", "Nettoyage en retard")}
        <mj-section background-color="#ffffff" padding="32px 32px 8px 32px">
          <mj-column>
            {_field("Business / Entreprise", sanitize_string(business_name))}
            {_field("Location / Emplacement", sanitize_string(room_name), size="20px")}
            {_field("Last Cleaned / Dernier nettoyage", last_cleaned, size="16px", color="#78350f")}
            {_field("Hours Overdue / Heures de retard", f"{hours_overdue}+ hours", size="24px", color=THEME['danger'])}
            {_field("Alert Sent / Alerte envoyée", f"{alert_date} at {alert_time}", size="16px")}
          </mj-column>
        </mj-section>
    """

    return get_base_template(
        title="Cleaning Overdue Alert",
        preview_text=f"{sanitize_string(room_name)} is overdue for cleaning",
        content_sections=content,
        cta_url=dashboard_url,
        cta_label="Login to Dashboard",
        footer_note=f"Threshold: {threshold_hours} hours",
    )


def attention_required_template(
    location_name: str,
    location_id: str,
    staff_name: str,
    notes: str,
    unchecked_items: list[str],
    log_date: str,
    log_time: str,
    dashboard_url: str,
) -> str:
    """Sent when a staff checklist is submitted with unchecked items"""
    items_html = "<br/>".join(f"• {sanitize_string(item)}" for item in unchecked_items) or "None"

    content = f"""
        {_banner("Attention Required", "Attention requise")}
        <mj-section background-color="#ffffff" padding="32px 32px 8px 32px">
          <mj-column>
            {_field("Location / Emplacement", sanitize_string(location_name), size="20px")}
            {_field("Location ID", sanitize_string(location_id), size="14px")}
            {_field("Staff / Personnel", sanitize_string(staff_name), size="16px")}
            {_field("Date", f"{log_date} at {log_time}", size="16px")}
            <mj-text font-size="12px" color="{THEME['text_muted']}" text-transform="uppercase" letter-spacing="1px" padding="0 0 4px 0">
              Unchecked Items / Éléments non cochés
            </mj-text>
            <mj-text color="#d97706" padding="0 0 16px 0">
              {items_html}
            </mj-text>
            {_field("Maintenance Notes / Notes d'entretien", sanitize_string(notes) or "No notes provided", size="14px")}
          </mj-column>
        </mj-section>
    """

    return get_base_template(
        title="Attention Required",
        preview_text=f"Attention required at {sanitize_string(location_name)}",
        content_sections=content,
        cta_url=dashboard_url,
        cta_label="Resolve in Dashboard",
        footer_note="NB Department of Health Compliance System",
    )


def attention_required_text(
    location_name: str,
    location_id: str,
    staff_name: str,
    notes: str,
    unchecked_items: list[str],
    log_date: str,
    log_time: str,
    dashboard_url: str,
) -> str:
    """Plain-text alternative for the attention-required email"""
    items = "\n".join(f"- {item}" for item in unchecked_items)
    return (
        "ACADIA CLEAN - ATTENTION REQUIRED\n"
        "=================================\n\n"
        f"Location: {location_name}\n"
        f"Location ID: {location_id}\n"
        f"Staff: {staff_name}\n"
        f"Date: {log_date}\n"
        f"Time: {log_time}\n\n"
        f"UNCHECKED ITEMS:\n{items}\n\n"
        f"MAINTENANCE NOTES:\n{notes or 'No notes provided'}\n\n"
        "---\n"
        f"TO RESOLVE THIS ISSUE:\nOpen this link in your browser:\n{dashboard_url}"
    )


def issue_report_template(
    location_name: str,
    issue_label: str,
    comment: str,
    report_date: str,
    report_time: str,
    dashboard_url: str,
) -> str:
    """Urgent issue reported by a washroom visitor"""
    content = f"""
        {_banner("Urgent Issue Reported", "Problème urgent signalé")}
        <mj-section background-color="#ffffff" padding="32px 32px 8px 32px">
          <mj-column>
            {_field("Location / Emplacement", sanitize_string(location_name), size="20px")}
            {_field("Issue Type / Type de problème", sanitize_string(issue_label), color=THEME['danger'])}
            {_field("Comment / Commentaire", sanitize_string(comment) or "No comment provided", size="14px")}
            {_field("Reported / Signalé", f"{report_date} at {report_time}", size="16px")}
          </mj-column>
        </mj-section>
    """

    return get_base_template(
        title="Urgent Issue Reported",
        preview_text=f"Issue reported at {sanitize_string(location_name)}",
        content_sections=content,
        cta_url=dashboard_url,
        cta_label="View in Dashboard",
    )


def diagnostic_template(sent_time: str) -> str:
    """Delivery test email"""
    content = f"""
        <mj-section background-color="#ffffff" padding="32px">
          <mj-column>
            <mj-text font-size="20px" font-weight="700" color="{THEME['text_primary']}">
              Email Delivery Test
            </mj-text>
            <mj-text>
              If you received this email, your email integration is working correctly.
            </mj-text>
            <mj-text color="{THEME['text_muted']}" font-size="14px">
              Sent at {sent_time}
            </mj-text>
          </mj-column>
        </mj-section>
    """

    return get_base_template(
        title="Email Delivery Test",
        preview_text="Email delivery test",
        content_sections=content,
    )
