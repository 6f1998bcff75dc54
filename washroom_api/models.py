import uuid

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Integer,
    String,
    Text,
)
from sqlalchemy.sql import func

from .config import (
    DEFAULT_ALERT_DAYS,
    DEFAULT_BUSINESS_HOURS_END,
    DEFAULT_BUSINESS_HOURS_START,
    DEFAULT_THRESHOLD_HOURS,
    DEFAULT_TIMEZONE,
)
from .database import Base


def generate_id():
    """Generate a unique record ID"""
    return str(uuid.uuid4())


class Business(Base):
    __tablename__ = "businesses"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)  # Stored lower-case
    password_hash = Column(String(255), nullable=False)
    is_admin = Column(Boolean, default=False, nullable=False)
    # Business-wide recipients added to every location's overdue alerts
    global_alert_emails = Column(JSON, nullable=True)
    use_global_alerts = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, server_default=func.now())


class Washroom(Base):
    __tablename__ = "washrooms"

    id = Column(String(64), primary_key=True, default=generate_id)
    business_name = Column(String(255), index=True, nullable=False)
    room_name = Column(String(255), nullable=False)
    pin_code = Column(String(10), nullable=False)  # 4-digit staff PIN
    is_active = Column(Boolean, default=True, nullable=False)
    last_cleaned = Column(DateTime, nullable=True)  # UTC

    # Overdue alert settings
    alert_email = Column(String(255), nullable=True)
    alert_enabled = Column(Boolean, default=False, nullable=True)
    alert_threshold_hours = Column(Integer, default=DEFAULT_THRESHOLD_HOURS, nullable=True)
    business_hours_start = Column(String(5), default=DEFAULT_BUSINESS_HOURS_START, nullable=True)
    business_hours_end = Column(String(5), default=DEFAULT_BUSINESS_HOURS_END, nullable=True)
    alert_days = Column(JSON, default=lambda: list(DEFAULT_ALERT_DAYS), nullable=True)
    timezone = Column(String(64), default=DEFAULT_TIMEZONE, nullable=True)
    last_alert_sent_at = Column(DateTime, nullable=True)  # UTC

    created_at = Column(DateTime, server_default=func.now())

    @property
    def display_name(self) -> str:
        return f"{self.business_name} - {self.room_name}"


class CleaningLog(Base):
    __tablename__ = "cleaning_logs"

    id = Column(String(36), primary_key=True, default=generate_id)
    location_id = Column(String(64), index=True, nullable=False)  # Washroom ID
    location_name = Column(String(255), nullable=False)
    staff_name = Column(String(255), nullable=False)
    timestamp = Column(DateTime, index=True, nullable=False)
    status = Column(String(30), nullable=False)  # complete, attention_required
    notes = Column(Text, default="", nullable=False)
    # Legacy checklist columns; the full checklist folds into these five
    checklist_supplies = Column(Boolean, default=False, nullable=False)
    checklist_surfaces = Column(Boolean, default=False, nullable=False)
    checklist_fixtures = Column(Boolean, default=False, nullable=False)
    checklist_trash = Column(Boolean, default=False, nullable=False)
    checklist_floor = Column(Boolean, default=False, nullable=False)
    resolved = Column(Boolean, default=False, nullable=False)
    resolved_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now())


class ReportedIssue(Base):
    __tablename__ = "reported_issues"

    id = Column(String(36), primary_key=True, default=generate_id)
    location_id = Column(String(64), index=True, nullable=False)
    location_name = Column(String(255), nullable=False)
    issue_type = Column(String(50), nullable=False)
    description = Column(Text, default="", nullable=False)
    status = Column(String(20), default="open", nullable=False)  # open, resolved
    created_at = Column(DateTime, server_default=func.now())
    resolved_at = Column(DateTime, nullable=True)
