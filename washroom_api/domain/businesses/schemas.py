"""Business domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import validate_email


class BusinessCreate(BaseModel):
    """Schema for registering a business (admin only)"""

    name: str = Field(..., min_length=1, max_length=255)
    email: str
    password: str = Field(..., min_length=8, max_length=72)
    is_admin: bool = False

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return validate_email(v)


class LoginRequest(BaseModel):
    email: str
    password: str


class GlobalAlertsUpdate(BaseModel):
    """Business-wide overdue alert recipients"""

    emails: list[str] = Field(default_factory=list)
    use_global_alerts: bool

    @field_validator("emails")
    @classmethod
    def check_emails(cls, v):
        normalized: list[str] = []
        for email in v:
            email = validate_email(email)
            if email and email not in normalized:
                normalized.append(email)
        return normalized


class BusinessResponse(BaseModel):
    """Schema for business response (never includes the password hash)"""

    id: str
    name: str
    email: str
    is_admin: bool
    global_alert_emails: Optional[list[str]] = None
    use_global_alerts: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class LoginResponse(BaseModel):
    token: str
    business: BusinessResponse
