"""Washroom domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import (
    validate_alert_days,
    validate_email,
    validate_pin,
    validate_time_string,
    validate_timezone,
)


class WashroomCreate(BaseModel):
    """Schema for creating a washroom under the current business"""

    id: Optional[str] = None
    room_name: str = Field(..., min_length=1, max_length=255)
    pin_code: str
    alert_email: Optional[str] = None

    @field_validator("pin_code")
    @classmethod
    def check_pin(cls, v):
        return validate_pin(v)

    @field_validator("alert_email")
    @classmethod
    def check_email(cls, v):
        if v:
            return validate_email(v)
        return None


class AlertSettingsUpdate(BaseModel):
    """Partial update of a washroom's overdue alert settings"""

    alert_email: Optional[str] = None
    alert_enabled: Optional[bool] = None
    alert_threshold_hours: Optional[int] = Field(None, ge=1, le=168)
    business_hours_start: Optional[str] = None
    business_hours_end: Optional[str] = None
    alert_days: Optional[list[str]] = None
    timezone: Optional[str] = None

    @field_validator("alert_email")
    @classmethod
    def check_email(cls, v):
        # Empty string clears the address
        if v:
            return validate_email(v)
        return v

    @field_validator("business_hours_start", "business_hours_end")
    @classmethod
    def check_time(cls, v):
        return validate_time_string(v)

    @field_validator("alert_days")
    @classmethod
    def check_days(cls, v):
        return validate_alert_days(v)

    @field_validator("timezone")
    @classmethod
    def check_timezone(cls, v):
        return validate_timezone(v)


class PinVerification(BaseModel):
    pin: str


class PinVerificationResponse(BaseModel):
    valid: bool


class WashroomResponse(BaseModel):
    """Schema for washroom response"""

    id: str
    business_name: str
    room_name: str
    pin_code: str
    is_active: bool
    last_cleaned: Optional[datetime] = None
    alert_email: Optional[str] = None
    alert_enabled: Optional[bool] = None
    alert_threshold_hours: Optional[int] = None
    business_hours_start: Optional[str] = None
    business_hours_end: Optional[str] = None
    alert_days: Optional[list[str]] = None
    timezone: Optional[str] = None
    last_alert_sent_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PublicWashroomResponse(BaseModel):
    """What a scanned QR code may see: no PIN, no alert settings"""

    id: str
    business_name: str
    room_name: str
    last_cleaned: Optional[datetime] = None

    class Config:
        from_attributes = True


class QRCodeResponse(BaseModel):
    url: str
    qr_code: str
