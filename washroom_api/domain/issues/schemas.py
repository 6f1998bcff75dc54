"""Reported issue schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...utils.sanitization import validate_and_sanitize_input
from .catalogue import ISSUE_TYPES_BY_VALUE


class IssueReport(BaseModel):
    """Anonymous report submitted from the washroom's QR page"""

    location_id: str = Field(..., min_length=1)
    issue_type: str
    description: Optional[str] = ""

    @field_validator("issue_type")
    @classmethod
    def check_issue_type(cls, v):
        if v not in ISSUE_TYPES_BY_VALUE:
            raise ValueError(f"Unknown issue type: {v}")
        return v

    @field_validator("description")
    @classmethod
    def check_description(cls, v):
        return validate_and_sanitize_input(v or "", max_length=1000)


class IssueResponse(BaseModel):
    id: str
    location_id: str
    location_name: str
    issue_type: str
    description: Optional[str] = ""
    status: str
    created_at: Optional[datetime] = None
    resolved_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class IssueReportResponse(BaseModel):
    issue: IssueResponse
    email_sent: bool


class IssueTypeResponse(BaseModel):
    value: str
    label_en: str
    label_fr: str

    class Config:
        from_attributes = True
