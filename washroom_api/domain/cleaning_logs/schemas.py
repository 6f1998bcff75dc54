"""Cleaning log schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, computed_field, field_validator

from ...utils.sanitization import validate_and_sanitize_input
from .checklist import CHECKLIST_ITEMS, CHECKLIST_KEYS, from_legacy_columns


class CleaningLogSubmit(BaseModel):
    """Checklist submitted by staff after cleaning a washroom"""

    location_id: str = Field(..., min_length=1)
    staff_name: str = Field(..., max_length=255)
    pin: str
    checklist: dict[str, bool] = Field(default_factory=dict)
    not_applicable: list[str] = Field(default_factory=list)
    notes: Optional[str] = ""

    @field_validator("staff_name")
    @classmethod
    def check_staff_name(cls, v):
        v = validate_and_sanitize_input(v, max_length=255)
        if not v:
            raise ValueError("Staff name is required")
        return v

    @field_validator("notes")
    @classmethod
    def check_notes(cls, v):
        return validate_and_sanitize_input(v or "", max_length=2000)

    @field_validator("checklist")
    @classmethod
    def check_checklist_keys(cls, v):
        unknown = set(v) - CHECKLIST_KEYS
        if unknown:
            raise ValueError(f"Unknown checklist item(s): {', '.join(sorted(unknown))}")
        return v

    @field_validator("not_applicable")
    @classmethod
    def check_not_applicable(cls, v):
        allowed = {item.key for item in CHECKLIST_ITEMS if item.has_na_option}
        invalid = set(v) - allowed
        if invalid:
            raise ValueError(f"N/A is not allowed for: {', '.join(sorted(invalid))}")
        return v


class CleaningLogResponse(BaseModel):
    id: str
    location_id: str
    location_name: str
    staff_name: str
    timestamp: datetime
    status: str
    notes: Optional[str] = ""
    checklist_supplies: bool
    checklist_surfaces: bool
    checklist_fixtures: bool
    checklist_trash: bool
    checklist_floor: bool
    resolved: bool
    resolved_at: Optional[datetime] = None

    @computed_field
    @property
    def checklist_items(self) -> dict[str, bool]:
        return from_legacy_columns(self)

    class Config:
        from_attributes = True


class CleaningLogSubmitResponse(BaseModel):
    log: CleaningLogResponse
    unchecked_items: list[str]
    email_sent: bool


class ChecklistItemResponse(BaseModel):
    key: str
    label_en: str
    label_fr: str
    section: str
    has_na_option: bool


class ChecklistSectionResponse(BaseModel):
    id: str
    title_en: str
    title_fr: str
    items: list[ChecklistItemResponse]
