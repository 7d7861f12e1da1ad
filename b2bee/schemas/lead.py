"""
Lead schemas.
"""
import uuid
from typing import Optional, List
from datetime import datetime

from pydantic import EmailStr, Field, field_validator

from b2bee.schemas.common import CamelModel, blank_to_none


class LeadSubmission(CamelModel):
    """Lead-capture form submission."""
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: EmailStr
    company: Optional[str] = None
    notes: Optional[str] = None
    bee_slug: Optional[str] = None
    utm_source: Optional[str] = None
    utm_medium: Optional[str] = None
    utm_campaign: Optional[str] = None
    referrer: Optional[str] = None

    @field_validator("first_name", "last_name", mode="before")
    @classmethod
    def strip_name(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator(
        "company", "notes", "bee_slug", "utm_source", "utm_medium", "utm_campaign", "referrer",
        mode="before"
    )
    @classmethod
    def empty_as_none(cls, value):
        return blank_to_none(value)

    class Config:
        json_schema_extra = {
            "example": {
                "firstName": "Jo",
                "lastName": "Lee",
                "email": "jo@x.com",
                "company": "Lee Plumbing",
                "beeSlug": "sales-bee",
                "utmSource": "linkedin"
            }
        }


class CalPrefill(CamelModel):
    """Values the site pre-fills into the Cal.com booking widget."""
    name: str
    email: str
    notes: str = ""


class LeadSubmissionResponse(CamelModel):
    success: bool = True
    lead_id: uuid.UUID
    cal_prefill: CalPrefill


class LeadResponse(CamelModel):
    """Lead response (admin)."""
    id: uuid.UUID
    first_name: str
    last_name: str
    email: str
    company: Optional[str]
    notes: Optional[str]
    bee_id: Optional[uuid.UUID]
    status: str
    utm_source: Optional[str]
    utm_medium: Optional[str]
    utm_campaign: Optional[str]
    referrer: Optional[str]
    reminder_sent_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime


class LeadFilter(CamelModel):
    """Lead filtering options."""
    status: Optional[str] = None
    bee_slug: Optional[str] = None
    search: Optional[str] = None  # Search in name, email, company


class LeadListResponse(CamelModel):
    """One page of leads."""
    items: List[LeadResponse]
    total: int
    page: int
    limit: int
    pages: int
    has_next: bool
    has_prev: bool
