"""
Booking and Cal.com webhook schemas.
"""
import uuid
from typing import Optional, List, Dict, Any
from datetime import datetime

from pydantic import Field, field_validator

from b2bee.schemas.common import CamelModel, blank_to_none, to_naive_utc


class BookingCreate(CamelModel):
    """Direct booking creation."""
    lead_id: uuid.UUID
    provider_id: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    bee_slug: Optional[str] = None

    @field_validator("provider_id", "bee_slug", mode="before")
    @classmethod
    def empty_as_none(cls, value):
        return blank_to_none(value)

    @field_validator("start_time", "end_time")
    @classmethod
    def as_utc(cls, value):
        return to_naive_utc(value)


class ManualBookingRequest(CamelModel):
    email: str = Field(min_length=1)

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, value):
        return value.strip() if isinstance(value, str) else value


class BookingResponse(CamelModel):
    id: uuid.UUID
    lead_id: uuid.UUID
    bee_id: Optional[uuid.UUID]
    provider_id: Optional[str]
    status: str
    start_time: Optional[datetime]
    end_time: Optional[datetime]
    created_at: datetime
    updated_at: datetime


class BookingCreateResponse(CamelModel):
    booking: BookingResponse


class ManualBookingSummary(CamelModel):
    id: uuid.UUID
    lead_id: uuid.UUID
    lead_name: str
    bee_name: str
    status: str
    start_time: Optional[datetime]


class ManualBookingResponse(CamelModel):
    success: bool = True
    message: str = "Booking created successfully"
    booking: ManualBookingSummary


class CalWebhookPayload(CamelModel):
    """
    The subset of the Cal.com booking payload we read.
    Unknown keys are ignored.
    """
    uid: Optional[str] = None
    attendees: Optional[List[Dict[str, Any]]] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    responses: Optional[Dict[str, Any]] = None
    metadata: Optional[Dict[str, Any]] = None

    @field_validator("uid", mode="before")
    @classmethod
    def empty_as_none(cls, value):
        return blank_to_none(value)

    @field_validator("start_time", "end_time")
    @classmethod
    def as_utc(cls, value):
        return to_naive_utc(value)


class CalWebhookEvent(CamelModel):
    trigger_event: Optional[str] = None
    payload: Optional[CalWebhookPayload] = None

    class Config:
        json_schema_extra = {
            "example": {
                "triggerEvent": "BOOKING_CREATED",
                "payload": {
                    "uid": "bk_123",
                    "attendees": [{"email": "jo@x.com", "name": "Jo Lee"}],
                    "startTime": "2026-01-10T10:00:00Z",
                    "endTime": "2026-01-10T10:30:00Z"
                }
            }
        }


class WebhookAck(CamelModel):
    received: bool = True
    action: str
    booking_id: Optional[uuid.UUID] = None
