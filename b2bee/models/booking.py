"""
Booking model - a demo meeting booked through Cal.com.
"""
import uuid
from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field


class BookingStatus:
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    RESCHEDULED = "RESCHEDULED"


class Booking(SQLModel, table=True):
    """
    Booking entity, keyed externally by the Cal.com booking uid.
    The unique provider_id is what keeps webhook replays from duplicating rows.
    """
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    lead_id: uuid.UUID = Field(foreign_key="lead.id", index=True)

    # Copy of the lead's Bee at booking time
    bee_id: Optional[uuid.UUID] = Field(
        default=None, foreign_key="bee.id", index=True, ondelete="SET NULL"
    )

    provider_id: Optional[str] = Field(default=None, unique=True, index=True)
    status: str = Field(default=BookingStatus.PENDING, index=True)

    start_time: Optional[datetime] = Field(default=None, index=True)
    end_time: Optional[datetime] = None

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
