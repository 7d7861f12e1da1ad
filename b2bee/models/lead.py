"""
Lead model - a lead-capture form submission.
"""
import uuid
from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field


class LeadStatus:
    """Known lead statuses. The column is a plain string so the set can grow."""
    NEW = "NEW"
    CONTACTED = "CONTACTED"
    BOOKED = "BOOKED"
    CONVERTED = "CONVERTED"
    LOST = "LOST"


class Lead(SQLModel, table=True):
    """
    Lead entity - a person who asked about a Bee.
    Created on form submission, never deleted.
    """
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    # Contact info
    first_name: str
    last_name: str
    email: str = Field(index=True)
    company: Optional[str] = None
    notes: Optional[str] = None

    # Product interest
    bee_id: Optional[uuid.UUID] = Field(
        default=None, foreign_key="bee.id", index=True, ondelete="SET NULL"
    )

    status: str = Field(default=LeadStatus.NEW, index=True)

    # Attribution
    utm_source: Optional[str] = None
    utm_medium: Optional[str] = None
    utm_campaign: Optional[str] = None
    referrer: Optional[str] = None

    # Set once, after a reminder email went out
    reminder_sent_at: Optional[datetime] = Field(default=None, index=True)

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow, index=True)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
