"""
Reminder job schemas.
"""
import uuid
from typing import Optional
from datetime import datetime

from pydantic import Field

from b2bee.schemas.common import CamelModel


class ReminderResults(CamelModel):
    total: int = 0
    sent: int = 0
    failed: int = 0


class ReminderJobResponse(CamelModel):
    success: bool = True
    message: str = "Reminder job completed"
    results: ReminderResults


class SingleReminderRequest(CamelModel):
    email: str = Field(min_length=1)


class SingleReminderResponse(CamelModel):
    success: bool
    message: str
    lead_id: Optional[uuid.UUID] = None
    sent_at: Optional[datetime] = None
