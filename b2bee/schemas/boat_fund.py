import uuid
from typing import Optional, List
from datetime import datetime

from pydantic import Field

from b2bee.schemas.common import CamelModel


class ContributionCreate(CamelModel):
    """Amount is in pence; fractional input is rounded."""
    amount: Optional[float] = Field(default=None)
    description: Optional[str] = None


class ContributionResponse(CamelModel):
    id: uuid.UUID
    amount: int
    description: str
    created_at: datetime


class BoatFundSummary(CamelModel):
    contributions: List[ContributionResponse]
    total: int
