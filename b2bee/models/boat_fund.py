import uuid
from datetime import datetime

from sqlmodel import SQLModel, Field


class BoatFundContribution(SQLModel, table=True):
    """Append-only ledger entry. Amount is in pence."""
    __tablename__ = "boat_fund_contribution"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    amount: int
    description: str = "Contribution"
    created_at: datetime = Field(default_factory=datetime.utcnow, index=True)
