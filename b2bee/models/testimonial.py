import uuid
from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field


class Testimonial(SQLModel, table=True):
    """Customer quote, optionally tied to a Bee."""
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    author: str
    role: str = ""
    company: str = ""
    quote: str
    rating: Optional[int] = None  # 1-5

    bee_id: Optional[uuid.UUID] = Field(
        default=None, foreign_key="bee.id", index=True, ondelete="SET NULL"
    )

    created_at: datetime = Field(default_factory=datetime.utcnow, index=True)
