"""
Bee model - a product offering shown on the marketing site.
"""
import uuid
from datetime import datetime
from typing import Optional, List

from sqlmodel import SQLModel, Field
from sqlalchemy import Column

from b2bee.models.types import JSONType


class Bee(SQLModel, table=True):
    """
    Bee entity - one product (Social Bee, Sales Bee, ...).
    Read-mostly; written through admin CRUD and the seed command.
    """
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    slug: str = Field(unique=True, index=True)

    # Display
    name: str
    tagline: str = ""
    description: str = ""
    icon: Optional[str] = None
    features: List[str] = Field(default=[], sa_column=Column(JSONType))
    price_monthly: Optional[int] = None  # None for quote-based Bees

    # Listing
    is_active: bool = Field(default=True, index=True)
    sort_order: int = Field(default=0)

    # Cal.com booking link for this Bee's CTA
    cta_cal_link: Optional[str] = None

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
