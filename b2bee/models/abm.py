"""
ABM landing page models.
Personalised pages addressed by a prospect's LinkedIn identifier.
"""
import uuid
from datetime import datetime
from typing import Optional, List, Dict, Any

from sqlmodel import SQLModel, Field
from sqlalchemy import Column

from b2bee.models.types import JSONType


class ABMPage(SQLModel, table=True):
    """
    Sales Bee ABM page.
    The mock_* blobs are demo content for the simulated product tour;
    they have no referential integrity with the rest of the data.
    """
    __tablename__ = "abm_page"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    linkedin_identifier: str = Field(unique=True, index=True)  # immutable
    linkedin_url: str

    # Prospect
    first_name: str
    last_name: str
    title: Optional[str] = None
    company: str

    # Targeting
    target_market: str
    target_location: str

    # Demo content
    mock_companies: List[str] = Field(default=[], sa_column=Column(JSONType))
    mock_leads: List[Dict[str, Any]] = Field(default=[], sa_column=Column(JSONType))
    # Example: [{"name": "John Smith", "company": "ABC Plumbing", "title": "Owner"}]
    mock_analytics: Dict[str, Any] = Field(default={}, sa_column=Column(JSONType))
    # Example: {"replies": 47, "meetings": 12, "openRate": 68, "replyRate": 24}

    hero_message: Optional[str] = None
    benefit_points: List[str] = Field(default=[], sa_column=Column(JSONType))

    is_active: bool = Field(default=True)

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)


class ABMMarinasPage(SQLModel, table=True):
    """Smart Marina ABM page. Content is fixed; only the prospect varies."""
    __tablename__ = "abm_marinas_page"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    linkedin_identifier: str = Field(unique=True, index=True)
    linkedin_url: str

    first_name: str
    last_name: str
    title: Optional[str] = None
    company: str

    hero_message: Optional[str] = None
    is_active: bool = Field(default=True)

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
