"""
ABM page schemas.
The mock_* blobs are validated here, at the admin edge, and stored as-is.
"""
import uuid
from typing import Optional, List, Dict, Any
from datetime import datetime

from pydantic import BaseModel, Field, HttpUrl

from b2bee.schemas.common import CamelModel

# Fields that may be explicitly cleared with null on update
ABM_NULLABLE_FIELDS = ("title", "hero_message")


class MockLead(BaseModel):
    name: str
    company: str
    title: str


class MockAnalytics(CamelModel):
    replies: float
    meetings: float
    open_rate: float
    reply_rate: float


def _blobs_to_record(data: dict, model: BaseModel) -> dict:
    """Dump nested blobs in their wire (camelCase) shape and URLs as strings."""
    if "linkedin_url" in data and data["linkedin_url"] is not None:
        data["linkedin_url"] = str(model.linkedin_url)
    if getattr(model, "mock_analytics", None) is not None and "mock_analytics" in data:
        data["mock_analytics"] = model.mock_analytics.model_dump(by_alias=True)
    return data


class ABMPageCreate(CamelModel):
    """Create a Sales Bee ABM page."""
    linkedin_identifier: str = Field(min_length=1)
    linkedin_url: HttpUrl
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    title: Optional[str] = None
    company: str = Field(min_length=1)
    target_market: str = Field(min_length=1)
    target_location: str = Field(min_length=1)
    mock_companies: List[str] = []
    mock_leads: List[MockLead] = []
    mock_analytics: MockAnalytics
    hero_message: Optional[str] = None
    benefit_points: List[str] = []
    is_active: bool = True

    def to_record(self) -> dict:
        return _blobs_to_record(self.model_dump(), self)

    class Config:
        json_schema_extra = {
            "example": {
                "linkedinIdentifier": "dbeer",
                "linkedinUrl": "https://www.linkedin.com/in/dbeer/",
                "firstName": "Daniel",
                "lastName": "Beer",
                "title": "Associate Director",
                "company": "The Store Room",
                "targetMarket": "Plumbers, Electricians and Carpenters",
                "targetLocation": "Solihull, United Kingdom",
                "mockCompanies": ["ABC Plumbing & Heating Ltd"],
                "mockLeads": [{"name": "John Smith", "company": "ABC Plumbing & Heating Ltd", "title": "Owner"}],
                "mockAnalytics": {"replies": 47, "meetings": 12, "openRate": 68, "replyRate": 24},
                "benefitPoints": ["Fill storage units faster"],
                "isActive": True
            }
        }


class ABMPageUpdate(CamelModel):
    """Update a Sales Bee ABM page. The LinkedIn identifier cannot change."""
    linkedin_url: Optional[HttpUrl] = None
    first_name: Optional[str] = Field(default=None, min_length=1)
    last_name: Optional[str] = Field(default=None, min_length=1)
    title: Optional[str] = None
    company: Optional[str] = Field(default=None, min_length=1)
    target_market: Optional[str] = Field(default=None, min_length=1)
    target_location: Optional[str] = Field(default=None, min_length=1)
    mock_companies: Optional[List[str]] = None
    mock_leads: Optional[List[MockLead]] = None
    mock_analytics: Optional[MockAnalytics] = None
    hero_message: Optional[str] = None
    benefit_points: Optional[List[str]] = None
    is_active: Optional[bool] = None

    def to_record(self) -> dict:
        return _blobs_to_record(self.model_dump(exclude_unset=True), self)


class ABMPageResponse(CamelModel):
    id: uuid.UUID
    linkedin_identifier: str
    linkedin_url: str
    first_name: str
    last_name: str
    title: Optional[str]
    company: str
    target_market: str
    target_location: str
    mock_companies: List[str]
    mock_leads: List[Dict[str, Any]]
    mock_analytics: Dict[str, Any]
    hero_message: Optional[str]
    benefit_points: List[str]
    is_active: bool
    created_at: datetime
    updated_at: datetime


class ABMMarinasPageCreate(CamelModel):
    """Create a Smart Marina ABM page."""
    linkedin_identifier: str = Field(min_length=1)
    linkedin_url: HttpUrl
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    title: Optional[str] = None
    company: str = Field(min_length=1)
    hero_message: Optional[str] = None
    is_active: bool = True

    def to_record(self) -> dict:
        data = _blobs_to_record(self.model_dump(), self)
        # The admin form posts "" for untouched optional inputs
        data["title"] = data["title"] or None
        data["hero_message"] = data["hero_message"] or None
        return data


class ABMMarinasPageUpdate(CamelModel):
    """Update a Smart Marina ABM page. The identifier may change but stays unique."""
    linkedin_identifier: Optional[str] = Field(default=None, min_length=1)
    linkedin_url: Optional[HttpUrl] = None
    first_name: Optional[str] = Field(default=None, min_length=1)
    last_name: Optional[str] = Field(default=None, min_length=1)
    title: Optional[str] = None
    company: Optional[str] = Field(default=None, min_length=1)
    hero_message: Optional[str] = None
    is_active: Optional[bool] = None

    def to_record(self) -> dict:
        data = _blobs_to_record(self.model_dump(exclude_unset=True), self)
        for field in ABM_NULLABLE_FIELDS:
            if field in data:
                data[field] = data[field] or None
        return data


class ABMMarinasPageResponse(CamelModel):
    id: uuid.UUID
    linkedin_identifier: str
    linkedin_url: str
    first_name: str
    last_name: str
    title: Optional[str]
    company: str
    hero_message: Optional[str]
    is_active: bool
    created_at: datetime
    updated_at: datetime


class ABMMarinasPageList(CamelModel):
    pages: List[ABMMarinasPageResponse]


class ABMMarinasPageEnvelope(CamelModel):
    page: ABMMarinasPageResponse
