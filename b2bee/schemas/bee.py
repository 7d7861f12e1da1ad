"""
Bee and testimonial schemas.
"""
import uuid
from typing import Optional, List
from datetime import datetime

from pydantic import Field

from b2bee.schemas.common import CamelModel


class BeeCreate(CamelModel):
    """Create a Bee."""
    slug: str = Field(min_length=1, pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
    name: str = Field(min_length=1)
    tagline: str = ""
    description: str = ""
    icon: Optional[str] = None
    features: List[str] = []
    price_monthly: Optional[int] = Field(default=None, ge=0)
    is_active: bool = True
    sort_order: int = 0
    cta_cal_link: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "slug": "sales-bee",
                "name": "Sales Bee",
                "tagline": "Your AI Sales Team",
                "features": ["Find and qualify ideal prospects"],
                "priceMonthly": 499,
                "sortOrder": 2
            }
        }


class BeeUpdate(CamelModel):
    """Update a Bee."""
    slug: Optional[str] = Field(default=None, min_length=1, pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
    name: Optional[str] = Field(default=None, min_length=1)
    tagline: Optional[str] = None
    description: Optional[str] = None
    icon: Optional[str] = None
    features: Optional[List[str]] = None
    price_monthly: Optional[int] = Field(default=None, ge=0)
    is_active: Optional[bool] = None
    sort_order: Optional[int] = None
    cta_cal_link: Optional[str] = None


class BeeResponse(CamelModel):
    id: uuid.UUID
    slug: str
    name: str
    tagline: str
    description: str
    icon: Optional[str]
    features: List[str]
    price_monthly: Optional[int]
    is_active: bool
    sort_order: int
    cta_cal_link: Optional[str]
    created_at: datetime
    updated_at: datetime


class TestimonialCreate(CamelModel):
    author: str = Field(min_length=1)
    role: str = ""
    company: str = ""
    quote: str = Field(min_length=1)
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    bee_id: Optional[uuid.UUID] = None


class TestimonialUpdate(CamelModel):
    author: Optional[str] = Field(default=None, min_length=1)
    role: Optional[str] = None
    company: Optional[str] = None
    quote: Optional[str] = Field(default=None, min_length=1)
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    bee_id: Optional[uuid.UUID] = None


class TestimonialResponse(CamelModel):
    id: uuid.UUID
    author: str
    role: str
    company: str
    quote: str
    rating: Optional[int]
    bee_id: Optional[uuid.UUID]
    created_at: datetime


class BeeWithTestimonials(BeeResponse):
    testimonials: List[TestimonialResponse] = []


class BeeList(CamelModel):
    bees: List[BeeWithTestimonials]
