"""
Common schemas used across multiple endpoints.
"""
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model; the public site speaks camelCase JSON."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class MessageResponse(CamelModel):
    """Simple message response."""
    success: bool = True
    message: str

    class Config:
        json_schema_extra = {"example": {"success": True, "message": "Operation successful"}}


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "healthy"
    version: str = "1.0.0"


def blank_to_none(value):
    """Treat empty / whitespace-only strings as missing."""
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Store timestamps as naive UTC, like the rest of the tables."""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value
