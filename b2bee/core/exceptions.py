"""
Custom exceptions for the B2Bee API.
Services raise these; main.py renders them as JSON errors.
"""
from typing import List, Optional

from fastapi import status


class B2BeeException(Exception):
    """Base exception for B2Bee"""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "An error occurred"):
        self.message = message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.message}


class NotFoundError(B2BeeException):
    """Resource not found"""
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str = "Resource", resource_id: str = None, message: str = None):
        if message is None:
            message = f"{resource} not found"
            if resource_id:
                message = f"{resource} with id '{resource_id}' not found"
        super().__init__(message)


class ConflictError(B2BeeException):
    """Resource already exists"""
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, resource: str = "Resource", field: str = None, value: str = None):
        if field and value:
            message = f"{resource} with {field} '{value}' already exists"
        else:
            message = f"{resource} already exists"
        super().__init__(message)


class UnauthorizedError(B2BeeException):
    """Missing or wrong credentials"""
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class ValidationError(B2BeeException):
    """
    Validation failed.
    Carries every violated field, not just the first one.
    """
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, issues: Optional[List[dict]] = None, message: str = "Validation error"):
        self.issues = issues or []
        super().__init__(message)

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls([{"field": field, "message": message}])

    @classmethod
    def from_pydantic(cls, errors: List[dict]) -> "ValidationError":
        """Build from pydantic's ``errors()`` list."""
        issues = []
        for err in errors:
            # Drop the "body" prefix FastAPI adds to request errors
            loc = [str(part) for part in err.get("loc", ()) if part != "body"]
            issues.append({
                "field": ".".join(loc) or None,
                "message": err.get("msg", "Invalid value"),
            })
        return cls(issues)

    def to_dict(self) -> dict:
        return {"error": self.message, "details": self.issues}


class DependencyError(B2BeeException):
    """External service call failed"""
    status_code = status.HTTP_502_BAD_GATEWAY

    def __init__(self, service: str = "External service", message: str = None):
        msg = f"{service} call failed"
        if message:
            msg = f"{msg}: {message}"
        super().__init__(msg)
