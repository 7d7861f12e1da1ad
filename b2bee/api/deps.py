"""
API dependencies - shared across all routes.
"""
import logging
from typing import Optional

from fastapi import Depends, Header
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from b2bee.config import settings
from b2bee.core.exceptions import UnauthorizedError
from b2bee.core.security import check_bearer_secret, verify_token
from b2bee.services.email_service import get_email_service

logger = logging.getLogger(__name__)

# Missing credentials are reported by get_current_admin, not as a 403
bearer_scheme = HTTPBearer(auto_error=False)

__all__ = ["get_current_admin", "require_cron_secret", "get_email_service"]


async def get_current_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> dict:
    """Get the admin token claims; 401 unless a valid admin JWT is sent."""
    if credentials is None:
        raise UnauthorizedError("Not authenticated")

    payload = verify_token(credentials.credentials, "access")
    if not payload:
        raise UnauthorizedError("Could not validate credentials")

    if payload.get("role") != "admin":
        raise UnauthorizedError("Admin access required")

    return payload


async def require_cron_secret(authorization: Optional[str] = Header(default=None)) -> None:
    """Check the cron caller's ``Authorization: Bearer <CRON_SECRET>``."""
    if not check_bearer_secret(authorization, settings.CRON_SECRET):
        logger.warning("Rejected cron call with missing or wrong secret")
        raise UnauthorizedError()
