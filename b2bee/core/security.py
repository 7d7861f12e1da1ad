"""
Security utilities for the B2Bee API.
Admin JWTs, the cron shared secret and Cal.com webhook signatures.
"""
from datetime import datetime, timedelta
from typing import Optional, Literal
import hashlib
import hmac
import uuid

import jwt

from b2bee.config import settings


# Token types
TokenType = Literal["access"]


def create_token(
    data: dict,
    token_type: TokenType = "access",
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create a JWT token.

    Args:
        data: Payload data (should include sub and role)
        token_type: token type claim
        expires_delta: Custom expiration time

    Returns:
        Encoded JWT string
    """
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({
        "exp": expire,
        "iat": datetime.utcnow(),
        "type": token_type,
        "jti": str(uuid.uuid4())
    })

    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def create_admin_token(email: str, expires_delta: Optional[timedelta] = None) -> str:
    """Create an admin access token."""
    return create_token({"sub": email, "role": "admin"}, expires_delta=expires_delta)


def decode_token(token: str) -> Optional[dict]:
    """
    Decode and validate a JWT token.

    Returns:
        Decoded payload dict or None if invalid
    """
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None


def verify_token(token: str, token_type: TokenType = "access") -> Optional[dict]:
    """
    Verify a token and check its type.

    Returns:
        Decoded payload if valid and correct type, None otherwise
    """
    payload = decode_token(token)
    if payload and payload.get("type") == token_type:
        return payload
    return None


def check_bearer_secret(authorization: Optional[str], secret: Optional[str]) -> bool:
    """
    Compare an Authorization header against ``Bearer <secret>``.
    An unset secret disables the check.
    """
    if not secret:
        return True
    if not authorization:
        return False
    return hmac.compare_digest(authorization.encode(), f"Bearer {secret}".encode())


def compute_signature(body: bytes, secret: str) -> str:
    """HMAC-SHA256 hex digest, as sent by Cal.com in X-Cal-Signature-256."""
    return hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()


def verify_signature(body: bytes, signature: Optional[str], secret: str) -> bool:
    if not signature:
        return False
    return hmac.compare_digest(compute_signature(body, secret), signature.strip().lower())
