"""
Core security utilities for authentication and password handling.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import jwt, JWTError
from passlib.context import CryptContext
import logging

from ..config import Settings

# Set up logging
logger = logging.getLogger(__name__)

# Access tokens are valid for a fixed window
ACCESS_TOKEN_LIFETIME = timedelta(hours=24)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        str: Hashed password
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against a hash.

    Args:
        plain_password: Plain text password
        hashed_password: Hashed password to compare against

    Returns:
        bool: True if password matches hash
    """
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(
    user_id: int,
    role: str,
    settings: Settings,
    issued_at: Optional[datetime] = None,
) -> str:
    """
    Create a signed JWT access token.

    The payload is ``{id, role, iat, exp}`` with ``exp`` exactly
    ``ACCESS_TOKEN_LIFETIME`` after ``iat``.

    Args:
        user_id: Identifier of the authenticated user
        role: Role of the authenticated user
        settings: Settings holding the signing secret and algorithm
        issued_at: Issue time, defaults to now

    Returns:
        str: Encoded JWT token
    """
    issued_at = issued_at or datetime.now(timezone.utc)
    iat = int(issued_at.timestamp())
    to_encode = {
        "id": user_id,
        "role": role,
        "iat": iat,
        "exp": iat + int(ACCESS_TOKEN_LIFETIME.total_seconds()),
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(
    token: str,
    settings: Settings,
    now: Optional[datetime] = None,
) -> Optional[Dict[str, Any]]:
    """
    Verify and decode a JWT token.

    A token stops being valid at the instant its ``exp`` is reached.

    Args:
        token: JWT token string
        settings: Settings holding the signing secret and algorithm
        now: Reference time for the expiry check, defaults to now

    Returns:
        Dict containing token payload if valid, None if invalid
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        logger.info(f"Token rejected: {str(e)}")
        return None

    exp = payload.get("exp")
    now = now or datetime.now(timezone.utc)
    if not isinstance(exp, int) or now.timestamp() >= exp:
        logger.info("Token rejected: expired")
        return None

    return payload
