"""
FastAPI dependencies for authentication and authorization.

``get_current_user`` is the Auth Gate: it turns the bearer token of a request
into a live, active ``User``. The role gates depend on it, so they can never
run without it.
"""
import logging
from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..config import Settings, get_settings
from ..core.security import verify_token
from ..database import get_db
from . import exceptions as auth_errors
from .models import User, UserRole
from .service import get_user_by_id

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token of a ``Bearer <token>`` header value, or None."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):].strip()
    return token or None


def get_current_user(
    authorization: Optional[str] = Header(None),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> User:
    """
    Get current authenticated user from the bearer token.

    Raises:
        Unauthenticated: If the token is missing, invalid or expired, or if
            the account it names no longer exists or has been disabled
    """
    token = extract_bearer_token(authorization)
    if token is None:
        raise auth_errors.missing_token()

    payload = verify_token(token, settings)
    if payload is None:
        raise auth_errors.invalid_token()

    user_id = payload.get("id")
    if user_id is None:
        raise auth_errors.invalid_token()

    try:
        user = get_user_by_id(db, user_id)
    except SQLAlchemyError as e:
        logger.error(f"User lookup failed during authentication: {str(e)}")
        raise auth_errors.verification_error(e)
    except Exception as e:
        logger.exception(f"Unexpected error during authentication: {str(e)}")
        raise auth_errors.verification_error(e)

    if not user:
        raise auth_errors.account_not_found(user_id)

    # Outstanding tokens of a disabled account stop working here
    if not user.is_active:
        raise auth_errors.account_disabled(user_id)

    return user


def require_roles(*allowed_roles: UserRole, error_factory):
    """
    Dependency factory to require specific roles.

    Args:
        allowed_roles: Roles that are allowed access
        error_factory: Builds the Forbidden error from the caller's role

    Returns:
        Function that checks if user has required role
    """
    def role_checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in allowed_roles:
            raise error_factory(current_user.role.value)
        return current_user
    return role_checker


# Convenience dependencies for specific roles
require_admin = require_roles(UserRole.ADMIN, error_factory=auth_errors.admin_required)

# Every current role passes
require_user_or_admin = require_roles(
    UserRole.USER, UserRole.ADMIN, error_factory=auth_errors.user_required
)
