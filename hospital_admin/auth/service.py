"""
Authentication service layer for business logic.
"""
import logging
from datetime import datetime, timezone
from typing import Dict, Any, Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..config import Settings
from ..core.security import create_access_token
from ..exceptions import InternalServerError
from . import exceptions as auth_errors
from .models import User, UserRole
from .schemas import UserCreate, UserPublic

# Set up logging
logger = logging.getLogger(__name__)


def get_user_by_username(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(User.username == username).first()


def get_user_by_id(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def find_conflicting_user(
    db: Session,
    username: Optional[str],
    email: Optional[str],
    exclude_id: Optional[int] = None,
) -> Optional[User]:
    """
    Return any user other than ``exclude_id`` holding ``username`` or ``email``.
    """
    clauses = []
    if username is not None:
        clauses.append(User.username == username)
    if email is not None:
        clauses.append(User.email == email)
    if not clauses:
        return None

    query = db.query(User).filter(or_(*clauses))
    if exclude_id is not None:
        query = query.filter(User.id != exclude_id)
    return query.first()


def login_user(db: Session, username: str, password: str, settings: Settings) -> Dict[str, Any]:
    """
    Authenticate a user and generate an access token.

    Args:
        db: Database session
        username: Exact username of the account
        password: User's password
        settings: Settings holding the signing secret

    Returns:
        Dict with the access token and the public user projection

    Raises:
        InvalidCredentials: If the username is unknown or the password is wrong
        InternalServerError: If the store fails
    """
    try:
        user = get_user_by_username(db, username)
    except SQLAlchemyError as e:
        logger.error(f"Login lookup failed for {username}: {str(e)}")
        raise InternalServerError(reason="store_error", detail=str(e))

    if not user:
        logger.warning(f"Login failed: unknown username {username}")
        raise auth_errors.unknown_user(username)

    if not user.check_password(password):
        logger.warning(f"Login failed: wrong password for {username}")
        raise auth_errors.wrong_password(username)

    user.last_login = datetime.now(timezone.utc)
    try:
        db.commit()
        db.refresh(user)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error recording last login for user {user.id}: {str(e)}")
        raise InternalServerError(reason="store_error", detail=str(e))

    token = create_access_token(user.id, user.role.value, settings)
    logger.info(f"Login successful: User {user.id} ({username})")

    return {
        "token": token,
        "user": UserPublic.model_validate(user),
    }


def register_user(db: Session, user_data: UserCreate) -> User:
    """
    Register a new user account.

    Args:
        db: Database session
        user_data: Registration payload

    Returns:
        User: The created user

    Raises:
        DuplicateAccount: If the username or email is already taken
        InternalServerError: If the store fails
    """
    try:
        existing = find_conflicting_user(db, user_data.username, user_data.email)
    except SQLAlchemyError as e:
        logger.error(f"Registration lookup failed for {user_data.username}: {str(e)}")
        raise InternalServerError(reason="store_error", detail=str(e))

    if existing:
        logger.warning(f"Registration rejected: {user_data.username} / {user_data.email} already in use")
        raise auth_errors.duplicate_account(user_data.username, user_data.email)

    user = User(
        username=user_data.username,
        name=user_data.name,
        email=user_data.email,
        role=user_data.role or UserRole.USER,
    )
    user.set_password(user_data.password)

    db.add(user)
    try:
        db.commit()
        db.refresh(user)
    except IntegrityError as e:
        # Lost a race against a concurrent registration
        db.rollback()
        logger.warning(f"Registration conflict for {user_data.username}: {str(e)}")
        raise auth_errors.duplicate_account(user_data.username, user_data.email)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error creating user {user_data.username}: {str(e)}")
        raise InternalServerError(reason="store_error", detail=str(e))

    logger.info(f"User registered: {user.id} ({user.username}, role={user.role.value})")
    return user
