"""
User Service - Business logic for user account management.

Each function performs a single store operation on one user record.
"""
from typing import List
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..auth import exceptions as auth_errors
from ..auth.models import User
from ..auth.schemas import UserUpdate
from ..auth.service import find_conflicting_user
from ..exceptions import NotFound, InternalServerError

# Set up logging
logger = logging.getLogger(__name__)


def _store_error(action: str, e: Exception) -> InternalServerError:
    logger.error(f"Error {action}: {str(e)}")
    return InternalServerError(reason="store_error", detail=f"{action}: {str(e)}")


def list_users(db: Session) -> List[User]:
    """
    Get all users, newest first.
    """
    try:
        return db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()
    except SQLAlchemyError as e:
        raise _store_error("listing users", e)


def get_user(db: Session, user_id: int) -> User:
    """
    Get a user by ID.

    Raises:
        NotFound: If the user does not exist
    """
    try:
        user = db.query(User).filter(User.id == user_id).first()
    except SQLAlchemyError as e:
        raise _store_error(f"loading user {user_id}", e)
    if not user:
        raise NotFound("User not found", reason="missing_user", detail=f"user_id={user_id}")
    return user


def update_user(db: Session, user_id: int, user_data: UserUpdate) -> User:
    """
    Merge the supplied fields onto an existing user.

    A supplied password goes through the hashing write path; every other
    field is assigned as-is.

    Args:
        db: Database session
        user_id: ID of the user
        user_data: Fields to change

    Returns:
        User: Updated user

    Raises:
        NotFound: If the user does not exist
        DuplicateAccount: If the new username or email belongs to another user
    """
    user = get_user(db, user_id)
    update_data = user_data.model_dump(exclude_unset=True)

    password = update_data.pop("password", None)

    try:
        conflict = find_conflicting_user(
            db, update_data.get("username"), update_data.get("email"), exclude_id=user.id
        )
    except SQLAlchemyError as e:
        raise _store_error(f"checking uniqueness for user {user_id}", e)
    if conflict:
        raise auth_errors.duplicate_account(
            update_data.get("username", user.username), update_data.get("email", user.email)
        )

    if password:
        user.set_password(password)
    for field, value in update_data.items():
        setattr(user, field, value)

    try:
        db.commit()
        db.refresh(user)
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Update of user {user_id} hit a uniqueness conflict: {str(e)}")
        raise auth_errors.duplicate_account(user.username, user.email)
    except SQLAlchemyError as e:
        db.rollback()
        raise _store_error(f"updating user {user_id}", e)

    logger.info(f"User {user_id} updated (fields: {sorted(update_data) + (['password'] if password else [])})")
    return user


def set_user_active(db: Session, user_id: int, is_active: bool) -> User:
    """
    Enable or disable an account. Only the active flag changes.

    A disabled account is rejected by the Auth Gate on its next request,
    even with an otherwise valid token.
    """
    user = get_user(db, user_id)
    user.is_active = is_active

    try:
        db.commit()
        db.refresh(user)
    except SQLAlchemyError as e:
        db.rollback()
        raise _store_error(f"updating status of user {user_id}", e)

    logger.info(f"User {user_id} {'enabled' if is_active else 'disabled'}")
    return user


def delete_user(db: Session, user_id: int) -> None:
    """
    Permanently delete a user.

    Raises:
        NotFound: If the user does not exist
    """
    user = get_user(db, user_id)

    try:
        db.delete(user)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise _store_error(f"deleting user {user_id}", e)

    logger.info(f"User {user_id} deleted")
