"""
User Router - Admin endpoints for managing staff accounts.
"""
from typing import List
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..auth.dependencies import require_admin
from ..auth.models import User
from ..auth.schemas import UserPublic, UserResponse, UserUpdate, UserStatusUpdate
from ..core.schemas import MessageResponse
from ..database import get_db
from ..exceptions import AppException, InternalServerError
from .service import list_users, get_user, update_user, set_user_active, delete_user

logger = logging.getLogger(__name__)

# Every user route is admin only
router = APIRouter(dependencies=[Depends(require_admin)])


def _unexpected(action: str, e: Exception) -> InternalServerError:
    logger.error(f"Unexpected error {action}: {str(e)}")
    return InternalServerError(reason="unexpected", detail=str(e))


@router.get("", response_model=List[UserResponse])
def list_users_route(db: Session = Depends(get_db)):
    """
    Get all users, newest first. Passwords are never included.
    """
    try:
        return list_users(db)
    except AppException:
        raise
    except Exception as e:
        raise _unexpected("listing users", e)


@router.get("/{user_id}", response_model=UserResponse)
def get_user_route(user_id: int, db: Session = Depends(get_db)):
    try:
        return get_user(db, user_id)
    except AppException:
        raise
    except Exception as e:
        raise _unexpected(f"loading user {user_id}", e)


@router.put("/{user_id}", response_model=UserPublic)
def update_user_route(user_id: int, user_data: UserUpdate, db: Session = Depends(get_db)):
    """
    Partially update a user. A supplied password is stored hashed.
    """
    try:
        return update_user(db, user_id, user_data)
    except AppException:
        raise
    except Exception as e:
        raise _unexpected(f"updating user {user_id}", e)


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user_route(user_id: int, db: Session = Depends(get_db)):
    try:
        delete_user(db, user_id)
    except AppException:
        raise
    except Exception as e:
        raise _unexpected(f"deleting user {user_id}", e)
    return {"message": "User deleted"}


@router.patch("/{user_id}/status", response_model=UserResponse)
def update_user_status_route(
    user_id: int,
    status_data: UserStatusUpdate,
    db: Session = Depends(get_db),
):
    """
    Enable or disable an account. Disabling revokes its tokens immediately.
    """
    try:
        return set_user_active(db, user_id, status_data.is_active)
    except AppException:
        raise
    except Exception as e:
        raise _unexpected(f"updating status of user {user_id}", e)
