"""
Authentication routes: login, registration and the current profile.
"""
import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..config import Settings, get_settings
from ..database import get_db
from ..exceptions import AppException, InternalServerError
from .dependencies import get_current_user
from .models import User
from .schemas import UserLogin, UserCreate, UserPublic, LoginResponse, RegisterResponse, UserResponse
from .service import login_user, register_user

# Set up logging
logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=LoginResponse, summary="User Login")
def login_route(
    login_data: UserLogin,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """
    Exchange a username and password for an access token.

    Unknown usernames and wrong passwords produce the same 401 response.
    """
    try:
        return login_user(db, login_data.username, login_data.password, settings)
    except AppException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error during login: {str(e)}")
        raise InternalServerError(reason="unexpected", detail=str(e))


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="User Registration",
)
def register_route(user_data: UserCreate, db: Session = Depends(get_db)):
    """
    Create an account. Fails with 400 if the username or email is taken.
    """
    try:
        user = register_user(db, user_data)
    except AppException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error during registration: {str(e)}")
        raise InternalServerError(reason="unexpected", detail=str(e))
    return {"message": "Registration successful", "user": UserPublic.model_validate(user)}


@router.get("/me", response_model=UserResponse, summary="Get Current User Profile")
def get_current_user_profile(current_user: User = Depends(get_current_user)):
    return current_user
