"""
Bootstrap utilities for first admin creation.
Handles automatic creation of the first admin user from environment variables.
"""
import logging
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..auth.models import User, UserRole
from ..config import Settings

logger = logging.getLogger(__name__)


def admin_exists(db: Session) -> bool:
    """
    Check if any admin user exists in the database.
    """
    return db.query(User).filter(User.role == UserRole.ADMIN).first() is not None


def create_bootstrap_admin(db: Session, settings: Settings) -> bool:
    """
    Create the first admin user from environment variables.

    Args:
        db: Database session
        settings: Settings carrying the bootstrap credentials

    Returns:
        bool: True if admin was created successfully, False otherwise
    """
    username = settings.bootstrap_admin_username
    password = settings.bootstrap_admin_password
    email = settings.bootstrap_admin_email
    if not (username and password and email):
        logger.info("Bootstrap admin credentials not provided in environment variables")
        return False

    existing_user = (
        db.query(User)
        .filter((User.username == username) | (User.email == email))
        .first()
    )
    if existing_user:
        logger.warning(f"Bootstrap failed: username {username} or email {email} already exists")
        return False

    bootstrap_admin = User(
        username=username,
        name="System Administrator",
        email=email,
        role=UserRole.ADMIN,
        is_active=True,
    )
    bootstrap_admin.set_password(password)

    try:
        db.add(bootstrap_admin)
        db.commit()
        db.refresh(bootstrap_admin)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to create bootstrap admin: {str(e)}")
        return False

    logger.info(f"Bootstrap admin created: {bootstrap_admin.username} (ID: {bootstrap_admin.id})")
    return True


def bootstrap_admin_if_needed(db: Session, settings: Settings) -> None:
    """
    Create the bootstrap admin when no admin account exists yet.
    Called during application startup.
    """
    if admin_exists(db):
        logger.info("Admin account present, bootstrap not needed")
        return

    logger.info("No admin accounts found, attempting bootstrap admin creation")
    if not create_bootstrap_admin(db, settings):
        logger.warning(
            "Bootstrap admin creation skipped. Set BOOTSTRAP_ADMIN_USERNAME, "
            "BOOTSTRAP_ADMIN_PASSWORD and BOOTSTRAP_ADMIN_EMAIL to create one."
        )
