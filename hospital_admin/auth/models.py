"""
User Model - Stores staff accounts used for authentication and role checks.
"""
from datetime import datetime, timezone
import enum

from sqlalchemy import Column, Integer, String, Boolean, DateTime, Enum

from ..database import Base
from ..core.security import hash_password, verify_password


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserRole(str, enum.Enum):
    """
    Enumeration for user roles.

    Roles:
    - ADMIN: Full access, including user management
    - USER: Regular staff member
    """
    ADMIN = "admin"
    USER = "user"


class User(Base):
    """
    User Model - Stores all user information in the system

    Fields:
    - id: Primary key for user identification
    - username: Unique login name, matched exactly
    - password_hash: Securely hashed password (never store raw passwords)
    - name: Display name
    - email: Unique email address
    - role: User role (admin, user)
    - is_active: Whether the account may authenticate
    - last_login: Timestamp of the last successful login
    - created_at: Timestamp when user was created
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    role = Column(Enum(UserRole), default=UserRole.USER, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    last_login = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}', role='{self.role}')>"

    def set_password(self, password: str) -> None:
        """Store the hash of ``password``; the plaintext is never kept."""
        self.password_hash = hash_password(password)

    def check_password(self, password: str) -> bool:
        return verify_password(password, self.password_hash)
