"""
Authentication-specific exceptions.

Every cause of a failed authentication maps onto one of a handful of
client-facing messages; the precise cause travels in ``reason``.
"""
from ..exceptions import InvalidCredentials, Unauthenticated, Forbidden, DuplicateAccount

# Public messages for the Auth Gate
MISSING_TOKEN_MESSAGE = "Authentication required"
INVALID_TOKEN_MESSAGE = "Authentication failed"
ACCOUNT_NOT_FOUND_MESSAGE = "Account not found"
ACCOUNT_DISABLED_MESSAGE = "Account disabled"


def missing_token() -> Unauthenticated:
    return Unauthenticated(MISSING_TOKEN_MESSAGE, reason="missing_token")


def invalid_token() -> Unauthenticated:
    return Unauthenticated(INVALID_TOKEN_MESSAGE, reason="invalid_token")


def account_not_found(user_id) -> Unauthenticated:
    return Unauthenticated(
        ACCOUNT_NOT_FOUND_MESSAGE, reason="account_not_found", detail=f"user_id={user_id}"
    )


def account_disabled(user_id) -> Unauthenticated:
    return Unauthenticated(
        ACCOUNT_DISABLED_MESSAGE, reason="account_disabled", detail=f"user_id={user_id}"
    )


def verification_error(error: Exception) -> Unauthenticated:
    return Unauthenticated(INVALID_TOKEN_MESSAGE, reason="verification_error", detail=str(error))


def unknown_user(username: str) -> InvalidCredentials:
    return InvalidCredentials(reason="unknown_user", detail=f"username={username}")


def wrong_password(username: str) -> InvalidCredentials:
    return InvalidCredentials(reason="wrong_password", detail=f"username={username}")


def admin_required(role) -> Forbidden:
    return Forbidden("Admin privileges required", reason="role_mismatch", detail=f"role={role}")


def user_required(role) -> Forbidden:
    return Forbidden("User privileges required", reason="role_mismatch", detail=f"role={role}")


def duplicate_account(username: str, email: str) -> DuplicateAccount:
    return DuplicateAccount(reason="unique_violation", detail=f"username={username} email={email}")
