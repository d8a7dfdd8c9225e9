"""
Authentication-specific exceptions.
"""
from fastapi import HTTPException, status
from typing import Iterable


class AuthException(HTTPException):
    """Base class for authentication exceptions."""
    def __init__(self, status_code: int, detail: str, headers: dict = None):
        super().__init__(status_code=status_code, detail=detail, headers=headers)


class InvalidCredentialsException(AuthException):
    """Exception raised when credentials are invalid."""
    def __init__(self, detail: str = "Invalid credentials"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"}
        )


class EmailAlreadyExistsException(AuthException):
    """Exception raised when email already exists."""
    def __init__(self, detail: str = "Email already registered"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class WeakPasswordException(AuthException):
    """Exception raised when a new password does not meet the minimum length."""
    def __init__(self, detail: str = "Password must be at least 8 characters long"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class AccountStatusException(AuthException):
    """Exception raised when a deactivated account tries to log in."""
    def __init__(self, detail: str = "Account has been deactivated"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class RoleDeniedException(AuthException):
    """Exception raised when user doesn't have required role."""
    def __init__(self, required_roles: Iterable, user_role: str):
        required = [getattr(role, "value", role) for role in required_roles]
        detail = f"Access denied. Required roles: {required}. Your role: {user_role}"
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)
