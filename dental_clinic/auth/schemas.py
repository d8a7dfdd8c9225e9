"""
Authentication Schemas - Pydantic models for login requests and responses.
"""
from uuid import UUID

from pydantic import BaseModel, EmailStr

from .models import UserRole


class UserLogin(BaseModel):
    """
    User Login Schema - Used for authentication

    Fields:
    - email: User's email address
    - password: User's plain text password
    """
    email: EmailStr
    password: str


class LoginResponse(BaseModel):
    """
    Login Response Schema - Returned after successful authentication

    Fields:
    - token: Bearer access token
    - token_type: Always "bearer"
    - user_id / tenant_id: Identity encoded in the token
    - tenant_name: Display name of the user's clinic
    - email, first_name, last_name, role: Profile data for the client
    """
    token: str
    token_type: str = "bearer"
    user_id: UUID
    tenant_id: UUID
    tenant_name: str
    email: str
    first_name: str
    last_name: str
    role: UserRole


class CurrentContextResponse(BaseModel):
    """Authenticated identity of the current request."""
    user_id: UUID
    tenant_id: UUID
    role: UserRole
