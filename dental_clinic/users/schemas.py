"""
User Schemas - Pydantic models for user management.
"""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from ..auth.models import UserRole


class UserCreate(BaseModel):
    """
    User Creation Schema - Used when an admin creates a login

    Fields:
    - email: Login email, unique across the system
    - password: Plain text password (hashed before storage)
    - first_name / last_name: Display names
    - role: Role of the new user
    - staff_id: Optional staff profile to link in the same transaction
    """
    email: EmailStr
    password: str = Field(..., min_length=8)
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    role: UserRole = UserRole.ASSISTANT
    staff_id: Optional[UUID] = None


class UserUpdate(BaseModel):
    """Fields an admin may change on an existing user."""
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    role: UserRole


class PasswordChange(BaseModel):
    """New password for a user. Length is checked by the service."""
    new_password: str


class UserResponse(BaseModel):
    """
    User Response Schema

    Includes the linked staff profile's display name when there is one.
    """
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    tenant_id: UUID
    staff_id: Optional[UUID] = None
    staff_name: Optional[str] = None
    email: str
    first_name: str
    last_name: str
    role: UserRole
    active: bool
    created_at: Optional[datetime] = None
