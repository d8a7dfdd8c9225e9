"""
Staff Schemas - Pydantic models for staff profile management.
"""
from datetime import date
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator

from ..auth.models import UserRole


class StaffBase(BaseModel):
    """
    Fields shared by staff create/update payloads

    Fields:
    - first_name / last_name: Names
    - phone / email: Contact data
    - specialty: Clinical specialty
    - license_number: Professional license
    - hire_date: Hiring date
    - active: Whether the professional is currently working
    """
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    specialty: Optional[str] = None
    license_number: Optional[str] = None
    hire_date: Optional[date] = None
    active: bool = True


class StaffCreate(StaffBase):
    """
    Staff Creation Schema

    When ``create_user`` is true a login is provisioned together with the
    profile and linked to it:
    - user_email: Login email
    - user_password: Login password
    - user_role: Login role (default DENTIST)
    """
    create_user: bool = False
    user_email: Optional[EmailStr] = None
    user_password: Optional[str] = Field(None, min_length=8)
    user_role: UserRole = UserRole.DENTIST

    @model_validator(mode="after")
    def login_fields_present(self):
        if self.create_user and (not self.user_email or not self.user_password):
            raise ValueError("user_email and user_password are required when create_user is true")
        return self


class StaffUpdate(StaffBase):
    pass


class StaffResponse(BaseModel):
    """Staff Response Schema"""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    tenant_id: UUID
    user_id: Optional[UUID] = None
    first_name: str
    last_name: str
    full_name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    specialty: Optional[str] = None
    license_number: Optional[str] = None
    hire_date: Optional[date] = None
    active: bool
