"""
Tenant and User models - login identities and the clinics that own them.
"""
import enum
import uuid

from sqlalchemy import Boolean, Column, DateTime, Enum, ForeignKey, String, Uuid
from sqlalchemy.sql import func

from ..core.tenancy import TenantScopedMixin
from ..database import Base


class UserRole(str, enum.Enum):
    """
    Enumeration for user roles in the dental clinic system.

    Roles:
    - ADMIN: Clinic administrators, the only role allowed to manage users
    - DENTIST: Practitioners treating patients
    - ASSISTANT: Front desk and chairside assistants
    """
    ADMIN = "ADMIN"
    DENTIST = "DENTIST"
    ASSISTANT = "ASSISTANT"


class Tenant(Base):
    """
    Tenant Model - One clinic; owns users, staff and patients.

    Fields:
    - id: Primary key
    - name: Clinic display name
    - contact_email: Clinic contact address
    - phone: Clinic phone number
    - active: Whether the clinic may be used
    - created_at: When the tenant was created
    """
    __tablename__ = "tenants"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    contact_email = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Tenant(id={self.id}, name='{self.name}')>"


class User(TenantScopedMixin, Base):
    """
    User Model - A login identity inside one tenant.

    Fields:
    - id: Primary key
    - tenant_id: Owning tenant
    - staff_id: Linked staff profile; mirrors Staff.user_id
    - email: Unique login email
    - password_hash: bcrypt hash (never store raw passwords)
    - first_name / last_name: Display names
    - role: User role
    - active: Deactivated users cannot log in
    - created_at: When the user was created
    """
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    staff_id = Column(Uuid, ForeignKey("staff.id", ondelete="SET NULL", use_alter=True), nullable=True, unique=True)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    role = Column(Enum(UserRole), nullable=False, default=UserRole.ASSISTANT)
    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role={self.role})>"

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
