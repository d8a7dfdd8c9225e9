"""
Staff Model - Professional profile of a clinic employee.

A staff profile may be linked 1:1 to a login (User); Staff.user_id and
User.staff_id always point at each other or are both empty.
"""
import uuid

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, String, Uuid, func

from ..core.tenancy import SoftDeleteMixin, TenantScopedMixin
from ..database import Base


class Staff(TenantScopedMixin, SoftDeleteMixin, Base):
    """
    Staff Model

    Fields:
    - id: Primary key
    - tenant_id: Owning tenant
    - user_id: Linked login; mirrors User.staff_id
    - first_name / last_name: Names
    - phone / email: Contact data
    - specialty: Clinical specialty (GENERAL, ORTODONCIA, ...)
    - license_number: Professional license
    - hire_date: Hiring date
    - active: Whether the professional is currently working
    - created_at / updated_at / deleted_at: Lifecycle timestamps
    """
    __tablename__ = "staff"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, unique=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    email = Column(String, nullable=True)
    specialty = Column(String, nullable=True)
    license_number = Column(String, nullable=True)
    hire_date = Column(Date, nullable=True)
    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        """String representation of the Staff model"""
        return f"<Staff(id={self.id}, user_id={self.user_id}, name='{self.full_name}')>"

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
