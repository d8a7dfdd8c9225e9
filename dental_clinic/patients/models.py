"""
Patient Model - Stores patient information for one clinic.
"""
import uuid

from sqlalchemy import Column, Date, DateTime, String, Uuid, func

from ..core.tenancy import SoftDeleteMixin, TenantScopedMixin
from ..database import Base


class Patient(TenantScopedMixin, SoftDeleteMixin, Base):
    """
    Patient Model

    Fields:
    - id: Primary key
    - tenant_id: Owning tenant
    - first_name / last_name: Patient names
    - phone / email: Contact data
    - birth_date: Date of birth
    - created_at / updated_at / deleted_at: Lifecycle timestamps
    """
    __tablename__ = "patients"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    email = Column(String, nullable=True)
    birth_date = Column(Date, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        """String representation of the Patient model"""
        return f"<Patient(id={self.id}, tenant_id={self.tenant_id})>"

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
