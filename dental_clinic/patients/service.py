"""
Patient Service - Tenant-scoped patient records.
"""
import logging
from datetime import datetime, timezone
from typing import List
from uuid import UUID

from sqlalchemy.orm import Session

from ..core.tenancy import TenantScopedRepository
from .models import Patient
from .schemas import PatientCreate, PatientUpdate

# Set up logging
logger = logging.getLogger(__name__)


def _repository(db: Session) -> TenantScopedRepository[Patient]:
    return TenantScopedRepository(db, Patient)


def list_patients(db: Session, tenant_id: UUID) -> List[Patient]:
    return _repository(db).list(tenant_id, order_by=Patient.last_name)


def get_patient(db: Session, patient_id: UUID, tenant_id: UUID) -> Patient:
    return _repository(db).get_or_404(patient_id, tenant_id, "Patient not found")


def create_patient(db: Session, tenant_id: UUID, data: PatientCreate) -> Patient:
    patient = Patient(tenant_id=tenant_id, **data.model_dump())
    _repository(db).save(patient)
    logger.info(f"Patient {patient.id} created in tenant {tenant_id}")
    return patient


def update_patient(db: Session, patient_id: UUID, tenant_id: UUID, data: PatientUpdate) -> Patient:
    patient = get_patient(db, patient_id, tenant_id)
    for field, value in data.model_dump().items():
        setattr(patient, field, value)
    patient.updated_at = datetime.now(timezone.utc)
    return _repository(db).save(patient)


def delete_patient(db: Session, patient_id: UUID, tenant_id: UUID) -> None:
    """Soft delete a patient; deleting twice is reported as not found."""
    patient = get_patient(db, patient_id, tenant_id)
    _repository(db).soft_delete(patient)
    logger.info(f"Patient {patient_id} deleted in tenant {tenant_id}")
