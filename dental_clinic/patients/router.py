"""
Patient Router - API endpoints for patient records.
"""
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ..core.context import current_tenant
from ..database import get_db
from .schemas import PatientCreate, PatientResponse, PatientUpdate
from .service import create_patient, delete_patient, get_patient, list_patients, update_patient

router = APIRouter()


@router.get("", response_model=List[PatientResponse])
async def get_all_patients(db: Session = Depends(get_db)):
    return list_patients(db, current_tenant())


@router.get("/{patient_id}", response_model=PatientResponse)
async def get_patient_by_id(patient_id: UUID, db: Session = Depends(get_db)):
    """Get a patient of the caller's clinic. Patients of other clinics are reported as not found."""
    return get_patient(db, patient_id, current_tenant())


@router.post("", response_model=PatientResponse, status_code=status.HTTP_201_CREATED)
async def post_patient(data: PatientCreate, db: Session = Depends(get_db)):
    return create_patient(db, current_tenant(), data)


@router.put("/{patient_id}", response_model=PatientResponse)
async def put_patient(patient_id: UUID, data: PatientUpdate, db: Session = Depends(get_db)):
    return update_patient(db, patient_id, current_tenant(), data)


@router.delete("/{patient_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_patient(patient_id: UUID, db: Session = Depends(get_db)):
    delete_patient(db, patient_id, current_tenant())
    return Response(status_code=status.HTTP_204_NO_CONTENT)
