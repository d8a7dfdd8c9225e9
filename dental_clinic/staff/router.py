"""
Staff Router - API endpoints for staff profile management.
"""
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ..core.context import current_tenant
from ..database import get_db
from .schemas import StaffCreate, StaffResponse, StaffUpdate
from .service import create_staff, delete_staff, get_staff, list_staff, update_staff

router = APIRouter()


@router.get("", response_model=List[StaffResponse])
async def get_all_staff(db: Session = Depends(get_db)):
    return list_staff(db, current_tenant())


@router.get("/{staff_id}", response_model=StaffResponse)
async def get_staff_by_id(staff_id: UUID, db: Session = Depends(get_db)):
    return get_staff(db, staff_id, current_tenant())


@router.post("", response_model=StaffResponse, status_code=status.HTTP_201_CREATED)
async def post_staff(data: StaffCreate, db: Session = Depends(get_db)):
    """
    Create a staff profile.

    Set ``create_user`` with ``user_email`` and ``user_password`` to
    provision a linked login in the same request. Only administrators may
    provision a login.
    """
    return create_staff(db, current_tenant(), data)


@router.put("/{staff_id}", response_model=StaffResponse)
async def put_staff(staff_id: UUID, data: StaffUpdate, db: Session = Depends(get_db)):
    return update_staff(db, staff_id, current_tenant(), data)


@router.delete("/{staff_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_staff(staff_id: UUID, db: Session = Depends(get_db)):
    delete_staff(db, staff_id, current_tenant())
    return Response(status_code=status.HTTP_204_NO_CONTENT)
