"""
User Router - API endpoints for login management.

Every endpoint here is restricted to administrators. The role check is a
router-level dependency, so it runs before the handler touches any data.
"""
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..core.context import current_tenant
from ..core.permissions import require_admin
from ..database import get_db
from .linking import link_user_to_staff, unlink_user_from_staff
from .schemas import PasswordChange, UserCreate, UserResponse, UserUpdate
from .service import (
    change_password,
    create_user,
    list_users,
    set_user_active,
    to_user_response,
    update_user,
)

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("", response_model=List[UserResponse])
async def get_users(db: Session = Depends(get_db)):
    """List the users of the caller's clinic."""
    return list_users(db, current_tenant())


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def post_user(data: UserCreate, db: Session = Depends(get_db)):
    """Create a user, optionally linked to an existing staff profile."""
    return create_user(db, current_tenant(), data)


@router.put("/{user_id}", response_model=UserResponse)
async def put_user(user_id: UUID, data: UserUpdate, db: Session = Depends(get_db)):
    return update_user(db, user_id, current_tenant(), data)


@router.put("/{user_id}/password", status_code=status.HTTP_200_OK)
async def put_user_password(user_id: UUID, data: PasswordChange, db: Session = Depends(get_db)):
    change_password(db, user_id, current_tenant(), data.new_password)
    return {"message": "Password updated"}


@router.put("/{user_id}/deactivate", status_code=status.HTTP_200_OK)
async def deactivate_user(user_id: UUID, db: Session = Depends(get_db)):
    set_user_active(db, user_id, current_tenant(), False)
    return {"message": "User deactivated"}


@router.put("/{user_id}/activate", status_code=status.HTTP_200_OK)
async def activate_user(user_id: UUID, db: Session = Depends(get_db)):
    set_user_active(db, user_id, current_tenant(), True)
    return {"message": "User activated"}


@router.post("/{user_id}/link-staff/{staff_id}", response_model=UserResponse)
async def link_staff(user_id: UUID, staff_id: UUID, db: Session = Depends(get_db)):
    """Link a user to a staff profile of the same clinic."""
    user, _ = link_user_to_staff(db, user_id, staff_id, current_tenant())
    return to_user_response(db, user)


@router.delete("/{user_id}/unlink-staff", response_model=UserResponse)
async def unlink_staff(user_id: UUID, db: Session = Depends(get_db)):
    """Remove the link between a user and its staff profile."""
    user = unlink_user_from_staff(db, user_id, current_tenant())
    return to_user_response(db, user)
