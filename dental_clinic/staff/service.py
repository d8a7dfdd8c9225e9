"""
Staff Service - Business logic for staff profile management.

This module provides tenant-scoped CRUD for staff profiles, including the
combined flow that provisions a login together with a new profile.
"""
import logging
from datetime import datetime, timezone
from typing import List
from uuid import UUID

from sqlalchemy.orm import Session

from ..auth.exceptions import EmailAlreadyExistsException
from ..auth.models import User
from ..core.permissions import USER_MANAGEMENT_ROLES, require_role
from ..core.security import hash_password
from ..core.tenancy import TenantScopedRepository, atomic
from ..users.linking import link_user_to_staff, unlink_staff_profile
from ..users.service import email_in_use
from .models import Staff
from .schemas import StaffCreate, StaffUpdate

# Set up logging
logger = logging.getLogger(__name__)


def _repository(db: Session) -> TenantScopedRepository[Staff]:
    return TenantScopedRepository(db, Staff)


def list_staff(db: Session, tenant_id: UUID) -> List[Staff]:
    return _repository(db).list(tenant_id, order_by=Staff.last_name)


def get_staff(db: Session, staff_id: UUID, tenant_id: UUID) -> Staff:
    """
    Get a staff profile by ID.

    Raises:
        NotFoundException: If absent, deleted, or in another tenant
    """
    return _repository(db).get_or_404(staff_id, tenant_id, "Staff not found")


def create_staff(db: Session, tenant_id: UUID, data: StaffCreate) -> Staff:
    """
    Create a staff profile, optionally with a linked login.

    With ``create_user`` the steps are: create staff, create user, link.
    They run in one transaction, so a failure in any step leaves neither
    record behind.

    Args:
        db: Database session
        tenant_id: Caller's tenant
        data: Profile data and optional login data

    Returns:
        Staff: The created profile

    Raises:
        RoleDeniedException: If a login is requested by a non-admin
        EmailAlreadyExistsException: If the login email is already registered
    """
    # Provisioning a login is user management
    if data.create_user:
        require_role(*USER_MANAGEMENT_ROLES)

    if data.create_user and email_in_use(db, data.user_email):
        logger.warning(f"Staff creation failed: login email {data.user_email} already registered")
        raise EmailAlreadyExistsException()

    staff = Staff(
        tenant_id=tenant_id,
        first_name=data.first_name,
        last_name=data.last_name,
        phone=data.phone,
        email=data.email,
        specialty=data.specialty,
        license_number=data.license_number,
        hire_date=data.hire_date,
        active=data.active,
    )

    with atomic(db, f"creating staff {data.first_name} {data.last_name}"):
        _repository(db).save(staff, commit=False)

        if data.create_user:
            user = User(
                tenant_id=tenant_id,
                email=data.user_email.lower(),
                password_hash=hash_password(data.user_password),
                first_name=data.first_name,
                last_name=data.last_name,
                role=data.user_role,
                active=True,
            )
            TenantScopedRepository(db, User).save(user, commit=False)
            link_user_to_staff(db, user.id, staff.id, tenant_id, commit=False)

    db.refresh(staff)
    logger.info(f"Staff {staff.id} created in tenant {tenant_id} (login: {staff.user_id})")
    return staff


def update_staff(db: Session, staff_id: UUID, tenant_id: UUID, data: StaffUpdate) -> Staff:
    staff = get_staff(db, staff_id, tenant_id)
    for field, value in data.model_dump().items():
        setattr(staff, field, value)
    staff.updated_at = datetime.now(timezone.utc)
    return _repository(db).save(staff)


def delete_staff(db: Session, staff_id: UUID, tenant_id: UUID) -> None:
    """
    Soft delete a staff profile.

    A linked login is unlinked in the same transaction so no user keeps
    pointing at a hidden profile. That changes a user record, so deleting a
    linked profile is restricted to administrators.

    Raises:
        NotFoundException: If absent, already deleted, or in another tenant
        RoleDeniedException: If the profile has a login and the caller is not an admin
    """
    staff = get_staff(db, staff_id, tenant_id)
    if staff.user_id is not None:
        require_role(*USER_MANAGEMENT_ROLES)

    with atomic(db, f"deleting staff {staff.id}"):
        unlink_staff_profile(db, staff)
        _repository(db).soft_delete(staff, commit=False)
    logger.info(f"Staff {staff_id} deleted in tenant {tenant_id}")
