"""
Identity link management between login users and staff profiles.

``User.staff_id`` and ``Staff.user_id`` always point at each other or are
both empty. Both sides are written in the same transaction, so a failed
commit leaves neither side changed.
"""
import logging
from datetime import datetime, timezone
from typing import Tuple
from uuid import UUID

from sqlalchemy.orm import Session

from ..auth.models import User
from ..core.tenancy import TenantScopedRepository, commit_or_rollback
from ..exceptions import AlreadyLinkedException, NotLinkedException
from ..staff.models import Staff

# Set up logging
logger = logging.getLogger(__name__)


def link_user_to_staff(
    db: Session,
    user_id: UUID,
    staff_id: UUID,
    tenant_id: UUID,
    commit: bool = True
) -> Tuple[User, Staff]:
    """
    Link a user and a staff profile of the same tenant.

    Linking a pair that is already linked to each other is a no-op.

    Args:
        db: Database session
        user_id: ID of the user
        staff_id: ID of the staff profile
        tenant_id: Caller's tenant
        commit: Commit the transaction; False only flushes so the caller can
            include the link in a larger unit of work

    Returns:
        Tuple[User, Staff]: The linked pair

    Raises:
        NotFoundException: If either record is missing in the tenant
        AlreadyLinkedException: If either side is linked to someone else
    """
    user = TenantScopedRepository(db, User).get_or_404(user_id, tenant_id, "User not found")
    staff = TenantScopedRepository(db, Staff).get_or_404(staff_id, tenant_id, "Staff not found")

    if user.staff_id == staff.id and staff.user_id == user.id:
        return user, staff

    if user.staff_id is not None:
        raise AlreadyLinkedException("User is already linked to another staff profile")
    if staff.user_id is not None:
        raise AlreadyLinkedException("Staff profile is already linked to another user")

    user.staff_id = staff.id
    staff.user_id = user.id
    staff.updated_at = datetime.now(timezone.utc)

    if commit:
        commit_or_rollback(db, f"linking user {user.id} to staff {staff.id}")
        db.refresh(user)
        db.refresh(staff)
    else:
        db.flush()

    logger.info(f"User {user.id} linked to staff {staff.id} in tenant {tenant_id}")
    return user, staff


def unlink_user_from_staff(db: Session, user_id: UUID, tenant_id: UUID, commit: bool = True) -> User:
    """
    Remove the link between a user and its staff profile.

    Args:
        db: Database session
        user_id: ID of the user
        tenant_id: Caller's tenant
        commit: Commit the transaction

    Returns:
        User: The unlinked user

    Raises:
        NotFoundException: If the user is missing in the tenant
        NotLinkedException: If the user has no staff profile
    """
    user = TenantScopedRepository(db, User).get_or_404(user_id, tenant_id, "User not found")
    if user.staff_id is None:
        raise NotLinkedException()

    # A soft-deleted profile still holds the back-reference and must be cleared too
    staff = TenantScopedRepository(db, Staff).find_by_id(user.staff_id, tenant_id, include_deleted=True)
    if staff is not None and staff.user_id == user.id:
        staff.user_id = None
        staff.updated_at = datetime.now(timezone.utc)

    previous_staff_id = user.staff_id
    user.staff_id = None

    if commit:
        commit_or_rollback(db, f"unlinking user {user.id} from staff {previous_staff_id}")
        db.refresh(user)
    else:
        db.flush()

    logger.info(f"User {user.id} unlinked from staff {previous_staff_id} in tenant {tenant_id}")
    return user


def unlink_staff_profile(db: Session, staff: Staff) -> None:
    """
    Clear both sides of a staff profile's link without committing.

    Used when a staff profile is deleted inside a larger transaction.
    """
    if staff.user_id is None:
        return
    user = TenantScopedRepository(db, User).find_by_id(staff.user_id, staff.tenant_id)
    if user is not None and user.staff_id == staff.id:
        user.staff_id = None
    logger.info(f"Staff {staff.id} unlinked from user {staff.user_id}")
    staff.user_id = None
