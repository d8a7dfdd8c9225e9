"""
User Service - Business logic for login management inside a tenant.

Every function takes the caller's tenant explicitly; a user of another
tenant is reported as not found. Role checks happen in the router before
any of these functions run.
"""
import logging
from typing import List
from uuid import UUID

from sqlalchemy.orm import Session

from ..auth.exceptions import EmailAlreadyExistsException, WeakPasswordException
from ..auth.models import User
from ..core.security import hash_password
from ..core.tenancy import TenantScopedRepository, atomic, commit_or_rollback
from ..staff.models import Staff
from .linking import link_user_to_staff
from .schemas import UserCreate, UserResponse, UserUpdate

# Set up logging
logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


def to_user_response(db: Session, user: User) -> UserResponse:
    """
    Build the API representation of a user, including the linked staff name.

    Args:
        db: Database session
        user: User to serialize

    Returns:
        UserResponse: Serialized user
    """
    response = UserResponse.model_validate(user)
    if user.staff_id is not None:
        staff = TenantScopedRepository(db, Staff).find_by_id(user.staff_id, user.tenant_id)
        if staff is not None:
            response.staff_name = staff.full_name
    return response


def email_in_use(db: Session, email: str) -> bool:
    """Login emails are unique across tenants because login resolves the tenant from the email."""
    return db.query(User.id).filter(User.email == email.lower()).first() is not None


def list_users(db: Session, tenant_id: UUID) -> List[UserResponse]:
    users = TenantScopedRepository(db, User).list(tenant_id, order_by=User.created_at)
    return [to_user_response(db, user) for user in users]


def get_user(db: Session, user_id: UUID, tenant_id: UUID) -> User:
    return TenantScopedRepository(db, User).get_or_404(user_id, tenant_id, "User not found")


def create_user(db: Session, tenant_id: UUID, data: UserCreate) -> UserResponse:
    """
    Create a login in the caller's tenant.

    When ``staff_id`` is given the new user is linked to that staff profile
    in the same transaction; if the link fails, the user is not created.

    Args:
        db: Database session
        tenant_id: Caller's tenant
        data: New user data

    Returns:
        UserResponse: The created user

    Raises:
        EmailAlreadyExistsException: If the email is already registered
        NotFoundException: If ``staff_id`` does not exist in the tenant
        AlreadyLinkedException: If the staff profile already has a login
    """
    if email_in_use(db, data.email):
        logger.warning(f"User creation failed: Email {data.email} already registered")
        raise EmailAlreadyExistsException()

    user = User(
        tenant_id=tenant_id,
        email=data.email.lower(),
        password_hash=hash_password(data.password),
        first_name=data.first_name,
        last_name=data.last_name,
        role=data.role,
        active=True,
    )

    with atomic(db, f"creating user {data.email}"):
        TenantScopedRepository(db, User).save(user, commit=False)
        if data.staff_id is not None:
            link_user_to_staff(db, user.id, data.staff_id, tenant_id, commit=False)

    db.refresh(user)
    logger.info(f"User {user.id} created in tenant {tenant_id}")
    return to_user_response(db, user)


def update_user(db: Session, user_id: UUID, tenant_id: UUID, data: UserUpdate) -> UserResponse:
    user = get_user(db, user_id, tenant_id)
    user.first_name = data.first_name
    user.last_name = data.last_name
    user.role = data.role
    TenantScopedRepository(db, User).save(user)
    logger.info(f"User {user.id} updated")
    return to_user_response(db, user)


def change_password(db: Session, user_id: UUID, tenant_id: UUID, new_password: str) -> None:
    """
    Replace a user's password.

    Raises:
        WeakPasswordException: If the password is shorter than 8 characters
        NotFoundException: If the user is not in the tenant
    """
    if not new_password or len(new_password) < MIN_PASSWORD_LENGTH:
        raise WeakPasswordException()

    user = get_user(db, user_id, tenant_id)
    user.password_hash = hash_password(new_password)
    commit_or_rollback(db, f"changing password of user {user.id}")
    logger.info(f"Password changed for user {user.id}")


def set_user_active(db: Session, user_id: UUID, tenant_id: UUID, active: bool) -> None:
    """Activate or deactivate a user. Deactivated users cannot log in."""
    user = get_user(db, user_id, tenant_id)
    user.active = active
    commit_or_rollback(db, f"setting active={active} on user {user.id}")
    logger.info(f"User {user.id} {'activated' if active else 'deactivated'}")
