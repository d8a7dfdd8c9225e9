"""
Authentication service layer for business logic.
"""
import logging
from typing import Optional

from sqlalchemy.orm import Session

from ..core.security import create_access_token, hash_password, verify_password
from ..core.tenancy import commit_or_rollback
from .exceptions import AccountStatusException, InvalidCredentialsException
from .models import Tenant, User, UserRole
from .schemas import LoginResponse

# Set up logging
logger = logging.getLogger(__name__)

DEFAULT_TENANT_NAME = "Clinica"


def login_user(db: Session, email: str, password: str) -> LoginResponse:
    """
    Authenticate a user and issue an access token.

    Args:
        db: Database session
        email: User's email address
        password: User's plain text password

    Returns:
        LoginResponse: Token plus the profile data the client displays

    Raises:
        InvalidCredentialsException: If the email is unknown or the password is wrong
        AccountStatusException: If the account has been deactivated
    """
    logger.info(f"Login attempt for email: {email}")

    # Login happens before any tenant is known, so this lookup is not tenant-scoped
    user = db.query(User).filter(User.email == email.lower()).first()
    if not user or not verify_password(password, user.password_hash):
        logger.warning(f"Invalid credentials for email: {email}")
        raise InvalidCredentialsException()

    if not user.active:
        logger.warning(f"Login rejected for deactivated account: {email}")
        raise AccountStatusException()

    token = create_access_token(
        user_id=user.id,
        tenant_id=user.tenant_id,
        email=user.email,
        role=user.role,
    )

    tenant = db.get(Tenant, user.tenant_id)
    logger.info(f"Login successful for user: {user.id}")

    return LoginResponse(
        token=token,
        user_id=user.id,
        tenant_id=user.tenant_id,
        tenant_name=tenant.name if tenant else DEFAULT_TENANT_NAME,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        role=user.role,
    )


def bootstrap_admin_if_needed(
    db: Session,
    email: Optional[str],
    password: Optional[str],
    tenant_name: str
) -> Optional[User]:
    """
    Create the first tenant and its admin when the database has no users.

    Args:
        db: Database session
        email: Admin email (bootstrap is skipped when missing)
        password: Admin password (bootstrap is skipped when missing)
        tenant_name: Name of the tenant to create

    Returns:
        Optional[User]: The created admin, or None if nothing was created
    """
    if not email or not password:
        logger.info("Bootstrap admin credentials not configured, skipping")
        return None

    if db.query(User).first() is not None:
        logger.info("Users already exist, skipping admin bootstrap")
        return None

    tenant = Tenant(name=tenant_name, contact_email=email.lower())
    db.add(tenant)
    db.flush()

    admin = User(
        tenant_id=tenant.id,
        email=email.lower(),
        password_hash=hash_password(password),
        first_name="Admin",
        last_name=tenant_name,
        role=UserRole.ADMIN,
        active=True,
    )
    db.add(admin)
    commit_or_rollback(db, f"bootstrapping admin for tenant {tenant_name}")
    db.refresh(admin)
    logger.info(f"Bootstrap admin created for tenant {tenant.id}")
    return admin
