"""
Core permissions utilities for role-based access control.

Handlers never compare roles themselves: they declare the roles an
operation needs with :func:`require_roles` (or call :func:`require_role`
directly), and the check runs before the handler body touches any data.
"""
import logging
from typing import Iterable, Optional, Set

from ..auth.exceptions import RoleDeniedException
from ..auth.models import UserRole
from .context import RequestContext, get_request_context

# Set up logging
logger = logging.getLogger(__name__)

# Roles allowed to create, update, (de)activate and link user accounts
USER_MANAGEMENT_ROLES: Set[UserRole] = {UserRole.ADMIN}


def has_role(required: Iterable[UserRole], context: Optional[RequestContext] = None) -> bool:
    """
    Check whether the current request's role is one of ``required``.

    Args:
        required: Accepted roles
        context: Context to check (default: the bound request context)

    Returns:
        bool: True if the role is accepted
    """
    context = context or get_request_context()
    return context.role in set(required)


def require_role(*roles: UserRole) -> RequestContext:
    """
    Ensure the current request holds one of ``roles``.

    Returns:
        RequestContext: The bound context, for convenience

    Raises:
        RoleDeniedException: If the role is not accepted
        ContextMissingError: If called outside an authenticated request
    """
    context = get_request_context()
    if not has_role(roles, context):
        logger.warning(
            f"Role check failed for user {context.user_id}: "
            f"required {[role.value for role in roles]}, has {context.role.value}"
        )
        raise RoleDeniedException(roles, context.role.value)
    return context


def require_roles(*roles: UserRole):
    """
    Dependency factory to require specific roles.

    Args:
        roles: Roles that are allowed access

    Returns:
        Async dependency returning the request context
    """
    async def role_checker() -> RequestContext:
        return require_role(*roles)
    return role_checker


async def get_current_context() -> RequestContext:
    """Dependency returning the authenticated request context."""
    return get_request_context()


# Convenience dependencies
require_admin = require_roles(*USER_MANAGEMENT_ROLES)
