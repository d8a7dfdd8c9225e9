"""
Request-scoped authentication context.

The request gate binds a :class:`RequestContext` for the lifetime of one
inbound request. It lives in a ``ContextVar`` so every asyncio task (and
every thread started with a copied context) sees only its own request's
tenant, user and role.
"""
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, Optional
from uuid import UUID

if TYPE_CHECKING:
    from ..auth.models import UserRole


class ContextMissingError(RuntimeError):
    """
    Raised when tenant-scoped code runs outside an authenticated request.

    Indicates a wiring bug (a protected route reached without the request
    gate), not a client error.
    """
    def __init__(self, detail: str = "No authenticated request context. Ensure the JWT middleware is installed."):
        super().__init__(detail)


@dataclass(frozen=True)
class RequestContext:
    """Authenticated identity of the in-flight request."""

    tenant_id: UUID
    user_id: UUID
    role: "UserRole"


_request_context: ContextVar[Optional[RequestContext]] = ContextVar("request_context", default=None)


def bind_request_context(context: RequestContext) -> Token:
    """
    Bind the context for the current task.

    Args:
        context: Identity extracted from a verified token

    Returns:
        Token: Pass to :func:`reset_request_context` once the request completes
    """
    return _request_context.set(context)


def reset_request_context(token: Token) -> None:
    """Restore whatever context was bound before :func:`bind_request_context`."""
    _request_context.reset(token)


@contextmanager
def request_context(context: RequestContext) -> Iterator[RequestContext]:
    """Bind ``context`` for the duration of a ``with`` block."""
    token = bind_request_context(context)
    try:
        yield context
    finally:
        reset_request_context(token)


def get_optional_request_context() -> Optional[RequestContext]:
    """Return the bound context, or None outside an authenticated request."""
    return _request_context.get()


def get_request_context() -> RequestContext:
    """
    Return the bound context.

    Raises:
        ContextMissingError: If called outside an authenticated request
    """
    context = _request_context.get()
    if context is None:
        raise ContextMissingError()
    return context


def current_tenant() -> UUID:
    return get_request_context().tenant_id


def current_user_id() -> UUID:
    return get_request_context().user_id


def current_role() -> "UserRole":
    return get_request_context().role
