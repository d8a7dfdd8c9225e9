"""
Authentication routes for the dental clinic system.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..core.context import RequestContext
from ..core.permissions import get_current_context
from ..database import get_db
from .schemas import CurrentContextResponse, LoginResponse, UserLogin
from .service import login_user

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(credentials: UserLogin, db: Session = Depends(get_db)):
    """
    Authenticate with email and password.

    Returns a bearer token encoding the user's tenant and role. Every other
    endpoint except the health check requires this token.
    """
    return login_user(db, credentials.email, credentials.password)


@router.get("/me", response_model=CurrentContextResponse)
async def who_am_i(context: RequestContext = Depends(get_current_context)):
    """Return the identity bound to the current request."""
    return CurrentContextResponse(
        user_id=context.user_id,
        tenant_id=context.tenant_id,
        role=context.role,
    )
