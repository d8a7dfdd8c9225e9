"""
Core security utilities for authentication and password handling.

Access tokens are HS256 JWTs carrying the user id (``sub``), ``tenantId``,
``email``, ``role``, ``iat`` and ``exp``. Claims are only read after the
signature has been verified with the configured secret and algorithm.
"""
import json
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from uuid import UUID

from jose import jws
from jose.exceptions import JWSError
from passlib.context import CryptContext

from ..auth.models import UserRole
from ..config import settings

# Set up logging
logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class TokenError(Exception):
    """Base class for access token validation failures."""


class InvalidSignatureError(TokenError):
    """Signature does not match the configured secret or algorithm."""


class TokenExpiredError(TokenError):
    """Token is past its expiry time."""


class MalformedTokenError(TokenError):
    """Token or its claims cannot be parsed."""


@dataclass(frozen=True)
class TokenClaims:
    """Verified content of an access token."""

    user_id: UUID
    tenant_id: UUID
    email: str
    role: UserRole
    issued_at: int
    expires_at: int


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        str: Hashed password
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against a hash.

    Args:
        plain_password: Plain text password
        hashed_password: Hashed password to compare against

    Returns:
        bool: True if password matches hash
    """
    return pwd_context.verify(plain_password, hashed_password)


def _epoch(moment: Optional[datetime]) -> int:
    moment = moment or datetime.now(timezone.utc)
    return int(moment.timestamp())


def create_access_token(
    user_id: UUID,
    tenant_id: UUID,
    email: str,
    role: UserRole,
    expires_delta: Optional[timedelta] = None,
    now: Optional[datetime] = None
) -> str:
    """
    Create a signed JWT access token.

    Args:
        user_id: Subject of the token
        tenant_id: Tenant the user belongs to
        email: User email, informational only
        role: User role
        expires_delta: Token lifetime (default: ACCESS_TOKEN_EXPIRE_MINUTES)
        now: Issue time (default: current time)

    Returns:
        str: Encoded JWT token
    """
    issued_at = _epoch(now)
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)

    claims = {
        "sub": str(user_id),
        "tenantId": str(tenant_id),
        "email": email,
        "role": UserRole(role).value,
        "iat": issued_at,
        "exp": issued_at + int(lifetime.total_seconds()),
    }

    return jws.sign(claims, settings.secret_key, algorithm=settings.algorithm)


def _verify_signature(token: str) -> bytes:
    try:
        header = jws.get_unverified_header(token)
    except JWSError as e:
        raise MalformedTokenError(f"Token is not a valid JWS: {e}") from e

    # Reject "none" and any algorithm other than the configured one up front
    if header.get("alg") != settings.algorithm:
        raise InvalidSignatureError(f"Unexpected token algorithm: {header.get('alg')}")

    # The header already parsed, so any failure from here on is a bad signature.
    # jws.verify reports signature mismatches as a plain JWSError.
    try:
        return jws.verify(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWSError as e:
        raise InvalidSignatureError("Signature verification failed") from e


def _parse_claims(payload: bytes) -> TokenClaims:
    try:
        claims: Dict[str, Any] = json.loads(payload)
    except ValueError as e:
        raise MalformedTokenError("Token payload is not valid JSON") from e

    if not isinstance(claims, dict):
        raise MalformedTokenError("Token payload is not a JSON object")

    try:
        issued_at = claims["iat"]
        expires_at = claims["exp"]
        if not isinstance(issued_at, int) or not isinstance(expires_at, int):
            raise MalformedTokenError("Token timestamps must be integers")
        return TokenClaims(
            user_id=UUID(claims["sub"]),
            tenant_id=UUID(claims["tenantId"]),
            email=claims.get("email") or "",
            role=UserRole(claims["role"]),
            issued_at=issued_at,
            expires_at=expires_at,
        )
    except (KeyError, TypeError, ValueError) as e:
        raise MalformedTokenError(f"Token claims are invalid: {e}") from e


def decode_access_token(token: str, now: Optional[datetime] = None) -> TokenClaims:
    """
    Verify and decode an access token.

    Args:
        token: JWT token string
        now: Validation time (default: current time)

    Returns:
        TokenClaims: Verified claims

    Raises:
        InvalidSignatureError: Wrong secret, wrong algorithm, or tampered token
        TokenExpiredError: Token is past its expiry time
        MalformedTokenError: Token or claims cannot be parsed
    """
    payload = _verify_signature(token)
    claims = _parse_claims(payload)

    if _epoch(now) >= claims.expires_at:
        raise TokenExpiredError("Token has expired")

    return claims
