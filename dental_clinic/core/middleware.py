"""
Custom middleware for the FastAPI application.
"""
import time
import logging
import uuid
from typing import Iterable, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from ..config import settings
from .context import RequestContext, bind_request_context, reset_request_context
from .security import TokenError, TokenExpiredError, decode_access_token

# Set up logging
logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "

# Public paths whose sub-paths are public too (Swagger UI assets such as /docs/oauth2-redirect)
DOCS_PATHS = frozenset({"/docs", "/redoc"})


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs every request with a request id and, once the gate has run, the
    tenant and user it was served for.

    An ``X-Request-ID`` sent by the client is reused so logs can be
    correlated with the caller's.
    """
    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        client_host = request.client.host if request.client else "unknown"
        logger.info(f"[{request_id}] {request.method} {request.url.path} from {client_host}")

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                f"[{request_id}] {request.method} {request.url.path} raised "
                f"{e.__class__.__name__} after {time.perf_counter() - started:.4f}s"
            )
            raise

        elapsed = time.perf_counter() - started
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"

        # Set by the JWT gate; absent on public and rejected requests
        auth = getattr(request.state, "auth", None)
        served_for = f" tenant={auth.tenant_id} user={auth.user_id}" if auth else ""
        logger.info(f"[{request_id}] {response.status_code} in {elapsed:.4f}s{served_for}")
        return response


class JWTAuthenticationMiddleware(BaseHTTPMiddleware):
    """
    Authenticates every request outside the public allow-list.

    A protected request must carry ``Authorization: Bearer <token>`` with a
    valid access token, otherwise it is answered with 401 before any
    handler runs. On success the token's tenant, user and role are bound as
    the request context until the response has been produced.
    """
    def __init__(self, app: ASGIApp, public_paths: Optional[Iterable[str]] = None):
        super().__init__(app)
        paths = settings.public_paths if public_paths is None else public_paths
        self.public_paths = {path.rstrip("/") or "/" for path in paths}

    def is_public_path(self, path: str) -> bool:
        """
        Check if a path bypasses authentication.

        Args:
            path: Request path

        Returns:
            bool: True for allow-listed paths, and for sub-paths of the docs pages
        """
        normalized = path.rstrip("/") or "/"
        if normalized in self.public_paths:
            return True
        return any(
            normalized.startswith(docs + "/")
            for docs in DOCS_PATHS
            if docs in self.public_paths
        )

    @staticmethod
    def unauthorized(detail: str) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"detail": detail},
            headers={"WWW-Authenticate": "Bearer"},
        )

    async def dispatch(self, request: Request, call_next):
        """
        Authenticate the request and bind its context.

        Args:
            request: The incoming request
            call_next: The next middleware or endpoint handler

        Returns:
            Response: The handler's response, or a 401 response
        """
        path = request.url.path

        # CORS preflight requests never carry credentials
        if request.method == "OPTIONS" or self.is_public_path(path):
            logger.debug(f"Skipping JWT validation for public endpoint: {path}")
            return await call_next(request)

        auth_header = request.headers.get("Authorization")
        if not auth_header or not auth_header.startswith(BEARER_PREFIX):
            logger.warning(f"Missing or malformed Authorization header for: {request.method} {path}")
            return self.unauthorized("Not authenticated")

        token = auth_header[len(BEARER_PREFIX):].strip()
        try:
            claims = decode_access_token(token)
        except TokenExpiredError:
            logger.info(f"Expired token presented for: {request.method} {path}")
            return self.unauthorized("Token has expired")
        except TokenError as e:
            logger.warning(f"JWT validation failed for path: {path} - Error: {e.__class__.__name__}")
            return self.unauthorized("Invalid or expired token")

        context = RequestContext(tenant_id=claims.tenant_id, user_id=claims.user_id, role=claims.role)
        request.state.auth = context
        logger.debug(f"JWT validated - userId: {claims.user_id}, tenantId: {claims.tenant_id}, role: {claims.role.value}")

        context_token = bind_request_context(context)
        try:
            return await call_next(request)
        finally:
            reset_request_context(context_token)


def setup_middlewares(app):
    """
    Set up all custom middlewares for the application.

    The authentication middleware is added first so request logging wraps it
    and also records rejected requests.

    Args:
        app: FastAPI application instance
    """
    app.add_middleware(JWTAuthenticationMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
