"""
Main FastAPI application entry point.
Configures the application, middleware, and includes routers.
"""
from dotenv import load_dotenv

# Load environment variables from .env file first
load_dotenv()

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .auth.router import router as auth_router
from .auth.service import bootstrap_admin_if_needed
from .config import settings
from .core.middleware import setup_middlewares
from .database import Base, SessionLocal, engine
from .exceptions import register_exception_handlers
from .patients.router import router as patients_router
from .staff.router import router as staff_router
from .users.router import router as users_router

# Import all models here so create_all sees every table
from .auth import models as auth_models  # noqa: F401
from .patients import models as patient_models  # noqa: F401
from .staff import models as staff_models  # noqa: F401

# Configure logging
logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)


def init_db() -> None:
    """
    Create database tables if they don't exist and bootstrap the first admin.
    """
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        bootstrap_admin_if_needed(
            db,
            email=settings.bootstrap_admin_email,
            password=settings.bootstrap_admin_password,
            tenant_name=settings.bootstrap_tenant_name,
        )
    except Exception as e:
        logger.error(f"Bootstrap process failed: {str(e)}")
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting Dental Clinic API...")
    init_db()
    yield
    logger.info("Dental Clinic API stopped")


# Create FastAPI application
app = FastAPI(
    title="Dental Clinic API",
    description="Multi-tenant API for dental clinic management",
    version="1.0.0",
    lifespan=lifespan,
)

# Register exception handlers
register_exception_handlers(app)

# Setup custom middleware (authentication and request logging)
setup_middlewares(app)

# CORS is added last so it wraps every response, including 401s from the gate
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth_router, prefix="/api/auth", tags=["Authentication"])
app.include_router(users_router, prefix="/api/users", tags=["Users"])
app.include_router(staff_router, prefix="/api/staff", tags=["Staff"])
app.include_router(patients_router, prefix="/api/patients", tags=["Patients"])


@app.get("/api/health", tags=["Health"])
async def health_check():
    """
    Health check endpoint for monitoring.

    Returns:
        dict: Health status information
    """
    return {"status": "UP"}


@app.get("/health", include_in_schema=False)
async def legacy_health_check():
    return {"status": "UP"}
