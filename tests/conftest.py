"""
Test configuration for the dental clinic backend.
"""
import os

# Settings are read at import time, so the environment must be ready first
os.environ.setdefault("SECRET_KEY", "test-secret-key-that-is-long-enough-for-hs256")
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from dental_clinic.auth.models import Tenant, User, UserRole
from dental_clinic.core.security import create_access_token, hash_password
from dental_clinic.database import Base, get_db
from dental_clinic.main import app
from dental_clinic.patients.models import Patient
from dental_clinic.staff.models import Staff

DEFAULT_PASSWORD = "Password123!"


@pytest.fixture(scope="function")
def engine():
    """
    Create a fresh in-memory database for each test.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture(scope="function")
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db(session_factory):
    """
    Session used by tests to seed and inspect data.
    """
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="function")
def client(session_factory):
    """
    Create a test client whose requests each get their own session on the test database.
    """
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as client:
        yield client

    app.dependency_overrides = {}


@pytest.fixture
def make_tenant(db):
    def _make_tenant(name: str = "Clinica Sonrisa") -> Tenant:
        tenant = Tenant(name=name)
        db.add(tenant)
        db.commit()
        db.refresh(tenant)
        return tenant
    return _make_tenant


@pytest.fixture
def make_user(db):
    def _make_user(
        tenant: Tenant,
        email: str,
        role: UserRole = UserRole.ADMIN,
        password: str = DEFAULT_PASSWORD,
        active: bool = True,
    ) -> User:
        user = User(
            tenant_id=tenant.id,
            email=email,
            password_hash=hash_password(password),
            first_name="Test",
            last_name=role.value.title(),
            role=role,
            active=active,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make_user


@pytest.fixture
def make_staff(db):
    def _make_staff(tenant: Tenant, first_name: str = "Ana", last_name: str = "Lopez") -> Staff:
        staff = Staff(tenant_id=tenant.id, first_name=first_name, last_name=last_name, specialty="GENERAL")
        db.add(staff)
        db.commit()
        db.refresh(staff)
        return staff
    return _make_staff


@pytest.fixture
def make_patient(db):
    def _make_patient(tenant: Tenant, first_name: str = "Luis", last_name: str = "Perez") -> Patient:
        patient = Patient(tenant_id=tenant.id, first_name=first_name, last_name=last_name)
        db.add(patient)
        db.commit()
        db.refresh(patient)
        return patient
    return _make_patient


def headers_for(user: User) -> dict:
    """Authorization header carrying a fresh token for ``user``."""
    token = create_access_token(user.id, user.tenant_id, user.email, user.role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers():
    return headers_for


@pytest.fixture
def tenant_a(make_tenant):
    return make_tenant("Clinica Sonrisa")


@pytest.fixture
def tenant_b(make_tenant):
    return make_tenant("Dental Norte")


@pytest.fixture
def admin_a(make_user, tenant_a):
    return make_user(tenant_a, "admin@sonrisa-dental.com", UserRole.ADMIN)


@pytest.fixture
def dentist_a(make_user, tenant_a):
    return make_user(tenant_a, "dentist@sonrisa-dental.com", UserRole.DENTIST)


@pytest.fixture
def admin_b(make_user, tenant_b):
    return make_user(tenant_b, "admin@dentalnorte.com", UserRole.ADMIN)
