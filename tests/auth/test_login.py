"""
Tests for the login endpoint and admin bootstrap.
"""
import logging
import uuid

import pytest
from sqlalchemy.exc import OperationalError

from dental_clinic.auth.models import Tenant, User
from dental_clinic.auth.service import bootstrap_admin_if_needed
from dental_clinic.core.security import decode_access_token


def test_login_returns_token_for_users_tenant(client, tenant_a, dentist_a):
    response = client.post("/api/auth/login", json={"email": dentist_a.email, "password": "Password123!"})

    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["tenant_name"] == tenant_a.name
    assert body["role"] == "DENTIST"

    claims = decode_access_token(body["token"])
    assert claims.user_id == dentist_a.id
    assert claims.tenant_id == tenant_a.id
    assert claims.email == dentist_a.email


def test_login_is_case_insensitive_on_email(client, dentist_a):
    response = client.post("/api/auth/login", json={"email": dentist_a.email.upper(), "password": "Password123!"})
    assert response.status_code == 200


def test_login_token_opens_protected_endpoints(client, dentist_a):
    token = client.post(
        "/api/auth/login", json={"email": dentist_a.email, "password": "Password123!"}
    ).json()["token"]

    response = client.get("/api/patients", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200


def test_wrong_password_and_unknown_email_look_the_same(client, dentist_a):
    wrong_password = client.post("/api/auth/login", json={"email": dentist_a.email, "password": "nope-nope"})
    unknown_email = client.post("/api/auth/login", json={"email": "ghost@sonrisa-dental.com", "password": "nope-nope"})

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()


def test_deactivated_account_cannot_log_in(client, tenant_a, make_user):
    user = make_user(tenant_a, "former@sonrisa-dental.com", active=False)

    response = client.post("/api/auth/login", json={"email": user.email, "password": "Password123!"})

    assert response.status_code == 403
    assert "deactivated" in response.json()["detail"]


def test_bootstrap_creates_tenant_and_admin_once(db):
    admin = bootstrap_admin_if_needed(db, "Owner@clinica-central.com", "Arranque123", "Clinica Central")

    assert admin is not None
    assert admin.email == "owner@clinica-central.com"
    assert db.get(Tenant, admin.tenant_id).name == "Clinica Central"

    assert bootstrap_admin_if_needed(db, "otro@clinica-central.com", "Arranque123", "Otra") is None
    assert db.query(User).count() == 1


def test_bootstrap_skipped_without_credentials(db):
    assert bootstrap_admin_if_needed(db, None, None, "Clinica") is None
    assert db.query(Tenant).count() == 0


def test_me_requires_token(client):
    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {uuid.uuid4()}"})
    assert response.status_code == 401


def test_bootstrap_commit_failure_is_rolled_back_and_logged(db, monkeypatch, caplog):
    def failing_commit():
        raise OperationalError("COMMIT", {}, Exception("database is locked"))

    monkeypatch.setattr(db, "commit", failing_commit)

    with caplog.at_level(logging.ERROR, logger="dental_clinic.core.tenancy"):
        with pytest.raises(OperationalError):
            bootstrap_admin_if_needed(db, "owner@clinica-central.com", "Arranque123", "Clinica Central")

    assert "bootstrapping admin" in caplog.text
    assert db.query(Tenant).count() == 0
    assert db.query(User).count() == 0
