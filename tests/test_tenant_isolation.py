"""
End-to-end tenant isolation tests.

Two clinics share one database; every request must only ever see the data
of the clinic in its token, including when requests run concurrently.
"""
import asyncio

import httpx

from dental_clinic.main import app
from dental_clinic.patients.models import Patient


def test_patient_of_other_tenant_is_indistinguishable_from_missing(
    client, tenant_b, admin_a, make_patient, auth_headers
):
    foreign = make_patient(tenant_b)
    headers = auth_headers(admin_a)

    response = client.get(f"/api/patients/{foreign.id}", headers=headers)
    missing = client.get("/api/patients/00000000-0000-0000-0000-000000000000", headers=headers)

    assert response.status_code == missing.status_code == 404
    assert response.json() == missing.json()


def test_cannot_modify_or_delete_other_tenants_patient(client, db, tenant_b, admin_a, make_patient, auth_headers):
    foreign = make_patient(tenant_b, "Original", "Nombre")
    headers = auth_headers(admin_a)

    update = client.put(
        f"/api/patients/{foreign.id}", json={"first_name": "Cambiado", "last_name": "X"}, headers=headers
    )
    delete = client.delete(f"/api/patients/{foreign.id}", headers=headers)

    assert update.status_code == 404
    assert delete.status_code == 404
    db.expire_all()
    stored = db.get(Patient, foreign.id)
    assert stored.first_name == "Original"
    assert stored.deleted_at is None


def test_created_patient_belongs_to_token_tenant(client, db, admin_b, auth_headers):
    response = client.post(
        "/api/patients", json={"first_name": "Eva", "last_name": "Ruiz"}, headers=auth_headers(admin_b)
    )

    assert response.status_code == 201
    stored = db.query(Patient).one()
    assert str(stored.id) == response.json()["id"]
    assert stored.tenant_id == admin_b.tenant_id


def test_concurrent_requests_stay_in_their_tenant(client, tenant_a, tenant_b, admin_a, admin_b, make_patient, auth_headers):
    own_a = {str(make_patient(tenant_a, f"A{i}").id) for i in range(3)}
    own_b = {str(make_patient(tenant_b, f"B{i}").id) for i in range(3)}
    callers = [(auth_headers(admin_a), own_a), (auth_headers(admin_b), own_b)] * 10

    async def fetch_all():
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as async_client:
            return await asyncio.gather(
                *(async_client.get("/api/patients", headers=headers) for headers, _ in callers)
            )

    responses = asyncio.run(fetch_all())

    for response, (_, expected) in zip(responses, callers):
        assert response.status_code == 200
        assert {p["id"] for p in response.json()} == expected


def test_staff_with_login_is_visible_only_to_its_clinic(client, admin_a, admin_b):
    login = client.post("/api/auth/login", json={"email": admin_a.email, "password": "Password123!"})
    token_a = login.json()["token"]
    headers_a = {"Authorization": f"Bearer {token_a}"}

    created = client.post(
        "/api/staff",
        json={
            "first_name": "Julia",
            "last_name": "Mora",
            "create_user": True,
            "user_email": "julia@sonrisa-dental.com",
            "user_password": "Julia12345",
            "user_role": "ASSISTANT",
        },
        headers=headers_a,
    )
    assert created.status_code == 201
    staff_id = created.json()["id"]

    login_b = client.post("/api/auth/login", json={"email": admin_b.email, "password": "Password123!"})
    headers_b = {"Authorization": f"Bearer {login_b.json()['token']}"}

    assert client.get(f"/api/staff/{staff_id}", headers=headers_a).status_code == 200
    assert client.get(f"/api/staff/{staff_id}", headers=headers_b).status_code == 404
    assert all(u["email"] != "julia@sonrisa-dental.com" for u in client.get("/api/users", headers=headers_b).json())

    # The provisioned login works and lands in clinic A
    julia = client.post("/api/auth/login", json={"email": "julia@sonrisa-dental.com", "password": "Julia12345"})
    assert julia.status_code == 200
    assert julia.json()["tenant_id"] == login.json()["tenant_id"]
    assert julia.json()["role"] == "ASSISTANT"
