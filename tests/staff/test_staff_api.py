"""
Tests for the staff endpoints, including combined profile + login creation.
"""
from dental_clinic.auth.models import User, UserRole
from dental_clinic.staff.models import Staff


def test_create_and_get_staff(client, admin_a, auth_headers):
    payload = {"first_name": "Rosa", "last_name": "Vega", "specialty": "ORTODONCIA"}

    created = client.post("/api/staff", json=payload, headers=auth_headers(admin_a))

    assert created.status_code == 201
    body = created.json()
    assert body["full_name"] == "Rosa Vega"
    assert body["tenant_id"] == str(admin_a.tenant_id)
    assert body["user_id"] is None

    fetched = client.get(f"/api/staff/{body['id']}", headers=auth_headers(admin_a))
    assert fetched.status_code == 200
    assert fetched.json()["specialty"] == "ORTODONCIA"


def test_create_staff_with_login_links_both_sides(client, db, admin_a, auth_headers):
    payload = {
        "first_name": "Rosa",
        "last_name": "Vega",
        "create_user": True,
        "user_email": "rosa@sonrisa-dental.com",
        "user_password": "Clave12345",
    }

    response = client.post("/api/staff", json=payload, headers=auth_headers(admin_a))

    assert response.status_code == 201
    body = response.json()
    user = db.query(User).filter(User.email == "rosa@sonrisa-dental.com").one()
    assert body["user_id"] == str(user.id)
    assert str(user.staff_id) == body["id"]
    assert user.role == UserRole.DENTIST
    assert user.tenant_id == admin_a.tenant_id

    login = client.post("/api/auth/login", json={"email": "rosa@sonrisa-dental.com", "password": "Clave12345"})
    assert login.status_code == 200


def test_create_staff_with_taken_email_leaves_no_profile(client, db, admin_a, admin_b, auth_headers):
    payload = {
        "first_name": "Rosa",
        "last_name": "Vega",
        "create_user": True,
        "user_email": admin_b.email,
        "user_password": "Clave12345",
    }

    response = client.post("/api/staff", json=payload, headers=auth_headers(admin_a))

    assert response.status_code == 400
    assert db.query(Staff).count() == 0


def test_create_staff_with_login_requires_credentials(client, db, admin_a, auth_headers):
    payload = {"first_name": "Rosa", "last_name": "Vega", "create_user": True}

    response = client.post("/api/staff", json=payload, headers=auth_headers(admin_a))

    assert response.status_code == 422
    assert db.query(Staff).count() == 0


def test_list_staff_is_tenant_scoped(client, tenant_a, tenant_b, admin_a, make_staff, auth_headers):
    own = make_staff(tenant_a, "Ana")
    make_staff(tenant_b, "Berta")

    response = client.get("/api/staff", headers=auth_headers(admin_a))

    assert response.status_code == 200
    assert [s["id"] for s in response.json()] == [str(own.id)]


def test_update_staff(client, tenant_a, admin_a, make_staff, auth_headers):
    staff = make_staff(tenant_a)
    payload = {"first_name": "Ana", "last_name": "Lopez", "phone": "555-0101", "active": False}

    response = client.put(f"/api/staff/{staff.id}", json=payload, headers=auth_headers(admin_a))

    assert response.status_code == 200
    assert response.json()["phone"] == "555-0101"
    assert response.json()["active"] is False


def test_delete_staff_unlinks_login(client, db, tenant_a, admin_a, dentist_a, make_staff, auth_headers):
    staff = make_staff(tenant_a)
    headers = auth_headers(admin_a)
    assert client.post(f"/api/users/{dentist_a.id}/link-staff/{staff.id}", headers=headers).status_code == 200

    response = client.delete(f"/api/staff/{staff.id}", headers=headers)

    assert response.status_code == 204
    db.expire_all()
    assert db.get(User, dentist_a.id).staff_id is None
    deleted = db.get(Staff, staff.id)
    assert deleted.user_id is None
    assert deleted.deleted_at is not None

    assert client.get(f"/api/staff/{staff.id}", headers=headers).status_code == 404
    assert client.delete(f"/api/staff/{staff.id}", headers=headers).status_code == 404


def test_staff_of_other_tenant_is_not_found(client, tenant_b, admin_a, make_staff, auth_headers):
    foreign = make_staff(tenant_b)
    headers = auth_headers(admin_a)

    assert client.get(f"/api/staff/{foreign.id}", headers=headers).status_code == 404
    assert client.delete(f"/api/staff/{foreign.id}", headers=headers).status_code == 404


def test_non_admin_cannot_provision_a_login(client, db, dentist_a, auth_headers):
    payload = {
        "first_name": "Rosa",
        "last_name": "Vega",
        "create_user": True,
        "user_email": "rosa@sonrisa-dental.com",
        "user_password": "Clave12345",
        "user_role": "ADMIN",
    }

    response = client.post("/api/staff", json=payload, headers=auth_headers(dentist_a))

    assert response.status_code == 403
    assert db.query(User).filter(User.email == "rosa@sonrisa-dental.com").count() == 0
    assert db.query(Staff).count() == 0


def test_non_admin_can_create_profile_without_login(client, dentist_a, auth_headers):
    response = client.post(
        "/api/staff", json={"first_name": "Rosa", "last_name": "Vega"}, headers=auth_headers(dentist_a)
    )

    assert response.status_code == 201
    assert response.json()["user_id"] is None


def test_non_admin_cannot_delete_profile_with_login(client, db, tenant_a, admin_a, dentist_a, make_staff, auth_headers):
    staff = make_staff(tenant_a)
    assert client.post(
        f"/api/users/{admin_a.id}/link-staff/{staff.id}", headers=auth_headers(admin_a)
    ).status_code == 200

    response = client.delete(f"/api/staff/{staff.id}", headers=auth_headers(dentist_a))

    assert response.status_code == 403
    db.expire_all()
    assert db.get(User, admin_a.id).staff_id == staff.id
    kept = db.get(Staff, staff.id)
    assert kept.user_id == admin_a.id
    assert kept.deleted_at is None


def test_non_admin_can_delete_profile_without_login(client, tenant_a, dentist_a, make_staff, auth_headers):
    staff = make_staff(tenant_a)

    response = client.delete(f"/api/staff/{staff.id}", headers=auth_headers(dentist_a))

    assert response.status_code == 204
