from datetime import timedelta

from shopapp.auth import service as auth_service
from shopapp.entities import Role, User
from conftest import TEST_PASSWORD, bearer


def test_register_returns_token(client, db_session):
    response = client.post("/api/auth/register", json={
        "username": "newbie", "email": "newbie@example.com", "password": "secret123",
    })
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "User registered successfully"
    claims = auth_service.verify_token(body["token"])
    assert claims.role == Role.USER
    assert not claims.is_admin
    assert db_session.query(User).filter(User.email == "newbie@example.com").count() == 1


def test_register_requires_username(client):
    response = client.post("/api/auth/register", json={"email": "a@example.com", "password": "secret123"})
    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "MISSING_REQUIRED_FIELD"
    assert error["message"] == "Username is required"


def test_register_rejects_short_password(client):
    response = client.post("/api/auth/register", json={
        "username": "shorty", "email": "shorty@example.com", "password": "12345",
    })
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_INPUT"


def test_register_duplicate_email_and_username(client, test_user):
    response = client.post("/api/auth/register", json={
        "username": "someone", "email": test_user.email, "password": "secret123",
    })
    assert response.status_code == 409
    assert response.json()["error"]["message"] == "Email already exists"

    response = client.post("/api/auth/register", json={
        "username": test_user.username, "email": "fresh@example.com", "password": "secret123",
    })
    assert response.status_code == 409
    assert response.json()["error"]["message"] == "Username already exists"


def test_login_success_and_failure(client, test_user):
    response = client.post("/api/auth/login", json={"email": test_user.email, "password": TEST_PASSWORD})
    assert response.status_code == 200
    assert response.json()["message"] == "User logged in successfully"

    response = client.post("/api/auth/login", json={"email": test_user.email, "password": "not-it"})
    assert response.status_code == 401
    assert response.json()["error"]["code"] == "AUTHENTICATION_FAILED"


def test_token_endpoint_uses_form_data(client, test_user):
    response = client.post("/api/auth/token", data={"username": test_user.email, "password": TEST_PASSWORD})
    assert response.status_code == 200
    assert response.json()["token_type"] == "bearer"


def test_forgot_password_unknown_email(client):
    response = client.post("/api/auth/forgot-password", json={"email": "ghost@example.com"})
    assert response.status_code == 404


def test_password_reset_flow_is_single_use(client, test_user):
    response = client.post("/api/auth/forgot-password", json={"email": test_user.email})
    assert response.status_code == 200
    reset_token = response.json()["reset_token"]

    payload = {"email": test_user.email, "reset_token": reset_token, "new_password": "brandnew1"}
    response = client.post("/api/auth/reset-password", json=payload)
    assert response.status_code == 200

    response = client.post("/api/auth/login", json={"email": test_user.email, "password": "brandnew1"})
    assert response.status_code == 200

    response = client.post("/api/auth/reset-password", json=payload)
    assert response.status_code == 401


def test_reset_token_bound_to_email(client, test_user, other_user):
    reset_token = auth_service.create_password_reset_token(test_user.email)
    response = client.post("/api/auth/reset-password", json={
        "email": other_user.email, "reset_token": reset_token, "new_password": "brandnew1",
    })
    assert response.status_code == 401


def test_access_token_cannot_reset_password(client, test_user, auth_headers):
    token = auth_headers["Authorization"].split()[1]
    response = client.post("/api/auth/reset-password", json={
        "email": test_user.email, "reset_token": token, "new_password": "brandnew1",
    })
    assert response.status_code == 401


def test_admin_register_and_login(client):
    response = client.post("/api/auth/admin/register", json={
        "username": "Boss", "email": "boss@example.com", "password": "secret123",
    })
    assert response.status_code == 201
    claims = auth_service.verify_token(response.json()["token"])
    assert claims.role == Role.ADMIN
    assert claims.is_admin

    response = client.post("/api/auth/admin/register", json={
        "username": "Boss", "email": "boss@example.com", "password": "secret123",
    })
    assert response.status_code == 409
    assert response.json()["error"]["message"] == "Admin with this email already exists"

    response = client.post("/api/auth/admin/login", json={"email": "boss@example.com", "password": "secret123"})
    assert response.status_code == 200


def test_admin_register_requires_key_when_configured(client, mocker):
    mocker.patch.object(auth_service.settings, "ADMIN_REGISTRATION_KEY", "let-me-in")
    body = {"username": "Boss", "email": "boss@example.com", "password": "secret123"}

    assert client.post("/api/auth/admin/register", json=body).status_code == 403
    body["registration_key"] = "let-me-in"
    assert client.post("/api/auth/admin/register", json=body).status_code == 201


def test_logout_revokes_token(client, auth_headers, revoked_tokens):
    assert client.get("/api/user/profile", headers=auth_headers).status_code == 200

    response = client.post("/api/auth/logout", headers=auth_headers)
    assert response.status_code == 200
    assert len(revoked_tokens) == 1

    response = client.get("/api/user/profile", headers=auth_headers)
    assert response.status_code == 401


def test_missing_and_expired_tokens(client, test_user):
    assert client.get("/api/user/profile").status_code == 401

    expired = auth_service.create_access_token(
        test_user.email, test_user.id, Role.USER, expires_delta=timedelta(minutes=-1)
    )
    assert client.get("/api/user/profile", headers=bearer(expired)).status_code == 401


def test_roles_are_enforced(client, auth_headers, admin_headers):
    assert client.get("/api/admin/dashboard/stats", headers=auth_headers).status_code == 403
    assert client.get("/api/cart/", headers=admin_headers).status_code == 403
