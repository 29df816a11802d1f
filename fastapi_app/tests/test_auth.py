"""
Тесты регистрации, входа и проверки токенов
"""

from datetime import datetime, timedelta, timezone

import jwt
from config import get_settings
from core.auth import create_access_token, decode_access_token, hash_password, verify_password

from tests.conftest import TEST_PASSWORD, bearer, make_user


# ==================== Хеширование паролей и JWT ====================


def test_password_hashing():
    hashed = hash_password("Secret123")
    assert hashed != "Secret123"
    assert verify_password("Secret123", hashed)
    assert not verify_password("secret123", hashed)


def test_user_without_password_cannot_verify():
    assert not verify_password("anything", None)


def test_token_roundtrip():
    payload = decode_access_token(create_access_token(42, "a@example.com"))
    assert payload["sub"] == "42"
    assert payload["email"] == "a@example.com"


def test_expired_token():
    settings = get_settings()
    token = jwt.encode(
        {"sub": "1", "exp": datetime.now(timezone.utc) - timedelta(minutes=1)},
        settings.auth_secret_key,
        algorithm=settings.auth_algorithm,
    )
    assert decode_access_token(token) is None


def test_forged_token():
    token = jwt.encode({"sub": "1"}, "not-the-secret", algorithm="HS256")
    assert decode_access_token(token) is None


# ==================== Регистрация и вход ====================

def test_register_success(client):
    response = client.post(
        "/auth/register",
        json={"email": " New.User@Example.com ", "password": "Secret123"},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["access_token"]
    assert data["user"]["email"] == "new.user@example.com"
    # имя по умолчанию - часть email до @
    assert data["user"]["name"] == "new.user"
    assert data["user"]["provider"] == "email"


def test_register_duplicate_email(client, user):
    response = client.post(
        "/auth/register",
        json={"email": user.email, "password": "Secret123"},
    )
    assert response.status_code == 409
    assert response.json()["error"] == "already_exists"
    assert response.json()["message"] == "Email already in use"


def test_register_activates_admin_created_user(client, auth_headers):
    created = client.post("/users", json={"email": "carol@example.com"}, headers=auth_headers)
    assert created.status_code == 201
    assert created.json()["provider"] == "admin"

    response = client.post(
        "/auth/register",
        json={"email": "carol@example.com", "password": TEST_PASSWORD, "name": "Carol"},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["user"]["id"] == created.json()["id"]
    assert data["user"]["provider"] == "email"
    assert data["user"]["name"] == "Carol"

    login = client.post("/auth/login", json={"email": "carol@example.com", "password": TEST_PASSWORD})
    assert login.status_code == 200


def test_register_keeps_admin_given_name(client, auth_headers):
    client.post("/users", json={"email": "dave@example.com", "name": "Dave"}, headers=auth_headers)
    response = client.post("/auth/register", json={"email": "dave@example.com", "password": TEST_PASSWORD})
    assert response.status_code == 201
    assert response.json()["user"]["name"] == "Dave"

    again = client.post("/auth/register", json={"email": "dave@example.com", "password": TEST_PASSWORD})
    assert again.status_code == 409


def test_register_weak_password(client):
    response = client.post(
        "/auth/register",
        json={"email": "weak@example.com", "password": "alllowercase"},
    )
    assert response.status_code == 422


def test_login_success(client, user):
    response = client.post(
        "/auth/login",
        json={"email": "ALICE@example.com", "password": TEST_PASSWORD},
    )
    assert response.status_code == 200
    assert response.json()["user"]["id"] == user.id


def test_login_wrong_password(client, user):
    response = client.post(
        "/auth/login",
        json={"email": user.email, "password": "Wrong1234"},
    )
    assert response.status_code == 401
    assert response.json()["error"] == "invalid_credentials"


def test_login_unknown_email(client):
    response = client.post(
        "/auth/login",
        json={"email": "ghost@example.com", "password": TEST_PASSWORD},
    )
    assert response.status_code == 401


def test_login_inactive_user(client, db_session):
    make_user(db_session, "inactive@example.com", is_active=False)
    response = client.post(
        "/auth/login",
        json={"email": "inactive@example.com", "password": TEST_PASSWORD},
    )
    assert response.status_code == 401


def test_admin_created_user_cannot_login(client, db_session):
    make_user(db_session, "nopass@example.com", password=None, provider="admin")
    response = client.post(
        "/auth/login",
        json={"email": "nopass@example.com", "password": TEST_PASSWORD},
    )
    assert response.status_code == 401


def test_me(client, user, auth_headers):
    response = client.get("/auth/me", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["email"] == user.email


def test_me_without_token(client):
    response = client.get("/auth/me")
    assert response.status_code == 401
    assert response.json()["error"] == "unauthorized"


def test_me_with_garbage_token(client):
    response = client.get("/auth/me", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 401


def test_token_of_deleted_user(client, db_session):
    ghost = make_user(db_session, "ghost@example.com")
    headers = bearer(ghost)
    db_session.delete(ghost)
    db_session.commit()

    response = client.get("/auth/me", headers=headers)
    assert response.status_code == 401


def test_logout(client, auth_headers):
    response = client.post("/auth/logout", headers=auth_headers)
    assert response.status_code == 204


# ==================== Health ====================

def test_health_is_public(client):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["database"] == "connected"
    assert "X-Request-ID" in response.headers
